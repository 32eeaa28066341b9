"""
Configuration module for the Book Library service.

This module defines the Settings class, which loads environment variables
and provides application-wide configuration: database URL, environment,
logging level, seeding and pagination defaults.

Usage:
    Import the `settings` object to access configuration throughout the project.
"""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL (str): Database connection string.
        ENVIRONMENT (str): Current environment (e.g., 'production', 'development').
        LOG_LEVEL (str): Root logging level used by the API and the scripts.
        SEED_ON_STARTUP (bool): Seed the sample catalog when the API starts on an empty database.
        DEFAULT_PAGE_SIZE (int): Default `limit` for list queries.
        TOP_RATED_DEFAULT_COUNT (int): Fallback size of the top rated books query.
        SUBSCRIPTION_QUEUE_SIZE (int): Pending events kept per subscriber before dropping.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./booklibrary.db")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "production")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    SEED_ON_STARTUP: bool = True
    DEFAULT_PAGE_SIZE: int = 100
    TOP_RATED_DEFAULT_COUNT: int = 10
    SUBSCRIPTION_QUEUE_SIZE: int = 100

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @property
    def include_exception_details(self) -> bool:
        """
        Whether GraphQL errors expose the underlying exception text.

        Returns:
            bool: True only in development.
        """
        return self.is_development

    @property
    def graphql_ide(self) -> Optional[str]:
        return "graphiql" if self.is_development else None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
