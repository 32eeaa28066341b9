"""
Script para crear el esquema y poblar la base de datos con el catálogo de ejemplo.

Uso:
    python scripts/seed_db.py            # crea tablas y siembra si está vacía
    python scripts/seed_db.py --reset    # borra todas las tablas antes de sembrar

Requiere haber instalado el paquete (`pip install -e .`) y, opcionalmente,
DATABASE_URL en el entorno o en `.env`.
"""

import argparse
import logging
import sys
from typing import Optional

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

try:
    from sqlalchemy.orm import Session
    from booklibrary.core.config import settings
    from booklibrary.db.seed import seed_database
    from booklibrary.db.session import Base, SessionLocal, engine, init_db
except ImportError as e:
    logger.error(f"Error importing project modules: {e}.")
    logger.error("Make sure the package is installed with 'pip install -e .'")
    sys.exit(1)


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Create the schema and load the sample catalog.")
    parser.add_argument("--reset", action="store_true", help="drop every table before seeding")
    args = parser.parse_args(argv)

    logger.info(f"Using database {settings.DATABASE_URL}")
    if args.reset:
        logger.warning("Dropping all tables...")
        init_db()
        Base.metadata.drop_all(bind=engine)
    init_db()

    db: Optional[Session] = None
    try:
        db = SessionLocal()
        seeded = seed_database(db)
        logger.info("Seed completed." if seeded else "Nothing to do.")
        return 0
    except Exception as exc:
        logger.exception(f"Error seeding database: {exc}")
        return 1
    finally:
        if db:
            logger.info("Closing database session.")
            db.close()


if __name__ == "__main__":
    sys.exit(main())
