from fastapi import Depends
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from booklibrary.api.dataloaders import Loaders
from booklibrary.core.events import EventBroker, broker
from booklibrary.db.session import get_db


class GraphQLContext(BaseContext):
    """Request context: database session, event broker and dataloaders."""

    def __init__(self, db: Session, events: EventBroker):
        super().__init__()
        self.db = db
        self.events = events
        self.loaders = Loaders(db)


def get_broker() -> EventBroker:
    return broker


async def get_context(
    db: Session = Depends(get_db),
    events: EventBroker = Depends(get_broker),
) -> GraphQLContext:
    return GraphQLContext(db=db, events=events)
