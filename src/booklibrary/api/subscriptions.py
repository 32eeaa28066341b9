from typing import AsyncGenerator

import strawberry
from strawberry.types import Info

from booklibrary.api.types import BookType, ReviewType
from booklibrary.core.events import BOOK_ADDED, REVIEW_POSTED


@strawberry.type
class Subscription:
    @strawberry.subscription(description="Emits every book added after the subscription starts.")
    async def on_book_added(self, info: Info) -> AsyncGenerator[BookType, None]:
        async for book in info.context.events.subscribe(BOOK_ADDED):
            yield book

    @strawberry.subscription(description="Emits every review posted after the subscription starts.")
    async def on_review_posted(self, info: Info) -> AsyncGenerator[ReviewType, None]:
        async for review in info.context.events.subscribe(REVIEW_POSTED):
            yield review
