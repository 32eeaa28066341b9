"""
In-process publish/subscribe broker for real-time notifications.

Mutations publish after their write has committed. Delivery is best effort:
a subscriber that falls behind loses events, and a publishing failure is
logged, never raised back to the mutation.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, Set

from booklibrary.core.config import settings

logger = logging.getLogger(__name__)

BOOK_ADDED = "onBookAdded"
REVIEW_POSTED = "onReviewPosted"


class EventBroker:
    """
    Fan-out of topic events to per-subscriber asyncio queues.

    publish() is synchronous and must be called from the event loop thread
    that runs the subscribers.
    """

    def __init__(self, queue_size: int = settings.SUBSCRIPTION_QUEUE_SIZE):
        self.queue_size = queue_size
        self._subscribers: Dict[str, Set[asyncio.Queue]] = {}

    def subscriber_count(self, topic: str) -> int:
        return len(self._subscribers.get(topic, ()))

    def publish(self, topic: str, payload: Any) -> int:
        """
        Hands the payload to every current subscriber of the topic.

        Returns:
            int: Number of subscribers that received the event.
        """
        delivered = 0
        try:
            for queue in list(self._subscribers.get(topic, ())):
                try:
                    queue.put_nowait(payload)
                    delivered += 1
                except asyncio.QueueFull:
                    logger.warning(f"Subscriber queue full on topic '{topic}', event dropped.")
        except Exception:
            logger.exception(f"Failed to publish event on topic '{topic}'.")
        return delivered

    async def subscribe(self, topic: str) -> AsyncIterator[Any]:
        """Yields every event published on the topic until the consumer stops iterating."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.setdefault(topic, set()).add(queue)
        logger.info(f"Subscriber added to '{topic}' ({self.subscriber_count(topic)} active).")
        try:
            while True:
                yield await queue.get()
        finally:
            subscribers = self._subscribers.get(topic)
            if subscribers is not None:
                subscribers.discard(queue)
                if not subscribers:
                    del self._subscribers[topic]
            logger.info(f"Subscriber removed from '{topic}'.")


broker = EventBroker()
