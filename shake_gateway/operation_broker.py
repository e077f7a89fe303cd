"""
Operation Broker - delayed completion events broadcast to subscribers.

Handles scheduling of fire-and-forget background operations and fans their
completion out to every client subscribed at the moment the timer fires.
There is no replay: late subscribers never see earlier events.
"""
from __future__ import annotations

import asyncio
from datetime import datetime
from typing import AsyncIterator
from uuid import UUID, uuid4

from loguru import logger

from shake_gateway.errors import BrokerClosedError
from shake_gateway.models import ScheduledOperationEvent

END_DATE_FORMAT = "%a %b %d %Y"

# Pushed into a subscriber queue to end its stream
_CLOSED = None


def _end_stream(queue: asyncio.Queue) -> None:
    # Make room for the close marker if a slow subscriber filled its queue
    while queue.full():
        queue.get_nowait()
    queue.put_nowait(_CLOSED)


class OperationBroker:
    def __init__(self, delay: float = 1.0, queue_size: int = 100):
        """
        Args:
            delay: Seconds between schedule() and the completion event
            queue_size: Max undelivered events per subscriber before drops
        """
        self.delay = delay
        self.queue_size = queue_size
        self._subscribers: dict[UUID, asyncio.Queue] = {}
        # Strong refs so pending timer tasks are not garbage collected
        self._timers: set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        return len(self._timers)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def schedule(self, name: str) -> str:
        """Arrange a one-shot completion event for `name` and acknowledge at once."""
        if self._closed:
            raise BrokerClosedError()
        task = asyncio.create_task(self._complete_later(name))
        self._timers.add(task)
        task.add_done_callback(self._timers.discard)
        logger.info("Scheduled operation {} to finish in {}s", name, self.delay)
        return f"Operation: {name} scheduled!"

    async def _complete_later(self, name: str) -> None:
        await asyncio.sleep(self.delay)
        self.publish(ScheduledOperationEvent(name=name, end_date=datetime.now().strftime(END_DATE_FORMAT)))

    def publish(self, event: ScheduledOperationEvent) -> int:
        """
        Deliver event to a snapshot of the current subscribers.

        Returns:
            Number of subscribers the event was queued for
        """
        delivered = 0
        for handle, queue in list(self._subscribers.items()):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning("Dropped event {} for subscriber {}: queue full", event.name, handle)
        logger.info("Operation {} finished, delivered to {} subscriber(s)", event.name, delivered)
        return delivered

    def subscribe(self) -> UUID:
        if self._closed:
            raise BrokerClosedError()
        handle = uuid4()
        self._subscribers[handle] = asyncio.Queue(maxsize=self.queue_size)
        logger.debug("Subscriber {} joined", handle)
        return handle

    def unsubscribe(self, handle: UUID) -> bool:
        queue = self._subscribers.pop(handle, None)
        if queue is None:
            return False
        _end_stream(queue)
        logger.debug("Subscriber {} left", handle)
        return True

    async def stream(self, handle: UUID) -> AsyncIterator[ScheduledOperationEvent]:
        """Yield events for a subscription until it is removed or the broker closes."""
        queue = self._subscribers.get(handle)
        if queue is None:
            return
        while True:
            event = await queue.get()
            if event is _CLOSED:
                return
            yield event

    async def close(self) -> None:
        """Teardown hook: cancel pending timers, end all streams, clear subscribers."""
        self._closed = True
        timers = list(self._timers)
        for task in timers:
            task.cancel()
        await asyncio.gather(*timers, return_exceptions=True)
        self._timers.clear()

        for queue in self._subscribers.values():
            _end_stream(queue)
        self._subscribers.clear()
        logger.info("Operation broker closed")
