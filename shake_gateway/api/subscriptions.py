"""
GraphQL Subscription resolvers.

Every connected client receives every operationFinished event; there is no
per-client filtering and no replay of events fired before subscribing.
"""
from __future__ import annotations

from contextlib import aclosing
from typing import AsyncGenerator

import strawberry

from shake_gateway.api.types import Operation
from shake_gateway.operation_broker import OperationBroker


async def operation_events(broker: OperationBroker) -> AsyncGenerator[Operation, None]:
    """Stream completion events for one client until it disconnects or the broker closes."""
    handle = broker.subscribe()
    try:
        async for event in broker.stream(handle):
            yield Operation.from_event(event)
    finally:
        # Runs on client disconnect too, so handles never leak
        broker.unsubscribe(handle)


@strawberry.type
class Subscription:

    @strawberry.subscription(name="operationFinished")
    async def operation_finished(self, info: strawberry.types.Info) -> AsyncGenerator[Operation, None]:
        broker: OperationBroker = info.context["broker"]
        # Closing the inner stream on disconnect releases the handle immediately
        async with aclosing(operation_events(broker)) as operations:
            async for operation in operations:
                yield operation
