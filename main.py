from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.requests import HTTPConnection
from loguru import logger
from strawberry.fastapi import GraphQLRouter

from config.operations_config import load_operations_config
from config.settings import settings
from shake_gateway.api import schema
from shake_gateway.backend_client import BackendClient
from shake_gateway.models import RequestContext
from shake_gateway.operation_broker import OperationBroker
from shake_gateway.operation_registry import build_registry
from shake_gateway.resolver_dispatch import ResolverDispatch


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Operation table, fixed for the lifetime of the process
    registry = build_registry(load_operations_config(settings.operations_config))
    logger.info("Enabled operations: {}", ", ".join(registry.names()))

    # Shared HTTP client towards the backend
    app.state.http_client = httpx.AsyncClient(
        base_url=settings.backend_url,
        timeout=settings.backend_timeout
    )

    # Broker is shared by the schedule mutation and the subscription
    app.state.broker = OperationBroker(
        delay=settings.operation_delay,
        queue_size=settings.subscriber_queue_size
    )
    app.state.dispatch = ResolverDispatch(registry, BackendClient(app.state.http_client), app.state.broker)
    try:
        yield
    finally:
        await app.state.broker.close()
        await app.state.http_client.aclose()


async def get_context(connection: HTTPConnection):
    # Works for both HTTP requests and subscription websockets
    return {
        "request_context": RequestContext.from_headers(connection.headers),
        "dispatch": connection.app.state.dispatch,
        "broker": connection.app.state.broker,
    }

graphql_app = GraphQLRouter(schema, context_getter=get_context)

app = FastAPI(lifespan=lifespan)
app.include_router(graphql_app, prefix="/graphql")


if __name__ == "__main__":
    logger.info("Query endpoint ready at http://{}:{}/graphql", settings.host, settings.port)
    logger.info("Subscription endpoint ready at ws://{}:{}/graphql", settings.host, settings.port)
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.reload)
