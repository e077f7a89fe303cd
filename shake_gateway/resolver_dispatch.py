"""
Resolver Dispatch - executes one GraphQL operation against the backend.

Order per invocation: registry lookup, auth check, request mapping, exactly one
backend call (or local action), then response mapping or error normalization.
"""
from __future__ import annotations

from typing import Any, Mapping

from loguru import logger

from shake_gateway.backend_client import BackendClient
from shake_gateway.error_normalizer import normalize
from shake_gateway.errors import GENERIC_FAILURE_MESSAGE, AuthMissingError, BackendError, UnknownOperationError
from shake_gateway.models import BackendFailure, OperationDescriptor, RequestContext
from shake_gateway.operation_broker import OperationBroker
from shake_gateway.operation_registry import SCHEDULE_OPERATION, OperationRegistry


class ResolverDispatch:
    def __init__(self, registry: OperationRegistry, backend: BackendClient, broker: OperationBroker):
        self.registry = registry
        self.backend = backend
        self.broker = broker

    async def execute(self, operation_name: str, args: Mapping[str, Any], request_context: RequestContext) -> Any:
        descriptor = self.registry.lookup(operation_name)
        logger.debug("Dispatching {}", operation_name)

        token = None
        if descriptor.requires_auth:
            token = request_context.token
            if token is None:
                logger.warning("Rejected {}: no credential", operation_name)
                raise AuthMissingError(operation_name)

        payload = descriptor.request_mapper(args)

        if descriptor.is_local:
            return descriptor.response_mapper(self._run_local(descriptor, payload))

        result = await self.backend.call(descriptor.http_method, descriptor.backend_path, payload, token)
        if isinstance(result, BackendFailure):
            raise normalize(result)

        try:
            return descriptor.response_mapper(result.body)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error("Malformed backend response for {}: {!r}", operation_name, e)
            raise BackendError(GENERIC_FAILURE_MESSAGE, result.status_code) from e

    def _run_local(self, descriptor: OperationDescriptor, payload: Mapping[str, Any]) -> Any:
        if descriptor.name == SCHEDULE_OPERATION:
            return self.broker.schedule(payload["name"])
        raise UnknownOperationError(descriptor.name)
