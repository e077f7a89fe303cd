"""
Operation Registry - the declarative table behind every GraphQL operation.

Each entry says which backend method and path an operation maps to, whether it
needs the caller's bearer token, and how arguments and responses are shaped.
The table is fixed; a deployment may only toggle `enabled` and `requires_auth`.
"""
from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from shake_gateway.enums import HttpMethod
from shake_gateway.errors import UnknownOperationError
from shake_gateway.models import CheckResult, MessageResult, OperationDescriptor, ReadyResult, TokenResult

SCHEDULE_OPERATION = "scheduleOperation"

OVERRIDABLE_FLAGS = ("enabled", "requires_auth")


# Request mappers

def pick(*fields: str) -> Callable[[Mapping[str, Any]], dict[str, Any]]:
    """Pass the named argument fields through unchanged."""
    def mapper(args: Mapping[str, Any]) -> dict[str, Any]:
        return {name: args[name] for name in fields}
    return mapper


def no_payload(args: Mapping[str, Any]) -> None:
    return None


# Response mappers

def identity(body: Any) -> Any:
    return body


def _fields(body: Any) -> dict:
    if not isinstance(body, dict):
        raise TypeError(f"expected a JSON object, got {type(body).__name__}")
    return body


def token_response(body: Any) -> TokenResult:
    return TokenResult(token=_fields(body)["token"])


def check_response(body: Any) -> CheckResult:
    return CheckResult(success="True", user=_fields(body)["user"])


def message_response(body: Any) -> MessageResult:
    return MessageResult(message=_fields(body)["message"])


def ready_response(body: Any) -> ReadyResult:
    return ReadyResult(ready=_fields(body)["ready"])


def _remote(name: str, method: HttpMethod, path: str, requires_auth: bool,
            request_mapper=no_payload, response_mapper=identity) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        http_method=method,
        backend_path=path,
        requires_auth=requires_auth,
        request_mapper=request_mapper,
        response_mapper=response_mapper
    )


DEFAULT_OPERATIONS: tuple[OperationDescriptor, ...] = (
    _remote("post_login", HttpMethod.POST, "/login", False, pick("email", "password"), token_response),
    _remote("post_register", HttpMethod.POST, "/register", False, pick("email", "name", "password"), token_response),
    _remote("check", HttpMethod.GET, "/check", True, response_mapper=check_response),
    _remote("get_userID", HttpMethod.GET, "/user", True),
    _remote("get_rooms", HttpMethod.GET, "/rooms", False),
    _remote("get_ready", HttpMethod.GET, "/ready", True, response_mapper=ready_response),
    _remote("post_matching", HttpMethod.POST, "/matching", True, pick("is_leave")),
    _remote("post_ready", HttpMethod.POST, "/ready", True, pick("room_id"), message_response),
    _remote("post_result", HttpMethod.POST, "/result", True, pick("room_id", "score")),
    _remote("post_shake", HttpMethod.POST, "/shake", False, pick("power"), message_response),
    OperationDescriptor(
        name=SCHEDULE_OPERATION,
        http_method=None,
        backend_path=None,
        requires_auth=False,
        request_mapper=pick("name"),
        response_mapper=identity
    ),
)


class OperationRegistry:
    def __init__(self, descriptors: Iterable[OperationDescriptor]):
        self._descriptors: Mapping[str, OperationDescriptor] = MappingProxyType(
            {descriptor.name: descriptor for descriptor in descriptors}
        )

    def lookup(self, operation_name: str) -> OperationDescriptor:
        descriptor = self._descriptors.get(operation_name)
        if descriptor is None or not descriptor.enabled:
            raise UnknownOperationError(operation_name)
        return descriptor

    def names(self) -> list[str]:
        """Names of all enabled operations."""
        return [name for name, descriptor in self._descriptors.items() if descriptor.enabled]

    def __contains__(self, operation_name: str) -> bool:
        descriptor = self._descriptors.get(operation_name)
        return descriptor is not None and descriptor.enabled


def build_registry(overrides: Mapping[str, Mapping[str, bool]] | None = None) -> OperationRegistry:
    """
    Build the registry from the default table plus per-deployment overrides.

    Args:
        overrides: Operation name -> {"enabled": bool, "requires_auth": bool};
            either flag may be omitted

    Raises:
        UnknownOperationError: an override names an operation not in the table
    """
    descriptors = {descriptor.name: descriptor for descriptor in DEFAULT_OPERATIONS}
    for name, flags in (overrides or {}).items():
        if name not in descriptors:
            raise UnknownOperationError(name)
        changes = {flag: bool(flags[flag]) for flag in OVERRIDABLE_FLAGS if flag in flags}
        descriptors[name] = replace(descriptors[name], **changes)
    return OperationRegistry(descriptors.values())
