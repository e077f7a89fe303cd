"""
Shared data models for the shake gateway.

These are plain Python dataclasses used by the dispatch core.
The GraphQL layer in api/types.py exposes its own strawberry types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from shake_gateway.auth_forwarder import extract
from shake_gateway.enums import HttpMethod


@dataclass(frozen=True)
class OperationDescriptor:
    """Static description of how one GraphQL operation maps onto the backend"""
    name: str
    http_method: HttpMethod | None  # None for local operations
    backend_path: str | None
    requires_auth: bool
    request_mapper: Callable[[Mapping[str, Any]], Any]
    response_mapper: Callable[[Any], Any]
    enabled: bool = True

    @property
    def is_local(self) -> bool:
        return self.backend_path is None


@dataclass(frozen=True)
class RequestContext:
    """Per-invocation view of the inbound request, built at the transport boundary"""
    raw_headers: Mapping[str, str] = field(default_factory=dict)
    token: str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RequestContext:
        raw_headers = dict(headers.items())
        return cls(raw_headers=raw_headers, token=extract(raw_headers))


@dataclass(frozen=True)
class BackendSuccess:
    status_code: int
    body: Any


@dataclass(frozen=True)
class BackendFailure:
    """Failed backend call. status_code is None when the backend was never reached."""
    status_code: int | None
    body: Any = None
    detail: str | None = None  # internal only, never shown to clients

    @property
    def is_transport(self) -> bool:
        return self.status_code is None


BackendResult = BackendSuccess | BackendFailure


@dataclass(frozen=True)
class ScheduledOperationEvent:
    name: str
    end_date: str


# Backend results after response mapping; api/types.py mirrors these for GraphQL

@dataclass(frozen=True)
class TokenResult:
    token: str


@dataclass(frozen=True)
class CheckResult:
    success: str
    user: Any = None


@dataclass(frozen=True)
class MessageResult:
    message: str


@dataclass(frozen=True)
class ReadyResult:
    ready: bool
