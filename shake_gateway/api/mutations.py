"""
GraphQL Mutation resolvers.

Backend mutations pass their input fields to ResolverDispatch;
scheduleOperation is served locally by the operation broker.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any, Optional

import strawberry
from strawberry.scalars import JSON

from shake_gateway.api.types import (
    LoginUserInput,
    MatchingInput,
    MessageResponse,
    ReadyInput,
    RegisterUserInput,
    ResultInput,
    ShakePowerInput,
    TokenResponse,
)

if TYPE_CHECKING:
    from shake_gateway.resolver_dispatch import ResolverDispatch


async def _dispatch(info: strawberry.types.Info, operation_name: str, args: dict[str, Any]):
    dispatch: ResolverDispatch = info.context["dispatch"]
    return await dispatch.execute(operation_name, args, info.context["request_context"])


@strawberry.type
class Mutation:

    @strawberry.mutation
    async def post_login(self, info: strawberry.types.Info, input: LoginUserInput) -> TokenResponse:
        return TokenResponse.from_result(await _dispatch(info, "post_login", asdict(input)))

    @strawberry.mutation
    async def post_register(self, info: strawberry.types.Info, input: RegisterUserInput) -> TokenResponse:
        return TokenResponse.from_result(await _dispatch(info, "post_register", asdict(input)))

    @strawberry.mutation
    async def post_matching(self, info: strawberry.types.Info, input: MatchingInput) -> Optional[JSON]:
        """Join or leave the matchmaking queue."""
        return await _dispatch(info, "post_matching", asdict(input))

    @strawberry.mutation
    async def post_ready(self, info: strawberry.types.Info, input: ReadyInput) -> MessageResponse:
        return MessageResponse.from_result(await _dispatch(info, "post_ready", asdict(input)))

    @strawberry.mutation
    async def post_result(self, info: strawberry.types.Info, input: ResultInput) -> Optional[JSON]:
        return await _dispatch(info, "post_result", asdict(input))

    @strawberry.mutation
    async def post_shake(self, info: strawberry.types.Info, input: ShakePowerInput) -> MessageResponse:
        return MessageResponse.from_result(await _dispatch(info, "post_shake", asdict(input)))

    @strawberry.mutation(name="scheduleOperation")
    async def schedule_operation(self, info: strawberry.types.Info, name: str) -> str:
        """Start a background operation; completion arrives on operationFinished."""
        return await _dispatch(info, "scheduleOperation", {"name": name})
