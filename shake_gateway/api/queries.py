"""
GraphQL Query resolvers. Each one hands off to ResolverDispatch.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import strawberry
from strawberry.scalars import JSON

from shake_gateway.api.types import CheckResponse, Ready

if TYPE_CHECKING:
    from shake_gateway.resolver_dispatch import ResolverDispatch


async def _dispatch(info: strawberry.types.Info, operation_name: str):
    dispatch: ResolverDispatch = info.context["dispatch"]
    return await dispatch.execute(operation_name, {}, info.context["request_context"])


@strawberry.type
class Query:

    @strawberry.field
    async def check(self, info: strawberry.types.Info) -> CheckResponse:
        """Validate the caller's token against the backend."""
        return CheckResponse.from_result(await _dispatch(info, "check"))

    @strawberry.field(name="get_userID")
    async def get_user_id(self, info: strawberry.types.Info) -> Optional[JSON]:
        """Get the caller's user id as returned by the backend."""
        return await _dispatch(info, "get_userID")

    @strawberry.field
    async def get_rooms(self, info: strawberry.types.Info) -> Optional[JSON]:
        """List open rooms, passed through from the backend."""
        return await _dispatch(info, "get_rooms")

    @strawberry.field
    async def get_ready(self, info: strawberry.types.Info) -> Ready:
        return Ready.from_result(await _dispatch(info, "get_ready"))
