"""
GraphQL type definitions for the Shake Gateway API.

These @strawberry.type classes mirror the result dataclasses in models.py.
The dispatch core returns the dataclasses; resolvers convert them here.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Optional

import strawberry
from strawberry.scalars import JSON

from shake_gateway import models


@strawberry.type(name="Response")
class TokenResponse:
    token: str

    @classmethod
    def from_result(cls, result: models.TokenResult) -> TokenResponse:
        return cls(**asdict(result))


@strawberry.type
class CheckResponse:
    success: str
    user: Optional[JSON] = None

    @classmethod
    def from_result(cls, result: models.CheckResult) -> CheckResponse:
        return cls(success=result.success, user=result.user)


@strawberry.type
class MessageResponse:
    message: str

    @classmethod
    def from_result(cls, result: models.MessageResult) -> MessageResponse:
        return cls(**asdict(result))


@strawberry.type
class Ready:
    ready: bool

    @classmethod
    def from_result(cls, result: models.ReadyResult) -> Ready:
        return cls(**asdict(result))


@strawberry.type
class Operation:
    """Completion notice for a scheduled background operation"""
    name: str
    end_date: str = strawberry.field(name="endDate")

    @classmethod
    def from_event(cls, event: models.ScheduledOperationEvent) -> Operation:
        return cls(name=event.name, end_date=event.end_date)


# Input types for mutations
@strawberry.input(name="LoginUser_input")
class LoginUserInput:
    email: str
    password: str


@strawberry.input(name="RegisterUser_input")
class RegisterUserInput:
    email: str
    name: str
    password: str


@strawberry.input(name="Matching_input")
class MatchingInput:
    is_leave: bool


@strawberry.input(name="Ready_input")
class ReadyInput:
    room_id: str


@strawberry.input(name="Result_input")
class ResultInput:
    room_id: str
    score: int


@strawberry.input(name="ShakePower_input")
class ShakePowerInput:
    power: int
