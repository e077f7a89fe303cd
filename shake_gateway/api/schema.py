"""
Combined GraphQL schema for Shake Gateway.

Field names are kept exactly as declared (no camel-casing) so the API matches
what existing clients already call.
"""
import strawberry
from strawberry.schema.config import StrawberryConfig

from shake_gateway.api.mutations import Mutation
from shake_gateway.api.queries import Query
from shake_gateway.api.subscriptions import Subscription

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
    config=StrawberryConfig(auto_camel_case=False),
)
