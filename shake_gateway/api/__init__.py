"""
GraphQL API layer for Shake Gateway.

This package contains:
- types.py: GraphQL type and input definitions
- queries.py: Query resolvers
- mutations.py: Mutation resolvers
- subscriptions.py: Subscription resolvers
- schema.py: Combined Strawberry schema
"""

from .schema import schema

__all__ = ["schema"]
