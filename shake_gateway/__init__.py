"""
Shake Gateway - GraphQL front for the shake game backend

A small gateway that:
- Exposes queries, mutations and subscriptions over GraphQL
- Forwards every operation to the HTTP backend with the caller's bearer token
- Normalizes backend failures into a single client-facing error
- Broadcasts completion of scheduled background operations to subscribers
"""

__version__ = "0.1.0"
