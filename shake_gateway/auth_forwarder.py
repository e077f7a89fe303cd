"""
Bearer credential forwarding between the client request and the backend call.
"""

from typing import Mapping

AUTHORIZATION_HEADER = "Authorization"
BEARER_SCHEME = "Bearer"


def extract(raw_headers: Mapping[str, str]) -> str | None:
    """
    Pull the bearer token out of inbound headers.

    The header name is matched case-insensitively. Clients may send either the
    raw token or "Bearer <token>"; the scheme prefix is stripped so the token is
    never double-prefixed on the way out.

    Returns:
        The token, or None when the header is absent or blank
    """
    value = next(
        (v for k, v in raw_headers.items() if k.lower() == AUTHORIZATION_HEADER.lower()),
        None
    )
    if value is None:
        return None

    value = value.strip()
    scheme, _, rest = value.partition(" ")
    if scheme.lower() == BEARER_SCHEME.lower():
        value = rest.strip()
    return value or None


def attach(token: str, headers: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return a copy of headers with Authorization set to 'Bearer <token>'."""
    outbound = {k: v for k, v in (headers or {}).items() if k.lower() != AUTHORIZATION_HEADER.lower()}
    outbound[AUTHORIZATION_HEADER] = f"{BEARER_SCHEME} {token}"
    return outbound
