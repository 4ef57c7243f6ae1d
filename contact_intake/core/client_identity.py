"""Client identity resolution for per-client rate limiting.

Clients are identified by network address only. Behind a reverse proxy the
first ``X-Forwarded-For`` entry is the original client as recorded by the
nearest proxy; otherwise the socket peer address is used. When neither is
available every such request shares the ``"unknown"`` bucket, so incomplete
proxy setups end up limited more strictly rather than not at all.
"""

from __future__ import annotations

from fastapi import Request

FORWARDED_FOR_HEADER = "X-Forwarded-For"
UNKNOWN_CLIENT = "unknown"


def resolve_client_identity(request: Request, *, trust_forwarded_for: bool = True) -> str:
    """Derive the identity used to key the rate limiter.

    Args:
        request: Incoming request.
        trust_forwarded_for: Whether to honour the forwarded-for header.

    Returns:
        str: Client address, or ``"unknown"``. Never raises.
    """
    if trust_forwarded_for:
        forwarded = request.headers.get(FORWARDED_FOR_HEADER)
        if forwarded:
            first_hop = forwarded.split(",")[0].strip()
            if first_hop:
                return first_hop

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_CLIENT
