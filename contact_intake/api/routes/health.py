from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe for load balancers and container healthchecks.

    Deliberately independent of the storage and mail backends: the intake
    endpoint should stay reachable (and keep rejecting abuse) while they are down.
    """

    return {"status": "ok"}
