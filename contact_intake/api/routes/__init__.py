from __future__ import annotations

from contact_intake.api.routes.contact import router as contact_router
from contact_intake.api.routes.health import router as health_router

__all__ = ["contact_router", "health_router"]
