from __future__ import annotations

"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) and
wires the admission collaborators. Each app instance owns its own rate
limiter, store and notifier on ``app.state``; tests pass their own.
"""

from fastapi import FastAPI

from contact_intake.adapters.notification.base import AbstractNotifier
from contact_intake.adapters.notification.factory import create_notifier
from contact_intake.adapters.rate_limit.base import AbstractRateLimiter
from contact_intake.adapters.storage.base import AbstractSubmissionStore
from contact_intake.adapters.storage.factory import create_submission_store
from contact_intake.api.routes import contact_router, health_router
from contact_intake.core.config import AppSettings, settings
from contact_intake.core.exception_handlers import setup_exception_handlers
from contact_intake.core.logging import configure_logging
from contact_intake.core.middleware import request_id_middleware
from contact_intake.core.openapi import apply_openapi_customizations
from contact_intake.core.rate_limit import build_rate_limiter
from contact_intake.services.contact_service import ContactService


def create_app(
    *,
    rate_limiter: AbstractRateLimiter | None = None,
    store: AbstractSubmissionStore | None = None,
    notifier: AbstractNotifier | None = None,
    admin_email: str | None = None,
    app_settings: AppSettings | None = None,
    configure_logs: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        rate_limiter: Limiter to use; built from settings when omitted.
        store: Storage collaborator; built from ``STORAGE_*`` settings when omitted.
        notifier: Notification collaborator; built from ``MAIL_*`` settings when omitted.
        admin_email: Notification recipient; defaults to ``MAIL_ADMIN_EMAIL``.
        app_settings: Client identity and rate limit options; defaults to ``APP_*`` settings.
        configure_logs: Whether to (re)configure root logging.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    if configure_logs:
        configure_logging(settings.log)

    app = FastAPI(
        title="Contact Intake API",
        description=(
            "Public contact form intake. Submissions are rate limited per client "
            "address, screened with a honeypot field, validated against strict "
            "whitelists and sanitized before being stored and forwarded to the "
            "site administrators."
        ),
        version="0.1.0",
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    app.state.app_settings = app_settings or settings.app
    app.state.rate_limiter = rate_limiter or build_rate_limiter(app.state.app_settings)
    app.state.contact_service = ContactService(
        store=store or create_submission_store(settings.storage),
        notifier=notifier or create_notifier(settings.mail),
        admin_email=admin_email if admin_email is not None else settings.mail.admin_email,
        subject_prefix=settings.mail.subject_prefix,
    )

    # Middleware
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(contact_router, prefix="/v1")
    app.include_router(health_router)

    # OpenAPI customizations (tags, documented request body)
    apply_openapi_customizations(app)

    return app
