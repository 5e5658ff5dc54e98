from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging
from ..application.services.account_service import AccountService
from ..infrastructure.persistence.sqlite import SQLitePersistence
from ..presentation.api.routers import account as account_router
from ..services.activation_gate import ActivationGate
from ..services.email_service import EmailService
from ..services.job_hooks import logging_job_hooks
from ..services.notification_dispatcher import NotificationDispatcher
from ..services.resend_issuer import ResendIssuer
from ..services.token_issuer import TokenIssuer
from ..services.verification_processor import VerificationProcessor

logger = logging.getLogger(__name__)


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title="Account Verification", lifespan=_create_lifespan(settings))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(account_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        container: ApplicationContainer = app.state.container  # type: ignore[attr-defined]
        return {"ok": True, "notifications": container.notification_dispatcher.get_status()}

    return app


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging()
        persistence = SQLitePersistence(settings.database_path)
        email_service = EmailService(
            smtp_host=settings.smtp_host,
            smtp_port=settings.smtp_port,
            smtp_username=settings.smtp_username,
            smtp_password=settings.smtp_password,
            from_email=settings.smtp_from_email,
            from_name=settings.smtp_from_name,
        )
        if not email_service.enabled:
            logger.warning("SMTP is not configured; verification links will only be logged.")
        dispatcher = NotificationDispatcher(
            email_service,
            settings.app_base_url,
            queue_name=settings.notification_queue_name,
            max_workers=settings.notification_workers,
            max_attempts=settings.notification_max_attempts,
            retry_delay_seconds=settings.notification_retry_delay_seconds,
            hooks=logging_job_hooks(),
        )
        token_issuer = TokenIssuer(persistence, dispatcher)
        verification_processor = VerificationProcessor(
            persistence, ttl_hours=settings.verification_token_ttl_hours
        )
        activation_gate = ActivationGate(persistence)
        resend_issuer = ResendIssuer(persistence, token_issuer)
        account_service = AccountService(
            users=persistence,
            issuer=token_issuer,
            gate=activation_gate,
            secret_key=settings.access_token_secret,
            token_exp_minutes=settings.access_token_exp_minutes,
        )

        container = ApplicationContainer(
            settings=settings,
            persistence=persistence,
            email_service=email_service,
            notification_dispatcher=dispatcher,
            token_issuer=token_issuer,
            verification_processor=verification_processor,
            activation_gate=activation_gate,
            resend_issuer=resend_issuer,
            account_service=account_service,
        )

        app.state.container = container  # type: ignore[attr-defined]

        await dispatcher.start()

        try:
            yield
        finally:
            await dispatcher.stop()
            persistence.close()

    return lifespan
