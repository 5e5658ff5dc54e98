from dataclasses import dataclass

from ..application.services.account_service import AccountService
from .config import Settings
from ..domain.ports.persistence import PersistenceGateway
from ..services.activation_gate import ActivationGate
from ..services.email_service import EmailService
from ..services.notification_dispatcher import NotificationDispatcher
from ..services.resend_issuer import ResendIssuer
from ..services.token_issuer import TokenIssuer
from ..services.verification_processor import VerificationProcessor


@dataclass(slots=True)
class ApplicationContainer:
    """Dependency registry shared across the FastAPI application lifecycle."""

    settings: Settings
    persistence: PersistenceGateway
    email_service: EmailService
    notification_dispatcher: NotificationDispatcher
    token_issuer: TokenIssuer
    verification_processor: VerificationProcessor
    activation_gate: ActivationGate
    resend_issuer: ResendIssuer
    account_service: AccountService
