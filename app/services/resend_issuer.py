from __future__ import annotations

import logging

from ..domain.models import Issued, ResendResult, UserNotFound
from ..domain.ports.persistence import UserRepository
from .token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


class ResendIssuer:
    """Re-issues a verification token for the account registered under an email."""

    def __init__(self, users: UserRepository, issuer: TokenIssuer) -> None:
        self._users = users
        self._issuer = issuer

    def resend(self, email: str) -> ResendResult:
        user = self._users.get_user_by_email(email.strip())
        if user is None:
            logger.info("Verification resend requested for unknown email.")
            return UserNotFound(email=email)
        token = self._issuer.issue(user)
        return Issued(user_id=user.id, token=token)
