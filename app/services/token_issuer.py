"""Issuing of account verification tokens."""

from __future__ import annotations

import logging
import secrets
from typing import Protocol

from ..domain.models import User
from ..domain.ports.persistence import VerificationTokenRepository

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32


class VerificationNotifier(Protocol):
    """Delivers a freshly issued token to the account owner."""

    def notify(self, recipient: str, token: str) -> None:
        ...


def generate_token() -> str:
    """Return 64 hex characters encoding 32 cryptographically random bytes."""
    return secrets.token_bytes(TOKEN_BYTES).hex()


class TokenIssuer:
    """Creates the verification token for a user and hands it to the notifier."""

    def __init__(self, tokens: VerificationTokenRepository, notifier: VerificationNotifier) -> None:
        self._tokens = tokens
        self._notifier = notifier

    def issue(self, user: User) -> str:
        """
        Issue a new verification token for ``user``.

        Any token previously issued to the same user stops being valid.

        Args:
            user: Persisted user

        Returns:
            The plaintext token

        Raises:
            UserNotFoundError: If the user is not persisted
        """
        token = generate_token()
        self._tokens.replace_token(user.id, token)
        logger.info("Issued verification token for user %s", user.id)
        self._notifier.notify(user.email, token)
        return token
