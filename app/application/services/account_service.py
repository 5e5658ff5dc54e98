from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Tuple

from jose import jwt
from passlib.context import CryptContext

from ...domain.errors import (
    AccountNotActivatedError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from ...domain.models import Deny, User
from ...domain.ports.persistence import UserRepository
from ...services.activation_gate import ActivationGate
from ...services.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)


class AccountService:
    """Registers accounts and authenticates logins behind the activation gate."""

    def __init__(
        self,
        users: UserRepository,
        issuer: TokenIssuer,
        gate: ActivationGate,
        secret_key: str,
        token_exp_minutes: int = 1440,
        algorithm: str = "HS256",
    ) -> None:
        if not secret_key:
            raise RuntimeError("ACCESS_TOKEN_SECRET is not configured.")
        if secret_key == "change-me":
            logger.warning(
                "ACCESS_TOKEN_SECRET is using the default value. Configure a secure secret in production."
            )
        self._users = users
        self._issuer = issuer
        self._gate = gate
        self._secret_key = secret_key
        self._token_exp_minutes = token_exp_minutes
        self._algorithm = algorithm
        self._pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")

    # ------------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> Tuple[User, str]:
        """
        Register a new, not yet activated account and issue its first token.

        Returns:
            Tuple of (User, verification_token)

        Raises:
            ValueError: If name, email or password are invalid
            EmailAlreadyRegisteredError: If email already exists
        """
        name_clean = name.strip()
        email_clean = email.strip().lower()
        if not name_clean:
            raise ValueError("Name is required.")
        if not email_clean:
            raise ValueError("Email is required.")
        if not password or len(password) < 6:
            raise ValueError("Password must be at least 6 characters long.")
        if self._users.get_user_by_email(email_clean):
            raise EmailAlreadyRegisteredError("Email already registered")

        hashed = self._pwd.hash(password)
        user = self._users.create_user(name=name_clean, email=email_clean, password_hash=hashed)
        logger.info("Registered user %s", user.id)
        token = self._issuer.issue(user)
        return user, token

    def login(self, email: str, password: str) -> str:
        email_clean = email.strip().lower()
        decision = self._gate.check(email_clean)
        if isinstance(decision, Deny):
            raise AccountNotActivatedError(decision.reason)

        user = decision.user
        if user is None or not self._pwd.verify(password, user.password_hash):
            raise InvalidCredentialsError("Invalid email or password")
        return self._create_token(user)

    def _create_token(self, user: User) -> str:
        now = datetime.now(tz=timezone.utc)
        expire = now + timedelta(minutes=self._token_exp_minutes)
        payload = {"sub": str(user.id), "email": user.email, "exp": expire}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
