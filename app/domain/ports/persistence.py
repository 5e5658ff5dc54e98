from __future__ import annotations

from typing import Optional, Protocol

from ..models import User, VerificationToken


class UserRepository(Protocol):
    """Persistence functions related to user accounts."""

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        ...


class VerificationTokenRepository(Protocol):
    """Persistence functions related to account verification tokens."""

    def replace_token(self, user_id: int, token: str) -> VerificationToken:
        ...

    def consume_token(self, token: str, not_before: Optional[str] = None) -> Optional[int]:
        ...

    def get_token_for_user(self, user_id: int) -> Optional[VerificationToken]:
        ...

    def purge_tokens_older_than(self, iso_timestamp: str) -> int:
        ...


class PersistenceGateway(
    UserRepository,
    VerificationTokenRepository,
    Protocol,
):
    """Composite gateway combining every persistence concern used by the app."""

    pass
