from __future__ import annotations

from ..domain.models import Allow, Deny, GateDecision
from ..domain.ports.persistence import UserRepository

UNACTIVATED_REASON = "Confirm your account to continue. Please check your email."


class ActivationGate:
    """Blocks login attempts for accounts that have not been confirmed by email."""

    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def check(self, email: str) -> GateDecision:
        user = self._users.get_user_by_email(email.strip())
        if user is None:
            return Allow()
        if not user.activated:
            return Deny(reason=UNACTIVATED_REASON)
        return Allow(user=user)
