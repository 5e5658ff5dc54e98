"""Tagged results for the verification operations.

Expected negative results (unknown token, unknown email, inactive account) are
returned as values instead of raised, so callers can branch on them without
catching data-access errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .user import User


@dataclass(frozen=True, slots=True)
class Verified:
    user_id: int


@dataclass(frozen=True, slots=True)
class TokenNotFound:
    token: str


ConsumeResult = Union[Verified, TokenNotFound]


@dataclass(frozen=True, slots=True)
class Allow:
    # None when no account matches the email; authentication rejects it later.
    user: Optional[User] = None


@dataclass(frozen=True, slots=True)
class Deny:
    reason: str


GateDecision = Union[Allow, Deny]


@dataclass(frozen=True, slots=True)
class Issued:
    user_id: int
    token: str


@dataclass(frozen=True, slots=True)
class UserNotFound:
    email: str


ResendResult = Union[Issued, UserNotFound]
