"""Domain models for the account verification service."""

from .outcomes import (
    Allow,
    ConsumeResult,
    Deny,
    GateDecision,
    Issued,
    ResendResult,
    TokenNotFound,
    UserNotFound,
    Verified,
)
from .user import User
from .verification_token import VerificationToken

__all__ = [
    "Allow",
    "ConsumeResult",
    "Deny",
    "GateDecision",
    "Issued",
    "ResendResult",
    "TokenNotFound",
    "User",
    "UserNotFound",
    "VerificationToken",
    "Verified",
]
