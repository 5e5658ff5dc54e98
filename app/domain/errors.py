"""Error taxonomy for account verification.

Callers catch ``AccountError`` to handle every failure raised by the services,
or a subclass to map it to a specific response.
"""

__all__ = [
    "AccountError",
    "EmailAlreadyRegisteredError",
    "InvalidCredentialsError",
    "AccountNotActivatedError",
    "UserNotFoundError",
    "NotificationDeliveryError",
]


class AccountError(Exception):
    """Base class for account verification errors."""

    pass


class EmailAlreadyRegisteredError(AccountError):
    """Registration attempted with an email that already has an account."""

    pass


class InvalidCredentialsError(AccountError):
    """Unknown email or wrong password on login."""

    pass


class AccountNotActivatedError(AccountError):
    """Login refused because the account has not been confirmed yet."""

    def __init__(self, reason: str):
        """Initialize AccountNotActivatedError.

        Args:
            reason: Message shown to the user explaining how to activate.
        """
        super().__init__(reason)
        self.reason = reason


class UserNotFoundError(AccountError):
    """A token was issued for a user that is not persisted."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class NotificationDeliveryError(AccountError):
    """The mail transport reported that a verification email was not sent."""

    pass
