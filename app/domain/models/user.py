"""User domain model for account registration and activation."""

from datetime import datetime
from typing import Optional


class User:
    """
    User entity tracked by the verification flow.

    Attributes:
        id: Unique identifier
        name: Display name given at registration
        email: User email address (unique, lower-cased)
        password_hash: Hashed password
        activated: Whether the account has been confirmed through the emailed link
        created_at: Account creation timestamp
        updated_at: Last update timestamp
    """

    def __init__(
        self,
        id: int,
        name: str,
        email: str,
        password_hash: str,
        activated: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.name = name
        self.email = email
        self.password_hash = password_hash
        self.activated = activated
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} activated={self.activated}>"
