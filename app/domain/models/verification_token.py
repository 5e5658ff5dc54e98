from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class VerificationToken:
    id: int
    token: str
    user_id: int
    created_at: datetime
    updated_at: datetime
