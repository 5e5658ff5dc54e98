from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from ..domain.models import ConsumeResult, TokenNotFound, Verified
from ..domain.ports.persistence import VerificationTokenRepository

logger = logging.getLogger(__name__)


class VerificationProcessor:
    """Consumes verification tokens and activates the owning account."""

    def __init__(self, tokens: VerificationTokenRepository, *, ttl_hours: int = 0) -> None:
        self._tokens = tokens
        self._ttl: Optional[timedelta] = timedelta(hours=ttl_hours) if ttl_hours > 0 else None

    def consume(self, token: str) -> ConsumeResult:
        cutoff = self._cutoff()
        user_id = self._tokens.consume_token(token, not_before=cutoff)
        if user_id is None:
            logger.info("Rejected unknown or expired verification token.")
            return TokenNotFound(token=token)

        logger.info("Activated user %s from verification token.", user_id)
        if cutoff:
            purged = self._tokens.purge_tokens_older_than(cutoff)
            if purged:
                logger.debug("Purged %s expired verification tokens older than %s.", purged, cutoff)
        return Verified(user_id=user_id)

    def _cutoff(self) -> Optional[str]:
        if self._ttl is None:
            return None
        return (datetime.now(timezone.utc) - self._ttl).replace(microsecond=0).isoformat()
