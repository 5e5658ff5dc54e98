from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..domain.errors import NotificationDeliveryError
from .email_service import EmailService
from .job_hooks import JobHooks, logging_job_hooks

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class NotificationJob:
    recipient: str
    token: str
    attempts: int = 0


class NotificationDispatcher:
    """Background worker queue delivering verification emails off the request path."""

    def __init__(
        self,
        email_service: EmailService,
        base_url: str,
        *,
        queue_name: str = "emails:verify-account",
        max_workers: int = 2,
        max_attempts: int = 3,
        retry_delay_seconds: float = 5.0,
        hooks: Optional[JobHooks] = None,
    ) -> None:
        self._email = email_service
        self._base_url = base_url.rstrip("/")
        self._queue_name = queue_name
        self._max_workers = max_workers
        self._max_attempts = max(1, max_attempts)
        self._retry_delay = retry_delay_seconds
        self._hooks = hooks if hooks is not None else logging_job_hooks()
        self._queue: asyncio.Queue[Optional[NotificationJob]] = asyncio.Queue()
        self._workers: List[asyncio.Task[None]] = []
        self._shutdown = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return bool(self._workers)

    def get_status(self) -> Dict[str, Any]:
        return {"running": self.is_running, "pending": self._queue.qsize()}

    async def start(self) -> None:
        if self._workers:
            return
        logger.info("Starting notification dispatcher with %s workers.", self._max_workers)
        self._shutdown.clear()
        loop = asyncio.get_running_loop()
        for _ in range(self._max_workers):
            task = loop.create_task(self._worker(), name="notification-dispatcher")
            self._workers.append(task)

    async def stop(self) -> None:
        if not self._workers:
            return
        logger.info("Stopping notification dispatcher.")
        self._shutdown.set()
        for _ in self._workers:
            await self._queue.put(None)
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers.clear()

    def notify(self, recipient: str, token: str) -> None:
        if self._shutdown.is_set():
            logger.warning("Notification dispatcher is shutting down; dropping email for %s.", recipient)
            return
        self._queue.put_nowait(NotificationJob(recipient=recipient, token=token))

    async def join(self) -> None:
        """Wait until every queued job has been processed."""
        await self._queue.join()

    async def _worker(self) -> None:
        while True:
            job = await self._queue.get()
            if job is None:
                self._queue.task_done()
                break
            try:
                await self._process_job(job)
            except Exception:  # pragma: no cover
                logger.exception("Unexpected error while processing notification job.")
            finally:
                self._queue.task_done()

    async def _process_job(self, job: NotificationJob) -> None:
        while job.attempts < self._max_attempts:
            job.attempts += 1
            event = self._describe(job)
            self._hooks.run_before(event)
            try:
                await self._deliver(job)
            except Exception as exc:
                self._hooks.run_failure(event, exc)
                if job.attempts >= self._max_attempts or self._shutdown.is_set():
                    logger.error(
                        "Giving up on verification email for %s after %s attempts.",
                        job.recipient,
                        job.attempts,
                    )
                    return
                await asyncio.sleep(self._retry_delay * (2 ** (job.attempts - 1)))
                continue
            self._hooks.run_after(event)
            return

    async def _deliver(self, job: NotificationJob) -> None:
        sent = await asyncio.to_thread(
            self._email.send_verification_email,
            job.recipient,
            job.token,
            self._base_url,
        )
        if not sent:
            raise NotificationDeliveryError(f"Verification email to {job.recipient} was not sent")

    def _describe(self, job: NotificationJob) -> Dict[str, Any]:
        return {
            "connection": "asyncio",
            "queue": self._queue_name,
            "job": "send_verification_email",
            "attempt": job.attempts,
            "payload": {"recipient": job.recipient},
        }
