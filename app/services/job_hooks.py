"""Observability hooks attached to the notification job boundary."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

JobEvent = Dict[str, Any]
BeforeHook = Callable[[JobEvent], None]
AfterHook = Callable[[JobEvent], None]
FailureHook = Callable[[JobEvent, BaseException], None]


@dataclass(slots=True)
class JobHooks:
    """Callbacks run before a job starts, after it succeeds and when it fails."""

    before: List[BeforeHook] = field(default_factory=list)
    after: List[AfterHook] = field(default_factory=list)
    failure: List[FailureHook] = field(default_factory=list)

    def run_before(self, event: JobEvent) -> None:
        for hook in self.before:
            _call_safely(hook, event)

    def run_after(self, event: JobEvent) -> None:
        for hook in self.after:
            _call_safely(hook, event)

    def run_failure(self, event: JobEvent, exc: BaseException) -> None:
        for hook in self.failure:
            _call_safely(hook, event, exc)


def logging_job_hooks(logger: Optional[logging.Logger] = None) -> JobHooks:
    """Hooks that log every job transition with its queue and payload."""
    log = logger or logging.getLogger("app.jobs")

    def before(event: JobEvent) -> None:
        log.info("Starting to process job %s", event)

    def after(event: JobEvent) -> None:
        log.info("Finished processing job %s", event)

    def failure(event: JobEvent, exc: BaseException) -> None:
        log.warning("Job failed %s: %s", event, exc)

    return JobHooks(before=[before], after=[after], failure=[failure])


def _call_safely(hook: Callable[..., None], *args: Any) -> None:
    try:
        hook(*args)
    except Exception:
        logging.getLogger(__name__).exception("Job hook %r raised.", hook)
