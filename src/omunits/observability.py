"""Trace ids correlating the log events of one unit-set install or CLI run."""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

_active_trace: ContextVar[Optional[str]] = ContextVar("omunits_trace", default=None)


def current_trace_id() -> Optional[str]:
    return _active_trace.get()


def bind_trace_id(value: Optional[str]) -> Optional[Token]:
    """Make ``value`` the active trace id; ``None`` leaves the context untouched."""

    return None if value is None else _active_trace.set(value)


def reset_trace_id(token: Optional[Token]) -> None:
    if token is not None:
        _active_trace.reset(token)


@contextmanager
def traced(operation: str) -> Iterator[str]:
    """Run the block under a trace id named after ``operation``.

    An enclosing trace is kept, so a unit set installed during a CLI run logs
    under the run's id.
    """

    trace_id = current_trace_id() or f"{operation}-{uuid.uuid4().hex[:12]}"
    token = _active_trace.set(trace_id)
    try:
        yield trace_id
    finally:
        _active_trace.reset(token)


def log_event(message: str, **fields: object) -> None:
    """Log ``message`` at INFO with ``fields`` and the active trace id as payload."""

    logger.info(message, extra={"payload": {"trace_id": current_trace_id(), **fields}})


__all__ = ["bind_trace_id", "current_trace_id", "log_event", "reset_trace_id", "traced"]
