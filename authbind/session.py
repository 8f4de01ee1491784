"""
Session lifecycle glue.

A ``UISession`` is one logical user session of the host application. The host
opens sessions through a ``SessionInitNotifier`` (which informs subscribers,
such as the authorization engine) and marks the session serving the current
thread or task with ``session_scope()``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
import logging
from typing import Any
import uuid

from authbind.core.errors import InitializationError
from authbind.host import NavigatorFacade

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class UISession:
    """
    Per-session storage.

    ``attributes`` is where session-scoped services (e.g. the authorization
    state) keep their instance; ``navigator`` is optional.
    """

    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    navigator: NavigatorFacade | None = None
    attributes: dict[str, Any] = field(default_factory=dict)


SessionInitListener = Callable[[UISession], None]


class SessionInitNotifier:
    """Fires every registered listener once for each newly opened session."""

    def __init__(self) -> None:
        self._listeners: list[SessionInitListener] = []

    def add_session_init_listener(self, listener: SessionInitListener) -> None:
        self._listeners.append(listener)

    def open_session(self, navigator: NavigatorFacade | None = None) -> UISession:
        session = UISession(navigator=navigator)
        for listener in list(self._listeners):
            listener(session)
        logger.info("Session opened session_id=%s listeners=%d", session.session_id, len(self._listeners))
        return session


_current_session: ContextVar[UISession | None] = ContextVar("authbind_current_session", default=None)


def current_session() -> UISession | None:
    return _current_session.get()


def get_current_session() -> UISession:
    session = _current_session.get()
    if session is None:
        raise InitializationError("no active session; wrap the call in session_scope(session)")
    return session


@contextmanager
def session_scope(session: UISession) -> Iterator[UISession]:
    """Make ``session`` the current session for the enclosed block."""
    token = _current_session.set(session)
    try:
        yield session
    finally:
        _current_session.reset(token)
