"""Facade over the host application's per-request session."""

import logging
from collections.abc import MutableMapping
from typing import Any

logger = logging.getLogger(__name__)

USER_KEY = 'user'


def _get_user(session: Any) -> Any:
    if isinstance(session, MutableMapping):
        return session.get(USER_KEY)
    return getattr(session, USER_KEY, None)


def has_user(session: Any) -> bool:
    """Whether ``session`` exists and holds an authenticated user."""
    return session is not None and bool(_get_user(session))


def can_destroy(session: Any) -> bool:
    """Whether ``session`` can be terminated."""
    if session is None:
        return False
    if callable(getattr(session, 'destroy', None)):
        return True
    return isinstance(session, MutableMapping)


class SessionWrapper(object):
    """
    What hook callbacks see of the session.

    Works with Flask's dict-like session and with session objects exposing
    ``user``, ``save()`` and ``destroy()`` (e.g. a server-side store).
    """

    def __init__(self, session: Any) -> None:
        self._session = session
        self._user = _get_user(session)

    @property
    def user(self) -> Any:
        """The stored user at the time the request started."""
        return self._user

    def save(self, user: Any) -> None:
        """Replace the stored user and persist the session."""
        if isinstance(self._session, MutableMapping):
            self._session[USER_KEY] = user
            if hasattr(self._session, 'modified'):
                self._session.modified = True   # type: ignore
        else:
            setattr(self._session, USER_KEY, user)
        persist = getattr(self._session, 'save', None)
        if callable(persist):
            persist()
        logger.debug('Saved user to session')

    def clear(self) -> None:
        """Terminate the session."""
        destroy = getattr(self._session, 'destroy', None)
        if callable(destroy):
            destroy()
        elif isinstance(self._session, MutableMapping):
            self._session.clear()
        logger.debug('Cleared session')
