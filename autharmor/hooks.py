"""
Validator and event hooks.

Validators run before a remote call and may refuse the request by raising
:class:`.ValidatorRejected`; ``authRequest`` may also return a
:class:`.domain.ValidatedAuth` to change the nickname that is authenticated.
Events run after a remote call and are used to persist session state; their
return value is ignored.

Callbacks are called as ``callback(payload, session)`` where ``payload`` is
one of the NamedTuples in :mod:`autharmor.domain` and ``session`` is a
:class:`.SessionWrapper` (or ``None`` if the request has no session).
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional

from .exceptions import ConfigurationError
from .sessions import SessionWrapper

logger = logging.getLogger(__name__)

Callback = Callable[[Any, Optional[SessionWrapper]], Any]

INVITE_REQUEST = 'inviteRequest'
AUTH_REQUEST = 'authRequest'

INVITE_GENERATED = 'inviteGenerated'
INVITE_CONFIRM_SUCCESS = 'inviteConfirmSuccess'
INVITE_CONFIRM_ERROR = 'inviteConfirmError'
AUTH_SUCCESS = 'authSuccess'
AUTH_DECLINED = 'authDeclined'
AUTH_TIMEOUT = 'authTimeout'
AUTH_ERROR = 'authError'

VALIDATORS = (INVITE_REQUEST, AUTH_REQUEST)
EVENTS = (INVITE_GENERATED, INVITE_CONFIRM_SUCCESS, INVITE_CONFIRM_ERROR,
          AUTH_SUCCESS, AUTH_DECLINED, AUTH_TIMEOUT, AUTH_ERROR)


def noop(payload: Any, session: Optional[SessionWrapper]) -> None:
    """Default binding for every hook."""
    return None


def check_validator(name: str) -> None:
    """Raise :class:`.ConfigurationError` unless ``name`` is a validator."""
    if name not in VALIDATORS:
        raise ConfigurationError(
            f'The specified action "{name}" is unknown, please specify '
            f'one of these actions: {", ".join(VALIDATORS)}'
        )


def check_event(name: str) -> None:
    """Raise :class:`.ConfigurationError` unless ``name`` is an event."""
    if name not in EVENTS:
        raise ConfigurationError(
            f'The specified event "{name}" is unknown, please specify '
            f'one of these event names: {", ".join(EVENTS)}'
        )


class HookRegistry(object):
    """
    Callbacks bound to the known hook names.

    Every name is always bound; unset hooks are bound to :func:`noop`. The
    bindings are held in a read-only mapping that is replaced as a whole on
    each change, so a request never sees a half-applied registration.
    """

    def __init__(self) -> None:
        self._hooks: Mapping[str, Callback] = MappingProxyType(
            {name: noop for name in VALIDATORS + EVENTS}
        )

    def __getitem__(self, name: str) -> Callback:
        return self._hooks[name]

    def __contains__(self, name: object) -> bool:
        return name in self._hooks

    def _bind(self, name: str, callback: Callback) -> None:
        self._hooks = MappingProxyType({**self._hooks, name: callback})

    def validate(self, name: str, callback: Callback) -> None:
        """
        Register ``callback`` as the validator ``name``.

        Raises
        ------
        :class:`.ConfigurationError`
            If ``name`` is not one of :data:`VALIDATORS`.

        """
        check_validator(name)
        if not callable(callback):
            raise ConfigurationError(f'Validator for "{name}" is not callable')
        logger.debug('Registered validator %s: %r', name, callback)
        self._bind(name, callback)

    def on(self, name: str, callback: Callback) -> None:
        """
        Register ``callback`` as the handler of event ``name``.

        Raises
        ------
        :class:`.ConfigurationError`
            If ``name`` is not one of :data:`EVENTS`.

        """
        check_event(name)
        if not callable(callback):
            raise ConfigurationError(f'Handler for "{name}" is not callable')
        logger.debug('Registered event handler %s: %r', name, callback)
        self._bind(name, callback)

    def remove(self, name: str) -> None:
        """Reset ``name`` to :func:`noop`."""
        if name not in self._hooks:
            logger.debug('Ignoring removal of unknown hook %s', name)
            return
        self._bind(name, noop)

    def fire(self, name: str, payload: Any,
             session: Optional[SessionWrapper]) -> Any:
        """Call the callback bound to ``name`` and return its result."""
        callback = self._hooks[name]
        logger.debug('Dispatching %s', name)
        return callback(payload, session)
