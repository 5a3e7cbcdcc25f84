"""Payloads passed to validator and event callbacks."""

from typing import Any, Mapping, NamedTuple, Optional


class AuthResponse:
    """Values of ``response_message`` on an ``/auth/request`` result."""

    SUCCESS = 'Success'
    DECLINED = 'Declined'
    TIMEOUT = 'Timeout'


class InviteRequest(NamedTuple):
    """Input of the ``inviteRequest`` validator."""

    nickname: Optional[str]
    reference_id: Optional[str] = None
    """Reference id sent by the client, if any."""


class AuthRequest(NamedTuple):
    """Input of the ``authRequest`` validator."""

    nickname: Optional[str]
    """The identifier the user typed in; not necessarily their nickname."""


class ValidatedAuth(NamedTuple):
    """
    Output of the ``authRequest`` validator.

    ``nickname`` is what AuthArmor is asked to authenticate, so a validator
    may map an e-mail address or username onto the registered nickname.
    """

    nickname: Optional[str]
    metadata: Mapping[str, Any] = {}

    @classmethod
    def coerce(cls, value: Any, default: Optional[str]) -> 'ValidatedAuth':
        """Accept a :class:`ValidatedAuth`, a mapping, or ``None``."""
        if value is None:
            return cls(nickname=default)
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(nickname=value.get('nickname', default),
                       metadata=value.get('metadata') or {})
        raise TypeError(f'authRequest validator returned {type(value)!r}')


class InviteGenerated(NamedTuple):
    """Input of the ``inviteGenerated`` event."""

    invite: Any
    username: Optional[str]
    reference_id: str


class InviteConfirmSuccess(NamedTuple):
    auth: Any
    nickname: Optional[str]


class InviteConfirmError(NamedTuple):
    error: Any
    nickname: Optional[str]


class AuthResult(NamedTuple):
    """Input of the ``authSuccess``, ``authDeclined`` and ``authTimeout``
    events."""

    auth: Any
    metadata: Mapping[str, Any]
    nickname: Optional[str]


class AuthError(NamedTuple):
    """Input of the ``authError`` event."""

    error: Any
    nickname: Optional[str]
