"""Flask configuration for the AuthArmor extension."""

import os
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple, Optional

from flask import session as flask_session

from .exceptions import ConfigurationError

AUTHARMOR_LOGIN_URL = os.environ.get('AUTHARMOR_LOGIN_URL',
                                     'https://login.autharmor.com')
"""Base URL of the AuthArmor OAuth2 token service."""

AUTHARMOR_API_URL = os.environ.get('AUTHARMOR_API_URL',
                                   'https://api.autharmor.com/v1')
"""Base URL of the AuthArmor invite/auth API."""

AUTHARMOR_CLIENT_ID = os.environ.get('AUTHARMOR_CLIENT_ID')
"""OAuth2 client id. Used by :func:`autharmor.factory.create_web_app`."""

AUTHARMOR_CLIENT_SECRET = os.environ.get('AUTHARMOR_CLIENT_SECRET')
"""OAuth2 client secret. Used by :func:`autharmor.factory.create_web_app`."""

AUTHARMOR_RESET_AND_REINVITE = bool(int(
    os.environ.get('AUTHARMOR_RESET_AND_REINVITE', '0')
))
"""Default for ``reset_and_reinvite`` when an invite request omits it."""

SECRET_KEY = os.environ.get('SECRET_KEY', 'foosecret')
"""Signs the Flask session cookie in the stand-alone app."""

DEFAULT_ROUTES = MappingProxyType({
    'invite': '/auth/autharmor/invite',
    'inviteConfirm': '/auth/autharmor/invite/confirm',
    'auth': '/auth/autharmor/auth',
    'me': '/auth/autharmor/me',
    'logout': '/auth/autharmor/logout',
})

DEFAULT_AUTH_CONFIG = MappingProxyType({
    'timeout_in_seconds': 60,
    'action_name': 'Confirm Invite',
    'short_msg': 'Please approve this request in order to confirm your '
                 'username',
})

DEFAULT_INVITE_CONFIG = MappingProxyType({'reset_and_reinvite': False})

# Camel-case keys accepted for parity with the JS SDK.
_ALIASES = {
    'clientId': 'client_id',
    'clientSecret': 'client_secret',
    'getUser': 'get_user',
    'authConfig': 'auth_config',
    'inviteConfig': 'invite_config',
    'loginUrl': 'login_url',
    'apiUrl': 'api_url',
    'sessionLoader': 'session_loader',
}


def _current_session() -> Any:
    return flask_session._get_current_object()   # type: ignore


class Configuration(NamedTuple):
    """Effective settings of one :class:`autharmor.AuthArmor` instance."""

    client_id: Optional[str]
    client_secret: Optional[str]

    routes: Mapping[str, str]
    """Route name to URL rule."""

    auth_config: Mapping[str, Any]
    """Base parameters for every ``/auth/request`` call."""

    invite_config: Mapping[str, Any]

    get_user: Optional[Callable[[Any], Any]] = None
    """Looks up the user for the ``me`` route, given the host session."""

    login_url: str = AUTHARMOR_LOGIN_URL
    api_url: str = AUTHARMOR_API_URL

    session_loader: Callable[[], Any] = _current_session
    """Returns the host session for the current request."""

    @classmethod
    def build(cls, **overrides: Any) -> 'Configuration':
        """
        Merge ``overrides`` onto the defaults.

        Nested mappings (``routes``, ``auth_config``, ``invite_config``) are
        merged key by key rather than replaced.

        Raises
        ------
        :class:`.ConfigurationError`
            If an override is not a known setting.

        """
        params = {}
        for key, value in overrides.items():
            key = _ALIASES.get(key, key)
            if key not in cls._fields:
                raise ConfigurationError(f'Unknown setting "{key}"')
            params[key] = value

        routes = {**DEFAULT_ROUTES, **(params.pop('routes', None) or {})}
        unknown = set(routes) - set(DEFAULT_ROUTES)
        if unknown:
            raise ConfigurationError(
                f'Unknown route(s): {", ".join(sorted(unknown))}'
            )
        auth_config = {**DEFAULT_AUTH_CONFIG,
                       **(params.pop('auth_config', None) or {})}
        invite_config = {**DEFAULT_INVITE_CONFIG,
                         **(params.pop('invite_config', None) or {})}
        params.setdefault('client_id', None)
        params.setdefault('client_secret', None)
        for key in ('login_url', 'api_url', 'session_loader'):
            if params.get(key) is None:
                params.pop(key, None)
        return cls(routes=MappingProxyType(routes),
                   auth_config=MappingProxyType(auth_config),
                   invite_config=MappingProxyType(invite_config),
                   **params)
