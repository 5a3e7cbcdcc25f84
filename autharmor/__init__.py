"""
Flask integration for AuthArmor passwordless authentication.

:class:`AuthArmor` registers a small set of JSON routes on a Flask app or
blueprint:

- ``POST /auth/autharmor/invite`` generates an invite for a nickname,
- ``POST /auth/autharmor/invite/confirm`` asks the invitee to confirm it,
- ``POST /auth/autharmor/auth`` logs a user in,
- ``GET /auth/autharmor/me`` returns the user of the current session,
- ``GET /auth/autharmor/logout`` ends the session.

All verification is delegated to the AuthArmor API. The host application
plugs in through validators (``inviteRequest``, ``authRequest``), which may
refuse a request before AuthArmor is called, and events (``inviteGenerated``,
``inviteConfirmSuccess``, ``inviteConfirmError``, ``authSuccess``,
``authDeclined``, ``authTimeout``, ``authError``), which are told about the
outcome and typically write the user to the session.
"""

from .exceptions import AuthArmorError, ConfigurationError, ErrorKind, \
    SessionError, UpstreamError, ValidatorRejected
from .routes import AuthArmor
