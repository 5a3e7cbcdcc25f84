"""Exceptions raised by the AuthArmor extension and its hooks."""

from enum import Enum
from http import HTTPStatus
from typing import Any, Optional


class ErrorKind(Enum):
    """What went wrong; route handlers branch on this."""

    CONFIGURATION = 'configuration'
    VALIDATOR_REJECTED = 'validator_rejected'
    UPSTREAM = 'upstream'
    SESSION = 'session'
    BAD_REQUEST = 'bad_request'


class AuthArmorError(Exception):
    """Base for all errors the extension knows how to report."""

    kind = ErrorKind.BAD_REQUEST
    code: int = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ConfigurationError(AuthArmorError):
    """The extension or a hook was set up incorrectly."""

    kind = ErrorKind.CONFIGURATION
    code = HTTPStatus.INTERNAL_SERVER_ERROR


class ValidatorRejected(AuthArmorError):
    """
    Raised by a validator callback to refuse a request.

    .. code-block:: python

       @armor.validate('inviteRequest')
       def unique_nickname(data, session):
           if nickname_taken(data.nickname):
               raise ValidatorRejected('taken', code=400)

    """

    kind = ErrorKind.VALIDATOR_REJECTED


class SessionError(AuthArmorError):
    """No usable session for the request."""

    kind = ErrorKind.SESSION
    code = HTTPStatus.UNAUTHORIZED


class BadRequest(AuthArmorError):
    """The request body could not be read."""

    kind = ErrorKind.BAD_REQUEST


class UpstreamError(AuthArmorError):
    """A call to the AuthArmor API failed."""

    kind = ErrorKind.UPSTREAM

    def __init__(self, body: Any, status_code: Optional[int] = None) -> None:
        """
        Parameters
        ----------
        body : Any
            Decoded upstream response body, forwarded to the client as-is.
        status_code : int or None
            Upstream status; ``None`` if no response was received.

        """
        message = body.get('errorMessage', str(body)) \
            if isinstance(body, dict) else str(body)
        super().__init__(message)
        self.body = body
        self.status_code = status_code
