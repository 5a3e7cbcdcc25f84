"""
Request flows of the AuthArmor routes.

Each controller takes the decoded request body (where there is one) and the
host session, calls the AuthArmor API and the registered hooks, and returns a
``(data, status, headers)`` tuple for the route to serialize. Controllers
never raise: every failure is logged and turned into an error response.
"""

import json
import logging
import uuid
from http import HTTPStatus
from typing import Any, Mapping, Optional, Tuple

from . import domain, hooks
from .config import Configuration
from .exceptions import AuthArmorError, BadRequest, ConfigurationError, \
    ErrorKind, SessionError
from .hooks import HookRegistry
from .services import AuthArmorSession
from .sessions import SessionWrapper, can_destroy, has_user

logger = logging.getLogger(__name__)

ResponseData = Tuple[Any, int, dict]

CONFIRM_INVITE_ACTION = 'Confirm Invite'
CONFIRM_INVITE_MSG = ('Please approve this request in order to confirm your '
                      'username')
LOGIN_ACTION = 'Login'
LOGIN_MSG = ('Someone is trying to login to your account, please respond to '
             'the request')


def parse_body(raw: Any) -> Mapping[str, Any]:
    """
    Get the request body as a mapping.

    ``raw`` may already be decoded, or be a JSON document (possibly one that
    was itself sent as a JSON string).
    """
    if raw is None or raw == '':
        return {}
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (ValueError, RecursionError) as e:
            raise BadRequest('Request body is not valid JSON') from e
        if isinstance(raw, str):
            return parse_body(raw)
    if not isinstance(raw, Mapping):
        raise BadRequest('Request body must be a JSON object')
    return raw


def _wrap(session: Any) -> Optional[SessionWrapper]:
    return SessionWrapper(session) if session is not None else None


def _client(config: Configuration) -> AuthArmorSession:
    return AuthArmorSession(config.login_url, config.api_url,
                            str(config.client_id), str(config.client_secret))


def _status_of(err: Exception) -> int:
    code = getattr(err, 'code', None)
    if isinstance(code, int) and 400 <= code < 600:
        return int(code)
    return int(HTTPStatus.BAD_REQUEST)


def _error_response(err: Exception, upstream_status: int) -> ResponseData:
    """Build the response for ``err``; upstream bodies are passed through."""
    if isinstance(err, AuthArmorError) and err.kind is ErrorKind.UPSTREAM:
        return err.body, upstream_status, {}   # type: ignore
    code = _status_of(err)
    message = getattr(err, 'message', None) or str(err)
    return {'errorMessage': message, 'errorCode': code}, code, {}


def _notify(registry: HookRegistry, name: str, payload: Any,
            session: Optional[SessionWrapper]) -> None:
    """Fire an event while already handling an error."""
    try:
        registry.fire(name, payload, session)
    except Exception:
        logger.exception('Handler for %s failed', name)


def invite(config: Configuration, registry: HookRegistry, raw_body: Any,
           session: Any) -> ResponseData:
    """
    Generate an invite for a nickname.

    Parameters
    ----------
    raw_body : Any
        Should include ``nickname``; may include ``referenceId`` and
        ``reset_and_reinvite``.
    session : Any
        Host session for the request, or ``None``.

    Returns
    -------
    dict
        The invite as returned by AuthArmor, or an error.
    int
        Status code; 200 if the invite was generated.
    dict
        Headers to add to the response.

    """
    wrapper = _wrap(session)
    try:
        body = parse_body(raw_body)
        nickname = body.get('nickname')
        client_reference = body.get('referenceId', body.get('reference_id'))
        with _client(config) as client:
            token = client.fetch_token()

            registry.fire(hooks.INVITE_REQUEST,
                          domain.InviteRequest(nickname, client_reference),
                          wrapper)

            reference_id = client_reference or str(uuid.uuid4())
            reset = body.get('reset_and_reinvite',
                             config.invite_config['reset_and_reinvite'])
            invite_data = client.request_invite(token, nickname,
                                                reference_id, bool(reset))

        registry.fire(hooks.INVITE_GENERATED,
                      domain.InviteGenerated(invite_data, nickname,
                                             reference_id),
                      wrapper)
    except Exception as e:
        logger.error('Invite request failed: %s', e)
        return _error_response(e, HTTPStatus.UNAUTHORIZED)
    return invite_data, HTTPStatus.OK, {}


def confirm_invite(config: Configuration, registry: HookRegistry,
                   raw_body: Any, session: Any) -> ResponseData:
    """Ask the invited user to approve the invite in their app."""
    wrapper = _wrap(session)
    nickname = None
    try:
        body = parse_body(raw_body)
        nickname = body.get('nickname')
        with _client(config) as client:
            token = client.fetch_token()
            auth = client.request_auth(token, nickname, {
                **config.auth_config,
                'action_name': CONFIRM_INVITE_ACTION,
                'short_msg': CONFIRM_INVITE_MSG
            })
    except AuthArmorError as e:
        logger.error('Invite confirmation failed for %s: %s', nickname, e)
        if e.kind is ErrorKind.UPSTREAM:
            _notify(registry, hooks.INVITE_CONFIRM_ERROR,
                    domain.InviteConfirmError(e.body, nickname),  # type: ignore
                    wrapper)
        return _error_response(e, HTTPStatus.UNAUTHORIZED)
    except Exception as e:
        logger.exception('Invite confirmation failed for %s', nickname)
        return _error_response(e, HTTPStatus.UNAUTHORIZED)

    try:
        registry.fire(hooks.INVITE_CONFIRM_SUCCESS,
                      domain.InviteConfirmSuccess(auth, nickname), wrapper)
    except Exception as e:
        logger.exception('Handler for %s failed',
                         hooks.INVITE_CONFIRM_SUCCESS)
        return _error_response(e, HTTPStatus.UNAUTHORIZED)
    return auth, HTTPStatus.OK, {}


def authenticate(config: Configuration, registry: HookRegistry,
                 raw_body: Any, session: Any) -> ResponseData:
    """
    Log a user in.

    The ``authRequest`` validator decides which nickname AuthArmor is asked
    to authenticate. The outcome (``response_message``) of the request
    selects the event that is fired: ``authSuccess``, ``authDeclined`` or
    ``authTimeout``. The response is 200 in all three cases; the client
    reads ``response_message`` to tell them apart.
    """
    wrapper = _wrap(session)
    nickname = None
    try:
        body = parse_body(raw_body)
        nickname = body.get('username')
        with _client(config) as client:
            token = client.fetch_token()

            validated = domain.ValidatedAuth.coerce(
                registry.fire(hooks.AUTH_REQUEST,
                              domain.AuthRequest(nickname), wrapper),
                default=nickname
            )
            nickname = validated.nickname
            auth = client.request_auth(token, nickname, {
                **config.auth_config,
                'action_name': LOGIN_ACTION,
                'short_msg': LOGIN_MSG
            })

        result = domain.AuthResult(auth, validated.metadata, nickname)
        message = auth.get('response_message') \
            if isinstance(auth, Mapping) else None
        if message == domain.AuthResponse.SUCCESS:
            registry.fire(hooks.AUTH_SUCCESS, result, wrapper)
            logger.debug('Authenticated %s', nickname)
            return auth, HTTPStatus.OK, {}
        if message == domain.AuthResponse.DECLINED:
            registry.fire(hooks.AUTH_DECLINED, result, wrapper)
            logger.warning('Authentication declined for %s', nickname)
            return auth, HTTPStatus.OK, {}
        if message == domain.AuthResponse.TIMEOUT:
            registry.fire(hooks.AUTH_TIMEOUT, result, wrapper)
            logger.warning('Authentication timed out for %s', nickname)
            return auth, HTTPStatus.OK, {}
    except AuthArmorError as e:
        logger.error('Authentication failed for %s: %s', nickname, e)
        if e.kind is ErrorKind.UPSTREAM:
            _notify(registry, hooks.AUTH_ERROR,
                    domain.AuthError(e.body, nickname), wrapper)  # type: ignore
        return _error_response(e, HTTPStatus.BAD_REQUEST)
    except Exception as e:
        logger.exception('Authentication failed for %s', nickname)
        return _error_response(e, HTTPStatus.BAD_REQUEST)

    logger.error('Unexpected response_message for %s: %r', nickname, message)
    _notify(registry, hooks.AUTH_ERROR, domain.AuthError(auth, nickname),
            wrapper)
    return auth, HTTPStatus.BAD_REQUEST, {}


def me(config: Configuration, session: Any) -> ResponseData:
    """Get the user of the current session from the host application."""
    try:
        if config.get_user is None:
            raise ConfigurationError(
                'Please provide a get_user function when initializing '
                'AuthArmor in order to be able to call the '
                f'{config.routes["me"]} route'
            )
        if not has_user(session):
            raise SessionError('User is not authenticated')
        user = config.get_user(session)
    except Exception as e:
        logger.error('Could not get current user: %s', e)
        return _error_response(e, HTTPStatus.UNAUTHORIZED)
    return user, HTTPStatus.OK, {}


def logout(session: Any) -> ResponseData:
    """Terminate the current session."""
    try:
        if not can_destroy(session):
            raise SessionError('An unknown error has occurred')
        SessionWrapper(session).clear()
    except Exception as e:
        logger.error('Logout failed: %s', e)
        return _error_response(e, HTTPStatus.UNAUTHORIZED)
    return {'message': 'Logged out successfully!'}, HTTPStatus.OK, {}
