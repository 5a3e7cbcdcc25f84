"""Binds the AuthArmor routes to a Flask application or blueprint."""

import logging
from typing import Any, Callable, Mapping, Optional, Union

from flask import Blueprint, Flask, Response, jsonify, make_response, request

from . import controllers
from .config import Configuration
from .exceptions import ConfigurationError
from .hooks import Callback, HookRegistry, check_event, check_validator

logger = logging.getLogger(__name__)

Router = Union[Flask, Blueprint]


def _respond(data: Any, code: int, headers: dict) -> Response:
    response: Response = make_response(jsonify(data), int(code))
    response.headers.extend(headers)
    return response


def _request_body() -> Any:
    """The JSON body of the current request, or its raw text."""
    body = request.get_json(silent=True)
    if body is None:
        return request.get_data(as_text=True)
    return body


class AuthArmor(object):
    """
    Adds the AuthArmor invite and login routes to a Flask app or blueprint.

    .. code-block:: python

       from flask import Flask
       from autharmor import AuthArmor

       app = Flask('someapp')
       armor = AuthArmor(app, client_id='...', client_secret='...',
                         get_user=load_user)

       @armor.on('authSuccess')
       def login(result, session):
           session.save({'nickname': result.nickname})

    """

    def __init__(self, router: Router, **config: Any) -> None:
        """
        Register the routes on ``router``.

        Parameters
        ----------
        router : :class:`Flask` or :class:`Blueprint`
        config
            Overrides for :class:`.Configuration`; ``client_id`` and
            ``client_secret`` are required.

        Raises
        ------
        :class:`.ConfigurationError`
            If the client credentials are missing.

        """
        self.config = Configuration.build(**config)
        if not self.config.client_id or not self.config.client_secret:
            raise ConfigurationError(
                'Please specify a client_secret and a client_id in order to '
                'be able to generate and use invites'
            )
        self.hooks = HookRegistry()
        self.init_router(router)

    @property
    def routes(self) -> Mapping[str, str]:
        """Effective URL rule of each route."""
        return self.config.routes

    def _session(self) -> Any:
        return self.config.session_loader()

    def init_router(self, router: Router) -> None:
        """Add the five routes to ``router``."""
        routes = self.config.routes
        router.add_url_rule(routes['invite'], 'autharmor_invite',
                            self.invite, methods=['POST'])
        router.add_url_rule(routes['inviteConfirm'],
                            'autharmor_invite_confirm',
                            self.confirm_invite, methods=['POST'])
        router.add_url_rule(routes['auth'], 'autharmor_auth',
                            self.authenticate, methods=['POST'])
        router.add_url_rule(routes['me'], 'autharmor_me', self.me,
                            methods=['GET'])
        router.add_url_rule(routes['logout'], 'autharmor_logout',
                            self.logout, methods=['GET'])
        logger.debug('Registered AuthArmor routes: %s', dict(routes))

    def invite(self) -> Response:
        """Generate an invite."""
        return _respond(*controllers.invite(self.config, self.hooks,
                                            _request_body(), self._session()))

    def confirm_invite(self) -> Response:
        """Confirm an invite."""
        return _respond(*controllers.confirm_invite(
            self.config, self.hooks, _request_body(), self._session()
        ))

    def authenticate(self) -> Response:
        """Log in."""
        return _respond(*controllers.authenticate(
            self.config, self.hooks, _request_body(), self._session()
        ))

    def me(self) -> Response:
        """Get the current user."""
        return _respond(*controllers.me(self.config, self._session()))

    def logout(self) -> Response:
        """Log out."""
        return _respond(*controllers.logout(self._session()))

    def validate(self, name: str, callback: Optional[Callback] = None) -> Any:
        """
        Register a validator; usable as a decorator.

        Raises
        ------
        :class:`.ConfigurationError`
            If ``name`` is not ``inviteRequest`` or ``authRequest``.

        """
        if callback is None:
            check_validator(name)
            return self._decorator(self.validate, name)
        self.hooks.validate(name, callback)
        return callback

    def on(self, name: str, callback: Optional[Callback] = None) -> Any:
        """Register an event handler; usable as a decorator."""
        if callback is None:
            check_event(name)
            return self._decorator(self.on, name)
        self.hooks.on(name, callback)
        return callback

    def remove(self, name: str) -> None:
        """Unbind the validator or event handler ``name``."""
        self.hooks.remove(name)

    register_validator = validate
    register_event_handler = on
    unregister = remove

    @staticmethod
    def _decorator(register: Callable, name: str) -> Callable:
        def decorator(callback: Callback) -> Callback:
            return register(name, callback)   # type: ignore
        return decorator
