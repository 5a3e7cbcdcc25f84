"""Application factory for a stand-alone AuthArmor app."""

from typing import Any, Optional

from flask import Flask

from . import config
from .routes import AuthArmor


def _session_user(current_session: Any) -> Any:
    return current_session.get('user')


def create_web_app(**overrides: Any) -> Flask:
    """
    Initialize an app that serves the AuthArmor routes at the root.

    Successful logins store the authenticated nickname in the Flask session,
    and ``/auth/autharmor/me`` returns it.

    Parameters
    ----------
    overrides
        Passed to :class:`.AuthArmor`; credentials default to
        ``AUTHARMOR_CLIENT_ID`` and ``AUTHARMOR_CLIENT_SECRET``.

    """
    app = Flask('autharmor')
    app.config.from_object(config)

    settings = {
        'client_id': app.config['AUTHARMOR_CLIENT_ID'],
        'client_secret': app.config['AUTHARMOR_CLIENT_SECRET'],
        'login_url': app.config['AUTHARMOR_LOGIN_URL'],
        'api_url': app.config['AUTHARMOR_API_URL'],
        'invite_config': {
            'reset_and_reinvite': app.config['AUTHARMOR_RESET_AND_REINVITE']
        },
        'get_user': _session_user,
    }
    settings.update(overrides)
    armor = AuthArmor(app, **settings)

    @armor.on('authSuccess')
    def save_user(result: Any, current: Optional[Any]) -> None:
        if current is not None:
            current.save({'nickname': result.nickname,
                          'metadata': dict(result.metadata)})

    app.extensions['autharmor'] = armor
    return app
