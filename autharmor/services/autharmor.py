"""Integration with the AuthArmor REST API."""

import json
import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..exceptions import UpstreamError

logger = logging.getLogger(__name__)


def _decode(response: requests.Response) -> Any:
    try:
        return response.json()
    except (json.decoder.JSONDecodeError, ValueError):
        logger.debug('AuthArmor response was not JSON')
        return {'errorMessage': response.text or response.reason,
                'errorCode': response.status_code}


class AuthArmorSession(object):
    """
    Talks to the AuthArmor token service and API for one request.

    Tokens are not cached: each request fetches its own with
    :meth:`fetch_token` and uses it for a single API call.
    """

    def __init__(self, login_url: str, api_url: str, client_id: str,
                 client_secret: str) -> None:
        """Create a new HTTP session."""
        self.login_url = login_url.rstrip('/')
        self.api_url = api_url.rstrip('/')
        self.client_id = client_id
        self.client_secret = client_secret
        self._session = requests.Session()
        logger.debug('New AuthArmorSession for %s', self.api_url)

    def __enter__(self) -> 'AuthArmorSession':
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the pooled connections of the HTTP session."""
        self._session.close()

    def _post(self, url: str, **kwargs: Any) -> Any:
        try:
            response = self._session.post(url, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error('Request to %s failed: %s', url, e)
            raise UpstreamError({'errorMessage': str(e)}) from e
        if not response.ok:
            logger.debug('%s responded with status %i', url,
                         response.status_code)
            raise UpstreamError(_decode(response), response.status_code)
        return _decode(response)

    def fetch_token(self) -> str:
        """
        Exchange the client credentials for an access token.

        Returns
        -------
        str

        Raises
        ------
        :class:`.UpstreamError`
            If the token service refuses the credentials or is unreachable.

        """
        data = self._post(f'{self.login_url}/connect/token', data={
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'grant_type': 'client_credentials'
        })
        try:
            return str(data['access_token'])
        except (KeyError, TypeError) as e:
            raise UpstreamError(data) from e

    def _headers(self, token: str) -> Dict[str, str]:
        return {'Authorization': f'Bearer {token}'}

    def request_invite(self, token: str, nickname: Optional[str],
                       reference_id: str,
                       reset_and_reinvite: bool = False) -> Any:
        """
        Create an invite for ``nickname``.

        Parameters
        ----------
        token : str
            Access token from :meth:`fetch_token`.
        nickname : str
        reference_id : str
            Caller's identifier for the invite.
        reset_and_reinvite : bool
            Replace an existing registration for ``nickname``.

        Returns
        -------
        Any
            The invite exactly as AuthArmor returned it.

        """
        logger.debug('Request invite for %s (%s)', nickname, reference_id)
        return self._post(f'{self.api_url}/invite/request', json={
            'nickname': nickname,
            'reference_id': reference_id,
            'reset_and_reinvite': reset_and_reinvite
        }, headers=self._headers(token))

    def request_auth(self, token: str, nickname: Optional[str],
                     params: Mapping[str, Any]) -> Any:
        """Ask AuthArmor to authenticate ``nickname``; ``params`` are sent
        along (timeout, action name, message)."""
        logger.debug('Request auth for %s (%s)', nickname,
                     params.get('action_name'))
        return self._post(f'{self.api_url}/auth/request',
                          json={**params, 'nickname': nickname},
                          headers=self._headers(token))
