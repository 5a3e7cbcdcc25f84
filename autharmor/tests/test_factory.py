"""Tests for :func:`autharmor.factory.create_web_app`."""

from unittest import TestCase, mock

from autharmor import AuthArmor, ConfigurationError, controllers, factory
from autharmor.exceptions import BadRequest
from autharmor.services import autharmor as service

from .test_routes import mock_api


class TestCreateWebApp(TestCase):
    """The stand-alone app keeps the logged-in user in its session."""

    def test_requires_credentials(self):
        """Without credentials the app cannot be built."""
        with self.assertRaises(ConfigurationError):
            factory.create_web_app(client_id=None, client_secret=None)

    @mock.patch(f'{service.__name__}.requests.Session')
    def test_login_me_logout(self, mock_session):
        """Log in, look at the current user, log out."""
        mock_api(mock_session, auth={'response_message': 'Success'})
        app = factory.create_web_app(client_id='foo', client_secret='bar')
        self.assertIsInstance(app.extensions['autharmor'], AuthArmor)
        client = app.test_client()

        self.assertEqual(client.get('/auth/autharmor/me').status_code, 401)

        response = client.post('/auth/autharmor/auth',
                               json={'username': 'alice'})
        self.assertEqual(response.status_code, 200)

        response = client.get('/auth/autharmor/me')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(),
                         {'nickname': 'alice', 'metadata': {}})

        self.assertEqual(client.get('/auth/autharmor/logout').status_code,
                         200)
        self.assertEqual(client.get('/auth/autharmor/me').status_code, 401)


class TestParseBody(TestCase):
    """:func:`.controllers.parse_body` accepts decoded and encoded bodies."""

    def test_mapping(self):
        self.assertEqual(controllers.parse_body({'a': 1}), {'a': 1})

    def test_empty(self):
        self.assertEqual(controllers.parse_body(None), {})
        self.assertEqual(controllers.parse_body(''), {})

    def test_json_string(self):
        self.assertEqual(controllers.parse_body('{"a": 1}'), {'a': 1})
        self.assertEqual(controllers.parse_body('"{\\"a\\": 1}"'), {'a': 1})

    def test_not_an_object(self):
        for raw in ['[1, 2]', '{nope', 42]:
            with self.assertRaises(BadRequest):
                controllers.parse_body(raw)
