"""Tests for :mod:`autharmor.sessions`."""

from unittest import TestCase, mock

from autharmor import sessions


class DictSession(dict):
    """Like Flask's cookie session."""

    modified = False


class TestWrapperOverMapping(TestCase):
    """The wrapper works with dict-like sessions."""

    def test_user_snapshot(self):
        """The user is read when the wrapper is created."""
        session = DictSession(user={'nickname': 'alice'})
        wrapper = sessions.SessionWrapper(session)
        session['user'] = {'nickname': 'bob'}
        self.assertEqual(wrapper.user, {'nickname': 'alice'})

    def test_save(self):
        """Saving replaces the user and marks the session modified."""
        session = DictSession(user={'nickname': 'alice'})
        sessions.SessionWrapper(session).save({'nickname': 'bob'})
        self.assertEqual(session['user'], {'nickname': 'bob'})
        self.assertTrue(session.modified)

    def test_save_plain_dict(self):
        """A plain dict has no modified flag to set."""
        session = {}
        sessions.SessionWrapper(session).save({'nickname': 'bob'})
        self.assertEqual(session, {'user': {'nickname': 'bob'}})

    def test_clear(self):
        """Clearing empties the session."""
        session = DictSession(user={'nickname': 'alice'}, other=1)
        sessions.SessionWrapper(session).clear()
        self.assertEqual(session, {})


class TestWrapperOverObject(TestCase):
    """The wrapper works with session objects that save and destroy."""

    def test_save(self):
        """The user is set and the session persisted."""
        session = mock.MagicMock(spec=['user', 'save', 'destroy'])
        session.user = None
        sessions.SessionWrapper(session).save({'nickname': 'bob'})
        self.assertEqual(session.user, {'nickname': 'bob'})
        session.save.assert_called_once_with()

    def test_clear(self):
        """The session is destroyed."""
        session = mock.MagicMock(spec=['user', 'save', 'destroy'])
        sessions.SessionWrapper(session).clear()
        session.destroy.assert_called_once_with()


class TestSessionState(TestCase):
    """Helpers that inspect the host session."""

    def test_has_user(self):
        self.assertFalse(sessions.has_user(None))
        self.assertFalse(sessions.has_user({}))
        self.assertFalse(sessions.has_user({'user': None}))
        self.assertTrue(sessions.has_user({'user': {'nickname': 'a'}}))

    def test_can_destroy(self):
        self.assertFalse(sessions.can_destroy(None))
        self.assertFalse(sessions.can_destroy(object()))
        self.assertTrue(sessions.can_destroy({}))
        self.assertTrue(sessions.can_destroy(mock.MagicMock(spec=['destroy'])))
