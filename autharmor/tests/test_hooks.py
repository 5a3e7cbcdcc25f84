"""Tests for :class:`autharmor.hooks.HookRegistry`."""

from unittest import TestCase, mock

from autharmor import domain, hooks
from autharmor.exceptions import ConfigurationError


class TestRegistration(TestCase):
    """Callbacks are bound only to known names."""

    def setUp(self):
        self.registry = hooks.HookRegistry()

    def test_every_name_starts_as_noop(self):
        """A fresh registry has the no-op bound to every hook."""
        for name in hooks.VALIDATORS + hooks.EVENTS:
            self.assertIs(self.registry[name], hooks.noop)

    def test_unknown_validator(self):
        """Unknown validator names are refused without touching the registry."""
        callback = mock.MagicMock()
        for name in ['inviteGenerated', 'authSuccess', 'nope', '']:
            with self.assertRaises(ConfigurationError):
                self.registry.validate(name, callback)
        for name in hooks.VALIDATORS + hooks.EVENTS:
            self.assertIs(self.registry[name], hooks.noop)
        self.assertNotIn('nope', self.registry)

    def test_unknown_event(self):
        """Unknown event names are refused without touching the registry."""
        callback = mock.MagicMock()
        for name in ['inviteRequest', 'authRequest', 'logout']:
            with self.assertRaises(ConfigurationError):
                self.registry.on(name, callback)
        for name in hooks.VALIDATORS + hooks.EVENTS:
            self.assertIs(self.registry[name], hooks.noop)

    def test_not_callable(self):
        """Only callables can be registered."""
        with self.assertRaises(ConfigurationError):
            self.registry.on(hooks.AUTH_SUCCESS, 'foo')

    def test_later_registration_replaces(self):
        """At most one callback is bound per name."""
        first, second = mock.MagicMock(), mock.MagicMock()
        self.registry.validate(hooks.AUTH_REQUEST, first)
        self.registry.validate(hooks.AUTH_REQUEST, second)
        self.registry.fire(hooks.AUTH_REQUEST, domain.AuthRequest('foo'), None)
        first.assert_not_called()
        second.assert_called_once_with(domain.AuthRequest('foo'), None)


class TestRemove(TestCase):
    """:meth:`.HookRegistry.remove` resets a hook to the no-op."""

    def setUp(self):
        self.registry = hooks.HookRegistry()

    def test_remove_registered(self):
        """Validators and events alike are reset."""
        self.registry.validate(hooks.INVITE_REQUEST, mock.MagicMock())
        self.registry.on(hooks.AUTH_ERROR, mock.MagicMock())
        self.registry.remove(hooks.INVITE_REQUEST)
        self.registry.remove(hooks.AUTH_ERROR)
        self.assertIs(self.registry[hooks.INVITE_REQUEST], hooks.noop)
        self.assertIs(self.registry[hooks.AUTH_ERROR], hooks.noop)

    def test_remove_never_registered(self):
        """Removing a hook that was never set is harmless."""
        self.registry.remove(hooks.AUTH_TIMEOUT)
        self.registry.remove(hooks.AUTH_TIMEOUT)
        self.assertIs(self.registry[hooks.AUTH_TIMEOUT], hooks.noop)

    def test_remove_unknown(self):
        """Unknown names are ignored."""
        self.registry.remove('nope')
        self.assertNotIn('nope', self.registry)


class TestFire(TestCase):
    """:meth:`.HookRegistry.fire` calls the bound callback."""

    def test_unbound_events_are_noops(self):
        """Firing any event with nothing registered does nothing."""
        registry = hooks.HookRegistry()
        for name in hooks.EVENTS:
            self.assertIsNone(registry.fire(name, {}, None))

    def test_return_value(self):
        """The callback's return value is handed back."""
        registry = hooks.HookRegistry()
        registry.validate(hooks.AUTH_REQUEST,
                          lambda data, session: {'nickname': 'bar'})
        self.assertEqual(
            registry.fire(hooks.AUTH_REQUEST, domain.AuthRequest('foo'), None),
            {'nickname': 'bar'}
        )

    def test_registries_are_independent(self):
        """Each registry has its own bindings."""
        one, two = hooks.HookRegistry(), hooks.HookRegistry()
        callback = mock.MagicMock()
        one.on(hooks.AUTH_SUCCESS, callback)
        two.fire(hooks.AUTH_SUCCESS, {}, None)
        callback.assert_not_called()
