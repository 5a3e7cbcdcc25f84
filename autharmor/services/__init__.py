"""External service integrations."""

from .autharmor import AuthArmorSession
