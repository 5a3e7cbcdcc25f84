"""Tests for :mod:`autharmor.services`."""
