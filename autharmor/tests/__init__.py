"""Tests for :mod:`autharmor`."""
