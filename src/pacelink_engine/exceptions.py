"""Errors raised by the workout engine."""

from __future__ import annotations


class InvalidArgument(ValueError):
    """A numeric input was NaN, infinite or outside its domain."""
