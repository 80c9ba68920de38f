"""Exceptions raised by the core."""

from __future__ import annotations


class InvariantViolation(RuntimeError):
    """A caller broke a contract of the core. Never recovered locally."""
