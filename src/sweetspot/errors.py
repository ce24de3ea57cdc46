"""Exception types raised by the parlay core."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised for unknown strategy versions, slot shapes, or malformed configs."""
