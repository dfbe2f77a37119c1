"""API routes."""

from . import messaging, observability, settings

__all__ = ["messaging", "observability", "settings"]
