"""Dispatch module."""

from .engine import CancellationToken, DispatchEngine, IDispatchEngine, LoadingListener
from .fallback import FallbackStrategy

__all__ = [
    "CancellationToken",
    "DispatchEngine",
    "FallbackStrategy",
    "IDispatchEngine",
    "LoadingListener",
]
