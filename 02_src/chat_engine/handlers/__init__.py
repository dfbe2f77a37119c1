"""Category handlers and their registry."""

from .general import APOLOGY, apology_response, handle_general
from .matches import NO_MATCH_MESSAGE
from .fitness import HIGH_RISK_MARKER, risk_band
from .registry import DEFAULT_HANDLERS, Handler, HandlerRegistry

__all__ = [
    "APOLOGY",
    "DEFAULT_HANDLERS",
    "HIGH_RISK_MARKER",
    "Handler",
    "HandlerRegistry",
    "NO_MATCH_MESSAGE",
    "apology_response",
    "handle_general",
    "risk_band",
]
