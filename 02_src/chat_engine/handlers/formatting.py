"""Text helpers shared by the handlers."""

from typing import Iterable


def bullets(items: Iterable[str], empty: str = "None recorded") -> str:
    lines = [f"• {item}" for item in items]
    return "\n".join(lines) if lines else f"• {empty}"


def numbered(items: Iterable[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def money(value: float | None) -> str:
    """Millions with one decimal, e.g. $25.0M."""
    return f"${(value or 0) / 1_000_000:.1f}M"


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0 for an empty input."""
    values = list(values)
    return sum(values) / len(values) if values else 0.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def signed(value: int) -> str:
    return f"+{value}" if value > 0 else str(value)
