"""Intent classification."""

from .classifier import (
    INTENT_RULES,
    ConfidenceWeights,
    IIntentClassifier,
    IntentClassifier,
)

__all__ = ["INTENT_RULES", "ConfidenceWeights", "IIntentClassifier", "IntentClassifier"]
