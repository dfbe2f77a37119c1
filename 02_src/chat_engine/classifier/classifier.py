"""Rule-based intent classification and confidence scoring."""

import re
from dataclasses import dataclass
from typing import Protocol

from ..models import ClassificationResult, IntentCategory, TeamDataSnapshot


@dataclass(frozen=True)
class ConfidenceWeights:
    """Heuristic constants of the confidence score."""

    base: float = 30.0
    length_divisor: float = 50.0
    length_weight: float = 20.0
    length_cap: float = 30.0
    keyword_weight: float = 15.0
    question_bonus: float = 10.0
    player_bonus: float = 20.0
    keywords: tuple[str, ...] = ("player", "team", "analyze", "training", "tactical")


# Order is the tie-break: the first matching rule wins. Player management and
# match prediction come before the broad "analy"/"team" catch-all so that
# "analyze player X" is not read as a team analysis.
INTENT_RULES: tuple[tuple[IntentCategory, re.Pattern[str]], ...] = (
    (
        IntentCategory.PLAYER_MANAGEMENT,
        re.compile(
            r"\b(?:add|create|register|sign|remove|delete|release|edit|update|"
            r"analy[sz]e|show|list|view)\b.*\bplayers?\b"
            r"|\bplayers?\s+(?:list|roster)\b|\bsquad\b|\broster\b"
        ),
    ),
    (IntentCategory.MATCH_PREDICTION, re.compile(r"predict|\bvs\.?\s+\w|\bversus\b")),
    (IntentCategory.INJURY_ANALYSIS, re.compile(r"injur")),
    (IntentCategory.TRAINING_PLAN, re.compile(r"train|\bplan")),
    (IntentCategory.MARKET_ANALYSIS, re.compile(r"market|\bvalue|transfer")),
    (IntentCategory.WEATHER_IMPACT, re.compile(r"weather")),
    (IntentCategory.COMPETITOR_ANALYSIS, re.compile(r"rival|competitor")),
    (IntentCategory.FITNESS_TRACKING, re.compile(r"fitness|fatigue")),
    (IntentCategory.PERFORMANCE_OPTIMIZATION, re.compile(r"optimi|improve")),
    (IntentCategory.MATCH_PREPARATION, re.compile(r"prepar")),
    (IntentCategory.TACTICAL_ADVICE, re.compile(r"tactic|formation|strateg")),
    (IntentCategory.TEAM_ANALYSIS, re.compile(r"analy|\bteam\b")),
)


class IIntentClassifier(Protocol):
    """Maps raw input to an intent and a confidence score."""

    def classify(self, text: str, snapshot: TeamDataSnapshot) -> ClassificationResult:
        ...


class IntentClassifier:
    """Ordered keyword rules plus the weighted confidence heuristic.

    Pure: the same text and snapshot always give the same result.
    """

    def __init__(
        self,
        weights: ConfidenceWeights | None = None,
        usefulness_floor: float = 30.0,
    ):
        self._weights = weights or ConfidenceWeights()
        self._usefulness_floor = usefulness_floor
        self._keyword_re = re.compile(
            r"\b(?:" + "|".join(re.escape(k) for k in self._weights.keywords) + r")\b",
            re.IGNORECASE,
        )

    @property
    def usefulness_floor(self) -> float:
        return self._usefulness_floor

    def classify(self, text: str, snapshot: TeamDataSnapshot) -> ClassificationResult:
        confidence = self.score(text, snapshot)
        if confidence <= self._usefulness_floor:
            return ClassificationResult(IntentCategory.GENERAL, confidence)
        return ClassificationResult(self.match_category(text), confidence)

    def match_category(self, text: str) -> IntentCategory:
        lowered = text.lower()
        for category, pattern in INTENT_RULES:
            if pattern.search(lowered):
                return category
        return IntentCategory.GENERAL

    def score(self, text: str, snapshot: TeamDataSnapshot) -> float:
        w = self._weights
        lowered = text.lower()

        length = min(w.length_cap, len(text) / w.length_divisor * w.length_weight)
        keywords = len(self._keyword_re.findall(text)) * w.keyword_weight
        question = w.question_bonus if "?" in text else 0.0
        known_player = any(
            p.name and p.name.lower() in lowered for p in snapshot.players
        )
        context = w.player_bonus if known_player else 0.0

        total = length + keywords + question + context + w.base
        return max(0.0, min(100.0, total))
