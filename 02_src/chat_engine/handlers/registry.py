"""Closed mapping from intent category to handler."""

from typing import Callable, Mapping

from ..models import IntentCategory, RequestContext, Response, TeamDataSnapshot
from .fitness import handle_fitness_tracking, handle_injury_analysis, handle_training_plan
from .general import handle_general
from .market import handle_competitor_analysis, handle_market_analysis
from .matches import handle_match_prediction, handle_match_preparation, handle_tactical_advice
from .players import handle_player_management
from .team import handle_performance_optimization, handle_team_analysis
from .weather import handle_weather_impact

Handler = Callable[[str, TeamDataSnapshot, float, RequestContext], Response]

DEFAULT_HANDLERS: dict[IntentCategory, Handler] = {
    IntentCategory.PLAYER_MANAGEMENT: handle_player_management,
    IntentCategory.TEAM_ANALYSIS: handle_team_analysis,
    IntentCategory.MATCH_PREDICTION: handle_match_prediction,
    IntentCategory.INJURY_ANALYSIS: handle_injury_analysis,
    IntentCategory.TACTICAL_ADVICE: handle_tactical_advice,
    IntentCategory.TRAINING_PLAN: handle_training_plan,
    IntentCategory.MARKET_ANALYSIS: handle_market_analysis,
    IntentCategory.WEATHER_IMPACT: handle_weather_impact,
    IntentCategory.COMPETITOR_ANALYSIS: handle_competitor_analysis,
    IntentCategory.FITNESS_TRACKING: handle_fitness_tracking,
    IntentCategory.PERFORMANCE_OPTIMIZATION: handle_performance_optimization,
    IntentCategory.MATCH_PREPARATION: handle_match_preparation,
    IntentCategory.GENERAL: handle_general,
}


class HandlerRegistry:
    """Every IntentCategory must have exactly one handler.

    Construction fails with ValueError when a category is missing, so a new
    category cannot be added without a handler.
    """

    def __init__(self, handlers: Mapping[IntentCategory, Handler] | None = None):
        table = dict(DEFAULT_HANDLERS if handlers is None else handlers)
        missing = [c.value for c in IntentCategory if c not in table]
        if missing:
            raise ValueError(f"No handler registered for: {', '.join(missing)}")
        self._handlers = table

    def __getitem__(self, category: IntentCategory) -> Handler:
        return self._handlers[category]

    def __len__(self) -> int:
        return len(self._handlers)

    def dispatch(
        self,
        category: IntentCategory,
        text: str,
        snapshot: TeamDataSnapshot,
        confidence: float,
        context: RequestContext,
    ) -> Response:
        return self._handlers[category](text, snapshot, confidence, context)

    def replace(self, category: IntentCategory, handler: Handler) -> "HandlerRegistry":
        """New registry with one handler swapped."""
        table = dict(self._handlers)
        table[category] = handler
        return HandlerRegistry(table)
