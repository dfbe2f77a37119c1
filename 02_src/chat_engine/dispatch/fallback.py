"""Local answer path: classify, run the category handler, contain failures."""

from dataclasses import replace

from ..classifier import IIntentClassifier
from ..handlers import HandlerRegistry, apology_response
from ..logging_config import get_logger
from ..models import RequestContext, Response, TeamDataSnapshot
from ..tracker import ITracker

logger = get_logger(__name__)


class FallbackStrategy:
    """Produces a Response using only local heuristics. Never raises."""

    def __init__(
        self,
        classifier: IIntentClassifier,
        registry: HandlerRegistry,
        tracker: ITracker | None = None,
    ):
        self._classifier = classifier
        self._registry = registry
        self._tracker = tracker

    async def respond(
        self,
        text: str,
        snapshot: TeamDataSnapshot,
        context: RequestContext,
    ) -> Response:
        result = self._classifier.classify(text, snapshot)
        try:
            response = self._registry.dispatch(
                result.category, text, snapshot, result.confidence, context
            )
        except Exception as e:
            logger.error(
                f"Handler {result.category.value} failed: {e}", exc_info=True
            )
            if self._tracker:
                await self._tracker.track(
                    event_type="handler_failed",
                    actor="fallback_strategy",
                    data={
                        "category": result.category.value,
                        "error": str(e),
                        "user_id": context.user_id,
                    },
                )
            response = apology_response(result.confidence)

        metadata = {**response.metadata, "category": result.category.value}
        return replace(response, metadata=metadata)
