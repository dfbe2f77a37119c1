"""General-purpose replies used when no specific intent applies."""

import zlib

from ..models import MessageKind, RequestContext, Response, TeamDataSnapshot
from .formatting import mean

APOLOGY = (
    "Sorry, I ran into a problem while working on that. "
    "Try rephrasing, or ask about players, matches, training or tactics."
)

SUGGESTIONS = (
    "Show me all players",
    "Analyze team performance",
    "Predict next match outcome",
    "Create a training plan",
)


def _templates(snapshot: TeamDataSnapshot) -> list[str]:
    stats = snapshot.team_stats
    players = snapshot.players
    return [
        (
            "Based on your team's current form and the data I have access to, I can provide "
            f"detailed insights. Your team is performing with a {stats.win_rate:.0f}% win rate. "
            "What specific aspect would you like me to analyze?"
        ),
        (
            "I have access to all your team data including player statistics, match history, "
            "and performance metrics. I can help you with player management, tactical analysis, "
            "training plans, or any other team-related decisions. What would you like to focus on?"
        ),
        (
            f"Your squad currently has {len(players)} players with an average rating of "
            f"{mean(p.rating for p in players):.1f}. I can provide detailed analysis, suggest "
            "improvements, or help with any team management tasks. How can I assist you?"
        ),
    ]


def handle_general(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    templates = _templates(snapshot)
    # crc32 is stable across runs, unlike hash() on str.
    index = zlib.crc32(text.encode("utf-8")) % len(templates)
    return Response(
        content=templates[index],
        kind=MessageKind.TEXT,
        confidence=confidence,
        suggestions=SUGGESTIONS,
        metadata={"template": index},
    )


def apology_response(confidence: float) -> Response:
    """Reply used when a handler fails."""
    return Response(
        content=APOLOGY,
        kind=MessageKind.TEXT,
        confidence=confidence,
        suggestions=SUGGESTIONS,
        metadata={"apology": True},
    )
