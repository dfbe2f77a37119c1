"""Match-facing handlers: prediction, preparation and tactical advice."""

from datetime import date

from ..classifier import extraction
from ..models import (
    MatchPrediction,
    MessageKind,
    Priority,
    RequestContext,
    Response,
    TeamDataSnapshot,
)
from .formatting import bullets, numbered

NO_MATCH_MESSAGE = "No upcoming matches scheduled. Focus on training and player development."
LINEUP_SIZE = 11


def _no_match(confidence: float) -> Response:
    return Response(content=NO_MATCH_MESSAGE, kind=MessageKind.INFO, confidence=confidence)


def _format_date(value: date) -> str:
    return value.strftime("%d %b %Y")


def _best_lineup(snapshot: TeamDataSnapshot) -> tuple[str, ...]:
    available = sorted(
        (p for p in snapshot.players if p.is_available),
        key=lambda p: p.rating,
        reverse=True,
    )
    return tuple(p.name for p in available[:LINEUP_SIZE])


def resolve_opponent(text: str, snapshot: TeamDataSnapshot) -> str | None:
    """Opponent named in the text, else the next scheduled opponent."""
    named = extraction.extract_opponent(text)
    if named:
        return named
    next_match = snapshot.next_match()
    return next_match.opponent if next_match else None


def derive_prediction(opponent: str, snapshot: TeamDataSnapshot, today: date) -> MatchPrediction:
    """Build a prediction from season results when none is stored for the opponent.

    Win/draw/loss are the shares of played matches. A known rival moves part
    of the win share to the loss share in proportion to its strength, so the
    three still add up to 100 (or 0 before any match is played).
    """
    stats = snapshot.team_stats
    played = stats.matches_played
    win = stats.wins / played * 100 if played else 0.0
    draw = stats.draws / played * 100 if played else 0.0
    loss = stats.losses / played * 100 if played else 0.0

    factors = [f"Team form: {stats.win_rate:.0f}% win rate"]
    rival = snapshot.rival(opponent)
    if rival:
        shift = win * rival.strength / 200
        win -= shift
        loss += shift
        factors.append(f"Opponent strength: {rival.strength:.0f}/100 (form {rival.recent_form})")

    fixture = next(
        (m for m in snapshot.upcoming_matches if m.opponent.lower() == opponent.lower()),
        None,
    )
    if fixture:
        factors.append("Home advantage" if fixture.venue == "home" else "Away fixture")

    return MatchPrediction(
        opponent=opponent,
        date=fixture.date if fixture else today,
        win_probability=win,
        draw_probability=draw,
        loss_probability=loss,
        expected_goals=stats.goals_per_match,
        key_factors=tuple(factors),
        recommended_formation=snapshot.analytics.tactical_analysis.formation,
        recommended_lineup=_best_lineup(snapshot),
    )


def handle_match_prediction(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    opponent = resolve_opponent(text, snapshot)
    if opponent is None and snapshot.predictions:
        opponent = snapshot.predictions[0].opponent
    if opponent is None:
        return _no_match(confidence)

    stored = snapshot.prediction_for(opponent)
    prediction = stored or derive_prediction(opponent, snapshot, context.today)
    weather = snapshot.weather

    content = (
        f"## Match Prediction: vs {prediction.opponent}\n\n"
        "**Probability Analysis:**\n"
        f"• Win: {prediction.win_probability:.1f}%\n"
        f"• Draw: {prediction.draw_probability:.1f}%\n"
        f"• Loss: {prediction.loss_probability:.1f}%\n\n"
        "**Expected Performance:**\n"
        f"• Expected Goals: {prediction.expected_goals:.1f}\n"
        f"• Recommended Formation: {prediction.recommended_formation}\n\n"
        "**Key Factors:**\n"
        f"{bullets(prediction.key_factors)}\n\n"
        "**Weather Impact:**\n"
        f"• Conditions: {weather.conditions}\n"
        f"• Temperature: {weather.temperature}°C\n"
        f"• Impact: {weather.impact}\n\n"
        "**Recommended Starting XI:**\n"
        f"{numbered(prediction.recommended_lineup[:LINEUP_SIZE]) or 'No available players'}"
    )

    return Response(
        content=content,
        kind=MessageKind.PREDICTION,
        confidence=confidence,
        priority=Priority.HIGH,
        metadata={
            "opponent": prediction.opponent,
            "source": "snapshot" if stored else "derived",
            "win_probability": round(prediction.win_probability, 1),
            "draw_probability": round(prediction.draw_probability, 1),
            "loss_probability": round(prediction.loss_probability, 1),
        },
    )


def handle_match_preparation(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    next_match = snapshot.next_match()
    if next_match is None:
        return _no_match(confidence)

    prediction = snapshot.prediction_for(next_match.opponent) or derive_prediction(
        next_match.opponent, snapshot, context.today
    )
    weather = snapshot.weather

    content = (
        f"## Match Preparation: vs {next_match.opponent}\n\n"
        "**Match Details:**\n"
        f"• Date: {_format_date(next_match.date)}\n"
        f"• Venue: {next_match.venue}\n"
        f"• Competition: {next_match.competition}\n\n"
        "**Pre-Match Analysis:**\n"
        f"• Win Probability: {prediction.win_probability:.1f}%\n"
        f"• Recommended Formation: {prediction.recommended_formation}\n"
        f"• Key Factors: {', '.join(prediction.key_factors) or 'Team form'}\n\n"
        "**Preparation Checklist:**\n\n"
        "**Training Focus (3 days before):**\n"
        "• Tactical rehearsal\n"
        "• Set piece practice\n"
        "• Opponent analysis\n"
        "• Fitness maintenance\n\n"
        "**Day Before Match:**\n"
        "• Light training session\n"
        "• Team meeting\n"
        "• Mental preparation\n"
        "• Equipment check\n\n"
        "**Match Day:**\n"
        "• Proper warm-up (45 minutes)\n"
        "• Final tactical briefing\n"
        "• Player motivation\n"
        "• Injury assessment\n\n"
        "**Starting XI Recommendation:**\n"
        f"{numbered(prediction.recommended_lineup[:LINEUP_SIZE]) or 'Based on current form and fitness'}\n\n"
        "**Weather Considerations:**\n"
        f"• Temperature: {weather.temperature}°C\n"
        f"• Conditions: {weather.conditions}\n"
        f"• Impact: {weather.impact}"
    )

    return Response(
        content=content,
        kind=MessageKind.ANALYSIS,
        confidence=confidence,
        priority=Priority.HIGH,
        metadata={"opponent": next_match.opponent, "match_id": next_match.id},
    )


def handle_tactical_advice(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    tactical = snapshot.analytics.tactical_analysis
    opponent = resolve_opponent(text, snapshot) or "upcoming opponent"
    rival = snapshot.rival(opponent)

    match_advice = []
    if rival:
        match_advice.append(f"Expect {rival.tactics or 'their usual setup'}")
        if rival.key_players:
            match_advice.append(f"Limit the influence of {', '.join(rival.key_players)}")
    match_advice.extend(
        [
            "Focus on exploiting wide areas",
            "Quick transitions from defense to attack",
            "Set piece preparation crucial",
        ]
    )

    content = (
        "## Tactical Analysis & Recommendations\n\n"
        f"**Current Formation: {tactical.formation}**\n"
        f"• Effectiveness: {tactical.effectiveness}%\n\n"
        "**Strengths:**\n"
        f"{bullets(tactical.strengths)}\n\n"
        "**Areas for Improvement:**\n"
        f"{bullets(tactical.weaknesses)}\n\n"
        "**Alternative Formations:**\n"
        f"{bullets(tactical.alternatives)}\n\n"
        f"**Match-Specific Advice vs {opponent}:**\n"
        f"{bullets(match_advice)}\n\n"
        "**Player Instructions:**\n"
        "• Wingers: Stay wide, create overloads\n"
        "• Midfield: Control tempo, press high\n"
        "• Defense: Play out from back, maintain shape"
    )

    return Response(
        content=content,
        kind=MessageKind.ANALYSIS,
        confidence=confidence,
        priority=Priority.HIGH,
        metadata={"opponent": opponent, "formation": tactical.formation},
    )
