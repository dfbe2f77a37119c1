"""Player management: add, remove, update, analyze and list squad members."""

import re
import uuid
from dataclasses import replace

from ..classifier import extraction
from ..models import (
    MessageKind,
    PersonalInfo,
    Player,
    PlayerStatus,
    Priority,
    RequestContext,
    Response,
    TeamDataSnapshot,
)
from .formatting import clamp, mean, money

DEFAULT_NAME = "New Player"
DEFAULT_POSITION = "Unknown"
DEFAULT_AGE = 25
DEFAULT_NATIONALITY = "Unknown"

# Ranges for the profile of a newly added player. The squad average is used
# and clamped into the range; an empty squad gives the lower bound.
FITNESS_RANGE = (80.0, 100.0)
FORM_RANGE = (7.0, 8.5)
RATING_RANGE = (7.0, 8.5)
MARKET_VALUE_RANGE = (5_000_000.0, 25_000_000.0)

_ADD_RE = re.compile(r"\b(?:add|create|register|sign)\b")
_REMOVE_RE = re.compile(r"\b(?:remove|delete|release)\b")
_UPDATE_RE = re.compile(r"\b(?:edit|update|change|set)\b")
_ANALYZE_RE = re.compile(r"\banaly[sz]e\b|\bstats\b|\bperformance\b")


def handle_player_management(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    lowered = text.lower()
    if _ADD_RE.search(lowered):
        return _add_player(text, snapshot, confidence)
    if _REMOVE_RE.search(lowered):
        return _remove_player(text, snapshot, confidence)
    if _UPDATE_RE.search(lowered):
        return _update_player(text, snapshot, confidence)
    if _ANALYZE_RE.search(lowered):
        wanted = extraction.extract_player_name(text, snapshot)
        if wanted and snapshot.find_player(wanted):
            return _analyze_player(text, snapshot, confidence)
    return _list_players(snapshot, confidence)


def _squad_default(values: list[float], bounds: tuple[float, float]) -> float:
    low, high = bounds
    return clamp(mean(values), low, high) if values else low


def _add_player(text: str, snapshot: TeamDataSnapshot, confidence: float) -> Response:
    name = extraction.extract_new_player_name(text) or DEFAULT_NAME
    position = extraction.extract_position(text) or DEFAULT_POSITION
    age = extraction.extract_age(text) or DEFAULT_AGE
    nationality = extraction.extract_nationality(text) or DEFAULT_NATIONALITY

    squad = snapshot.players
    player = Player(
        id=str(uuid.uuid4()),
        name=name,
        position=position,
        age=age,
        rating=round(_squad_default([p.rating for p in squad], RATING_RANGE), 1),
        status=PlayerStatus.ACTIVE,
        fitness_level=round(
            _squad_default(
                [p.fitness_level for p in squad if p.fitness_level is not None],
                FITNESS_RANGE,
            )
        ),
        form=round(
            _squad_default([p.form for p in squad if p.form is not None], FORM_RANGE), 1
        ),
        market_value=round(
            _squad_default(
                [p.market_value for p in squad if p.market_value is not None],
                MARKET_VALUE_RANGE,
            )
        ),
        personal_info=PersonalInfo(nationality=nationality),
    )

    content = (
        f"Successfully added {player.name} ({player.position}, Age: {player.age}) to the team.\n\n"
        f"Player Profile:\n"
        f"• Market Value: {money(player.market_value)}\n"
        f"• Fitness Level: {player.fitness_level:.0f}%\n"
        f"• Current Form: {player.form:.1f}/10\n"
        f"• Nationality: {nationality}\n\n"
        f"The player is ready for training and match selection."
    )
    return Response(
        content=content,
        kind=MessageKind.SUCCESS,
        confidence=confidence,
        priority=Priority.HIGH,
        metadata={"action": "add_player", "player_id": player.id},
        snapshot=snapshot.with_player(player),
    )


def _not_found(snapshot: TeamDataSnapshot, confidence: float, wanted: str | None) -> Response:
    available = ", ".join(p.name for p in snapshot.players) or "none"
    label = f'"{wanted}"' if wanted else "that player"
    return Response(
        content=f"I couldn't find {label} in the squad. Available players: {available}",
        kind=MessageKind.WARNING,
        confidence=confidence,
        priority=Priority.LOW,
        metadata={"action": "player_not_found"},
    )


def _remove_player(text: str, snapshot: TeamDataSnapshot, confidence: float) -> Response:
    wanted = extraction.extract_player_name(text, snapshot)
    player = snapshot.find_player(wanted) if wanted else None
    if player is None:
        return _not_found(snapshot, confidence, wanted)

    remaining = tuple(p for p in snapshot.players if p.id != player.id)
    return Response(
        content=f"Successfully removed {player.name} from your squad.",
        kind=MessageKind.SUCCESS,
        confidence=confidence,
        priority=Priority.MEDIUM,
        metadata={"action": "remove_player", "player_id": player.id},
        snapshot=snapshot.with_players(remaining),
    )


def _update_player(text: str, snapshot: TeamDataSnapshot, confidence: float) -> Response:
    wanted = extraction.extract_player_name(text, snapshot)
    player = snapshot.find_player(wanted) if wanted else None
    if player is None:
        return _not_found(snapshot, confidence, wanted)

    changes: dict = {}
    rating = extraction.extract_rating(text)
    if rating is not None:
        changes["rating"] = rating
    position = extraction.extract_position(text)
    if position is not None:
        changes["position"] = position
    age = extraction.extract_age(text)
    if age is not None:
        changes["age"] = age
    status = extraction.extract_status(text)
    if status is not None:
        changes["status"] = status

    if not changes:
        return Response(
            content=(
                f"No changes recognised for {player.name}. "
                "You can update rating, position, age or status, "
                f'e.g. "update player {player.name} rating 8.0".'
            ),
            kind=MessageKind.INFO,
            confidence=confidence,
            priority=Priority.LOW,
        )

    updated = replace(player, **changes)
    players = tuple(updated if p.id == player.id else p for p in snapshot.players)
    return Response(
        content=f"Successfully updated {player.name}. Changes applied: {', '.join(changes)}.",
        kind=MessageKind.SUCCESS,
        confidence=confidence,
        priority=Priority.MEDIUM,
        metadata={"action": "edit_player", "player_id": player.id, "changes": list(changes)},
        snapshot=snapshot.with_players(players),
    )


def _analyze_player(text: str, snapshot: TeamDataSnapshot, confidence: float) -> Response:
    wanted = extraction.extract_player_name(text, snapshot)
    player = snapshot.find_player(wanted) if wanted else None
    if player is None:
        return _not_found(snapshot, confidence, wanted)

    if player.rating > 8:
        form_label, advice = "Excellent", "Key player, maintain fitness"
    elif player.rating > 7:
        form_label, advice = "Good", "Focus on training to improve performance"
    else:
        form_label, advice = "Average", "Focus on training to improve performance"

    lines = [
        f"## {player.name} Analysis",
        "",
        f"• Position: {player.position}",
        f"• Current Rating: {player.rating}/10",
        f"• Goals: {player.goals} in {player.matches} matches",
        f"• Assists: {player.assists}",
        f"• Status: {player.status.value}",
        f"• Form: {form_label}",
    ]
    if player.fitness_level is not None:
        lines.append(f"• Fitness Level: {player.fitness_level:.0f}%")
    efficiency = next(
        (e for e in snapshot.analytics.player_efficiency if e.player_id == player.id),
        None,
    )
    if efficiency:
        lines.append(f"• Efficiency: {efficiency.efficiency:.0f}%")
        if efficiency.strengths:
            lines.append(f"• Strengths: {', '.join(efficiency.strengths)}")
        if efficiency.weaknesses:
            lines.append(f"• Weaknesses: {', '.join(efficiency.weaknesses)}")
    lines.append(f"• Recommendation: {advice}")

    return Response(
        content="\n".join(lines),
        kind=MessageKind.ANALYSIS,
        confidence=confidence,
        priority=Priority.MEDIUM,
        metadata={"action": "analyze_player", "player_id": player.id},
    )


def _list_players(snapshot: TeamDataSnapshot, confidence: float) -> Response:
    stats = snapshot.team_stats
    lines = [
        f"{p.name} ({p.position}) - Rating: {p.rating}, Goals: {p.goals}, Status: {p.status.value}"
        for p in snapshot.players
    ]
    content = (
        f"Current Squad ({len(snapshot.players)} players):\n\n"
        + ("\n".join(lines) if lines else "No players registered yet.")
        + f"\n\nTeam Stats: {stats.wins}W-{stats.draws}D-{stats.losses}L"
    )
    return Response(
        content=content,
        kind=MessageKind.ANALYSIS,
        confidence=confidence,
        priority=Priority.MEDIUM,
        metadata={"action": "show_players", "players": [p.name for p in snapshot.players]},
    )
