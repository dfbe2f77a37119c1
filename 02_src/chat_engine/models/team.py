"""Team-data snapshot models.

The snapshot is read-only for handlers. Handlers that change team data build a
new snapshot with ``dataclasses.replace`` and hand it back on the Response.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any


class PlayerStatus(str, Enum):
    """Availability of a player."""

    ACTIVE = "active"
    INJURED = "injured"
    SUSPENDED = "suspended"
    TRAINING = "training"
    RESTING = "resting"


class Intensity(str, Enum):
    """Training intensity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class InjuryRecord:
    id: str
    type: str
    severity: str  # "minor", "moderate", "severe"
    date: date
    description: str = ""
    treatment: str = ""
    expected_return: date | None = None


@dataclass(frozen=True)
class PersonalInfo:
    nationality: str
    height_cm: float | None = None
    weight_kg: float | None = None
    preferred_foot: str | None = None
    languages: tuple[str, ...] = ()


@dataclass(frozen=True)
class PerformanceMetrics:
    speed: float
    strength: float
    stamina: float
    technique: float
    mentality: float
    passing: float
    shooting: float
    defending: float


@dataclass(frozen=True)
class Player:
    """A squad member."""

    id: str
    name: str
    position: str
    age: int
    rating: float
    goals: int = 0
    assists: int = 0
    matches: int = 0
    status: PlayerStatus = PlayerStatus.ACTIVE
    fitness_level: float | None = None
    form: float | None = None
    market_value: float | None = None
    injury_history: tuple[InjuryRecord, ...] = ()
    personal_info: PersonalInfo | None = None
    performance: PerformanceMetrics | None = None

    @property
    def is_available(self) -> bool:
        return self.status not in (PlayerStatus.INJURED, PlayerStatus.SUSPENDED)


@dataclass(frozen=True)
class TeamStats:
    """Season totals."""

    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    possession: float = 0.0
    pass_accuracy: float = 0.0
    shots_on_target: float = 0.0
    corners: int = 0
    fouls: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    clean_sheets: int = 0

    @property
    def matches_played(self) -> int:
        return self.wins + self.draws + self.losses

    @property
    def win_rate(self) -> float:
        """Wins as a percentage of played matches, 0 when nothing was played."""
        played = self.matches_played
        return self.wins / played * 100 if played else 0.0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    @property
    def goals_per_match(self) -> float:
        played = self.matches_played
        return self.goals_for / played if played else 0.0


@dataclass(frozen=True)
class Match:
    id: str
    opponent: str
    date: date
    venue: str  # "home" or "away"
    competition: str
    result: str | None = None  # "win", "draw", "loss"
    score: str | None = None
    lineup: tuple[str, ...] = ()


@dataclass(frozen=True)
class MatchPrediction:
    opponent: str
    date: date
    win_probability: float
    draw_probability: float
    loss_probability: float
    expected_goals: float
    key_factors: tuple[str, ...] = ()
    recommended_formation: str = ""
    recommended_lineup: tuple[str, ...] = ()


@dataclass(frozen=True)
class WeatherData:
    temperature: float
    humidity: float
    wind_speed: float
    conditions: str
    impact: str  # "positive", "neutral", "negative"


@dataclass(frozen=True)
class PlayerEfficiency:
    player_id: str
    efficiency: float
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class TacticalAnalysis:
    formation: str
    effectiveness: float
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    alternatives: tuple[str, ...] = ()


@dataclass(frozen=True)
class FitnessMetrics:
    team_average: float
    injury_risk: float
    fatigue_level: float
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class MarketAnalysis:
    team_value: float
    top_performers: tuple[str, ...] = ()
    transfer_targets: tuple[str, ...] = ()
    contract_renewals: tuple[str, ...] = ()


@dataclass(frozen=True)
class Competitor:
    name: str
    strength: float
    recent_form: str
    key_players: tuple[str, ...] = ()
    tactics: str = ""


@dataclass(frozen=True)
class CompetitorAnalysis:
    rivals: tuple[Competitor, ...] = ()
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    opportunities: tuple[str, ...] = ()
    threats: tuple[str, ...] = ()


@dataclass(frozen=True)
class AdvancedAnalytics:
    tactical_analysis: TacticalAnalysis
    fitness_metrics: FitnessMetrics
    market_analysis: MarketAnalysis
    competitor_analysis: CompetitorAnalysis = field(default_factory=CompetitorAnalysis)
    player_efficiency: tuple[PlayerEfficiency, ...] = ()


@dataclass(frozen=True)
class Exercise:
    name: str
    duration_minutes: int
    description: str
    equipment: tuple[str, ...] = ()
    sets: int | None = None
    reps: int | None = None


@dataclass(frozen=True)
class TrainingPlan:
    id: str
    name: str
    duration_days: int
    intensity: Intensity
    focus_areas: tuple[str, ...]
    exercises: tuple[Exercise, ...]
    target_player_ids: tuple[str, ...]
    schedule: tuple[date, ...]


@dataclass(frozen=True)
class TeamDataSnapshot:
    """Everything a handler may read for one request."""

    team_name: str
    players: tuple[Player, ...]
    team_stats: TeamStats
    weather: WeatherData
    analytics: AdvancedAnalytics
    sport: str = "soccer"
    recent_matches: tuple[Match, ...] = ()
    upcoming_matches: tuple[Match, ...] = ()
    training_plans: tuple[TrainingPlan, ...] = ()
    predictions: tuple[MatchPrediction, ...] = ()

    def with_player(self, player: Player) -> "TeamDataSnapshot":
        return replace(self, players=self.players + (player,))

    def with_players(self, players: tuple[Player, ...]) -> "TeamDataSnapshot":
        return replace(self, players=players)

    def with_training_plan(self, plan: TrainingPlan) -> "TeamDataSnapshot":
        return replace(self, training_plans=self.training_plans + (plan,))

    def find_player(self, name: str) -> Player | None:
        """Case-insensitive lookup: exact name first, then substring."""
        needle = name.strip().lower()
        if not needle:
            return None
        for player in self.players:
            if player.name.lower() == needle:
                return player
        for player in self.players:
            if needle in player.name.lower():
                return player
        return None

    def player_by_id(self, player_id: str) -> Player | None:
        return next((p for p in self.players if p.id == player_id), None)

    def next_match(self) -> Match | None:
        return self.upcoming_matches[0] if self.upcoming_matches else None

    def prediction_for(self, opponent: str) -> MatchPrediction | None:
        wanted = opponent.strip().lower()
        for prediction in self.predictions:
            if prediction.opponent.lower() == wanted:
                return prediction
        return None

    def rival(self, name: str) -> Competitor | None:
        wanted = name.strip().lower()
        for rival in self.analytics.competitor_analysis.rivals:
            if rival.name.lower() == wanted:
                return rival
        return None

    def summary(self) -> dict[str, Any]:
        """Compact view sent to the remote AI service as context."""
        stats = self.team_stats
        next_match = self.next_match()
        return {
            "teamName": self.team_name,
            "sport": self.sport,
            "playerCount": len(self.players),
            "players": [
                {
                    "name": p.name,
                    "position": p.position,
                    "rating": p.rating,
                    "status": p.status.value,
                }
                for p in self.players
            ],
            "record": {
                "wins": stats.wins,
                "draws": stats.draws,
                "losses": stats.losses,
                "goalsFor": stats.goals_for,
                "goalsAgainst": stats.goals_against,
            },
            "formation": self.analytics.tactical_analysis.formation,
            "nextMatch": (
                {
                    "opponent": next_match.opponent,
                    "date": next_match.date.isoformat(),
                    "venue": next_match.venue,
                }
                if next_match
                else None
            ),
        }
