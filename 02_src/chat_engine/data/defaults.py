"""Built-in team data used while the real source is loading or unavailable."""

from datetime import date

from ..models import (
    AdvancedAnalytics,
    Competitor,
    CompetitorAnalysis,
    FitnessMetrics,
    InjuryRecord,
    MarketAnalysis,
    Match,
    MatchPrediction,
    PerformanceMetrics,
    Player,
    PlayerEfficiency,
    PlayerStatus,
    TacticalAnalysis,
    TeamDataSnapshot,
    TeamStats,
    WeatherData,
)


def default_snapshot() -> TeamDataSnapshot:
    """Return the fallback snapshot: a four-player demo squad."""
    players = (
        Player(
            id="1",
            name="Torres",
            position="ST",
            age=24,
            rating=8.4,
            goals=18,
            assists=7,
            matches=25,
            fitness_level=92,
            form=8.5,
            market_value=25_000_000,
            performance=PerformanceMetrics(85, 78, 88, 90, 82, 75, 92, 45),
        ),
        Player(
            id="2",
            name="Silva",
            position="CM",
            age=26,
            rating=8.1,
            goals=5,
            assists=12,
            matches=24,
            fitness_level=89,
            form=8.2,
            market_value=30_000_000,
            performance=PerformanceMetrics(72, 70, 85, 95, 88, 93, 68, 75),
        ),
        Player(
            id="3",
            name="Rodriguez",
            position="CB",
            age=28,
            rating=7.8,
            goals=2,
            assists=1,
            matches=23,
            status=PlayerStatus.INJURED,
            fitness_level=45,
            form=6.8,
            market_value=18_000_000,
            injury_history=(
                InjuryRecord(
                    id="inj1",
                    type="Hamstring strain",
                    severity="moderate",
                    date=date(2024, 1, 15),
                    expected_return=date(2024, 2, 15),
                    description="Grade 2 hamstring strain during training",
                    treatment="Physiotherapy and rest",
                ),
            ),
            performance=PerformanceMetrics(65, 88, 82, 78, 85, 80, 35, 92),
        ),
        Player(
            id="4",
            name="Martinez",
            position="GK",
            age=30,
            rating=8.2,
            goals=0,
            assists=0,
            matches=25,
            fitness_level=91,
            form=8.3,
            market_value=15_000_000,
            performance=PerformanceMetrics(60, 85, 88, 82, 90, 70, 25, 95),
        ),
    )

    return TeamDataSnapshot(
        team_name="Demo FC",
        sport="soccer",
        players=players,
        team_stats=TeamStats(
            wins=18,
            draws=4,
            losses=3,
            goals_for=52,
            goals_against=23,
            possession=58.5,
            pass_accuracy=84.2,
            shots_on_target=67.8,
            corners=142,
            fouls=298,
            yellow_cards=45,
            red_cards=3,
            clean_sheets=12,
        ),
        recent_matches=(
            Match(
                id="m1",
                opponent="Barcelona FC",
                date=date(2024, 1, 20),
                venue="home",
                competition="La Liga",
                result="win",
                score="2-1",
                lineup=("Martinez", "Silva", "Torres"),
            ),
        ),
        upcoming_matches=(
            Match(
                id="m2",
                opponent="Real Madrid",
                date=date(2024, 2, 15),
                venue="away",
                competition="La Liga",
            ),
        ),
        predictions=(
            MatchPrediction(
                opponent="Real Madrid",
                date=date(2024, 2, 15),
                win_probability=35,
                draw_probability=28,
                loss_probability=37,
                expected_goals=1.8,
                key_factors=("Away disadvantage", "Strong opponent", "Recent form"),
                recommended_formation="4-3-3",
                recommended_lineup=("Martinez", "Silva", "Torres"),
            ),
        ),
        weather=WeatherData(
            temperature=18,
            humidity=65,
            wind_speed=12,
            conditions="Partly cloudy",
            impact="neutral",
        ),
        analytics=AdvancedAnalytics(
            player_efficiency=(
                PlayerEfficiency(
                    player_id="1",
                    efficiency=92,
                    strengths=("Finishing", "Positioning", "Speed"),
                    weaknesses=("Defensive work", "Passing"),
                    recommendations=("Improve link-up play", "Work on defensive pressing"),
                ),
            ),
            tactical_analysis=TacticalAnalysis(
                formation="4-3-3",
                effectiveness=78,
                strengths=("Wing play", "Counter-attacks"),
                weaknesses=("Central midfield control",),
                alternatives=("4-2-3-1", "3-5-2"),
            ),
            fitness_metrics=FitnessMetrics(
                team_average=87,
                injury_risk=23,
                fatigue_level=34,
                recommendations=("Rotate squad", "Focus on recovery"),
            ),
            market_analysis=MarketAnalysis(
                team_value=88_000_000,
                top_performers=("Torres", "Silva"),
                transfer_targets=("New CB", "Backup GK"),
                contract_renewals=("Silva", "Martinez"),
            ),
            competitor_analysis=CompetitorAnalysis(
                rivals=(
                    Competitor(
                        name="Real Madrid",
                        strength=92,
                        recent_form="WWWDW",
                        key_players=("Benzema", "Modric"),
                        tactics="4-3-3 possession-based",
                    ),
                ),
                strengths=("Attack", "Set pieces"),
                weaknesses=("Defense", "Squad depth"),
                opportunities=("Young talent", "Transfer market"),
                threats=("Injuries", "Competition"),
            ),
        ),
    )
