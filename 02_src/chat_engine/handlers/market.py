"""Market and competitor reports."""

from ..models import MessageKind, Priority, RequestContext, Response, TeamDataSnapshot
from .formatting import bullets, money


def _player_value_line(name: str, snapshot: TeamDataSnapshot, with_form: bool) -> str:
    player = snapshot.find_player(name)
    value = money(player.market_value if player else None)
    if not with_form:
        return f"{name} - Current value: {value}"
    form = player.form if player and player.form is not None else 0
    return f"{name}: {value} (Form: {form:.1f}/10)"


def handle_market_analysis(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    market = snapshot.analytics.market_analysis

    performers = [_player_value_line(n, snapshot, with_form=True) for n in market.top_performers]
    renewals = [_player_value_line(n, snapshot, with_form=False) for n in market.contract_renewals]
    targets = [f"{t} - Strategic priority" for t in market.transfer_targets]

    content = (
        "## Market Analysis Report\n\n"
        "**Team Valuation:**\n"
        f"• Current Value: {money(market.team_value)}\n\n"
        "**Top Performers:**\n"
        f"{bullets(performers)}\n\n"
        "**Transfer Recommendations:**\n"
        "**Targets to Acquire:**\n"
        f"{bullets(targets)}\n\n"
        "**Contract Renewals:**\n"
        f"{bullets(renewals)}\n\n"
        "**Financial Recommendations:**\n"
        "• Prioritize contract renewals for top performers\n"
        "• Consider selling underperforming assets\n"
        "• Invest in youth development"
    )

    return Response(
        content=content,
        kind=MessageKind.ANALYSIS,
        confidence=confidence,
        priority=Priority.MEDIUM,
        metadata={"team_value": market.team_value},
    )


def handle_competitor_analysis(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    competitors = snapshot.analytics.competitor_analysis

    rivals = [
        f"**{r.name}** (Strength: {r.strength}/100)\n"
        f"  - Recent Form: {r.recent_form}\n"
        f"  - Key Players: {', '.join(r.key_players) or 'Unknown'}\n"
        f"  - Tactics: {r.tactics or 'Unknown'}"
        for r in sorted(competitors.rivals, key=lambda r: r.strength, reverse=True)
    ]

    content = (
        "## Competitor Analysis\n\n"
        "**Key Rivals:**\n"
        f"{bullets(rivals, empty='No rivals tracked yet')}\n\n"
        "**SWOT Analysis:**\n\n"
        f"**Strengths:**\n{bullets(competitors.strengths)}\n\n"
        f"**Weaknesses:**\n{bullets(competitors.weaknesses)}\n\n"
        f"**Opportunities:**\n{bullets(competitors.opportunities)}\n\n"
        f"**Threats:**\n{bullets(competitors.threats)}\n\n"
        "**Strategic Recommendations:**\n"
        "• Focus on exploiting competitor weaknesses\n"
        "• Strengthen areas where rivals excel\n"
        "• Monitor transfer activities of key rivals\n"
        "• Develop counter-tactics for common formations"
    )

    return Response(
        content=content,
        kind=MessageKind.ANALYSIS,
        confidence=confidence,
        priority=Priority.MEDIUM,
        metadata={"rivals": [r.name for r in competitors.rivals]},
    )
