"""Weather impact report."""

from ..models import MessageKind, Priority, RequestContext, Response, TeamDataSnapshot, WeatherData
from .formatting import bullets

COLD_BELOW = 10
HOT_ABOVE = 25
WINDY_ABOVE = 15
HUMID_ABOVE = 70


def weather_adjustments(weather: WeatherData) -> list[str]:
    """Tactical adjustments for the reported conditions."""
    adjustments = []
    if weather.temperature < COLD_BELOW:
        adjustments.append("Cold weather: Focus on longer warm-up, maintain ball possession")
    elif weather.temperature > HOT_ABOVE:
        adjustments.append("Hot weather: Increase hydration, consider more substitutions")
    if weather.wind_speed > WINDY_ABOVE:
        adjustments.append("Windy conditions: Adjust passing game, be careful with crosses")
    if weather.humidity > HUMID_ABOVE:
        adjustments.append("High humidity: Monitor player fatigue, adjust intensity")
    if "rain" in weather.conditions.lower():
        adjustments.append("Wet conditions: Focus on ground passes, careful with tackles")
    return adjustments


def handle_weather_impact(
    text: str,
    snapshot: TeamDataSnapshot,
    confidence: float,
    context: RequestContext,
) -> Response:
    weather = snapshot.weather

    content = (
        "## Weather Impact Analysis\n\n"
        "**Current Conditions:**\n"
        f"• Temperature: {weather.temperature}°C\n"
        f"• Humidity: {weather.humidity}%\n"
        f"• Wind Speed: {weather.wind_speed} km/h\n"
        f"• Conditions: {weather.conditions}\n\n"
        f"**Performance Impact: {weather.impact.upper()}**\n\n"
        "**Tactical Adjustments:**\n"
        f"{bullets(weather_adjustments(weather), empty='No adjustments needed for current conditions')}\n\n"
        "**Equipment Recommendations:**\n"
        "• Appropriate footwear for conditions\n"
        "• Weather-suitable training gear\n"
        "• Extra hydration supplies"
    )

    return Response(
        content=content,
        kind=MessageKind.ANALYSIS,
        confidence=confidence,
        priority=Priority.HIGH if weather.impact == "negative" else Priority.MEDIUM,
        metadata={"impact": weather.impact},
    )
