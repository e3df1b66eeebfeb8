"""
Weather tool.

Current conditions from weatherapi.com, bound to the configured API key.

Dependencies: httpx, langchain_core.tools, ragchat.configs
System role: Weather lookup tool for the chat agent
"""

import logging

import httpx
from langchain_core.tools import tool

from ragchat.configs.llm import LLMSettings

logger = logging.getLogger(__name__)


def format_weather(payload: dict) -> str:
    """Render a weatherapi.com ``current.json`` payload as tool output."""
    location = payload.get("location", {})
    current = payload.get("current", {})
    place = ", ".join(
        part for part in (location.get("name"), location.get("region"), location.get("country")) if part
    )
    return "\n".join([
        f"Location: {place or 'unknown'}",
        f"Temperature: {current.get('temp_c')}°C",
        f"Condition: {current.get('condition', {}).get('text', 'unknown')}",
        f"Humidity: {current.get('humidity')}%",
        f"Wind: {current.get('wind_kph')} kph",
    ])


def create_weather_tool(llm_config: LLMSettings, client: httpx.AsyncClient | None = None):
    """
    Create a weather tool bound to the weather API settings.

    Args:
        llm_config: LLM settings carrying the weather API key, url and timeout
        client: Optional shared HTTP client (tests inject a mock transport)

    Returns:
        Callable: Async tool function for weather lookups
    """

    @tool
    async def get_weather(location: str) -> str:
        """Get the current weather for a location.

        Args:
            location: City name, postcode or "lat,lon" coordinates

        Returns:
            str: Location, temperature, condition, humidity and wind
        """
        if not llm_config.weather_api_key:
            return "Error: weather lookups are not configured"
        if not location or not location.strip():
            return "Error: location is required"

        params = {"key": llm_config.weather_api_key, "q": location.strip(), "aqi": "no"}
        try:
            if client is not None:
                response = await client.get(llm_config.weather_api_url, params=params)
            else:
                async with httpx.AsyncClient(timeout=llm_config.weather_timeout) as http:
                    response = await http.get(llm_config.weather_api_url, params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Weather API returned an error",
                extra={"location": location, "status_code": e.response.status_code},
            )
            return f"Error: weather lookup failed with status {e.response.status_code}"
        except httpx.HTTPError as e:
            logger.warning("Weather API unreachable", extra={"location": location, "error": str(e)})
            return f"Error: weather lookup failed ({type(e).__name__})"

        return format_weather(payload)

    return get_weather
