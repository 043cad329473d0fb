"""Network access: retry-classified fetch and the weather client."""

from .retry import fetch_with_retry, parse_retry_after_ms
from .weather_client import WeatherClient, simulated_observation, to_observation

__all__ = [
    "fetch_with_retry",
    "parse_retry_after_ms",
    "WeatherClient",
    "simulated_observation",
    "to_observation",
]
