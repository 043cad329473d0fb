"""Caiyun weather API client producing display-ready observations for a log."""

import random
import time
from typing import Callable

import httpx
from pydantic import ValidationError

from ..config import constants
from ..models.result import FailureKind, Result
from ..models.weather import CaiyunWeatherResponse, RetryPolicy, WeatherObservation
from ..utils.logger import get_logger
from .retry import fetch_with_retry

logger = get_logger(__name__)

_SIMULATED_SKYCONS = ("CLEAR_DAY", "PARTLY_CLOUDY_DAY", "CLOUDY", "LIGHT_RAIN")


def skycon_label(skycon: str) -> str:
    """Chinese label for a Caiyun skycon code."""
    return constants.SKYCON_LABELS.get(skycon, constants.UNKNOWN_SKYCON_LABEL)


def wind_direction_label(degrees: float) -> str:
    """Eight-point compass label for a wind direction in degrees."""
    index = int(((degrees % 360) + 22.5) // 45) % 8
    return constants.WIND_DIRECTION_LABELS[index]


def to_observation(response: CaiyunWeatherResponse) -> WeatherObservation:
    """Map an API payload to the values written into a construction log."""
    realtime = response.result.realtime
    return WeatherObservation(
        condition=skycon_label(realtime.skycon),
        temperature=f"{int(realtime.temperature)}°C",
        wind=f"{wind_direction_label(realtime.wind.direction)} {realtime.wind.speed:.1f} m/s",
    )


def simulated_observation(rng: random.Random | None = None) -> WeatherObservation:
    """Plausible random weather, used when no API token is configured."""
    rng = rng or random.Random()
    observation = to_observation(
        CaiyunWeatherResponse.model_validate(
            {
                "result": {
                    "realtime": {
                        "temperature": rng.uniform(15.0, 25.0),
                        "skycon": rng.choice(_SIMULATED_SKYCONS),
                        "wind": {"speed": rng.uniform(1.0, 10.0), "direction": rng.uniform(0.0, 360.0)},
                    }
                }
            }
        )
    )
    return observation.model_copy(update={"simulated": True})


class WeatherClient:
    """Fetches current weather for a coordinate, retrying transient failures."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.caiyunapp.com/v2.5",
        lang: str = "zh_CN",
        unit: str = "metric",
        granularity: str = "realtime",
        timeout_seconds: float = 30.0,
        policy: RetryPolicy | None = None,
        http_client: httpx.Client | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize weather client.

        Args:
            token: Caiyun API token; empty enables simulated weather
            base_url: API base URL including version
            lang: Response language
            unit: Unit system
            granularity: Forecast granularity (realtime, hourly, daily)
            timeout_seconds: Per-request timeout
            policy: Retry bounds (defaults to RetryPolicy())
            http_client: Client to use; one is created and owned if omitted
            sleep: Blocking sleep used between retries
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.lang = lang
        self.unit = unit
        self.granularity = granularity
        self.policy = policy or RetryPolicy()
        self.sleep = sleep
        self._owns_client = http_client is None
        self.http = http_client or httpx.Client(timeout=timeout_seconds)

    @property
    def simulated(self) -> bool:
        return not self.token

    def close(self) -> None:
        if self._owns_client:
            self.http.close()

    def __enter__(self) -> "WeatherClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _url(self, token: str, latitude: float, longitude: float) -> str:
        return f"{self.base_url}/{token}/{longitude},{latitude}/weather.json"

    def _get(self, token: str, latitude: float, longitude: float) -> httpx.Response:
        return self.http.get(
            self._url(token, latitude, longitude),
            params={"lang": self.lang, "unit": self.unit, "granu": self.granularity},
        )

    def fetch_raw(self, latitude: float, longitude: float) -> Result:
        """
        Fetch and parse the weather payload for a coordinate.

        Returns:
            Result holding a CaiyunWeatherResponse
        """
        logger.info(f"Fetching weather for ({latitude}, {longitude})")

        result = fetch_with_retry(
            lambda: self._get(self.token, latitude, longitude), self.policy, sleep=self.sleep
        )
        if not result.ok:
            logger.error(f"Weather fetch failed [{result.kind.value}]: {result.message}")
            return result

        try:
            payload = CaiyunWeatherResponse.model_validate(result.value.json())
        except (ValueError, ValidationError) as e:
            error_msg = f"Invalid weather response: {e}"
            logger.error(error_msg)
            return Result.failure(FailureKind.INVALID_RESPONSE, error_msg, result.attempts)

        return Result.success(payload, result.attempts)

    def get_current_weather(self, latitude: float, longitude: float) -> Result:
        """
        Current weather as display-ready log values.

        With no token configured this returns simulated weather without
        touching the network.

        Returns:
            Result holding a WeatherObservation
        """
        if self.simulated:
            logger.warning("No weather API token configured, using simulated weather")
            return Result.success(simulated_observation(), attempts=0)

        result = self.fetch_raw(latitude, longitude)
        if not result.ok:
            return result

        observation = to_observation(result.value)
        logger.info(
            f"Weather: {observation.condition}, {observation.temperature}, {observation.wind}"
        )
        return Result.success(observation, result.attempts)

    def verify_token(self, token: str, latitude: float = 34.2610, longitude: float = 117.1859) -> Result:
        """
        Check a token with a single request (no retries).

        Returns:
            Result holding a confirmation message
        """
        if not token:
            return Result.success("No token set, simulated weather will be used", attempts=0)

        try:
            response = self._get(token, latitude, longitude)
        except Exception as e:
            logger.error(f"Token check failed: {e}")
            return Result.failure(FailureKind.UNEXPECTED, f"Token check failed: {e}", 1)

        if response.is_success:
            return Result.success("Token is valid, weather data is available", 1)

        status = response.status_code
        if status == 401:
            return Result.failure(FailureKind.UNAUTHORIZED, "Token is invalid, check the API key", 1)
        if status == 403:
            return Result.failure(FailureKind.FORBIDDEN, "Token lacks permission, check the account status", 1)
        if status == 429:
            return Result.failure(
                FailureKind.RATE_LIMITED, "Token is valid but the rate limit was exceeded", 1
            )
        return Result.failure(FailureKind.HTTP_ERROR, f"Token check failed: HTTP {status}", 1)
