"""Data models for weather retrieval and retry configuration."""

from pydantic import BaseModel, Field, model_validator


class RetryPolicy(BaseModel):
    """Bounds for retrying a remote call. Holds no state between calls."""

    max_attempts: int = Field(default=3, ge=1)
    initial_delay_ms: int = Field(default=1000, ge=0)
    max_delay_ms: int = Field(default=10000, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "RetryPolicy":
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError("max_delay_ms must not be smaller than initial_delay_ms")
        return self


class WeatherObservation(BaseModel):
    """Display-ready weather values for a construction log."""

    condition: str
    temperature: str
    wind: str
    simulated: bool = False


class WindData(BaseModel):
    speed: float = 0.0
    direction: float = 0.0


class RealtimeWeather(BaseModel):
    status: str = "ok"
    temperature: float
    skycon: str = ""
    humidity: float | None = None
    cloudrate: float | None = None
    visibility: float | None = None
    pressure: float | None = None
    apparent_temperature: float | None = None
    wind: WindData = Field(default_factory=WindData)


class WeatherResult(BaseModel):
    realtime: RealtimeWeather


class CaiyunWeatherResponse(BaseModel):
    """
    Subset of the Caiyun weather API payload used by the application.

    Expected format:
    {
        "status": "ok",
        "location": [117.1859, 34.261],
        "result": {
            "realtime": {
                "temperature": 21.3,
                "skycon": "PARTLY_CLOUDY_DAY",
                "wind": {"speed": 3.2, "direction": 45.0}
            }
        }
    }
    """

    status: str = "ok"
    api_version: str | None = None
    lang: str | None = None
    unit: str | None = None
    timezone: str | None = None
    server_time: int | None = None
    location: list[float] = Field(default_factory=list)
    result: WeatherResult
