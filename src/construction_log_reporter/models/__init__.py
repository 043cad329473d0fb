"""Data models for construction log reports."""

from .report import (
    MediaType,
    ProjectInfo,
    ReportInput,
    MediaItem,
    GeneratedArtifact,
    ReportConfig,
)
from .weather import (
    RetryPolicy,
    WeatherObservation,
    WindData,
    RealtimeWeather,
    WeatherResult,
    CaiyunWeatherResponse,
)
from .result import FailureKind, Result

__all__ = [
    "MediaType",
    "ProjectInfo",
    "ReportInput",
    "MediaItem",
    "GeneratedArtifact",
    "ReportConfig",
    "RetryPolicy",
    "WeatherObservation",
    "WindData",
    "RealtimeWeather",
    "WeatherResult",
    "CaiyunWeatherResponse",
    "FailureKind",
    "Result",
]
