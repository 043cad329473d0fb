"""Data models for construction logs, media and generated reports."""

from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

from ..config import constants

if TYPE_CHECKING:
    from .weather import WeatherObservation


class MediaType(str, Enum):
    """Kinds of media attached to a construction log."""

    PHOTO = "PHOTO"
    VIDEO = "VIDEO"


class ProjectInfo(BaseModel):
    """Project the log belongs to."""

    name: str = Field(description="Project name")
    manager: str = Field(default="", description="Responsible manager")

    @field_validator("manager", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class ReportInput(BaseModel):
    """
    One day's construction log, as rendered into the report.

    Free-text fields are never None; absent values are empty strings so the
    builder can render every section unconditionally.
    """

    project_name: str = ""
    project_manager: str = ""
    log_date: date
    weather_condition: str = ""
    temperature: str = ""
    wind: str = ""
    construction_site: str = ""
    main_content: str = ""
    personnel_equipment: str = ""
    quality_management: str = ""
    safety_management: str = ""

    @field_validator(
        "project_name",
        "project_manager",
        "weather_condition",
        "temperature",
        "wind",
        "construction_site",
        "main_content",
        "personnel_equipment",
        "quality_management",
        "safety_management",
        mode="before",
    )
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("log_date", mode="before")
    @classmethod
    def _datetime_to_date(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value

    @property
    def has_weather(self) -> bool:
        return bool(self.weather_condition.strip())

    def with_weather(self, observation: "WeatherObservation") -> "ReportInput":
        """Return a copy with the weather fields taken from an observation."""
        return self.model_copy(
            update={
                "weather_condition": observation.condition,
                "temperature": observation.temperature,
                "wind": observation.wind,
            }
        )


class MediaItem(BaseModel):
    """Photo or video captured for a log."""

    file_path: Path
    file_type: MediaType
    created_at: datetime
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @property
    def is_photo(self) -> bool:
        return self.file_type == MediaType.PHOTO


class GeneratedArtifact(BaseModel):
    """A generated PDF report as found on disk."""

    path: Path
    size_bytes: int = Field(ge=0)
    last_modified: datetime

    @property
    def name(self) -> str:
        return self.path.stem

    @classmethod
    def from_path(cls, path: Path) -> "GeneratedArtifact":
        """Build from a file's current stat info."""
        stat = path.stat()
        return cls(
            path=path,
            size_bytes=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime),
        )


class ReportConfig(BaseModel):
    """Layout configuration for report generation."""

    title: str = Field(default=constants.REPORT_TITLE, description="Caption at the top of the report")
    font_name: str = Field(default=constants.DEFAULT_FONT_NAME, description="CID font used for all text")
    margin_pt: float = Field(default=50.0, gt=0, description="Page margin on every side, in points")
    gallery_columns: int = Field(default=4, ge=1, description="Photos per gallery row")
    gallery_image_height_pt: float = Field(default=90.0, gt=0, description="Image box height in the gallery")
