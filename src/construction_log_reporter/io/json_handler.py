"""JSON file handling utilities."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ..models.report import ProjectInfo, ReportInput, MediaItem
from ..utils.logger import get_logger
from ..utils.exceptions import InvalidInputError

logger = get_logger(__name__)


class ReportJob(BaseModel):
    """
    One report request, as handed over by the logging application.

    Expected format:
    {
        "project": {"name": "...", "manager": "..."},
        "log": {"log_date": "2026-10-19", "main_content": "...", ...},
        "media": [{"file_path": "...", "file_type": "PHOTO", "created_at": "...", "description": "..."}],
        "latitude": 34.261,
        "longitude": 117.1859
    }
    """

    project: ProjectInfo
    log: ReportInput
    media: list[MediaItem] = Field(default_factory=list)
    latitude: float | None = None
    longitude: float | None = None

    def report_input(self) -> ReportInput:
        """Log with project name/manager filled from the project when left blank."""
        updates = {}
        if not self.log.project_name:
            updates["project_name"] = self.project.name
        if not self.log.project_manager:
            updates["project_manager"] = self.project.manager
        return self.log.model_copy(update=updates) if updates else self.log


def load_job(path: Path) -> ReportJob:
    """
    Load and validate a report job file.

    Args:
        path: Path to job JSON

    Returns:
        Parsed ReportJob

    Raises:
        InvalidInputError: If the file is missing or invalid
    """
    logger.info(f"Loading report job from {path}")

    try:
        job = ReportJob.model_validate(load_json(path))
        logger.info(f"Loaded job for project '{job.project.name}' ({len(job.media)} media items)")
        return job
    except Exception as e:
        error_msg = f"Failed to load report job from {path}: {e}"
        logger.error(error_msg)
        raise InvalidInputError(error_msg) from e


def load_json(path: Path) -> dict[str, Any] | list[Any]:
    """
    Load JSON file.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON data
    """
    logger.debug(f"Loading JSON from {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except Exception as e:
        error_msg = f"Failed to load JSON from {path}: {e}"
        logger.error(error_msg)
        raise IOError(error_msg) from e
