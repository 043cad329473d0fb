"""Naming, location and listing of generated report files."""

import os
import re
import tempfile
from datetime import date, datetime
from pathlib import Path

from ..config import constants
from ..models.report import GeneratedArtifact
from ..utils.logger import get_logger
from ..utils.exceptions import StorageUnavailableError

logger = get_logger(__name__)

# Anything that is not a word character, whitespace or hyphen is dropped
_DISALLOWED_CHARS = re.compile(r"[^\w\s-]")


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def clean_project_name(project_name: str) -> str:
    """Delete characters that are unsafe in file names ("A/B Co." -> "AB Co")."""
    return _DISALLOWED_CHARS.sub("", project_name)


def date_prefix(log_date: date | datetime) -> str:
    """yymmdd prefix shared by every report file of a given day."""
    return _as_date(log_date).strftime(constants.FILE_DATE_FORMAT)


def derive_file_name(project_name: str, log_date: date | datetime) -> str:
    """
    Deterministic report file name for a project and log date.

    Format: <yymmdd>施工日志_<project name without disallowed chars>.pdf

    Args:
        project_name: Project name as entered by the user
        log_date: Log date (datetime values use their date part)

    Returns:
        File name, without directory
    """
    return (
        f"{date_prefix(log_date)}{constants.REPORT_FILE_LABEL}"
        f"{clean_project_name(project_name)}{constants.PDF_EXTENSION}"
    )


class ReportStorage:
    """Resolves the report directory and lists the reports stored in it."""

    def __init__(
        self,
        private_root: Path,
        shared_root: Path | None = None,
        folder_name: str = constants.REPORT_FOLDER_NAME,
    ):
        """
        Initialize report storage.

        Args:
            private_root: App-private documents location, always usable as fallback
            shared_root: Shared documents location, preferred when present and writable
            folder_name: Sub-folder holding the reports
        """
        self.private_root = Path(private_root)
        self.shared_root = Path(shared_root) if shared_root else None
        self.folder_name = folder_name

    def _candidates(self) -> list[Path]:
        candidates = []
        if self.shared_root and self.shared_root.is_dir() and os.access(self.shared_root, os.W_OK):
            candidates.append(self.shared_root / self.folder_name)
        candidates.append(self.private_root / self.folder_name)
        candidates.append(Path(tempfile.gettempdir()) / self.folder_name)
        return candidates

    def resolve_directory(self) -> Path:
        """
        Return the report directory, creating it if needed.

        Tries the shared location first, then the private one, then the system
        temp directory. Creation tolerates concurrent callers.

        Raises:
            StorageUnavailableError: If no candidate directory can be created
        """
        errors = []
        for candidate in self._candidates():
            try:
                candidate.mkdir(parents=True, exist_ok=True)
                logger.debug(f"Report directory: {candidate}")
                return candidate
            except OSError as e:
                logger.warning(f"Cannot use report directory {candidate}: {e}")
                errors.append(f"{candidate}: {e}")

        error_msg = f"No writable report directory available ({'; '.join(errors)})"
        logger.error(error_msg)
        raise StorageUnavailableError(error_msg)

    def report_path(self, project_name: str, log_date: date | datetime) -> Path:
        """Full output path for a project's report of the given day."""
        return self.resolve_directory() / derive_file_name(project_name, log_date)

    def list_artifacts(
        self,
        project_name: str | None = None,
        log_date: date | datetime | None = None,
    ) -> list[GeneratedArtifact]:
        """
        List generated reports, most recently modified first.

        Args:
            project_name: Keep files whose name contains this project name,
                cleaned the same way as derive_file_name cleans it
            log_date: Keep files whose name starts with this day's yymmdd prefix

        Returns:
            Matching artifacts
        """
        directory = self.resolve_directory()
        prefix = date_prefix(log_date) if log_date else None
        # Match the name as it appears in written file names
        name_filter = clean_project_name(project_name) if project_name else None

        artifacts = []
        for path in directory.iterdir():
            if not path.is_file() or path.suffix.lower() != constants.PDF_EXTENSION:
                continue
            if name_filter and name_filter not in path.name:
                continue
            if prefix and not path.name.startswith(prefix):
                continue
            try:
                artifacts.append(GeneratedArtifact.from_path(path))
            except FileNotFoundError:
                # removed between listing and stat
                continue

        artifacts.sort(key=lambda a: a.last_modified, reverse=True)
        logger.debug(f"Found {len(artifacts)} reports in {directory}")
        return artifacts

    def artifact_info(self, path: Path) -> GeneratedArtifact | None:
        """Stat info for a report, or None if it does not exist."""
        path = Path(path)
        if not path.is_file():
            return None
        return GeneratedArtifact.from_path(path)

    def delete_artifact(self, path: Path) -> bool:
        """
        Delete a report file.

        Returns:
            True if the file was removed
        """
        try:
            Path(path).unlink()
            logger.info(f"Deleted report {path}")
            return True
        except OSError as e:
            logger.warning(f"Failed to delete report {path}: {e}")
            return False
