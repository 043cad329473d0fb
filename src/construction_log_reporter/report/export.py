"""Build a log's report into the report directory, returning an explicit result."""

from ..models.report import GeneratedArtifact, MediaItem, ProjectInfo, ReportConfig, ReportInput
from ..models.result import FailureKind, Result
from ..io.storage import ReportStorage
from ..utils.logger import get_logger
from ..utils.exceptions import ReportGenerationError, StorageUnavailableError
from .builder import ReportBuilder

logger = get_logger(__name__)


def build_report(
    project: ProjectInfo,
    report_input: ReportInput,
    media: list[MediaItem],
    storage: ReportStorage,
    config: ReportConfig | None = None,
) -> Result:
    """
    Generate the PDF report for one day's log.

    The file name is derived from the project name and log date, so rebuilding
    the same log overwrites the previous report.

    Args:
        project: Project the log belongs to
        report_input: The day's log
        media: Media recorded for the log
        storage: Report directory resolver
        config: Layout configuration

    Returns:
        Result holding the GeneratedArtifact, or a STORAGE_UNAVAILABLE /
        WRITE_FAILED failure
    """
    project_name = project.name or report_input.project_name

    try:
        output_path = storage.report_path(project_name, report_input.log_date)
    except StorageUnavailableError as e:
        return Result.failure(FailureKind.STORAGE_UNAVAILABLE, str(e))

    try:
        builder = ReportBuilder(project, report_input, media, config)
        builder.generate_pdf(output_path)
        artifact = GeneratedArtifact.from_path(output_path)
    except (ReportGenerationError, OSError) as e:
        logger.error(f"Report build failed for '{project_name}': {e}")
        return Result.failure(FailureKind.WRITE_FAILED, str(e))

    logger.info(f"Report ready: {artifact.path} ({artifact.size_bytes} bytes)")
    return Result.success(artifact)
