"""Batch entrypoint: fill weather, build the daily report and list stored reports."""

import sys
import time
from pathlib import Path

from . import __version__
from .config import settings
from .io import ReportStorage, load_job
from .models import ReportConfig, RetryPolicy
from .network import WeatherClient
from .report import build_report
from .utils import setup_logging, get_logger
from .utils.exceptions import ProcessingError

logger = get_logger(__name__)


def _step(title: str) -> None:
    logger.info("=" * 80)
    logger.info(title)
    logger.info("=" * 80)


def main(argv: list[str] | None = None) -> int:
    """
    Build the report described by a job file.

    Args:
        argv: Command line arguments; the first one is the job file path
            (defaults to SITELOG_JOB_FILE)

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    argv = sys.argv[1:] if argv is None else argv

    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("=" * 80)
    logger.info(f"Starting Construction Log Reporter v{__version__}")
    logger.info("=" * 80)

    start_time = time.time()

    try:
        job_file = Path(argv[0]) if argv else settings.job_file
        if job_file is None:
            raise ProcessingError("No job file given (pass a path or set SITELOG_JOB_FILE)")

        # ===== STEP 1: Load job =====
        _step("STEP 1: Loading report job")

        job = load_job(job_file)
        report_input = job.report_input()

        # ===== STEP 2: Weather =====
        _step("STEP 2: Filling weather data")

        if report_input.has_weather:
            logger.info(f"Log already has weather: {report_input.weather_condition}")
        else:
            policy = RetryPolicy(
                max_attempts=settings.retry_max_attempts,
                initial_delay_ms=settings.retry_initial_delay_ms,
                max_delay_ms=settings.retry_max_delay_ms,
            )
            with WeatherClient(
                token=settings.weather_api_token,
                base_url=settings.weather_base_url,
                lang=settings.weather_lang,
                unit=settings.weather_unit,
                granularity=settings.weather_granularity,
                timeout_seconds=settings.request_timeout_seconds,
                policy=policy,
            ) as client:
                weather = client.get_current_weather(
                    latitude=job.latitude if job.latitude is not None else settings.default_latitude,
                    longitude=job.longitude if job.longitude is not None else settings.default_longitude,
                )

            if weather.ok:
                report_input = report_input.with_weather(weather.value)
            else:
                logger.warning(
                    f"Continuing without weather [{weather.kind.value}]: {weather.message}"
                )

        # ===== STEP 3: Build report =====
        _step("STEP 3: Building PDF report")

        storage = ReportStorage(
            private_root=settings.private_documents_dir,
            shared_root=settings.shared_documents_dir,
            folder_name=settings.report_folder_name,
        )
        report_config = ReportConfig(title=settings.report_title, font_name=settings.report_font_name)

        result = build_report(job.project, report_input, job.media, storage, report_config)
        if not result.ok:
            raise ProcessingError(f"[{result.kind.value}] {result.message}")

        # ===== STEP 4: List stored reports =====
        _step("STEP 4: Listing stored reports")

        for artifact in storage.list_artifacts(project_name=job.project.name):
            logger.info(
                f"{artifact.path.name}: {artifact.size_bytes / 1_000:.1f} KB, "
                f"modified {artifact.last_modified:%Y-%m-%d %H:%M}"
            )

        duration = time.time() - start_time
        logger.info("=" * 80)
        logger.info(f"✅ Report generated in {duration:.1f}s: {result.value.path}")
        logger.info("=" * 80)
        return 0

    except ProcessingError as e:
        logger.error(f"❌ Processing failed: {e}", exc_info=True)
        return 1
    except Exception as e:
        logger.error(f"❌ Unexpected error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
