from datetime import date, datetime

import pytest
from PIL import Image

from construction_log_reporter.models import MediaItem, MediaType, ProjectInfo, ReportInput


@pytest.fixture
def project():
    return ProjectInfo(name="城东水厂扩建", manager="王工")


@pytest.fixture
def report_input():
    return ReportInput(
        project_name="城东水厂扩建",
        project_manager="王工",
        log_date=date(2026, 10, 19),
        weather_condition="多云",
        temperature="21°C",
        wind="东北风 3.2 m/s",
        construction_site="二期沉淀池",
        main_content="浇筑沉淀池底板混凝土 <C30>，完成 120m³。",
        personnel_equipment="木工 8 人，泵车 1 台",
        quality_management="坍落度抽检合格",
        safety_management="班前安全交底",
    )


@pytest.fixture
def make_photo(tmp_path):
    """Write a small JPEG and return a PHOTO MediaItem pointing at it."""

    def _make(name, created_at, description="", size=(64, 48), color=(200, 120, 40)):
        path = tmp_path / "media" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color).save(path, format="JPEG")
        return MediaItem(
            file_path=path, file_type=MediaType.PHOTO, created_at=created_at, description=description
        )

    return _make


@pytest.fixture
def video_item(tmp_path):
    return MediaItem(
        file_path=tmp_path / "media" / "clip.mp4",
        file_type=MediaType.VIDEO,
        created_at=datetime(2026, 10, 19, 8, 0),
        description="视频",
    )
