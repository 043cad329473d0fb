import json

from construction_log_reporter import main as main_module


def _write_job(tmp_path, media_path, **log_fields):
    job = {
        "project": {"name": "南湖泵站", "manager": "李工"},
        "log": {"log_date": "2026-10-19", "main_content": "泵房基础开挖", **log_fields},
        "media": [
            {
                "file_path": str(media_path),
                "file_type": "PHOTO",
                "created_at": "2026-10-19T09:15:00",
                "description": "开挖",
            }
        ],
    }
    path = tmp_path / "job.json"
    path.write_text(json.dumps(job, ensure_ascii=False), encoding="utf-8")
    return path


def _configure(monkeypatch, tmp_path):
    monkeypatch.setattr(main_module.settings, "weather_api_token", "")
    monkeypatch.setattr(main_module.settings, "shared_documents_dir", None)
    monkeypatch.setattr(main_module.settings, "private_documents_dir", tmp_path / "docs")
    monkeypatch.setattr(main_module.settings, "log_json", False)


def test_main_builds_report_with_simulated_weather(tmp_path, monkeypatch):
    _configure(monkeypatch, tmp_path)
    job = _write_job(tmp_path, tmp_path / "missing.jpg")

    assert main_module.main([str(job)]) == 0

    reports = list((tmp_path / "docs" / "ConstructionLogs").glob("*.pdf"))
    assert [p.name for p in reports] == ["261019施工日志_南湖泵站.pdf"]


def test_main_keeps_existing_weather(tmp_path, monkeypatch):
    _configure(monkeypatch, tmp_path)
    monkeypatch.setattr(main_module.settings, "weather_api_token", "real-token")

    class NoNetwork:
        def __init__(self, **kwargs):
            raise AssertionError("weather must not be fetched")

    monkeypatch.setattr(main_module, "WeatherClient", NoNetwork)
    job = _write_job(tmp_path, tmp_path / "missing.jpg", weather_condition="晴天")

    assert main_module.main([str(job)]) == 0


def test_main_fails_on_invalid_job(tmp_path, monkeypatch):
    _configure(monkeypatch, tmp_path)
    job = tmp_path / "job.json"
    job.write_text("{not json", encoding="utf-8")

    assert main_module.main([str(job)]) == 1


def test_main_fails_without_job_file(monkeypatch, tmp_path):
    _configure(monkeypatch, tmp_path)
    monkeypatch.setattr(main_module.settings, "job_file", None)

    assert main_module.main([]) == 1
