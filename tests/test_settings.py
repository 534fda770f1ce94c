from __future__ import annotations

import json
from pathlib import Path

import pytest

from photo_insight.core.errors import ConfigurationError
from photo_insight.core.settings import OutputConfig, load_settings


def _write_settings(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_settings_reads_both_values(tmp_path: Path) -> None:
    path = _write_settings(
        tmp_path / "appsettings.json",
        {"CognitiveServicesEndpoint": " https://vision.test/ ", "CognitiveServiceKey": "abc"},
    )
    settings = load_settings(path)
    assert settings.endpoint == "https://vision.test/"
    assert settings.key == "abc"
    assert "abc" not in repr(settings)


def test_load_settings_defaults_to_appsettings_in_cwd(tmp_path: Path) -> None:
    _write_settings(
        tmp_path / "appsettings.json",
        {"CognitiveServicesEndpoint": "https://vision.test/", "CognitiveServiceKey": "k"},
    )
    assert load_settings().key == "k"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_settings(tmp_path / "nope.json")


@pytest.mark.parametrize(
    "payload",
    [
        {"CognitiveServicesEndpoint": "https://vision.test/"},
        {"CognitiveServiceKey": "k"},
        {},
    ],
)
def test_missing_keys_raise(tmp_path: Path, payload: dict) -> None:
    path = _write_settings(tmp_path / "appsettings.json", payload)
    with pytest.raises(ConfigurationError, match="Missing setting"):
        load_settings(path)


def test_blank_value_raises(tmp_path: Path) -> None:
    path = _write_settings(
        tmp_path / "appsettings.json",
        {"CognitiveServicesEndpoint": "https://vision.test/", "CognitiveServiceKey": "  "},
    )
    with pytest.raises(ConfigurationError, match="Invalid setting"):
        load_settings(path)


def test_non_object_and_bad_json_raise(tmp_path: Path) -> None:
    as_list = _write_settings(tmp_path / "list.json", ["x"])
    with pytest.raises(ConfigurationError, match="JSON object"):
        load_settings(as_list)

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_settings(broken)


def test_environment_overrides_file(monkeypatch, tmp_path: Path) -> None:
    path = _write_settings(tmp_path / "appsettings.json", {"CognitiveServicesEndpoint": "https://file.test/"})
    monkeypatch.setenv("VISION_KEY", "from-env")
    monkeypatch.setenv("VISION_ENDPOINT", "https://env.test/")
    settings = load_settings(path)
    assert settings.endpoint == "https://env.test/"
    assert settings.key == "from-env"


def test_settings_file_path_from_env(monkeypatch, tmp_path: Path) -> None:
    (tmp_path / "conf").mkdir()
    custom = _write_settings(
        tmp_path / "conf" / "vision.json",
        {"CognitiveServicesEndpoint": "https://vision.test/", "CognitiveServiceKey": "k2"},
    )
    monkeypatch.setenv("VISION_SETTINGS_FILE", str(custom))
    assert load_settings().key == "k2"


def test_output_config_defaults_and_overrides(monkeypatch, tmp_path: Path) -> None:
    defaults = OutputConfig.from_env()
    root = tmp_path.resolve()
    assert defaults.output_dir.resolve() == root
    assert defaults.report_path.resolve() == root / "analyze.txt"
    assert defaults.objects_path.resolve() == root / "objects.jpg"
    assert defaults.thumbnail_path.resolve() == root / "thumbnail.png"
    assert defaults.http_timeout is None

    monkeypatch.setenv("PHOTO_INSIGHT_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setenv("PHOTO_INSIGHT_REPORT_FILE", "report.txt")
    monkeypatch.setenv("VISION_HTTP_TIMEOUT", "2.5")
    custom = OutputConfig.from_env()
    assert custom.report_path == tmp_path / "out" / "report.txt"
    assert custom.thumbnail_path == tmp_path / "out" / "thumbnail.png"
    assert custom.http_timeout == 2.5
