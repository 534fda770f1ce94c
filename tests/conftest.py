from __future__ import annotations

from pathlib import Path
from typing import Iterable

import cv2
import numpy as np
import pytest

from photo_insight.core.models import ImageAnalysis, VisualFeature

_ENV_VARS = (
    "VISION_ENDPOINT",
    "VISION_KEY",
    "VISION_SETTINGS_FILE",
    "VISION_HTTP_TIMEOUT",
    "PHOTO_INSIGHT_OUTPUT_DIR",
    "PHOTO_INSIGHT_REPORT_FILE",
    "PHOTO_INSIGHT_OBJECTS_FILE",
    "PHOTO_INSIGHT_THUMBNAIL_FILE",
    "PHOTO_INSIGHT_DEFAULT_IMAGE",
)


@pytest.fixture(autouse=True)
def isolated_workdir(monkeypatch, tmp_path: Path):
    """Run every test inside its own directory with no vision settings in the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield tmp_path


def write_image(path: Path, size: tuple[int, int] = (120, 160)) -> Path:
    """Create a small synthetic image (grey frame with a white block)."""
    h, w = size
    img = np.full((h, w, 3), 64, dtype=np.uint8)
    cv2.rectangle(img, (w // 4, h // 4), (3 * w // 4, 3 * h // 4), (255, 255, 255), -1)
    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), img)
    return path


def png_bytes(size: tuple[int, int] = (100, 100)) -> bytes:
    h, w = size
    ok, buf = cv2.imencode(".png", np.zeros((h, w, 3), dtype=np.uint8))
    assert ok
    return buf.tobytes()


@pytest.fixture
def sample_image(tmp_path: Path) -> Path:
    return write_image(tmp_path / "image" / "building.jpg")


class StubVisionClient:
    """In-memory stand-in for VisionClient that records calls."""

    def __init__(
        self,
        analysis: ImageAnalysis | None = None,
        thumbnail: bytes | None = None,
        analyze_error: Exception | None = None,
    ):
        self.analysis = analysis or ImageAnalysis()
        self.thumbnail = thumbnail if thumbnail is not None else png_bytes()
        self.analyze_error = analyze_error
        self.analyze_calls: list[tuple[int, list[VisualFeature]]] = []
        self.thumbnail_calls: list[tuple[int, int, bool]] = []

    def analyze(self, image_data, features: Iterable[VisualFeature] = ()) -> ImageAnalysis:
        data = image_data if isinstance(image_data, bytes) else image_data.read()
        self.analyze_calls.append((len(data), list(features)))
        if self.analyze_error is not None:
            raise self.analyze_error
        return self.analysis

    def generate_thumbnail(self, width, height, image_data, smart_cropping=True) -> bytes:
        self.thumbnail_calls.append((width, height, smart_cropping))
        return self.thumbnail
