from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from photo_insight.core.env import env_float, env_str
from photo_insight.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = "appsettings.json"
ENDPOINT_KEY = "CognitiveServicesEndpoint"
API_KEY_KEY = "CognitiveServiceKey"


class VisionSettings(BaseModel):
    """Endpoint and key for the vision service, as stored in the settings file."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    endpoint: str = Field(alias=ENDPOINT_KEY)
    key: str = Field(alias=API_KEY_KEY, repr=False)

    @field_validator("endpoint", "key")
    @classmethod
    def _require_text(cls, v: str) -> str:
        text = v.strip()
        if not text:
            raise ValueError("must not be blank")
        return text


def settings_path_from_env() -> Path:
    return Path(env_str("VISION_SETTINGS_FILE", DEFAULT_SETTINGS_FILE))


def load_settings(path: str | Path | None = None) -> VisionSettings:
    """
    Read the service endpoint and key from a JSON settings file.

    VISION_ENDPOINT / VISION_KEY in the environment take precedence over the file.
    Raises ConfigurationError when the file is missing or either value is absent.
    """
    settings_path = Path(path) if path is not None else settings_path_from_env()
    if not settings_path.is_file():
        raise ConfigurationError(f"Settings file not found: {settings_path}")

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Settings file is not valid JSON: {settings_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Settings file must contain a JSON object: {settings_path}")

    endpoint = os.getenv("VISION_ENDPOINT") or raw.get(ENDPOINT_KEY)
    key = os.getenv("VISION_KEY") or raw.get(API_KEY_KEY)
    missing = [name for name, value in ((ENDPOINT_KEY, endpoint), (API_KEY_KEY, key)) if value is None]
    if missing:
        raise ConfigurationError(f"Missing setting(s) {', '.join(missing)} in {settings_path}")

    try:
        settings = VisionSettings.model_validate({ENDPOINT_KEY: endpoint, API_KEY_KEY: key})
    except ValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors())
        raise ConfigurationError(f"Invalid setting(s) {fields} in {settings_path}") from exc

    logger.debug("Loaded vision settings from %s (endpoint=%s)", settings_path, settings.endpoint)
    return settings


@dataclass
class OutputConfig:
    """Where a run writes its report, annotated image, thumbnail, and category folders."""

    output_dir: Path
    report_file: str = "analyze.txt"
    objects_file: str = "objects.jpg"
    thumbnail_file: str = "thumbnail.png"
    http_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "OutputConfig":
        output_dir = Path(env_str("PHOTO_INSIGHT_OUTPUT_DIR", os.getcwd()))
        return cls(
            output_dir=output_dir,
            report_file=env_str("PHOTO_INSIGHT_REPORT_FILE", "analyze.txt"),
            objects_file=env_str("PHOTO_INSIGHT_OBJECTS_FILE", "objects.jpg"),
            thumbnail_file=env_str("PHOTO_INSIGHT_THUMBNAIL_FILE", "thumbnail.png"),
            http_timeout=env_float("VISION_HTTP_TIMEOUT"),
        )

    @property
    def report_path(self) -> Path:
        return self.output_dir / self.report_file

    @property
    def objects_path(self) -> Path:
        return self.output_dir / self.objects_file

    @property
    def thumbnail_path(self) -> Path:
        return self.output_dir / self.thumbnail_file
