from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import cv2
import numpy as np

from photo_insight.core.errors import ImageProcessingError
from photo_insight.core.models import BoundingRect, DetectedObject

logger = logging.getLogger(__name__)

BOX_COLOR = (255, 255, 0)  # cyan (BGR)
TEXT_COLOR = (0, 0, 0)
BOX_THICKNESS = 3
FONT = cv2.FONT_HERSHEY_SIMPLEX
FONT_SCALE = 0.6


def _clamp_rect(rect: BoundingRect, width: int, height: int) -> tuple[int, int, int, int]:
    x1 = max(0, min(rect.x, width - 1))
    y1 = max(0, min(rect.y, height - 1))
    x2 = max(x1, min(rect.x + rect.w, width - 1))
    y2 = max(y1, min(rect.y + rect.h, height - 1))
    return x1, y1, x2, y2


def _draw_label(img: np.ndarray, text: str, x: int, y: int) -> None:
    # Text hangs below the box origin, like the top-left anchor of the box itself.
    (_, text_h), baseline = cv2.getTextSize(text, FONT, FONT_SCALE, 1)
    origin_y = min(img.shape[0] - baseline, y + text_h + BOX_THICKNESS)
    cv2.putText(img, text, (x + BOX_THICKNESS, origin_y), FONT, FONT_SCALE, TEXT_COLOR, 1, cv2.LINE_AA)


def draw_objects(image_file: Path, objects: Iterable[DetectedObject], dest: Path) -> Path:
    """Draw a box and label per detected object on a copy of image_file and save it to dest."""
    try:
        img = cv2.imread(str(image_file))
    except cv2.error as exc:
        raise ImageProcessingError(f"Could not decode image for annotation: {image_file}: {exc}") from exc
    if img is None:
        raise ImageProcessingError(f"Could not decode image for annotation: {image_file}")

    height, width = img.shape[:2]
    count = 0
    try:
        for detected in objects:
            x1, y1, x2, y2 = _clamp_rect(detected.rectangle, width, height)
            cv2.rectangle(img, (x1, y1), (x2, y2), BOX_COLOR, BOX_THICKNESS)
            _draw_label(img, detected.object_property, x1, y1)
            count += 1
    except cv2.error as exc:
        raise ImageProcessingError(f"Could not draw objects on {image_file}: {exc}") from exc

    dest.parent.mkdir(parents=True, exist_ok=True)
    try:
        written = cv2.imwrite(str(dest), img)
    except cv2.error as exc:
        raise ImageProcessingError(f"Could not encode annotated image {dest}: {exc}") from exc
    if not written:
        raise ImageProcessingError(f"Could not write annotated image {dest}")
    logger.info("Annotated %d object(s) into %s", count, dest)
    return dest
