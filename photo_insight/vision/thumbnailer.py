from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from photo_insight.core.errors import ImageProcessingError
from photo_insight.vision.client import VisionService

logger = logging.getLogger(__name__)

THUMB_WIDTH = 100
THUMB_HEIGHT = 100


def _check_image(data: bytes) -> str:
    """Return the decoded format name; raise ImageProcessingError if data is not an image."""
    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            return img.format or "unknown"
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as exc:
        raise ImageProcessingError(f"Thumbnail response is not a readable image: {exc}") from exc


def generate_thumbnail(
    client: VisionService,
    image_file: Path,
    dest: Path,
    *,
    width: int = THUMB_WIDTH,
    height: int = THUMB_HEIGHT,
    smart_cropping: bool = True,
) -> Path:
    """Request a (smart-cropped) thumbnail for image_file and write it to dest, replacing it."""
    logger.info("Generating thumbnail")
    with Path(image_file).open("rb") as image_data:
        data = client.generate_thumbnail(width, height, image_data, smart_cropping)

    fmt = _check_image(data)
    dest.parent.mkdir(parents=True, exist_ok=True)
    with dest.open("wb") as thumb:
        thumb.write(data)
    logger.info("Thumbnail saved in %s (%s, %d bytes)", dest, fmt, len(data))
    return dest
