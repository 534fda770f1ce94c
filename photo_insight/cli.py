from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from photo_insight.core.env import configure_logging, env_str, load_dotenv_if_present
from photo_insight.core.errors import PhotoInsightError
from photo_insight.core.settings import OutputConfig, load_settings
from photo_insight.pipeline import run
from photo_insight.vision import VisionClient

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "image/building.jpg"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-insight",
        description="Analyze an image with the vision service, write a report, and fetch a thumbnail.",
    )
    parser.add_argument(
        "image",
        nargs="?",
        type=Path,
        default=None,
        help=f"Image to analyze (default: $PHOTO_INSIGHT_DEFAULT_IMAGE or {DEFAULT_IMAGE}).",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one analysis; returns 0 on success and 1 after printing the error message."""
    args = _parser().parse_args(argv)

    load_dotenv_if_present()
    configure_logging()

    image_file = args.image or Path(env_str("PHOTO_INSIGHT_DEFAULT_IMAGE", DEFAULT_IMAGE))
    try:
        settings = load_settings()
        outputs = OutputConfig.from_env()
        with VisionClient.from_settings(settings, timeout=outputs.http_timeout) as client:
            result = run(client, image_file, outputs, progress=print)
    except (PhotoInsightError, OSError, ValueError) as exc:
        logger.debug("Run failed with %s", type(exc).__name__, exc_info=True)
        print(exc)
        return 1

    print(f"Report saved in {result.report_path}")
    if result.objects_path is not None:
        print(f"Objects image saved in {result.objects_path}")
    print(f"Thumbnail saved in {result.thumbnail_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
