from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from photo_insight.core.models import ImageAnalysis
from photo_insight.core.settings import OutputConfig
from photo_insight.vision import VisionService, analyze_image, generate_thumbnail

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    analysis: ImageAnalysis
    report_path: Path
    thumbnail_path: Path
    objects_path: Path | None = None


def run(
    client: VisionService,
    image_file: Path,
    outputs: OutputConfig,
    progress: Optional[Callable[[str], None]] = None,
) -> RunResult:
    """
    Analyze image_file, then fetch its thumbnail. A failed analysis skips the thumbnail.

    progress, when given, receives one line as each step starts.
    """
    notify = progress or (lambda _line: None)
    outputs.output_dir.mkdir(parents=True, exist_ok=True)
    notify(f"Analyzing {image_file}")
    analysis = analyze_image(
        client,
        image_file,
        outputs.report_path,
        output_dir=outputs.output_dir,
        objects_file=outputs.objects_file,
    )
    notify("Generating thumbnail")
    thumb = generate_thumbnail(client, image_file, outputs.thumbnail_path)
    return RunResult(
        analysis=analysis,
        report_path=outputs.report_path,
        thumbnail_path=thumb,
        objects_path=outputs.objects_path if analysis.objects else None,
    )
