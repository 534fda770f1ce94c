from __future__ import annotations

import logging
from pathlib import Path

from photo_insight.core.models import ALL_FEATURES, ImageAnalysis
from photo_insight.organize import add_image_to_folder
from photo_insight.vision.annotator import draw_objects
from photo_insight.vision.client import VisionService
from photo_insight.vision.report import render_report

logger = logging.getLogger(__name__)


def analyze_image(
    client: VisionService,
    image_file: Path,
    report_file: Path,
    *,
    output_dir: Path | None = None,
    objects_file: str = "objects.jpg",
) -> ImageAnalysis:
    """
    Analyze one image and write the text report.

    Side effects, done before the report body is written:
    - one copy of the image per category under output_dir/<category>/
    - an annotated copy (output_dir/objects_file) when objects were detected

    The report is rewritten from scratch on every call. Service, file and image
    errors propagate unchanged.
    """
    image_file = Path(image_file)
    report_file = Path(report_file)
    base_dir = output_dir if output_dir is not None else Path.cwd()
    logger.info("Analyzing %s", image_file)

    with report_file.open("w", encoding="utf-8") as out:
        with image_file.open("rb") as image_data:
            analysis = client.analyze(image_data, ALL_FEATURES)

        for category in analysis.categories:
            add_image_to_folder(image_file, category.name, base_dir)
        if analysis.objects:
            draw_objects(image_file, analysis.objects, base_dir / objects_file)

        out.writelines(line + "\n" for line in render_report(analysis, objects_file))

    logger.info(
        "Report written to %s (%d categories, %d objects)",
        report_file,
        len(analysis.categories),
        len(analysis.objects),
    )
    return analysis
