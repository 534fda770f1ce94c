"""Plain-text rendering of an ImageAnalysis."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from photo_insight.core.models import (
    AdultInfo,
    Category,
    Celebrity,
    DetectedObject,
    ImageAnalysis,
    Landmark,
)


def format_percent(value: float) -> str:
    """Render a 0-1 confidence as a percentage with two decimals (0.873 -> '87.30 %')."""
    return f"{value * 100:.2f} %"


def _item_line(name: str, confidence: float) -> str:
    return f" -{name} (confidence: {format_percent(confidence)})"


def collect_landmarks(categories: Iterable[Category]) -> list[Landmark]:
    """Landmarks from category detail, first occurrence per name, in first-seen order."""
    seen: dict[str, Landmark] = {}
    for category in categories:
        if category.detail is None or not category.detail.landmarks:
            continue
        for landmark in category.detail.landmarks:
            seen.setdefault(landmark.name, landmark)
    return list(seen.values())


def collect_celebrities(categories: Iterable[Category]) -> list[Celebrity]:
    seen: dict[str, Celebrity] = {}
    for category in categories:
        if category.detail is None or not category.detail.celebrities:
            continue
        for celebrity in category.detail.celebrities:
            seen.setdefault(celebrity.name, celebrity)
    return list(seen.values())


def caption_lines(analysis: ImageAnalysis) -> Iterator[str]:
    for caption in analysis.description.captions:
        yield f"Description: {caption.text} (confidence: {format_percent(caption.confidence)})"


def tag_lines(analysis: ImageAnalysis) -> Iterator[str]:
    if not analysis.tags:
        return
    yield "Tags:"
    for tag in analysis.tags:
        yield _item_line(tag.name, tag.confidence)


def category_line(category: Category) -> str:
    return _item_line(category.name, category.score)


def landmark_lines(landmarks: Sequence[Landmark]) -> Iterator[str]:
    if not landmarks:
        return
    yield "Landmarks:"
    for landmark in landmarks:
        yield _item_line(landmark.name, landmark.confidence)


def celebrity_lines(celebrities: Sequence[Celebrity]) -> Iterator[str]:
    if not celebrities:
        return
    yield "Celebrities:"
    for celebrity in celebrities:
        yield _item_line(celebrity.name, celebrity.confidence)


def brand_lines(analysis: ImageAnalysis) -> Iterator[str]:
    if not analysis.brands:
        return
    yield "Brands:"
    for brand in analysis.brands:
        yield _item_line(brand.name, brand.confidence)


def object_line(detected: DetectedObject) -> str:
    return _item_line(detected.object_property, detected.confidence)


def saved_objects_line(objects_file: str) -> str:
    return f"  Results saved in {objects_file}"


def rating_lines(adult: AdultInfo) -> list[str]:
    return [
        "Ratings:",
        f" -Adult: {adult.is_adult_content}",
        f" -Racy: {adult.is_racy_content}",
        f" -Gore: {adult.is_gory_content}",
    ]


def render_report(analysis: ImageAnalysis, objects_file: str | None = None) -> list[str]:
    """
    Full report as a list of lines, in report order.

    objects_file is the annotated image name to mention under "Objects in image:";
    it is only referenced when the analysis has detected objects.
    """
    lines: list[str] = []
    lines.extend(caption_lines(analysis))
    lines.extend(tag_lines(analysis))
    lines.append("Categories:")
    lines.extend(category_line(category) for category in analysis.categories)
    lines.extend(landmark_lines(collect_landmarks(analysis.categories)))
    lines.extend(celebrity_lines(collect_celebrities(analysis.categories)))
    lines.extend(brand_lines(analysis))
    if analysis.objects:
        lines.append("Objects in image:")
        lines.extend(object_line(detected) for detected in analysis.objects)
        if objects_file:
            lines.append(saved_objects_line(objects_file))
    lines.extend(rating_lines(analysis.adult))
    return lines
