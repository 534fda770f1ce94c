from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class VisualFeature(str, Enum):
    DESCRIPTION = "Description"
    TAGS = "Tags"
    CATEGORIES = "Categories"
    BRANDS = "Brands"
    OBJECTS = "Objects"
    ADULT = "Adult"


ALL_FEATURES: tuple[VisualFeature, ...] = (
    VisualFeature.DESCRIPTION,
    VisualFeature.TAGS,
    VisualFeature.CATEGORIES,
    VisualFeature.BRANDS,
    VisualFeature.OBJECTS,
    VisualFeature.ADULT,
)


class _WireModel(BaseModel):
    """Accepts the service's camelCase keys as well as field names."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, protected_namespaces=()
    )


def _none_to_list(value: Any) -> Any:
    return [] if value is None else value


class AnalysisRequest(BaseModel):
    image: bytes
    features: list[VisualFeature] = Field(default_factory=lambda: list(ALL_FEATURES))


class ThumbnailRequest(BaseModel):
    width: int = Field(ge=1, le=1024)
    height: int = Field(ge=1, le=1024)
    smart_cropping: bool = True
    image: bytes


class Caption(_WireModel):
    text: str
    confidence: float


class ImageDescription(_WireModel):
    tags: list[str] = Field(default_factory=list)
    captions: list[Caption] = Field(default_factory=list)

    @field_validator("tags", "captions", mode="before")
    @classmethod
    def _norm_lists(cls, v: Any) -> Any:
        return _none_to_list(v)


class Tag(_WireModel):
    name: str
    confidence: float
    hint: Optional[str] = None


class FaceRectangle(_WireModel):
    left: int
    top: int
    width: int
    height: int


class Landmark(_WireModel):
    name: str
    confidence: float


class Celebrity(_WireModel):
    name: str
    confidence: float
    face_rectangle: Optional[FaceRectangle] = None


class CategoryDetail(_WireModel):
    landmarks: Optional[list[Landmark]] = None
    celebrities: Optional[list[Celebrity]] = None


class Category(_WireModel):
    name: str
    score: float
    detail: Optional[CategoryDetail] = None


class BoundingRect(_WireModel):
    """Pixel rectangle anchored at the top-left corner."""

    x: int
    y: int
    w: int
    h: int


class Brand(_WireModel):
    name: str
    confidence: float
    rectangle: Optional[BoundingRect] = None


class ObjectHierarchy(_WireModel):
    object_property: str = Field(alias="object")
    confidence: float
    parent: Optional["ObjectHierarchy"] = None


class DetectedObject(_WireModel):
    object_property: str = Field(alias="object")
    confidence: float
    rectangle: BoundingRect
    parent: Optional[ObjectHierarchy] = None


class AdultInfo(_WireModel):
    is_adult_content: bool = False
    is_racy_content: bool = False
    is_gory_content: bool = False
    adult_score: Optional[float] = None
    racy_score: Optional[float] = None
    gore_score: Optional[float] = None


class ImageMetadata(_WireModel):
    width: Optional[int] = None
    height: Optional[int] = None
    format: Optional[str] = None


class ImageAnalysis(_WireModel):
    """Analysis result as returned by the vision service; read-only to callers."""

    description: ImageDescription = Field(default_factory=ImageDescription)
    tags: list[Tag] = Field(default_factory=list)
    categories: list[Category] = Field(default_factory=list)
    brands: list[Brand] = Field(default_factory=list)
    objects: list[DetectedObject] = Field(default_factory=list)
    adult: AdultInfo = Field(default_factory=AdultInfo)
    request_id: Optional[str] = None
    metadata: Optional[ImageMetadata] = None
    model_version: Optional[str] = None

    @field_validator("tags", "categories", "brands", "objects", mode="before")
    @classmethod
    def _norm_lists(cls, v: Any) -> Any:
        return _none_to_list(v)

    @field_validator("description", "adult", mode="before")
    @classmethod
    def _default_block(cls, v: Any) -> Any:
        return {} if v is None else v
