"""Vision service client plus the analysis and thumbnail steps built on it."""

from .analyzer import analyze_image
from .client import VisionClient, VisionService
from .thumbnailer import generate_thumbnail

__all__ = ["VisionClient", "VisionService", "analyze_image", "generate_thumbnail"]
