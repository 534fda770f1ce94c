from __future__ import annotations

import logging
from typing import Any, BinaryIO, Iterable, Optional, Protocol, Union

import httpx
from pydantic import ValidationError

from photo_insight.core.errors import ServiceError
from photo_insight.core.models import (
    ALL_FEATURES,
    AnalysisRequest,
    ImageAnalysis,
    ThumbnailRequest,
    VisualFeature,
)
from photo_insight.core.settings import VisionSettings

logger = logging.getLogger(__name__)

API_PATH = "vision/v3.2"
_KEY_HEADER = "Ocp-Apim-Subscription-Key"

ImageData = Union[bytes, BinaryIO]


class VisionService(Protocol):
    def analyze(
        self, image_data: ImageData, features: Iterable[VisualFeature] = ALL_FEATURES
    ) -> ImageAnalysis: ...

    def generate_thumbnail(
        self, width: int, height: int, image_data: ImageData, smart_cropping: bool = True
    ) -> bytes: ...


def _read_image(image_data: ImageData) -> bytes:
    if isinstance(image_data, (bytes, bytearray)):
        return bytes(image_data)
    return image_data.read()


def _error_detail(response: httpx.Response) -> tuple[Optional[str], str]:
    """Pull (code, message) out of an error body; fall back to the reason phrase."""
    try:
        body: Any = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        err = body.get("error") if isinstance(body.get("error"), dict) else body
        message = err.get("message")
        if isinstance(message, str) and message.strip():
            code = err.get("code")
            return (str(code) if code is not None else None), message.strip()
    return None, response.reason_phrase or f"HTTP {response.status_code}"


class VisionClient:
    """Computer Vision REST client authenticated with a subscription key."""

    def __init__(
        self,
        endpoint: str,
        key: str,
        *,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/") + "/"
        self._owns_client = client is None
        self.client = client or httpx.Client(base_url=self.endpoint, timeout=timeout)
        self._key = key

    @classmethod
    def from_settings(
        cls, settings: VisionSettings, timeout: Optional[float] = None
    ) -> "VisionClient":
        return cls(settings.endpoint, settings.key, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "VisionClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _post(self, path: str, params: dict[str, Any], content: bytes) -> httpx.Response:
        url = f"{self.endpoint}{API_PATH}/{path}"
        try:
            response = self.client.post(
                url,
                params=params,
                content=content,
                headers={
                    _KEY_HEADER: self._key,
                    "Content-Type": "application/octet-stream",
                },
            )
        except httpx.HTTPError as exc:
            raise ServiceError(f"Vision service call failed: {exc}") from exc

        if response.is_success:
            return response
        code, message = _error_detail(response)
        if response.status_code in (401, 403):
            message = f"Authentication failed: {message}"
        raise ServiceError(
            f"Vision service returned {response.status_code}: {message}",
            status_code=response.status_code,
            code=code,
        )

    def analyze(
        self, image_data: ImageData, features: Iterable[VisualFeature] = ALL_FEATURES
    ) -> ImageAnalysis:
        """Run one analysis call for the requested visual features."""
        request = AnalysisRequest(image=_read_image(image_data), features=list(features))
        params = {"visualFeatures": ",".join(f.value for f in request.features)}
        logger.debug("Analyze request: %d bytes, features=%s", len(request.image), params["visualFeatures"])
        response = self._post("analyze", params, request.image)
        try:
            return ImageAnalysis.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ServiceError(f"Unexpected analysis response: {exc}") from exc

    def generate_thumbnail(
        self, width: int, height: int, image_data: ImageData, smart_cropping: bool = True
    ) -> bytes:
        """Request a thumbnail; returns the encoded image bytes."""
        try:
            request = ThumbnailRequest(
                width=width,
                height=height,
                smart_cropping=smart_cropping,
                image=_read_image(image_data),
            )
        except ValidationError as exc:
            raise ValueError(f"Invalid thumbnail request: {exc}") from exc
        params = {
            "width": request.width,
            "height": request.height,
            "smartCropping": "true" if request.smart_cropping else "false",
        }
        logger.debug("Thumbnail request: %sx%s smart=%s", width, height, smart_cropping)
        response = self._post("generateThumbnail", params, request.image)
        return response.content
