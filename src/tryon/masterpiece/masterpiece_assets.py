"""Signed-URL asset upload for the Masterpiece API.

Some provider deployments only accept an internal asset id instead of a
public image URL. The handshake is: download the source image, ask an asset
endpoint for a signed upload URL, PUT the bytes there, and hand the asset id
to job creation. Every failure here is soft; the caller falls back to the
public URL unless upload is mandatory.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from urllib.parse import unquote, urlsplit

from .masterpiece_endpoints import EndpointResolver
from .masterpiece_extract import extract_asset_ticket
from .masterpiece_models import SourceImage
from .masterpiece_probe import SkipCandidate, first_accepting
from .masterpiece_transport import (
    TRANSPORT_ERRORS,
    MasterpieceTransport,
    is_success,
    response_json,
)

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"
ASSET_SOURCE_TAG = "tryon-platform"


def derive_filename(image_url: str) -> str:
    """Return the last URL path segment, or a timestamped fallback name."""

    segment = urlsplit(image_url).path.rstrip("/").rsplit("/", 1)[-1]
    segment = unquote(segment).strip()
    if segment:
        return segment
    return f"image-{int(time.time() * 1000)}.jpg"


@dataclass(slots=True)
class AssetUploader:
    transport: MasterpieceTransport
    resolver: EndpointResolver
    log: logging.Logger = field(default_factory=lambda: logger)

    async def upload(self, image_url: str, product_reference: str | None) -> str | None:
        """Upload ``image_url`` as a provider asset and return its id, or ``None``."""

        image = await self.fetch_source_image(image_url)
        if image is None:
            return None

        async def register(endpoint: str) -> str:
            return await self._register_and_upload(endpoint, image, product_reference)

        hit = await first_accepting(
            self.resolver.asset_endpoints(), register, role="asset", log=self.log
        )
        if hit is None:
            self.log.warning(
                "masterpiece.asset.exhausted",
                extra={"product_reference": product_reference, "image_url": image_url},
            )
            return None
        self.log.info(
            "masterpiece.asset.uploaded",
            extra={"asset_id": hit.value, "endpoint": hit.endpoint},
        )
        return hit.value

    async def fetch_source_image(self, image_url: str) -> SourceImage | None:
        try:
            response = await self.transport.download(image_url)
        except TRANSPORT_ERRORS as exc:
            self.log.warning(
                "masterpiece.asset.download_failed",
                extra={"image_url": image_url, "error": str(exc)},
            )
            return None
        if not is_success(response.status_code):
            self.log.warning(
                "masterpiece.asset.download_failed",
                extra={"image_url": image_url, "status_code": response.status_code},
            )
            return None
        raw_type = response.headers.get("Content-Type") or DEFAULT_IMAGE_CONTENT_TYPE
        content_type = raw_type.split(";", 1)[0].strip() or DEFAULT_IMAGE_CONTENT_TYPE
        return SourceImage(
            content=response.content,
            content_type=content_type,
            filename=derive_filename(image_url),
        )

    async def _register_and_upload(
        self, endpoint: str, image: SourceImage, product_reference: str | None
    ) -> str:
        payload = {
            "fileName": image.filename,
            "fileType": image.content_type,
            "fileSize": image.content_length,
            "metadata": {"productId": product_reference, "source": ASSET_SOURCE_TAG},
        }
        self.log.info("masterpiece.asset.create", extra={"endpoint": endpoint})
        response = await self.transport.post_json(endpoint, payload)
        if not is_success(response.status_code):
            raise SkipCandidate("asset create rejected", status_code=response.status_code)

        ticket = extract_asset_ticket(response_json(response))
        if ticket is None:
            raise SkipCandidate("asset response missing upload url or asset id")
        upload_url, asset_id = ticket

        upload = await self.transport.put_bytes(
            upload_url, image.content, content_type=image.content_type
        )
        if not is_success(upload.status_code):
            raise SkipCandidate("signed upload rejected", status_code=upload.status_code)
        return asset_id


__all__ = ["AssetUploader", "derive_filename"]
