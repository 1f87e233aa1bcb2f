"""Remote job creation against the first reachable endpoint."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from .masterpiece_endpoints import EndpointResolver
from .masterpiece_errors import (
    EndpointUnreachableError,
    MalformedResponseError,
    MasterpieceRequestError,
)
from .masterpiece_extract import extract_job_id
from .masterpiece_probe import SkipCandidate, first_accepting, is_next_candidate_status
from .masterpiece_transport import (
    MasterpieceTransport,
    body_preview,
    is_success,
    response_json,
)

logger = logging.getLogger(__name__)

DEFAULT_TEXTURE_SIZE = 1024
DEFAULT_SEED = 1


@dataclass(slots=True)
class JobSubmitter:
    transport: MasterpieceTransport
    resolver: EndpointResolver
    texture_size: int = DEFAULT_TEXTURE_SIZE
    seed: int = DEFAULT_SEED
    log: logging.Logger = field(default_factory=lambda: logger)

    def build_payload(self, image_url: str, upload_reference: str | None) -> dict[str, Any]:
        payload: dict[str, Any] = {"textureSize": self.texture_size, "seed": self.seed}
        if upload_reference:
            payload["imageRequestId"] = upload_reference
        else:
            payload["imageUrl"] = image_url
        return payload

    async def submit(self, image_url: str, upload_reference: str | None = None) -> str:
        """Create a generation job and return the provider job id.

        Not idempotent: every call creates a new remote job.
        """

        payload = self.build_payload(image_url, upload_reference)

        async def create(endpoint: str) -> httpx.Response:
            self.log.info(
                "masterpiece.create.attempt",
                extra={"endpoint": endpoint, "payload": payload},
            )
            response = await self.transport.post_json(endpoint, payload)
            if is_success(response.status_code):
                return response
            if is_next_candidate_status(response.status_code):
                raise SkipCandidate("create rejected", status_code=response.status_code)
            self.log.error(
                "masterpiece.create.fatal_status",
                extra={
                    "endpoint": endpoint,
                    "status_code": response.status_code,
                    "body_preview": body_preview(response),
                },
            )
            raise MasterpieceRequestError(
                f"Masterpiece job creation failed (status={response.status_code})",
                status_code=response.status_code,
                url=endpoint,
            )

        hit = await first_accepting(
            self.resolver.creation_endpoints(), create, role="create", log=self.log
        )
        if hit is None:
            raise EndpointUnreachableError(
                "Failed to reach Masterpiece X generation endpoint. "
                "Please verify MASTERPIECE_X_API_URL and related settings.",
                role="create",
            )

        body = response_json(hit.value)
        job_id = extract_job_id(body)
        if not job_id:
            if body is None:
                raw = body_preview(hit.value)
            else:
                raw = json.dumps(body, ensure_ascii=False, default=str)
            self.log.error(
                "masterpiece.create.missing_job_id",
                extra={"endpoint": hit.endpoint, "body": raw},
            )
            raise MalformedResponseError(
                f"Failed to get requestId from Masterpiece X API. Response: {raw}",
                payload=body,
            )
        self.log.info(
            "masterpiece.create.job_created",
            extra={"endpoint": hit.endpoint, "job_id": job_id},
        )
        return job_id


__all__ = ["DEFAULT_SEED", "DEFAULT_TEXTURE_SIZE", "JobSubmitter"]
