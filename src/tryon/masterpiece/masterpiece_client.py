"""Public entry points of the image-to-3D integration."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from ..core.config import MasterpieceSettings
from .masterpiece_assets import AssetUploader
from .masterpiece_endpoints import EndpointResolver, EndpointRole, parse_path_list
from .masterpiece_errors import AssetUploadError, MasterpieceConfigError, MasterpieceError
from .masterpiece_jobs import JobSubmitter
from .masterpiece_models import GenerationResult, StatusSnapshot
from .masterpiece_polling import StatusPoller
from .masterpiece_transport import MasterpieceTransport

logger = logging.getLogger(__name__)

WARMUP_SECONDS = 2.0


@dataclass(slots=True)
class MasterpieceClient:
    """Stateless client; every :meth:`generate` call starts a new remote job."""

    api_url: str | None
    api_key: str | None
    app_id: str | None = None
    enabled: bool = False
    poll_interval_seconds: float = 5.0
    max_poll_attempts: int = 240
    timeout_seconds: float = 30.0
    warmup_seconds: float = WARMUP_SECONDS
    force_asset_upload: bool = False
    try_asset_upload: bool = True
    path_overrides: dict[EndpointRole, list[str]] = field(default_factory=dict)
    log: logging.Logger = field(default_factory=lambda: logger)

    @classmethod
    def from_settings(cls, settings: MasterpieceSettings) -> "MasterpieceClient":
        return cls(
            api_url=settings.api_url,
            api_key=settings.api_key,
            app_id=settings.app_id,
            enabled=settings.enabled,
            poll_interval_seconds=settings.poll_interval_ms / 1000,
            max_poll_attempts=settings.max_poll_attempts,
            timeout_seconds=settings.request_timeout_ms / 1000,
            force_asset_upload=settings.force_asset_upload,
            try_asset_upload=settings.try_asset_upload,
            path_overrides={
                EndpointRole.CREATE: parse_path_list(settings.generate_paths),
                EndpointRole.STATUS: parse_path_list(settings.status_paths),
                EndpointRole.ASSET: parse_path_list(settings.asset_paths),
            },
        )

    def ensure_configured(self) -> None:
        """Raise :class:`MasterpieceConfigError` unless the client can run."""

        if not self.api_url:
            raise MasterpieceConfigError("MASTERPIECE_X_API_URL is not set in environment variables")
        if not self.api_key:
            raise MasterpieceConfigError("MASTERPIECE_X_API_KEY is not set in environment variables")
        if not self.enabled:
            raise MasterpieceConfigError(
                '3D generation is disabled (ENABLE_3D_GENERATION is not set to "true")'
            )

    @property
    def resolver(self) -> EndpointResolver:
        return EndpointResolver(self.api_url or "", self.path_overrides)

    @property
    def transport(self) -> MasterpieceTransport:
        return MasterpieceTransport(
            api_key=self.api_key or "",
            app_id=self.app_id,
            timeout_seconds=self.timeout_seconds,
        )

    def _poller(self, transport: MasterpieceTransport, resolver: EndpointResolver) -> StatusPoller:
        return StatusPoller(
            transport=transport,
            resolver=resolver,
            poll_interval_seconds=self.poll_interval_seconds,
            max_attempts=self.max_poll_attempts,
        )

    async def generate(self, image_url: str, product_reference: str | None = None) -> GenerationResult:
        """Upload (optionally), create, discover and poll until terminal.

        Long-running: bounded by ``max_poll_attempts * poll_interval_seconds``.
        Callers run it on a background task and persist the outcome.
        """

        self.ensure_configured()
        if not image_url:
            raise MasterpieceError("Image URL is required for 3D model generation")

        transport = self.transport
        resolver = self.resolver
        context = {"product_reference": product_reference, "image_url": image_url}
        self.log.info("masterpiece.generate.start", extra=context)

        try:
            upload_reference = None
            if self.force_asset_upload or self.try_asset_upload:
                uploader = AssetUploader(transport=transport, resolver=resolver)
                upload_reference = await uploader.upload(image_url, product_reference)
                if upload_reference is None:
                    if self.force_asset_upload:
                        raise AssetUploadError(
                            "Asset upload required but failed. "
                            "Please check Masterpiece asset configuration."
                        )
                    self.log.info("masterpiece.asset.fallback_to_url", extra=context)

            submitter = JobSubmitter(transport=transport, resolver=resolver)
            job_id = await submitter.submit(image_url, upload_reference)

            # Freshly created jobs are not immediately visible on status endpoints.
            await asyncio.sleep(self.warmup_seconds)

            poller = self._poller(transport, resolver)
            hit = await poller.discover(job_id)
            result = await poller.poll(job_id, hit.endpoint)
        except MasterpieceError as exc:
            self.log.error(
                "masterpiece.generate.failed",
                extra={**context, "job_id": exc.job_id, "error": str(exc), "error_type": type(exc).__name__},
            )
            raise

        self.log.info(
            "masterpiece.generate.completed",
            extra={**context, "job_id": result.job_id, "result_url": result.result_url},
        )
        return result

    async def check_status(self, job_id: str) -> StatusSnapshot:
        """Return the current classification of an existing job."""

        self.ensure_configured()
        if not job_id:
            raise MasterpieceError("Generation ID is required")
        poller = self._poller(self.transport, self.resolver)
        snapshot = await poller.check(job_id)
        self.log.info(
            "masterpiece.status.checked",
            extra={"job_id": job_id, "status": snapshot.raw_status, "outcome": snapshot.outcome.value},
        )
        return snapshot


__all__ = ["MasterpieceClient", "WARMUP_SECONDS"]
