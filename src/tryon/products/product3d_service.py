"""Background 3D model generation for product records.

The HTTP request only flips ``model3d.status`` to ``processing`` and returns;
the long-running Masterpiece call runs on an ``asyncio`` task whose outcome
is written back through the same repository used for synchronous updates.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

import structlog

from ..masterpiece.masterpiece_client import MasterpieceClient
from ..masterpiece.masterpiece_errors import MasterpieceError
from ..masterpiece.masterpiece_models import JobStatus, Model3DState, PollOutcome
from .products_errors import (
    GenerationInProgressError,
    ModelNotReadyError,
    ProductImageMissingError,
)
from .products_models import Product, ProductImage
from .products_repository import ProductRepository

logger = logging.getLogger(__name__)

PENDING_STATUS = "pending"


class Model3DService:
    """Start, track and refresh image-to-3D generation for products."""

    def __init__(
        self,
        *,
        repo: ProductRepository,
        client: MasterpieceClient,
        log: logging.Logger | None = None,
    ) -> None:
        self._repo = repo
        self._client = client
        self._log = log or logger
        self._tasks: set[asyncio.Task[None]] = set()

    async def start_generation(self, product_id: str) -> Model3DState:
        """Mark the product as processing and launch generation in background.

        Raises ``ProductNotFoundError``, ``ProductImageMissingError``,
        ``GenerationInProgressError`` or ``MasterpieceConfigError`` before
        anything is persisted.
        """

        product = self._repo.get_product(product_id)
        image_url = product.primary_image_url
        if not image_url:
            raise ProductImageMissingError("Product must have at least one image")
        if product.model3d and product.model3d.status == JobStatus.PROCESSING:
            raise GenerationInProgressError(f"3D generation already running for '{product_id}'")
        self._client.ensure_configured()

        state = Model3DState(status=JobStatus.PROCESSING.value)
        self._repo.update_model3d(product_id, state)

        task = asyncio.create_task(self._run_generation(product_id, image_url))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._log.info("product3d.generation.scheduled", extra={"product_id": product_id})
        return state

    async def attach_images(self, product_id: str, images: Iterable[ProductImage]) -> Product:
        """Append hosted images and auto-start generation when appropriate."""

        product = self._repo.add_images(product_id, images)
        current = product.model3d.status if product.model3d else None
        if not product.images or current in (JobStatus.PROCESSING, JobStatus.COMPLETED):
            return product
        try:
            await self.start_generation(product_id)
        except MasterpieceError as exc:
            self._log.warning(
                "product3d.generation.autostart_skipped",
                extra={"product_id": product_id, "error": str(exc)},
            )
            return product
        return self._repo.get_product(product_id)

    async def refresh_status(self, product_id: str) -> Model3DState:
        """Re-check the provider for a stored job id and persist terminal states."""

        product = self._repo.get_product(product_id)
        stored = product.model3d
        if stored is None or not stored.masterpiece_id:
            return Model3DState(status=stored.status if stored else PENDING_STATUS)

        try:
            snapshot = await self._client.check_status(stored.masterpiece_id)
        except MasterpieceError as exc:
            self._log.warning(
                "product3d.status.check_failed",
                extra={"product_id": product_id, "job_id": stored.masterpiece_id, "error": str(exc)},
            )
            return stored

        if snapshot.outcome is PollOutcome.SUCCESS and snapshot.result_url:
            state = Model3DState(
                status=JobStatus.COMPLETED.value,
                masterpiece_id=stored.masterpiece_id,
                url=snapshot.result_url,
            )
        elif snapshot.outcome is PollOutcome.FAILURE:
            state = Model3DState(
                status=JobStatus.FAILED.value,
                masterpiece_id=stored.masterpiece_id,
                url=stored.url,
                error=snapshot.failure_reason,
            )
        else:
            return stored
        self._repo.update_model3d(product_id, state)
        return state

    def get_product(self, product_id: str) -> Product:
        return self._repo.get_product(product_id)

    def get_model(self, product_id: str) -> Product:
        product = self._repo.get_product(product_id)
        if not product.model3d or product.model3d.status != JobStatus.COMPLETED:
            status = product.model3d.status if product.model3d else PENDING_STATUS
            raise ModelNotReadyError(status)
        return product

    async def drain(self) -> None:
        """Wait for every in-flight generation task to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run_generation(self, product_id: str, image_url: str) -> None:
        structlog.contextvars.bind_contextvars(product_id=product_id)
        try:
            result = await self._client.generate(image_url, product_id)
        except MasterpieceError as exc:
            state = Model3DState(
                status=JobStatus.FAILED.value,
                masterpiece_id=exc.job_id,
                error=str(exc),
            )
        except Exception as exc:
            self._log.exception("product3d.generation.crashed", extra={"product_id": product_id})
            state = Model3DState(status=JobStatus.FAILED.value, error=str(exc) or type(exc).__name__)
        else:
            state = Model3DState(
                status=JobStatus.COMPLETED.value,
                masterpiece_id=result.job_id,
                url=result.result_url,
            )

        try:
            self._repo.update_model3d(product_id, state)
        except KeyError:
            self._log.warning("product3d.generation.product_removed", extra={"product_id": product_id})
        finally:
            structlog.contextvars.unbind_contextvars("product_id")
        self._log.info(
            "product3d.generation.finished",
            extra={"product_id": product_id, "status": state.status},
        )
