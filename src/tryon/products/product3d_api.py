"""HTTP routes for product 3D model generation."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from ..masterpiece.masterpiece_errors import MasterpieceConfigError
from .product3d_service import Model3DService
from .products_errors import (
    GenerationInProgressError,
    ModelNotReadyError,
    ProductImageMissingError,
    ProductNotFoundError,
)

router = APIRouter(prefix="/api/product3d", tags=["product3d"])
logger = logging.getLogger(__name__)


def get_model3d_service(request: Request) -> Model3DService:
    """Fetch 3D model service from application state."""
    try:
        return request.app.state.model3d_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive path
        raise RuntimeError("Model3DService is not configured") from exc


def _not_found(product_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"status": "error", "failure_reason": "product_not_found", "product_id": product_id},
    )


@router.post("/{product_id}/generate", status_code=status.HTTP_202_ACCEPTED)
async def generate_model(
    product_id: str,
    service: Model3DService = Depends(get_model3d_service),
) -> dict[str, str]:
    """Start background generation; the response never waits for the provider."""
    try:
        state = await service.start_generation(product_id)
    except ProductNotFoundError:
        raise _not_found(product_id)
    except ProductImageMissingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"status": "error", "failure_reason": "image_missing", "details": str(exc)},
        )
    except GenerationInProgressError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={"status": "error", "failure_reason": "generation_in_progress"},
        )
    except MasterpieceConfigError as exc:
        logger.warning("product3d.generate.not_configured", extra={"product_id": product_id, "error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "error", "failure_reason": "generation_unavailable", "details": str(exc)},
        )
    return {
        "message": "3D model generation started",
        "productId": product_id,
        "status": state.status,
    }


@router.get("/{product_id}/status")
async def get_status(
    product_id: str,
    service: Model3DService = Depends(get_model3d_service),
) -> dict[str, str | None]:
    try:
        state = await service.refresh_status(product_id)
    except ProductNotFoundError:
        raise _not_found(product_id)
    return {"status": state.status, "modelUrl": state.url}


@router.get("/{product_id}/model")
def get_model(
    product_id: str,
    service: Model3DService = Depends(get_model3d_service),
):
    try:
        product = service.get_model(product_id)
    except ProductNotFoundError:
        raise _not_found(product_id)
    except ModelNotReadyError as exc:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"status": exc.status, "failure_reason": "model_not_ready"},
        )
    return {
        "modelUrl": product.model3d.url if product.model3d else None,
        "status": product.model3d.status if product.model3d else None,
        "productName": product.name,
    }
