"""HTTP routes for product records used by the 3D flow."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from .product3d_api import get_model3d_service
from .product3d_service import Model3DService
from .products_errors import ProductNotFoundError
from .products_models import ProductImage

router = APIRouter(prefix="/api/products", tags=["products"])


class ProductImagePayload(BaseModel):
    url: str = Field(min_length=1)
    public_id: str | None = Field(default=None, alias="publicId")


class AttachImagesRequest(BaseModel):
    images: list[ProductImagePayload] = Field(min_length=1)


@router.get("/{product_id}")
def get_product(
    product_id: str,
    service: Model3DService = Depends(get_model3d_service),
) -> dict[str, Any]:
    try:
        product = service.get_product(product_id)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "product_not_found"},
        )
    return product.to_dict()


@router.post("/{product_id}/images")
async def attach_images(
    product_id: str,
    payload: AttachImagesRequest,
    service: Model3DService = Depends(get_model3d_service),
) -> dict[str, Any]:
    """Attach already-hosted images; may start 3D generation automatically."""
    images = [ProductImage(url=item.url, public_id=item.public_id) for item in payload.images]
    try:
        product = await service.attach_images(product_id, images)
    except ProductNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"status": "error", "failure_reason": "product_not_found"},
        )
    return {"product": product.to_dict(), "message": "Images attached"}
