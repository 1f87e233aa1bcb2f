"""Product record structures consumed by the 3D generation flow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..masterpiece.masterpiece_models import Model3DState


@dataclass(slots=True)
class ProductImage:
    url: str
    public_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "publicId": self.public_id}


@dataclass(slots=True)
class Product:
    id: str
    name: str
    images: list[ProductImage] = field(default_factory=list)
    model3d: Model3DState | None = None

    @property
    def primary_image_url(self) -> str | None:
        return self.images[0].url if self.images else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "images": [image.to_dict() for image in self.images],
            "model3d": self.model3d.to_dict() if self.model3d else None,
        }
