"""Persistence layer for product records."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from ..db.db_models import ProductModel
from ..masterpiece.masterpiece_models import Model3DState
from .products_errors import ProductNotFoundError
from .products_models import Product, ProductImage


class ProductRepository:
    """Manage product records; ``model3d`` is replaced as a whole on write."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def create_product(
        self,
        *,
        product_id: str,
        name: str,
        images: Iterable[ProductImage] = (),
    ) -> Product:
        with self._session_factory() as session:
            model = ProductModel(
                id=product_id,
                name=name,
                images_json=_dump_images(images),
                model3d_json=None,
            )
            session.add(model)
            session.commit()
            return _to_domain(model)

    def get_product(self, product_id: str) -> Product:
        with self._session_factory() as session:
            model = session.get(ProductModel, product_id)
            if model is None:
                raise ProductNotFoundError(product_id)
            return _to_domain(model)

    def add_images(self, product_id: str, images: Iterable[ProductImage]) -> Product:
        with self._session_factory() as session:
            model = _require(session, product_id)
            existing = _load_images(model.images_json)
            model.images_json = _dump_images([*existing, *images])
            model.updated_at = datetime.utcnow()
            session.commit()
            return _to_domain(model)

    def update_model3d(self, product_id: str, state: Model3DState) -> Product:
        with self._session_factory() as session:
            model = _require(session, product_id)
            model.model3d_json = json.dumps(state.to_dict())
            model.updated_at = datetime.utcnow()
            session.commit()
            return _to_domain(model)


def _require(session: Session, product_id: str) -> ProductModel:
    model = session.get(ProductModel, product_id)
    if model is None:
        raise ProductNotFoundError(product_id)
    return model


def _dump_images(images: Iterable[ProductImage]) -> str:
    return json.dumps([image.to_dict() for image in images])


def _load_images(raw: str | None) -> list[ProductImage]:
    return [
        ProductImage(url=item["url"], public_id=item.get("publicId"))
        for item in json.loads(raw or "[]")
        if item.get("url")
    ]


def _to_domain(model: ProductModel) -> Product:
    model3d = None
    if model.model3d_json:
        model3d = Model3DState.from_dict(json.loads(model.model3d_json))
    return Product(
        id=model.id,
        name=model.name,
        images=_load_images(model.images_json),
        model3d=model3d,
    )
