"""Dependency wiring helpers."""

from fastapi import FastAPI

from .config import AppConfig
from .masterpiece.masterpiece_client import MasterpieceClient
from .products.product3d_api import router as product3d_router
from .products.product3d_service import Model3DService
from .products.products_api import router as products_router
from .products.products_repository import ProductRepository


def include_routers(app: FastAPI, config: AppConfig) -> None:
    """Mount module routers and attach services."""
    product_repo = ProductRepository(config.session_factory)
    client = MasterpieceClient.from_settings(config.masterpiece)
    model3d_service = Model3DService(repo=product_repo, client=client)

    app.state.config = config
    app.state.product_repo = product_repo
    app.state.masterpiece_client = client
    app.state.model3d_service = model3d_service

    app.include_router(products_router)
    app.include_router(product3d_router)
