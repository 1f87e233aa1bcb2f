from __future__ import annotations

import logging

import structlog
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.tryon.config import AppConfig
from src.tryon.core.config import MasterpieceSettings
from src.tryon.db.db_init import init_db
from src.tryon.main import create_app
from src.tryon.masterpiece.masterpiece_client import MasterpieceClient
from src.tryon.products.products_models import ProductImage


def test_create_app_wires_services() -> None:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    engine = create_engine(
        "sqlite://", future=True, connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    init_db(engine)
    config = AppConfig(
        database_url="sqlite://",
        engine=engine,
        session_factory=sessionmaker(bind=engine, expire_on_commit=False),
        masterpiece=MasterpieceSettings(),
    )
    try:
        app = create_app(config)
        repo = app.state.product_repo
        repo.create_product(
            product_id="prod-1",
            name="Canvas Sneaker",
            images=[ProductImage(url="https://cdn.example.com/sneaker.png")],
        )
        client = TestClient(app)

        assert isinstance(app.state.masterpiece_client, MasterpieceClient)
        assert client.get("/api/products/prod-1").json()["name"] == "Canvas Sneaker"
        # 3D generation is disabled by default
        assert client.post("/api/product3d/prod-1/generate").status_code == 503
        assert repo.get_product("prod-1").model3d is None
    finally:
        root.handlers = handlers
        root.setLevel(level)
        structlog.reset_defaults()
