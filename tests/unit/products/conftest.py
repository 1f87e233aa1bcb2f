from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.tryon.db.db_models import Base
from src.tryon.products.products_models import ProductImage
from src.tryon.products.products_repository import ProductRepository


@pytest.fixture
def session_factory():
    engine = create_engine("sqlite:///:memory:", future=True)
    Session = sessionmaker(bind=engine, expire_on_commit=False)
    Base.metadata.create_all(engine)
    return Session


@pytest.fixture
def product_repo(session_factory) -> ProductRepository:
    repo = ProductRepository(session_factory)
    repo.create_product(
        product_id="prod-1",
        name="Canvas Sneaker",
        images=[ProductImage(url="https://cdn.example.com/products/sneaker.png", public_id="img-1")],
    )
    repo.create_product(product_id="prod-bare", name="Gift Card")
    return repo
