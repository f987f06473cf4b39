"""
Shared fixtures.

Every test gets its own SQLite file under tmp_path, with tables created
and the starter catalog seeded. The app's session dependency is
overridden to point at it, so the lifespan (and the real database) is
never touched.
"""
import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.core.identity import get_current_user_id
from app.database import build_engine, get_session
from app.main import app
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.services.cart_service import CartService
from app.services.product_service import ProductService


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'storefront-test.db'}")
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        ProductService(ProductRepository()).seed_if_empty(session)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def cart_service() -> CartService:
    return CartService(CartRepository(), ProductRepository())


@pytest.fixture
def api_app(engine):
    """
    The FastAPI app wired to the test database.
    """

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def test_client(api_app) -> TestClient:
    return TestClient(api_app)


@pytest.fixture
def as_user(api_app):
    """
    Switch the acting shopper for subsequent requests.
    """

    def switch(user_id: int) -> None:
        api_app.dependency_overrides[get_current_user_id] = lambda: user_id

    return switch
