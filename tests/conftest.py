import pytest
from fastapi.testclient import TestClient

from catalog_service.dependencies.depend import (
    get_category_repo,
    get_product_repo,
    get_storage,
)
from catalog_service.main import app
from tests.fakes import FakeImageStorage, InMemoryCategoryRepo, InMemoryProductRepo


# --- Fixtures ---


@pytest.fixture
def storage():
    return FakeImageStorage()


@pytest.fixture
def category_repo():
    return InMemoryCategoryRepo()


@pytest.fixture
def product_repo():
    return InMemoryProductRepo()


@pytest.fixture
def client(storage, category_repo, product_repo):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_category_repo] = lambda: category_repo
    app.dependency_overrides[get_product_repo] = lambda: product_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def image():
    return {"image": ("photo.PNG", b"\x89PNG fake bytes", "image/png")}


@pytest.fixture
def make_category(client, image):
    def _make(name: str = "Shoes") -> dict:
        resp = client.post("/addCategories", data={"name": name}, files=image)
        assert resp.status_code == 201, resp.text
        return resp.json()["category"]

    return _make
