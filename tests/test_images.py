import pytest

from catalog_service.core.errors import UpstreamUploadError
from catalog_service.service.images import UploadedImage, attach_image, make_blob_name
from catalog_service.service.products import populate_category
from tests.fakes import FakeImageStorage, InMemoryCategoryRepo


def test_blob_names_are_unique_and_keep_extension():
    names = {make_blob_name("cat.JPG") for _ in range(50)}

    assert len(names) == 50
    assert all(n.endswith(".jpg") for n in names)


def test_blob_name_without_extension():
    assert "." not in make_blob_name("README")


@pytest.mark.asyncio
async def test_attach_image_without_file_returns_fields_unchanged():
    storage = FakeImageStorage()

    fields = await attach_image({"name": "Shoes"}, None, storage)

    assert fields == {"name": "Shoes"}
    assert storage.blobs == {}


@pytest.mark.asyncio
async def test_attach_image_sets_public_url():
    storage = FakeImageStorage()
    image = UploadedImage(data=b"abc", filename="a.png", content_type="image/png")
    base = {"name": "Shoes"}

    fields = await attach_image(base, image, storage)

    assert fields["imageUrl"] in storage.blobs
    assert storage.blobs[fields["imageUrl"]]["content_type"] == "image/png"
    assert "imageUrl" not in base


@pytest.mark.asyncio
async def test_attach_image_propagates_upload_failure():
    storage = FakeImageStorage()
    storage.fail = True
    image = UploadedImage(data=b"abc", filename="a.png")

    with pytest.raises(UpstreamUploadError):
        await attach_image({"name": "Shoes"}, image, storage)


@pytest.mark.asyncio
async def test_populate_category_resolves_and_limits_fields():
    categories = InMemoryCategoryRepo()
    cat = await categories.create({"name": "Tools", "imageUrl": "https://x/y.png"})
    products = [
        {"id": "p1", "name": "Hammer", "category": cat["id"]},
        {"id": "p2", "name": "Orphan", "category": "deadbeef"},
        {"id": "p3", "name": "Loose", "category": None},
    ]

    full = await populate_category(products, categories)
    names = await populate_category(products, categories, fields=["name"])

    assert full[0]["category"] == cat
    assert full[1]["category"] is None
    assert full[2]["category"] is None
    assert names[0]["category"] == {"id": cat["id"], "name": "Tools"}
    assert products[0]["category"] == cat["id"]
