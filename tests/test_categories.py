"""Category routes: create, list, get, update and delete."""

from bson import ObjectId


def test_create_category_without_file_is_rejected(client, category_repo, storage):
    resp = client.post("/addCategories", data={"name": "Shoes"})

    assert resp.status_code == 400
    assert resp.json() == {"message": "No file uploaded", "error": "bad_request"}
    assert category_repo.docs == {}
    assert storage.blobs == {}


def test_create_category_with_empty_filename_counts_as_no_file(client, category_repo):
    resp = client.post(
        "/addCategories",
        data={"name": "Shoes"},
        files={"image": ("", b"", "application/octet-stream")},
    )

    assert resp.status_code == 400
    assert resp.json()["error"] == "bad_request"
    assert category_repo.docs == {}


def test_create_category_uploads_image_and_persists(client, category_repo, storage, image):
    resp = client.post("/addCategories", data={"name": "Shoes"}, files=image)

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Category added successfully"
    category = body["category"]
    assert category["name"] == "Shoes"
    assert category["imageUrl"].startswith("https://")

    blob = storage.blobs[category["imageUrl"]]
    assert blob["data"] == b"\x89PNG fake bytes"
    assert blob["content_type"] == "image/png"
    assert blob["name"].endswith(".png")
    assert category_repo.docs[category["id"]]["imageUrl"] == category["imageUrl"]


def test_create_category_upload_failure_persists_nothing(client, category_repo, storage, image):
    storage.fail = True

    resp = client.post("/addCategories", data={"name": "Shoes"}, files=image)

    assert resp.status_code == 502
    assert resp.json()["error"] == "upload_failed"
    assert category_repo.docs == {}


def test_list_categories(client, make_category):
    make_category("Shoes")
    make_category("Hats")

    resp = client.get("/addcategories")

    assert resp.status_code == 200
    assert sorted(c["name"] for c in resp.json()) == ["Hats", "Shoes"]


def test_get_category_by_id(client, make_category):
    created = make_category("Shoes")

    resp = client.get(f"/addcategories/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == created


def test_get_missing_category_returns_404(client):
    resp = client.get(f"/addcategories/{ObjectId()}")

    assert resp.status_code == 404
    assert resp.json() == {"message": "Category not found", "error": "not_found"}


def test_update_category_without_file_keeps_image(client, make_category, storage):
    created = make_category("Shoes")

    resp = client.put(f"/updateCategory/{created['id']}", data={"name": "Boots"})

    assert resp.status_code == 200
    assert resp.json() == {
        "message": "Category updated successfully",
        "updatedCategory": {"name": "Boots"},
    }
    stored = client.get(f"/addcategories/{created['id']}").json()
    assert stored["name"] == "Boots"
    assert stored["imageUrl"] == created["imageUrl"]
    assert len(storage.blobs) == 1


def test_update_category_with_file_replaces_image(client, make_category, storage):
    created = make_category("Shoes")

    resp = client.put(
        f"/updateCategory/{created['id']}",
        data={"name": "Boots"},
        files={"image": ("new.jpg", b"jpeg", "image/jpeg")},
    )

    assert resp.status_code == 200
    payload = resp.json()["updatedCategory"]
    assert payload["name"] == "Boots"
    assert payload["imageUrl"] != created["imageUrl"]
    # the previous blob is left behind
    assert created["imageUrl"] in storage.blobs
    assert payload["imageUrl"] in storage.blobs


def test_update_missing_category_returns_404_without_upload(client, storage, image):
    resp = client.put(f"/updateCategory/{ObjectId()}", data={"name": "Boots"}, files=image)

    assert resp.status_code == 404
    assert storage.blobs == {}


def test_delete_category(client, make_category, category_repo):
    created = make_category("Shoes")

    resp = client.delete(f"/deleteCategory/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == {"message": "Category removed successfully"}
    assert category_repo.docs == {}

    again = client.delete(f"/deleteCategory/{created['id']}")
    assert again.status_code == 404
