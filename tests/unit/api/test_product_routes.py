"""HTTP tests for the product router using FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from src.catalog.core.services import InMemoryImageStore

BASE = "/api/product"


def _form(**overrides) -> dict[str, str]:
    data = {
        "name": "Linen Shirt",
        "description": "Breathable summer shirt",
        "price": "49.9",
        "quantity": "7",
        "category": "apparel",
    }
    data.update(overrides)
    return {key: value for key, value in data.items() if value is not None}


def _create(client: TestClient, files=None, **overrides) -> dict:
    response = client.post(f"{BASE}/create", data=_form(**overrides), files=files)
    assert response.status_code == 201, response.text
    return response.json()["product"]


def _image(name: str = "photo.jpg"):
    return ("images", (name, b"\xff\xd8fake", "image/jpeg"))


class TestCreateRoute:
    def test_create_returns_201_envelope(self, app_client: TestClient):
        response = app_client.post(f"{BASE}/create", data=_form())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Product created successfully"
        product = body["product"]
        assert product["slug"] == "linen-shirt"
        assert product["price"] == 49.9
        assert product["quantity"] == 7
        assert product["isAvailable"] is True
        assert product["images"] == []
        assert response.headers["X-Request-ID"]

    def test_create_with_images(self, app_client: TestClient, image_store: InMemoryImageStore):
        product = _create(app_client, files=[_image("a.jpg"), _image("b.jpg")])

        assert len(product["images"]) == 2
        assert set(product["images"][0]) == {"url", "imagePublicId"}
        assert image_store.upload_calls == ["a.jpg", "b.jpg"]

    def test_create_with_failed_upload_keeps_marker(
        self, app_client: TestClient, image_store: InMemoryImageStore
    ):
        image_store.fail_on = {"bad.jpg"}

        product = _create(app_client, files=[_image("ok.jpg"), _image("bad.jpg")])

        assert product["images"][1] == {"error": "Failed to upload image"}

    def test_create_missing_field_returns_400(
        self, app_client: TestClient, image_store: InMemoryImageStore
    ):
        response = app_client.post(
            f"{BASE}/create", data=_form(quantity=None), files=[_image()]
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "All fields are required"}
        assert image_store.upload_calls == []

    def test_create_rejects_more_than_five_images(self, app_client: TestClient):
        files = [_image(f"{i}.jpg") for i in range(6)]

        response = app_client.post(f"{BASE}/create", data=_form(), files=files)

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_create_ignores_empty_file_field(
        self, app_client: TestClient, image_store: InMemoryImageStore
    ):
        product = _create(app_client, files=[("images", ("", b"", "application/octet-stream"))])

        assert product["images"] == []
        assert image_store.upload_calls == []

    def test_create_keeps_real_files_next_to_empty_field(
        self, app_client: TestClient, image_store: InMemoryImageStore
    ):
        files = [_image("real.jpg"), ("images", ("", b"", "application/octet-stream"))]

        product = _create(app_client, files=files)

        assert len(product["images"]) == 1
        assert image_store.upload_calls == ["real.jpg"]

    def test_create_with_non_numeric_price_returns_400(self, app_client: TestClient):
        response = app_client.post(f"{BASE}/create", data=_form(price="cheap"))

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestReadRoutes:
    def test_get_one_product(self, app_client: TestClient):
        created = _create(app_client)

        response = app_client.get(f"{BASE}/product/{created['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Product fetched successfully"
        assert body["product"]["id"] == created["id"]

    def test_get_one_product_not_found(self, app_client: TestClient):
        response = app_client.get(f"{BASE}/product/unknown")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Product not found"}

    def test_get_by_slug(self, app_client: TestClient):
        created = _create(app_client, name="Wool Scarf")

        response = app_client.get(f"{BASE}/slug/wool-scarf")

        assert response.status_code == 200
        assert response.json()["product"]["id"] == created["id"]

    def test_get_by_slug_not_found(self, app_client: TestClient):
        assert app_client.get(f"{BASE}/slug/nothing-here").status_code == 404

    def test_all_products_pagination(self, app_client: TestClient):
        for i in range(25):
            _create(app_client, name=f"Shirt {i}")

        response = app_client.get(f"{BASE}/all", params={"page": 2, "limit": 10})

        body = response.json()
        assert response.status_code == 200
        assert body["success"] is True
        assert body["currentPage"] == 2
        assert body["totalPages"] == 3
        assert body["productCount"] == 25
        assert len(body["products"]) == 10

    @pytest.mark.parametrize("page, limit", [("abc", "xyz"), ("0", "-5"), (None, None)])
    def test_all_products_bad_pagination_falls_back_to_defaults(
        self, app_client: TestClient, page, limit
    ):
        _create(app_client)
        params = {key: value for key, value in {"page": page, "limit": limit}.items() if value}

        body = app_client.get(f"{BASE}/all", params=params).json()

        assert body["currentPage"] == 1
        assert body["totalPages"] == 1

    def test_oversized_page_falls_back_to_default(self, app_client: TestClient):
        _create(app_client)

        response = app_client.get(f"{BASE}/all", params={"page": "9" * 25, "limit": "9" * 25})

        assert response.status_code == 200
        assert response.json()["currentPage"] == 1
        assert len(response.json()["products"]) == 1

    def test_related_products(self, app_client: TestClient):
        anchor = _create(app_client, name="Shirt", description="Cotton")
        _create(app_client, name="Shirt Hanger", description="Wooden")
        _create(app_client, name="Hat", description="Straw")

        response = app_client.get(f"{BASE}/related/{anchor['id']}")

        body = response.json()
        assert response.status_code == 200
        names = [product["name"] for product in body["relatedProducts"]]
        assert names == ["Shirt Hanger"]

    def test_related_products_not_found(self, app_client: TestClient):
        assert app_client.get(f"{BASE}/related/unknown").status_code == 404


class TestSearchRoute:
    def test_search_requires_term(self, app_client: TestClient):
        response = app_client.post(f"{BASE}/search")

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Search term is required"}

    def test_search_empty_term(self, app_client: TestClient):
        assert app_client.post(f"{BASE}/search", params={"term": ""}).status_code == 400

    def test_search_no_match(self, app_client: TestClient):
        _create(app_client)

        body = app_client.post(f"{BASE}/search", params={"term": "kayak"}).json()

        assert body["success"] is True
        assert body["products"] == []
        assert body["productsFound"] == 0
        assert body["totalPages"] == 0

    def test_search_match(self, app_client: TestClient):
        _create(app_client, name="Linen Trousers")
        _create(app_client, name="Denim Jacket", description="Heavy cotton")

        body = app_client.post(f"{BASE}/search", params={"term": "LINEN"}).json()

        assert body["productsFound"] == 1
        assert body["products"][0]["name"] == "Linen Trousers"
        assert body["currentPage"] == 1

    def test_search_accented_term_ignores_case(self, app_client: TestClient):
        _create(app_client, name="Crème Brûlée Dish", description="Porcelain ramekin")
        _create(app_client, name="Cream Jug", description="Stoneware")

        body = app_client.post(f"{BASE}/search", params={"term": "CRÈME"}).json()

        assert body["productsFound"] == 1
        assert body["products"][0]["name"] == "Crème Brûlée Dish"


class TestUpdateRoute:
    def test_update_fields(self, app_client: TestClient):
        created = _create(app_client)

        response = app_client.put(
            f"{BASE}/update/{created['id']}", data={"name": "Silk Shirt", "price": "80"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Product updated successfully"
        assert body["product"]["name"] == "Silk Shirt"
        assert body["product"]["slug"] == "silk-shirt"
        assert body["product"]["price"] == 80
        assert body["product"]["description"] == created["description"]

    def test_update_replaces_images(self, app_client: TestClient, image_store: InMemoryImageStore):
        created = _create(app_client, files=[_image("old.jpg")])
        old_id = created["images"][0]["imagePublicId"]

        response = app_client.put(f"{BASE}/update/{created['id']}", files=[_image("new.jpg")])

        images = response.json()["product"]["images"]
        assert len(images) == 1
        assert images[0]["imagePublicId"] != old_id
        assert image_store.destroy_calls == [old_id]

    def test_update_without_images_keeps_list(
        self, app_client: TestClient, image_store: InMemoryImageStore
    ):
        created = _create(app_client, files=[_image("keep.jpg")])

        response = app_client.put(f"{BASE}/update/{created['id']}", data={"quantity": "1"})

        assert response.json()["product"]["images"] == created["images"]
        assert image_store.destroy_calls == [created["images"][0]["imagePublicId"]]

    def test_update_with_empty_file_field_keeps_images(
        self, app_client: TestClient, image_store: InMemoryImageStore
    ):
        created = _create(app_client, files=[_image("keep.jpg")])

        response = app_client.put(
            f"{BASE}/update/{created['id']}",
            data={"name": "Renamed"},
            files=[("images", ("", b"", "application/octet-stream"))],
        )

        assert response.status_code == 200
        assert response.json()["product"]["images"] == created["images"]
        assert image_store.upload_calls == ["keep.jpg"]

    def test_update_not_found(self, app_client: TestClient):
        response = app_client.put(f"{BASE}/update/unknown", data={"name": "x"})

        assert response.status_code == 404
        assert response.json()["success"] is False


class TestDeleteRoute:
    def test_delete_existing(self, app_client: TestClient):
        created = _create(app_client)

        response = app_client.delete(f"{BASE}/delete/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Product deleted successfully",
            "result": {"deletedCount": 1},
        }
        assert app_client.get(f"{BASE}/product/{created['id']}").status_code == 404

    def test_delete_nonexistent_still_reports_success(self, app_client: TestClient):
        response = app_client.delete(f"{BASE}/delete/unknown")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["result"] == {"deletedCount": 0}


class TestApplicationRoutes:
    def test_root(self, app_client: TestClient):
        assert app_client.get("/").status_code == 200

    def test_health(self, app_client: TestClient):
        assert app_client.get("/health").json() == {"status": "healthy", "service": "catalog"}

    def test_readiness(self, app_client: TestClient):
        body = app_client.get("/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"]["database"]["status"] == "healthy"
        assert body["checks"]["images"]["type"] == "in-memory"

    def test_unknown_route_uses_envelope(self, app_client: TestClient):
        response = app_client.get("/api/product/nowhere")

        assert response.status_code == 404
        assert response.json()["success"] is False
