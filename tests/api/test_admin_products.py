"""Tests for admin product endpoints."""

from collections.abc import Callable

from fastapi.testclient import TestClient

PRODUCTS_URL = "/admin/api/products"


class TestCreateProduct:
    """Tests for POST /admin/api/products."""

    def test_create_then_get(
        self,
        admin_client: TestClient,
        make_category: Callable[..., str],
    ) -> None:
        """A created product reads back with derived fields."""
        category_id = make_category("Suéteres")

        response = admin_client.post(
            PRODUCTS_URL,
            json={
                "name": "Suéter Minimalista Negro",
                "description": "<p>Suéter de <b>algodón</b> premium.</p>",
                "price": "89.99",
                "compareAt": "109.99",
                "tags": ["Negro", "negro", " Algodón "],
                "categories": [category_id],
            },
        )
        assert response.status_code == 201
        product_id = response.json()["id"]

        response = admin_client.get(f"{PRODUCTS_URL}/{product_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["slug"] == "sueter-minimalista-negro"
        assert data["seoTitle"] == "Suéter Minimalista Negro"
        assert data["seoDesc"] == "Suéter de algodón premium."
        assert data["price"] == "89.99"
        assert data["compareAt"] == "109.99"
        assert data["status"] == "draft"
        assert data["stock"] == 0
        assert data["tags"] == ["negro", "algodón"]
        assert [c["slug"] for c in data["categories"]] == ["sueteres"]

    def test_minimal_create_defaults(self, admin_client: TestClient) -> None:
        """Name and a numeric price are enough; the rest is defaulted."""
        response = admin_client.post(PRODUCTS_URL, json={"name": "Test Hoodie", "price": 49.99})
        assert response.status_code == 201

        data = admin_client.get(f"{PRODUCTS_URL}/{response.json()['id']}").json()
        assert data["slug"] == "test-hoodie"
        assert data["status"] == "draft"
        assert data["stock"] == 0
        assert data["images"] == []
        assert data["price"] == "49.99"

    def test_duplicate_slug_conflicts(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """A second product with the same slug is rejected and not stored."""
        make_product("Hoodie Gris")

        response = admin_client.post(
            PRODUCTS_URL, json={"name": "Otro", "slug": "hoodie-gris", "price": "5"}
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "SLUG_EXISTS"

        listing = admin_client.get(PRODUCTS_URL).json()
        assert listing["total"] == 1

    def test_missing_price_is_validation_error(self, admin_client: TestClient) -> None:
        """Schema failures are 400 with the offending field."""
        response = admin_client.post(PRODUCTS_URL, json={"name": "Hoodie"})
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert "price" in [d["field"] for d in data["details"]]

    def test_negative_price_rejected(self, admin_client: TestClient) -> None:
        """Prices cannot be negative."""
        response = admin_client.post(PRODUCTS_URL, json={"name": "Hoodie", "price": "-1"})
        assert response.status_code == 400

    def test_extra_price_decimals_are_rounded(self, admin_client: TestClient) -> None:
        """Prices are stored and returned in cents."""
        response = admin_client.post(PRODUCTS_URL, json={"name": "Hoodie", "price": "49.999"})
        assert response.status_code == 201

        data = admin_client.get(f"{PRODUCTS_URL}/{response.json()['id']}").json()
        assert data["price"] == "50.00"

    def test_values_beyond_column_limits_rejected(self, admin_client: TestClient) -> None:
        """Oversized tags and stock are 400s, not store errors."""
        for payload in (
            {"name": "Hoodie", "price": "1", "tags": ["x" * 101]},
            {"name": "Hoodie", "price": "1", "stock": 2**31},
        ):
            response = admin_client.post(PRODUCTS_URL, json=payload)
            assert response.status_code == 400
            assert response.json()["error_code"] == "VALIDATION_ERROR"

        assert admin_client.get(PRODUCTS_URL).json()["total"] == 0

    def test_malformed_slug_rejected(self, admin_client: TestClient) -> None:
        """Explicit slugs must match the slug pattern."""
        response = admin_client.post(
            PRODUCTS_URL, json={"name": "Hoodie", "price": "1", "slug": "Hoodie Gris"}
        )
        assert response.status_code == 400

    def test_unknown_category_rejected(self, admin_client: TestClient) -> None:
        """Linking a category that does not exist is a 400."""
        response = admin_client.post(
            PRODUCTS_URL,
            json={"name": "Hoodie", "price": "1", "categories": ["missing"]},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"][0]["field"] == "categories"


class TestListProducts:
    """Tests for GET /admin/api/products."""

    def test_no_match_returns_empty_first_page(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """A search with no hits is an empty page, not an error."""
        make_product("Hoodie")

        response = admin_client.get(PRODUCTS_URL, params={"q": "nonexistent-zzz"})
        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total"] == 0
        assert data["page"] == 1
        assert data["pages"] == 1

    def test_out_of_range_params_are_normalized(self, admin_client: TestClient) -> None:
        """Bad paging and sort values fall back instead of failing."""
        response = admin_client.get(
            PRODUCTS_URL,
            params={"page": "-2", "perPage": "1000", "sort": "secret", "dir": "up"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["page"] == 1
        assert data["perPage"] == 100

    def test_huge_page_is_empty(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """A page far past the end is an empty page, not a store error."""
        make_product("Hoodie")

        response = admin_client.get(PRODUCTS_URL, params={"page": "1e20"})
        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total"] == 1

    def test_search_status_and_sort(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """Search and status filter combine; sort orders the page."""
        make_product("Hoodie Gris", price="30", status="published")
        make_product("Hoodie Negro", price="20", status="published")
        make_product("Hoodie Borrador", price="10")
        make_product("Gorro", price="5", status="published")

        response = admin_client.get(
            PRODUCTS_URL,
            params={"q": "hoodie", "status": "published", "sort": "price", "dir": "asc"},
        )
        data = response.json()
        assert [p["name"] for p in data["items"]] == ["Hoodie Negro", "Hoodie Gris"]
        assert data["total"] == 2

    def test_pages_cover_total(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """Total and pages describe the whole match set."""
        for i in range(3):
            make_product(f"Hoodie {i}")

        data = admin_client.get(
            PRODUCTS_URL, params={"perPage": "2", "page": "2", "sort": "name", "dir": "asc"}
        ).json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert [p["name"] for p in data["items"]] == ["Hoodie 2"]

    def test_list_row_shape(
        self,
        admin_client: TestClient,
        make_category: Callable[..., str],
        make_product: Callable[..., str],
    ) -> None:
        """List rows carry the admin projection with category names."""
        category_id = make_category("Hoodies")
        make_product("Hoodie", categories=[category_id], stock=4, images=["/hoodie.png"])

        item = admin_client.get(PRODUCTS_URL).json()["items"][0]
        assert item["slug"] == "hoodie"
        assert item["stock"] == 4
        assert item["images"] == ["/hoodie.png"]
        assert item["categories"][0]["name"] == "Hoodies"
        assert "updatedAt" in item


class TestUpdateProduct:
    """Tests for PUT /admin/api/products/{id}."""

    def test_partial_update(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """Only fields in the body change."""
        product_id = make_product("Hoodie", description="Warm", stock=5)

        response = admin_client.put(f"{PRODUCTS_URL}/{product_id}", json={"price": "15.50"})
        assert response.status_code == 200
        data = response.json()
        assert data["price"] == "15.50"
        assert data["description"] == "Warm"
        assert data["stock"] == 5
        assert data["name"] == "Hoodie"

    def test_clear_compare_at(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """Null clears the compare-at price."""
        product_id = make_product("Hoodie", compareAt="20.00")

        response = admin_client.put(f"{PRODUCTS_URL}/{product_id}", json={"compareAt": None})
        assert response.status_code == 200
        assert response.json()["compareAt"] is None

    def test_null_name_rejected(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """Required fields cannot be nulled."""
        product_id = make_product("Hoodie")

        response = admin_client.put(f"{PRODUCTS_URL}/{product_id}", json={"name": None})
        assert response.status_code == 400

    def test_slug_conflict(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """Taking another product's slug is a 409."""
        make_product("Hoodie Gris")
        product_id = make_product("Hoodie Negro")

        response = admin_client.put(
            f"{PRODUCTS_URL}/{product_id}", json={"slug": "hoodie-gris"}
        )
        assert response.status_code == 409

    def test_unknown_product(self, admin_client: TestClient) -> None:
        """Updating an unknown id is a 404."""
        response = admin_client.put(f"{PRODUCTS_URL}/missing", json={"stock": 1})
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"


class TestDeleteProduct:
    """Tests for DELETE /admin/api/products/{id}."""

    def test_delete(
        self,
        admin_client: TestClient,
        make_product: Callable[..., str],
    ) -> None:
        """A deleted product is gone."""
        product_id = make_product("Hoodie", tags=["gris"])

        response = admin_client.delete(f"{PRODUCTS_URL}/{product_id}")
        assert response.status_code == 200
        assert response.json() == {"ok": True}

        assert admin_client.get(f"{PRODUCTS_URL}/{product_id}").status_code == 404

    def test_delete_unknown(self, admin_client: TestClient) -> None:
        """Deleting an unknown id is a 404."""
        assert admin_client.delete(f"{PRODUCTS_URL}/missing").status_code == 404
