"""HTTP tests for the product endpoints"""
from app.models.product import Product, Review

PRODUCT_ID = "507f1f77bcf86cd799439021"


def make_products(count):
    return [Product(id=f"507f1f77bcf86cd7994390{i:02d}", name=f"Item {i}", price=10 + i) for i in range(count)]


class TestListProducts:

    def test_six_products_on_a_single_page(self, client, product_repo):
        product_repo.list_page.return_value = (make_products(6), 6)

        response = client.get("/api/products")

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 1
        assert body["pages"] == 1
        assert len(body["products"]) == 6
        assert body["products"][0]["_id"] == "507f1f77bcf86cd799439000"
        assert "countInStock" in body["products"][0]

    def test_keyword_and_page_number_forwarded(self, client, product_repo):
        product_repo.list_page.return_value = ([], 30)

        body = client.get("/api/products", params={"keyword": "chair", "pageNumber": 2}).json()

        assert body == {"products": [], "page": 2, "pages": 3}
        product_repo.list_page.assert_called_once_with("chair", 2, 12, "_id")

    def test_top_rated(self, client, product_repo):
        product_repo.list_page.return_value = ([], 0)

        response = client.get("/api/products/top-rated")

        assert response.status_code == 200
        assert product_repo.list_page.call_args.args[3] == "rating"

    def test_all_requires_admin(self, client, auth_headers, regular_user):
        response = client.get("/api/products/all", headers=auth_headers(regular_user))

        assert response.status_code == 403
        assert response.json() == {"message": "Not authorized as an admin"}

    def test_all_for_admin(self, client, product_repo, auth_headers, admin_user):
        product_repo.list_all.return_value = make_products(2)

        response = client.get("/api/products/all", headers=auth_headers(admin_user))

        assert response.status_code == 200
        assert len(response.json()) == 2


class TestGetProduct:

    def test_not_found(self, client, product_repo):
        product_repo.get_by_id.return_value = None

        response = client.get(f"/api/products/{PRODUCT_ID}")

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}

    def test_found(self, client, product_repo, sample_product):
        product_repo.get_by_id.return_value = sample_product

        body = client.get(f"/api/products/{PRODUCT_ID}").json()

        assert body["name"] == "Velvet Chair"
        assert body["numReviews"] == 0


class TestWriteProducts:

    def test_create_requires_token(self, client):
        response = client.post("/api/products", json={"name": "Lamp"})

        assert response.status_code == 401
        assert response.json() == {"message": "Not authorized, no token"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_admin_creates_product(self, client, product_repo, auth_headers, admin_user):
        product_repo.find_by_name.return_value = None

        response = client.post(
            "/api/products",
            json={"name": "Lamp", "price": 25, "countInStock": 4},
            headers=auth_headers(admin_user),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["user"] == admin_user.id
        assert body["countInStock"] == 4

    def test_duplicate_name(self, client, product_repo, auth_headers, admin_user, sample_product):
        product_repo.find_by_name.return_value = sample_product

        response = client.post("/api/products", json={"name": "Velvet Chair"}, headers=auth_headers(admin_user))

        assert response.status_code == 400
        assert response.json()["message"] == "Product name already exists"

    def test_negative_price_is_validation_error(self, client, auth_headers, admin_user):
        response = client.post("/api/products", json={"name": "Lamp", "price": -1}, headers=auth_headers(admin_user))

        assert response.status_code == 400
        assert response.json()["message"] == "Validation error"

    def test_delete(self, client, product_repo, auth_headers, admin_user, sample_product):
        product_repo.get_by_id.return_value = sample_product
        product_repo.delete.return_value = True

        response = client.delete(f"/api/products/{PRODUCT_ID}", headers=auth_headers(admin_user))

        assert response.json() == {"message": "Product deleted"}


class TestReviews:

    def test_review_added(self, client, product_repo, auth_headers, regular_user, sample_product):
        product_repo.get_by_id.return_value = sample_product

        response = client.post(
            f"/api/products/{PRODUCT_ID}/review",
            json={"rating": 4, "comment": "Comfortable"},
            headers=auth_headers(regular_user),
        )

        assert response.status_code == 201
        assert response.json() == {"message": "Review added"}
        saved = product_repo.save.call_args.args[0]
        assert saved.num_reviews == 1
        assert saved.rating == 4

    def test_duplicate_review(self, client, product_repo, auth_headers, regular_user, sample_product):
        sample_product.add_review(Review(name="Alice", rating=5, user=regular_user.id))
        product_repo.get_by_id.return_value = sample_product

        response = client.post(
            f"/api/products/{PRODUCT_ID}/review",
            json={"rating": 1},
            headers=auth_headers(regular_user),
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Product already reviewed"}
        product_repo.save.assert_not_called()
