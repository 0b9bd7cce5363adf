import unittest

from fastapi.testclient import TestClient

from inventory_api.config import Settings
from inventory_api.core.rate_limit import RATE_LIMIT_MESSAGE
from inventory_api.main import create_app


def _product(**overrides):
    payload = {
        "name": "Wireless Mouse",
        "sku": "elec-001",
        "category": "Electronics",
        "price": 150,
        "cost": 100,
        "stock": 5,
        "minStock": 5,
        "unit": "pcs",
    }
    payload.update(overrides)
    return payload


class ApiTest(unittest.TestCase):
    def setUp(self):
        settings = Settings(
            DATABASE_URL="sqlite://",
            JWT_SECRET="api-test-secret",
            PASSWORD_PBKDF2_ROUNDS=1_000,
            LOG_REQUESTS=False,
            _env_file=None,
        )
        self.client = TestClient(create_app(settings))
        self.client.__enter__()
        self.admin = self._register("Admin User", "admin@example.com", "admin")
        self.staff = self._register("Staff User", "staff@example.com", "staff")
        self.viewer = self._register("Viewer User", "viewer@example.com", None)

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def _register(self, name, email, role):
        body = {"name": name, "email": email, "password": "secret123"}
        if role:
            body["role"] = role
        response = self.client.post("/api/auth/register", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        return {"Authorization": f"Bearer {response.json()['token']}"}

    def _create(self, headers=None, **overrides):
        response = self.client.post("/api/products", json=_product(**overrides), headers=headers or self.staff)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["data"]

    def test_health_and_root(self):
        self.assertEqual(self.client.get("/api/health").json()["database"], "connected")
        self.assertTrue(self.client.get("/").json()["success"])

    def test_requires_authentication(self):
        response = self.client.get("/api/products")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["kind"], "AuthenticationFailed")

        response = self.client.get("/api/products", headers={"Authorization": "Bearer junk"})
        self.assertEqual(response.status_code, 401)

    def test_login_and_me(self):
        response = self.client.post(
            "/api/auth/login", json={"email": "STAFF@example.com", "password": "secret123"}
        )
        self.assertEqual(response.status_code, 200)
        headers = {"Authorization": f"Bearer {response.json()['token']}"}
        me = self.client.get("/api/auth/me", headers=headers).json()["data"]
        self.assertEqual(me["email"], "staff@example.com")
        self.assertEqual(me["role"], "staff")
        self.assertIsNotNone(me["lastLoginAt"])

        bad = self.client.post("/api/auth/login", json={"email": "staff@example.com", "password": "nope"})
        self.assertEqual(bad.status_code, 401)

    def test_viewer_is_the_default_role(self):
        me = self.client.get("/api/auth/me", headers=self.viewer).json()["data"]
        self.assertEqual(me["role"], "viewer")

    def test_duplicate_email(self):
        response = self.client.post(
            "/api/auth/register",
            json={"name": "Again", "email": "admin@example.com", "password": "secret123"},
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["kind"], "ConstraintViolation")

    def test_profile_and_password_change(self):
        response = self.client.put("/api/auth/profile", json={"name": "Renamed"}, headers=self.staff)
        self.assertEqual(response.json()["data"]["name"], "Renamed")

        response = self.client.put(
            "/api/auth/change-password",
            json={"currentPassword": "wrong", "newPassword": "another1"},
            headers=self.staff,
        )
        self.assertEqual(response.status_code, 401)

        response = self.client.put(
            "/api/auth/change-password",
            json={"currentPassword": "secret123", "newPassword": "another1"},
            headers=self.staff,
        )
        self.assertEqual(response.status_code, 200)
        login = self.client.post("/api/auth/login", json={"email": "staff@example.com", "password": "another1"})
        self.assertEqual(login.status_code, 200)

    def test_create_and_get_product(self):
        created = self._create(supplier={"name": "Logi", "contact": "sales@logi.test"})
        self.assertEqual(created["sku"], "ELEC-001")
        self.assertEqual(created["profitMargin"], 50)
        self.assertTrue(created["isLowStock"])
        self.assertEqual(created["createdBy"]["name"], "Staff User")
        self.assertEqual(created["supplier"], {"name": "Logi", "contact": "sales@logi.test"})

        response = self.client.get(f"/api/products/{created['id']}", headers=self.viewer)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"]["createdBy"]["role"], "staff")

    def test_missing_product_is_404(self):
        response = self.client.get("/api/products/999", headers=self.viewer)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"success": False, "kind": "NotFound", "message": "Product not found"})

    def test_validation_failures_are_400(self):
        response = self.client.post("/api/products", json=_product(category="Toys"), headers=self.staff)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["kind"], "ValidationError")

        response = self.client.post("/api/products", json=_product(stock=-1), headers=self.staff)
        self.assertEqual(response.status_code, 400)

    def test_role_gates(self):
        response = self.client.post("/api/products", json=_product(), headers=self.viewer)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["kind"], "PermissionDenied")

        created = self._create()
        response = self.client.delete(f"/api/products/{created['id']}", headers=self.staff)
        self.assertEqual(response.status_code, 403)
        response = self.client.delete(f"/api/products/{created['id']}", headers=self.admin)
        self.assertEqual(response.status_code, 200)
        response = self.client.get(f"/api/products/{created['id']}", headers=self.admin)
        self.assertEqual(response.status_code, 404)

    def test_duplicate_sku(self):
        self._create()
        response = self.client.post("/api/products", json=_product(sku="ELEC-001"), headers=self.admin)
        self.assertEqual(response.status_code, 409)

    def test_update_product(self):
        created = self._create()
        response = self.client.put(
            f"/api/products/{created['id']}",
            json=_product(name="Gaming Mouse", price=200),
            headers=self.admin,
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()["data"]
        self.assertEqual(data["name"], "Gaming Mouse")
        self.assertEqual(data["updatedBy"]["name"], "Admin User")

    def test_listing_envelope(self):
        for index in range(3):
            self._create(sku=f"SKU-{index}", name=f"Product {index}", price=10 * (index + 1))
        response = self.client.get(
            "/api/products",
            params={"sort": "-price", "limit": "2", "minPrice": "oops"},
            headers=self.viewer,
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["count"], 2)
        self.assertEqual(
            body["stats"],
            {"totalItems": 3, "totalPages": 2, "currentPage": 1, "itemsPerPage": 2},
        )
        self.assertEqual([item["price"] for item in body["data"]], [30, 20])

    def test_stock_endpoint(self):
        created = self._create()
        url = f"/api/products/{created['id']}/stock"

        response = self.client.patch(url, json={"quantity": 3, "operation": "add"}, headers=self.staff)
        self.assertEqual(response.json()["data"]["stock"], 8)

        response = self.client.patch(url, json={"quantity": 9, "operation": "subtract"}, headers=self.staff)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Insufficient stock")

        response = self.client.patch(url, json={"quantity": 1, "operation": "multiply"}, headers=self.staff)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["kind"], "InvalidOperation")

        response = self.client.patch(url, json={"quantity": 0, "operation": "add"}, headers=self.staff)
        self.assertEqual(response.json()["kind"], "ValidationError")

        response = self.client.patch(url, json={"quantity": 1, "operation": "add"}, headers=self.viewer)
        self.assertEqual(response.status_code, 403)

    def test_special_listings_and_dashboard(self):
        self._create(sku="LOW-1", stock=2, minStock=5)
        self._create(sku="OK-1", stock=50, minStock=5, category="Hardware", name="Hammer")
        self._create(sku="OFF-1", stock=0, isActive=False)

        low = self.client.get("/api/products/low-stock", headers=self.viewer).json()
        self.assertEqual([item["sku"] for item in low["data"]], ["LOW-1"])

        hardware = self.client.get("/api/products/category/Hardware", headers=self.viewer).json()
        self.assertEqual(hardware["count"], 1)

        stats = self.client.get("/api/products/stats/dashboard", headers=self.viewer).json()["data"]
        self.assertEqual(stats["totalProducts"], 2)
        self.assertEqual(stats["lowStockCount"], 1)
        self.assertEqual(stats["totalStockValue"], 2 * 100 + 50 * 100)
        self.assertEqual(stats["recentProducts"], 2)
        self.assertEqual(
            stats["productsByCategory"],
            [
                {"category": "Electronics", "count": 1, "totalStock": 2},
                {"category": "Hardware", "count": 1, "totalStock": 50},
            ],
        )

    def test_unknown_route_uses_failure_envelope(self):
        response = self.client.get("/api/does-not-exist", headers=self.viewer)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(),
            {"success": False, "kind": "NotFound", "message": "Not Found - /api/does-not-exist"},
        )

        response = self.client.delete("/api/products", headers=self.admin)
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.json()["kind"], "MethodNotAllowed")
        self.assertFalse(response.json()["success"])

    def test_huge_numbers_never_escape_as_server_errors(self):
        response = self.client.get(
            "/api/products", params={"page": "99999999999999999999"}, headers=self.viewer
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["count"], 0)

        response = self.client.get("/api/products/99999999999999999999", headers=self.viewer)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["kind"], "ValidationError")

        created = self._create()
        response = self.client.patch(
            f"/api/products/{created['id']}/stock",
            json={"quantity": 10**20, "operation": "add"},
            headers=self.staff,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["kind"], "ValidationError")

        response = self.client.post(
            "/api/products", json=_product(sku="BIG-1", stock=10**20), headers=self.staff
        )
        self.assertEqual(response.status_code, 400)


class RateLimitTest(unittest.TestCase):
    def setUp(self):
        settings = Settings(
            DATABASE_URL="sqlite://",
            JWT_SECRET="api-test-secret",
            PASSWORD_PBKDF2_ROUNDS=1_000,
            LOG_REQUESTS=False,
            RATE_LIMIT_MAX_REQUESTS=3,
            RATE_LIMIT_WINDOW_SECONDS=60,
            _env_file=None,
        )
        self.client = TestClient(create_app(settings))
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)

    def test_login_is_limited_per_client(self):
        credentials = {"email": "nobody@example.com", "password": "secret123"}
        for _ in range(3):
            self.assertEqual(self.client.post("/api/auth/login", json=credentials).status_code, 401)

        response = self.client.post("/api/auth/login", json=credentials)
        self.assertEqual(response.status_code, 429)
        self.assertEqual(
            response.json(),
            {"success": False, "kind": "RateLimitExceeded", "message": RATE_LIMIT_MESSAGE},
        )

    def test_register_is_limited(self):
        for index in range(3):
            body = {"name": f"User {index}", "email": f"user{index}@example.com", "password": "secret123"}
            self.assertEqual(self.client.post("/api/auth/register", json=body).status_code, 201)

        body = {"name": "One More", "email": "more@example.com", "password": "secret123"}
        self.assertEqual(self.client.post("/api/auth/register", json=body).status_code, 429)


if __name__ == "__main__":
    unittest.main()
