import os
import unittest

os.environ["USE_IN_MEMORY_BACKENDS"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-key"

from fastapi.testclient import TestClient

from storefront.app import create_app
from storefront.config import get_settings
from storefront.dependencies import (
    get_auth_provider,
    get_db_client,
    get_storage_client,
    reset_dependencies,
)
from storefront.seed import load_demo_catalog

CLIENT = {"X-Client-Id": "browser-1"}


class StorefrontApiTests(unittest.TestCase):
    def setUp(self):
        get_settings.cache_clear()
        reset_dependencies()
        self.client = TestClient(create_app())
        self.db = get_db_client()
        load_demo_catalog(self.db)

    def sign_up(self, email="buyer@example.com"):
        response = self.client.post(
            "/api/auth/signup",
            json={"name": "Buyer", "email": email, "password": "secret1"},
        )
        self.assertEqual(response.status_code, 201)
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    def admin_headers(self):
        get_auth_provider().admin_create_user(
            "admin@example.com", "admin123", user_metadata={"role": "admin"}
        )
        response = self.client.post(
            "/api/auth/signin",
            json={"email": "admin@example.com", "password": "admin123"},
        )
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    def test_catalog_endpoints(self):
        categories = self.client.get("/api/categories").json()["categories"]
        self.assertEqual(len(categories), 8)
        self.assertIn("productCount", categories[0])

        featured = self.client.get("/api/products/featured").json()
        self.assertEqual(featured["total"], 6)

        product = self.client.get("/api/products/4").json()["product"]
        self.assertTrue(product["isNew"])
        self.assertEqual(product["category"]["slug"], "electronics")

        self.assertEqual(self.client.get("/api/products/nope").status_code, 404)
        self.assertEqual(
            self.client.get("/api/categories/nope/products").status_code, 404
        )

    def test_search_query_params(self):
        response = self.client.get(
            "/api/search",
            params={"category": "electronics", "sortBy": "price-low", "maxPrice": 300000},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([p["id"] for p in response.json()["products"]], ["1", "4"])

        response = self.client.get("/api/search", params={"condition": "new,refurbished"})
        self.assertEqual(response.json()["total"], 0)

        response = self.client.get("/api/search", params={"sortBy": "cheapest"})
        self.assertEqual(response.status_code, 422)

    def test_cart_flow_is_scoped_to_client(self):
        response = self.client.post(
            "/api/cart", json={"product_id": "1", "quantity": 2}, headers=CLIENT
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["item_count"], 2)

        self.client.post("/api/cart", json={"product_id": "5"}, headers=CLIENT)
        cart = self.client.get("/api/cart", headers=CLIENT).json()
        self.assertEqual(cart["total"], 2 * 185000 + 95000)

        other = self.client.get("/api/cart", headers={"X-Client-Id": "browser-2"})
        self.assertEqual(other.json()["items"], [])

        cart = self.client.patch(
            "/api/cart/1", json={"quantity": 0}, headers=CLIENT
        ).json()
        self.assertEqual([i["product"]["id"] for i in cart["items"]], ["5"])

        cart = self.client.delete("/api/cart", headers=CLIENT).json()
        self.assertEqual(cart["item_count"], 0)

    def test_cart_rejects_unknown_product(self):
        response = self.client.post(
            "/api/cart", json={"product_id": "missing"}, headers=CLIENT
        )
        self.assertEqual(response.status_code, 404)

    def test_cookie_identifies_browser_without_header(self):
        self.client.post("/api/watchlist", json={"product_id": "2"})
        self.assertIn(get_settings().client_cookie_name, self.client.cookies)
        watchlist = self.client.get("/api/watchlist").json()
        self.assertEqual(watchlist["count"], 1)

    def test_watchlist_flow(self):
        self.client.post("/api/watchlist", json={"product_id": "2"}, headers=CLIENT)
        self.client.post("/api/watchlist", json={"product_id": "2"}, headers=CLIENT)
        status = self.client.get("/api/watchlist/2", headers=CLIENT).json()
        self.assertTrue(status["in_watchlist"])

        watchlist = self.client.delete("/api/watchlist/2", headers=CLIENT).json()
        self.assertEqual(watchlist["count"], 0)

    def test_auth_flow(self):
        response = self.client.post(
            "/api/auth/signup",
            json={"name": "B", "email": "b@example.com", "password": "secret1"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["detail"], "Name must be at least 2 characters long"
        )

        headers = self.sign_up()
        me = self.client.get("/api/auth/me", headers=headers).json()
        self.assertEqual(me["user"]["email"], "buyer@example.com")
        self.assertEqual(me["user"]["role"], "user")
        self.assertIsNotNone(self.db.get_user_profile(me["user"]["id"]))

        self.client.post("/api/auth/signout", headers=headers)
        self.assertIsNone(self.client.get("/api/auth/me", headers=headers).json()["user"])

        response = self.client.post(
            "/api/auth/signin",
            json={"email": "buyer@example.com", "password": "nope-nope"},
        )
        self.assertEqual(response.status_code, 400)

    def test_checkout_creates_order_and_clears_cart(self):
        headers = {**self.sign_up(), **CLIENT}
        self.client.post("/api/cart", json={"product_id": "1", "quantity": 2}, headers=headers)

        details = {
            "name": "Buyer",
            "email": "buyer@example.com",
            "mobile": "0771234567",
            "address": "1 Main St",
            "city": "Colombo",
        }
        response = self.client.post("/api/checkout", json=details, headers=headers)
        self.assertEqual(response.status_code, 201)
        order = response.json()["order"]
        self.assertRegex(order["order_number"], r"^ORD-\d{8}-[0-9A-F]{6}$")
        self.assertEqual(order["status"], "pending")
        self.assertEqual(order["payment_status"], "pending")
        self.assertEqual(order["total_amount"], 370000)
        self.assertEqual(order["items"][0]["subtotal"], 370000)

        cart = self.client.get("/api/cart", headers=headers).json()
        self.assertEqual(cart["items"], [])

        orders = self.client.get("/api/account/orders", headers=headers).json()["orders"]
        self.assertEqual(len(orders), 1)

        response = self.client.post("/api/checkout", json=details, headers=headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Cart is empty")

    def test_checkout_requires_sign_in_and_fields(self):
        response = self.client.post("/api/checkout", json={}, headers=CLIENT)
        self.assertEqual(response.status_code, 401)

        headers = {**self.sign_up(), **CLIENT}
        self.client.post("/api/cart", json={"product_id": "1"}, headers=headers)
        response = self.client.post("/api/checkout", json={"name": "Buyer"}, headers=headers)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Please fill in all required fields")

    def test_admin_routes_require_admin(self):
        self.assertEqual(self.client.get("/api/admin/users").status_code, 401)
        response = self.client.get("/api/admin/users", headers=self.sign_up())
        self.assertEqual(response.status_code, 403)

    def test_admin_user_management(self):
        buyer = self.sign_up()
        admin = self.admin_headers()
        users = self.client.get("/api/admin/users", params={"q": "buyer"}, headers=admin).json()["users"]
        self.assertEqual(len(users), 1)
        user_id = users[0]["id"]

        toggled = self.client.patch(
            f"/api/admin/users/{user_id}/role", json={}, headers=admin
        ).json()["user"]
        self.assertEqual(toggled["role"], "admin")
        me = self.client.get("/api/auth/me", headers=buyer).json()["user"]
        self.assertEqual(me["role"], "admin")

        details = self.client.get(f"/api/admin/users/{user_id}", headers=admin).json()["user"]
        self.assertEqual(details["order_count"], 0)
        self.assertEqual(self.client.get("/api/admin/users/nobody", headers=admin).status_code, 404)

    def test_role_change_needs_a_profile_before_touching_metadata(self):
        admin = self.admin_headers()
        provider = get_auth_provider()
        orphan = provider.admin_create_user(
            "orphan@example.com", "secret1", user_metadata={"role": "user"}
        )

        response = self.client.patch(
            f"/api/admin/users/{orphan.id}/role", json={"role": "admin"}, headers=admin
        )
        self.assertEqual(response.status_code, 404)
        stored = provider.admin_get_user_by_id(orphan.id)
        self.assertEqual(stored.user_metadata["role"], "user")

    def test_admin_product_and_category_crud(self):
        admin = self.admin_headers()
        response = self.client.post(
            "/api/admin/categories",
            json={"name": "Books", "slug": "books"},
            headers=admin,
        )
        self.assertEqual(response.status_code, 201)
        category_id = response.json()["category"]["id"]
        duplicate = self.client.post(
            "/api/admin/categories", json={"name": "Books", "slug": "books"}, headers=admin
        )
        self.assertEqual(duplicate.status_code, 409)

        payload = {
            "title": "Sinhala Novel Collection",
            "price": 3500,
            "category_id": category_id,
            "condition": "used",
            "location": "Galle",
        }
        created = self.client.post("/api/admin/products", json=payload, headers=admin)
        self.assertEqual(created.status_code, 201)
        product = created.json()["product"]
        self.assertEqual(product["category"]["slug"], "books")

        payload["price"] = 3000
        updated = self.client.put(
            f"/api/admin/products/{product['id']}", json=payload, headers=admin
        ).json()["product"]
        self.assertEqual(updated["price"], 3000)

        bad = self.client.post(
            "/api/admin/products", json={**payload, "category_id": "nope"}, headers=admin
        )
        self.assertEqual(bad.status_code, 400)

        deleted = self.client.delete(f"/api/admin/products/{product['id']}", headers=admin)
        self.assertEqual(deleted.json(), {"status": "ok"})
        self.assertEqual(
            self.client.delete(f"/api/admin/products/{product['id']}", headers=admin).status_code,
            404,
        )

    def test_admin_image_upload(self):
        admin = self.admin_headers()
        response = self.client.post(
            "/api/admin/uploads",
            files={"file": ("photo.PNG", b"\x89PNG data", "image/png")},
            headers=admin,
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertTrue(body["path"].startswith("products/"))
        self.assertTrue(body["path"].endswith(".png"))
        self.assertEqual(get_storage_client().get_bytes(body["path"]), b"\x89PNG data")

        signed = self.client.get(
            "/api/admin/uploads/sign-url", params={"path": body["path"]}, headers=admin
        )
        self.assertIn(body["path"], signed.json()["url"])

        response = self.client.post(
            "/api/admin/uploads",
            files={"file": ("notes.txt", b"hello", "text/plain")},
            headers=admin,
        )
        self.assertEqual(response.status_code, 400)

    def test_functions_require_service_key_or_admin(self):
        self.assertEqual(self.client.get("/functions/v1/get-users").status_code, 401)
        response = self.client.get("/functions/v1/get-users", headers=self.sign_up())
        self.assertEqual(response.status_code, 403)

    def test_create_users_then_get_users(self):
        service = {"Authorization": "Bearer service-key"}
        response = self.client.post("/functions/v1/create-users", headers=service)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()["results"]), 9)

        users = self.client.get("/functions/v1/get-users", headers=service).json()["users"]
        self.assertEqual(len(users), 9)

        response = self.client.get(
            "/functions/v1/get-users", params={"userId": "missing"}, headers=service
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "User not found"})

    def test_account_profile(self):
        buyer = self.sign_up()
        self.assertEqual(self.client.get("/api/account/profile").status_code, 401)

        body = self.client.get("/api/account/profile", headers=buyer).json()
        self.assertEqual(body["profile"]["name"], "Buyer")
        self.assertEqual(body["order_count"], 0)

        response = self.client.patch(
            "/api/account/profile",
            json={
                "name": "Buyer Perera",
                "email": "buyer@example.com",
                "mobile": "0771234567",
                "address": "1 Main St",
                "city": "Kandy",
                "postal_code": "20000",
            },
            headers=buyer,
        )
        self.assertEqual(response.status_code, 200)
        profile = response.json()["profile"]
        self.assertEqual(profile["city"], "Kandy")
        self.assertEqual(profile["postal_code"], "20000")
        self.assertTrue(profile["updated_at"])

        stored = self.db.get_user_profile(profile["id"])
        self.assertEqual(stored.name, "Buyer Perera")
        self.assertEqual(stored.created_at, profile["created_at"])


class SellerAndOrderManagementTests(unittest.TestCase):
    def setUp(self):
        get_settings.cache_clear()
        reset_dependencies()
        self.client = TestClient(create_app())
        self.db = get_db_client()
        load_demo_catalog(self.db)

    def register_seller(self, email="shop@example.com", **overrides):
        form = {
            "email": email,
            "password": "secret1",
            "confirm_password": "secret1",
            "business_name": "Lanka Gadgets",
            "business_email": "sales@lankagadgets.lk",
            "business_phone": "0112345678",
            "business_description": "Phones and accessories",
            "district": "Colombo",
        }
        form.update(overrides)
        return self.client.post("/api/seller/register", json=form)

    def seller_headers(self):
        response = self.register_seller()
        self.assertEqual(response.status_code, 201)
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    def admin_headers(self):
        get_auth_provider().admin_create_user(
            "admin@example.com", "admin123", user_metadata={"role": "admin"}
        )
        response = self.client.post(
            "/api/auth/signin",
            json={"email": "admin@example.com", "password": "admin123"},
        )
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    def list_product(self, seller):
        response = self.client.post(
            "/api/seller/products",
            json={
                "title": "Phone case",
                "price": 5000,
                "images": ["https://example.com/case.jpg", "  "],
                "category_id": "2",
                "condition": "new",
                "location": "Colombo",
                "tags": ["case", ""],
            },
            headers=seller,
        )
        self.assertEqual(response.status_code, 201)
        return response.json()["product"]

    def place_order(self, product_id):
        response = self.client.post(
            "/api/auth/signup",
            json={"name": "Buyer", "email": "buyer@example.com", "password": "secret1"},
        )
        buyer = {
            "Authorization": f"Bearer {response.json()['access_token']}",
            **CLIENT,
        }
        self.client.post("/api/cart", json={"product_id": product_id, "quantity": 2}, headers=buyer)
        self.client.post("/api/cart", json={"product_id": "1"}, headers=buyer)
        response = self.client.post(
            "/api/checkout",
            json={
                "name": "Buyer",
                "email": "buyer@example.com",
                "mobile": "0771234567",
                "address": "1 Main St",
                "city": "Colombo",
            },
            headers=buyer,
        )
        self.assertEqual(response.status_code, 201)
        return response.json()["order"]

    def test_seller_registration(self):
        response = self.register_seller()
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["user"]["role"], "seller")
        self.assertEqual(body["seller"]["business_name"], "Lanka Gadgets")
        self.assertEqual(body["seller"]["district"], "Colombo")
        self.assertTrue(body["seller"]["is_active"])
        self.assertFalse(body["seller"]["is_verified"])

        provider_user = get_auth_provider().admin_get_user_by_id(body["user"]["id"])
        self.assertEqual(provider_user.user_metadata["business_name"], "Lanka Gadgets")

        response = self.register_seller("other@example.com", confirm_password="nope")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Passwords do not match")

        response = self.register_seller(
            "other@example.com", password="abc", confirm_password="abc"
        )
        self.assertEqual(response.json()["detail"], "Password must be at least 6 characters")

    def test_seller_lists_a_product(self):
        seller = self.seller_headers()
        product = self.list_product(seller)
        self.assertEqual(product["seller"]["name"], "Lanka Gadgets")
        self.assertEqual(product["images"], ["https://example.com/case.jpg"])
        self.assertEqual(product["tags"], ["case"])
        self.assertEqual(product["category"]["slug"], "electronics")
        self.assertEqual(len(self.client.get("/api/products").json()["products"]), 7)

        response = self.client.post(
            "/api/seller/products",
            json={"title": "No pictures", "price": 10, "images": [" "]},
            headers=seller,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Please add at least one image URL")

    def test_seller_routes_require_seller_role(self):
        response = self.client.post(
            "/api/auth/signup",
            json={"name": "Buyer", "email": "buyer@example.com", "password": "secret1"},
        )
        buyer = {"Authorization": f"Bearer {response.json()['access_token']}"}
        self.assertEqual(self.client.get("/api/seller/orders", headers=buyer).status_code, 403)
        self.assertEqual(self.client.get("/api/seller/orders").status_code, 401)

    def test_inactive_seller_cannot_list(self):
        seller = self.seller_headers()
        admin = self.admin_headers()
        seller_id = self.client.get("/api/admin/sellers", headers=admin).json()["sellers"][0]["id"]
        self.client.patch(
            f"/api/admin/sellers/{seller_id}", json={"is_active": False}, headers=admin
        )
        response = self.client.post(
            "/api/seller/products",
            json={"title": "Case", "price": 10, "images": ["https://example.com/a.jpg"]},
            headers=seller,
        )
        self.assertEqual(response.status_code, 403)

    def test_seller_works_through_own_orders(self):
        seller = self.seller_headers()
        product = self.list_product(seller)
        order = self.place_order(product["id"])

        orders = self.client.get("/api/seller/orders", headers=seller).json()["orders"]
        self.assertEqual(len(orders), 1)
        self.assertEqual(len(orders[0]["items"]), 1)
        self.assertEqual(orders[0]["total_items"], 2)
        self.assertEqual(orders[0]["seller_total"], 10000)
        self.assertEqual(
            self.client.get(
                "/api/seller/orders", params={"status": "shipped"}, headers=seller
            ).json()["orders"],
            [],
        )

        url = f"/api/seller/orders/{order['id']}/status"
        response = self.client.patch(url, json={"status": "delivered"}, headers=seller)
        self.assertEqual(response.status_code, 400)

        for status in ("confirmed", "shipped", "delivered"):
            response = self.client.patch(
                url, json={"status": status, "notes": f"now {status}"}, headers=seller
            )
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json()["order"]["status"], status)

        history = self.client.get(
            f"/api/seller/orders/{order['id']}/history", headers=seller
        ).json()["history"]
        self.assertEqual(
            [(h["old_status"], h["new_status"]) for h in history],
            [("shipped", "delivered"), ("confirmed", "shipped"), ("pending", "confirmed")],
        )
        self.assertEqual(history[0]["changed_by_role"], "seller")
        self.assertEqual(history[0]["notes"], "now delivered")

        missing = self.client.patch(
            "/api/seller/orders/nope/status", json={"status": "confirmed"}, headers=seller
        )
        self.assertEqual(missing.status_code, 404)

    def test_seller_cannot_touch_other_orders(self):
        seller = self.seller_headers()
        self.list_product(seller)
        order = self.place_order("2")
        response = self.client.patch(
            f"/api/seller/orders/{order['id']}/status",
            json={"status": "confirmed"},
            headers=seller,
        )
        self.assertEqual(response.status_code, 404)

    def test_admin_order_management(self):
        seller = self.seller_headers()
        product = self.list_product(seller)
        order = self.place_order(product["id"])
        admin = self.admin_headers()

        orders = self.client.get("/api/admin/orders", headers=admin).json()["orders"]
        self.assertEqual(len(orders), 1)
        sellers = {s["business_name"]: s for s in orders[0]["sellers"]}
        self.assertEqual(sellers["Lanka Gadgets"]["total_amount"], 10000)
        self.assertEqual(sellers["Lanka Gadgets"]["district"], "Colombo")
        self.assertEqual(sellers["Unknown Seller"]["district"], "Unknown")
        self.assertEqual(sellers["Unknown Seller"]["total_amount"], 185000)

        for params, expected in (
            ({"q": "gadgets"}, 1),
            ({"q": order["order_number"].lower()}, 1),
            ({"district": "Galle"}, 0),
            ({"status": "pending"}, 1),
        ):
            found = self.client.get("/api/admin/orders", params=params, headers=admin).json()
            self.assertEqual(len(found["orders"]), expected, params)

        response = self.client.patch(
            f"/api/admin/orders/{order['id']}/status",
            json={"status": "delivered", "notes": "paid in cash"},
            headers=admin,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["order"]["status"], "delivered")

        history = self.client.get(
            f"/api/admin/orders/{order['id']}/history", headers=admin
        ).json()["history"]
        self.assertEqual(len(history), 1)
        self.assertEqual(history[0]["old_status"], "pending")
        self.assertEqual(history[0]["changed_by_role"], "admin")

        self.assertEqual(
            self.client.patch(
                "/api/admin/orders/nope/status", json={"status": "shipped"}, headers=admin
            ).status_code,
            404,
        )
        self.assertEqual(
            self.client.patch(
                f"/api/admin/orders/{order['id']}/status",
                json={"status": "lost"},
                headers=admin,
            ).status_code,
            422,
        )

    def test_seller_incomes_and_analytics(self):
        seller = self.seller_headers()
        product = self.list_product(seller)
        order = self.place_order(product["id"])
        admin = self.admin_headers()

        incomes = self.client.get("/api/admin/seller-incomes", headers=admin).json()["incomes"]
        mine = next(i for i in incomes if i["business_name"] == "Lanka Gadgets")
        self.assertEqual(mine["total_orders"], 1)
        self.assertEqual(mine["pending_income"], 10000)
        self.assertEqual(mine["completed_income"], 0)

        self.client.patch(
            f"/api/admin/orders/{order['id']}/status",
            json={"status": "delivered"},
            headers=admin,
        )
        incomes = self.client.get("/api/admin/seller-incomes", headers=admin).json()["incomes"]
        mine = next(i for i in incomes if i["business_name"] == "Lanka Gadgets")
        self.assertEqual(mine["completed_income"], 10000)
        self.assertEqual(mine["pending_income"], 0)

        stats = self.client.get("/api/admin/analytics", headers=admin).json()
        self.assertEqual(stats["total_orders"], 1)
        self.assertEqual(stats["total_revenue"], 195000)
        self.assertEqual(stats["average_order_value"], 195000)
        self.assertEqual(stats["completed_orders"], 1)
        self.assertEqual(stats["pending_orders"], 0)
        self.assertEqual(stats["total_users"], 2)
        self.assertEqual(stats["total_products"], 7)
        self.assertEqual(
            [c["name"] for c in stats["top_categories"]],
            ["Fashion", "Electronics", "Home & Garden", "Vehicles", "Services"],
        )

    def test_admin_seller_management(self):
        self.seller_headers()
        self.register_seller(
            "fashion@example.com",
            business_name="Fashion Hub",
            business_email="hello@fashionhub.lk",
        )
        admin = self.admin_headers()

        sellers = self.client.get("/api/admin/sellers", headers=admin).json()["sellers"]
        self.assertEqual(len(sellers), 2)
        found = self.client.get(
            "/api/admin/sellers", params={"q": "lankagadgets"}, headers=admin
        ).json()["sellers"]
        self.assertEqual([s["business_name"] for s in found], ["Lanka Gadgets"])

        seller_id = found[0]["id"]
        updated = self.client.patch(
            f"/api/admin/sellers/{seller_id}", json={"is_verified": True}, headers=admin
        ).json()["seller"]
        self.assertTrue(updated["is_verified"])
        self.assertTrue(updated["is_active"])

        updated = self.client.patch(
            f"/api/admin/sellers/{seller_id}", json={"is_active": False}, headers=admin
        ).json()["seller"]
        self.assertFalse(updated["is_active"])
        self.assertTrue(self.db.get_seller_profile(seller_id).is_verified)

        self.assertEqual(
            self.client.patch(
                f"/api/admin/sellers/{seller_id}", json={}, headers=admin
            ).status_code,
            400,
        )
        self.assertEqual(
            self.client.patch(
                "/api/admin/sellers/nobody", json={"is_active": True}, headers=admin
            ).status_code,
            404,
        )
        self.assertEqual(self.client.get("/api/admin/sellers").status_code, 401)


if __name__ == "__main__":
    unittest.main()
