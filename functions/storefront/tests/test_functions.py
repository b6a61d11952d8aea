import unittest
from unittest.mock import patch

from shared.types import Order, OrderItem, UserProfile
from storefront import functions
from storefront.auth import InMemoryAuthProvider
from storefront.db import InMemoryDbClient
from storefront.seed import SEED_USERS


class CreateUsersTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.auth = InMemoryAuthProvider()

    def test_provisions_seed_accounts(self):
        response = functions.create_users(self.db, self.auth)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.body["success"])
        results = response.body["results"]
        self.assertEqual(len(results), len(SEED_USERS))
        self.assertTrue(all(r["status"] == "created" for r in results))
        self.assertEqual(len(self.db.list_user_profiles()), 9)

        seller = next(r for r in results if r["email"] == "seller1@sibn.com")
        self.assertEqual(seller["role"], "seller")
        profile = self.db.get_seller_profile(seller["user_id"])
        self.assertEqual(profile.business_name, "Tech Store Electronics")
        self.assertTrue(profile.is_verified)
        self.assertTrue(profile.is_active)

    def test_second_run_reports_existing(self):
        functions.create_users(self.db, self.auth)
        response = functions.create_users(self.db, self.auth)
        statuses = {r["status"] for r in response.body["results"]}
        self.assertEqual(statuses, {"already_exists"})

    def test_provider_rejection_is_reported_per_user(self):
        seed = [{"email": "not-an-email", "password": "x", "role": "user", "name": "X"}]
        response = functions.create_users(self.db, self.auth, seed=seed)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.body["results"][0]["status"], "error")

    def test_unexpected_failure_is_500(self):
        with patch.object(self.auth, "admin_list_users", side_effect=RuntimeError("down")):
            response = functions.create_users(self.db, self.auth)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.body, {"success": False, "error": "down"})


class GetUsersTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.auth = InMemoryAuthProvider()
        user = self.auth.admin_create_user(
            "nimal@example.com", "secret1", user_metadata={"role": "admin"}
        )
        self.user_id = user.id
        self.db.save_user_profile(
            UserProfile(id=user.id, email=user.email, name="Nimal", city="Galle")
        )
        for amount in (1500.0, 2500.0):
            self.db.create_order(
                Order(
                    id="",
                    order_number=f"ORD-{amount}",
                    user_id=user.id,
                    total_amount=amount,
                    customer_name="Nimal",
                    customer_email=user.email,
                    customer_mobile="0711111111",
                    shipping_address="1 Main St",
                    shipping_city="Galle",
                    payment_method="cash_on_delivery",
                    items=[
                        OrderItem(
                            product_id="1",
                            product_title="Thing",
                            quantity=1,
                            price=amount,
                            subtotal=amount,
                        )
                    ],
                )
            )

    def test_lists_users_with_order_counts(self):
        response = functions.get_users(self.db, self.auth)
        self.assertEqual(response.status_code, 200)
        [summary] = response.body["users"]
        self.assertEqual(summary["role"], "admin")
        self.assertEqual(summary["order_count"], 2)
        # Never signed in, so the profile creation time stands in.
        self.assertEqual(summary["last_sign_in_at"], summary["created_at"])

    def test_single_user_includes_totals(self):
        response = functions.get_users(self.db, self.auth, self.user_id)
        self.assertEqual(response.status_code, 200)
        user = response.body["user"]
        self.assertEqual(user["total_spent"], 4000.0)
        self.assertEqual(user["city"], "Galle")

    def test_unknown_user_is_404(self):
        response = functions.get_users(self.db, self.auth, "missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.body, {"error": "User not found"})


if __name__ == "__main__":
    unittest.main()
