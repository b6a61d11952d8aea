import unittest

from shared.types import Order, OrderItem, OrderStatus, SellerProfile, UserProfile
from storefront.db import PostgresDbClient, ProductRecord
from storefront.seed import load_demo_catalog


class PostgresDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the Postgres client logic.
    """

    @classmethod
    def setUpClass(cls):
        cls.db = PostgresDbClient("sqlite+pysqlite:///:memory:")
        load_demo_catalog(cls.db)

    def test_catalog_queries(self):
        categories = self.db.list_categories()
        self.assertEqual(categories[0].name, "Electronics")
        self.assertEqual(self.db.get_category_by_slug("vehicles").id, "1")

        featured = self.db.list_products(featured_only=True, limit=2)
        self.assertEqual([p.id for p in featured], ["1", "2"])
        electronics = self.db.list_products(category_id="2")
        self.assertEqual([p.id for p in electronics], ["1", "4", "6"])

    def test_product_json_columns_roundtrip(self):
        product = self.db.get_product("1")
        self.assertEqual(product.tags, ["smartphone", "apple", "iphone", "mobile"])
        self.assertEqual(product.original_price, 220000)

    def test_save_update_and_delete_product(self):
        saved = self.db.save_product(
            ProductRecord(
                id="",
                title="Mountain Bike",
                description="Barely used",
                price=45000,
                condition="used",
                location="Kandy",
                seller_name="Admin",
                category_id="8",
                features=["21 gears"],
            )
        )
        self.assertTrue(saved.id)
        self.assertTrue(saved.created_at)

        saved.price = 40000
        updated = self.db.save_product(saved)
        self.assertEqual(updated.price, 40000)
        self.assertEqual(updated.created_at, saved.created_at)

        self.assertTrue(self.db.delete_product(saved.id))
        self.assertFalse(self.db.delete_product(saved.id))
        self.assertIsNone(self.db.get_product(saved.id))

    def test_profiles(self):
        self.db.save_user_profile(UserProfile(id="u-profile", email="a@b.c", name="A"))
        self.db.save_user_profile(
            UserProfile(
                id="u-profile", email="a@b.c", name="A", city="Galle", postal_code="80000"
            )
        )
        profile = self.db.get_user_profile("u-profile")
        self.assertEqual(profile.city, "Galle")
        self.assertEqual(profile.postal_code, "80000")
        self.assertTrue(profile.updated_at)

        self.db.save_seller_profile(
            SellerProfile(
                id="u-profile",
                business_name="A Traders",
                district="Galle",
                business_description="Spices",
                is_verified=True,
            )
        )
        seller = self.db.get_seller_profile("u-profile")
        self.assertTrue(seller.is_verified)
        self.assertTrue(seller.is_active)
        self.assertEqual(seller.district, "Galle")
        self.assertEqual(seller.business_description, "Spices")
        self.assertIn("u-profile", [s.id for s in self.db.list_seller_profiles()])

    def test_orders_and_totals(self):
        self.assertEqual(self.db.get_order_totals("u-orders"), (0, 0.0))
        order = self.db.create_order(
            Order(
                id="",
                order_number="ORD-20240101-ABC123",
                user_id="u-orders",
                total_amount=370000,
                customer_name="Buyer",
                customer_email="buyer@example.com",
                customer_mobile="0771234567",
                shipping_address="1 Main St",
                shipping_city="Colombo",
                payment_method="cash_on_delivery",
                items=[
                    OrderItem(
                        product_id="1",
                        product_title="iPhone",
                        quantity=2,
                        price=185000,
                        subtotal=370000,
                    )
                ],
            )
        )
        self.assertTrue(order.id)
        self.assertEqual(order.items[0].order_id, order.id)

        [stored] = self.db.list_orders("u-orders")
        self.assertEqual(stored.status, OrderStatus.PENDING)
        self.assertEqual(stored.items[0].quantity, 2)
        self.assertEqual(self.db.get_order_totals("u-orders"), (1, 370000.0))

    def test_status_history_and_seller_orders(self):
        order = self.db.create_order(
            Order(
                id="",
                order_number="ORD-20240102-DEF456",
                user_id="u-status",
                total_amount=285000,
                customer_name="Buyer",
                customer_email="buyer@example.com",
                customer_mobile="0771234567",
                shipping_address="1 Main St",
                shipping_city="Colombo",
                payment_method="cash_on_delivery",
                items=[
                    OrderItem(
                        product_id="1",
                        product_title="iPhone",
                        quantity=1,
                        price=185000,
                        subtotal=185000,
                        seller_id="s-status",
                    ),
                    OrderItem(
                        product_id="7",
                        product_title="Speaker",
                        quantity=1,
                        price=100000,
                        subtotal=100000,
                        seller_id="s-other",
                    ),
                ],
            )
        )
        self.assertEqual(
            [o.id for o in self.db.list_seller_orders("s-status")], [order.id]
        )
        self.assertEqual(self.db.list_seller_orders("s-nobody"), [])
        self.assertIn(order.id, [o.id for o in self.db.list_all_orders()])
        self.assertEqual(len(self.db.get_order(order.id).items), 2)
        self.assertIsNone(self.db.get_order("missing"))

        self.db.update_order_status(
            order.id, OrderStatus.CONFIRMED, changed_by_role="seller", changed_by="s-status"
        )
        updated = self.db.update_order_status(
            order.id, OrderStatus.SHIPPED, changed_by_role="admin", notes="courier"
        )
        self.assertEqual(updated.status, OrderStatus.SHIPPED)
        self.assertIsNone(
            self.db.update_order_status(
                "missing", OrderStatus.SHIPPED, changed_by_role="admin"
            )
        )

        history = self.db.list_order_status_history(order.id)
        self.assertEqual(
            [(h.old_status, h.new_status) for h in history],
            [("confirmed", "shipped"), ("pending", "confirmed")],
        )
        self.assertEqual(history[0].notes, "courier")
        self.assertEqual(history[1].changed_by, "s-status")


if __name__ == "__main__":
    unittest.main()
