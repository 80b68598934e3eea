#!/usr/bin/env python3
"""
HTTP API Tests

TEST COVERAGE:
    - Admin login and bearer-token checks
    - Product create / list / restock / delete
    - Order placement, tracking and status updates over HTTP
    - Chat endpoint never surfaces an HTTP error
    - Gallery CRUD and health check
"""

import unittest
from unittest.mock import Mock, patch

from fastapi.testclient import TestClient

from support import TempDatabase

from ubepari.app import main
from ubepari.app.config import Config
from ubepari.app.controller import FALLBACK_REPLY
from ubepari.data.database import get_db
from ubepari.utils.errors import UpstreamError


class TestApi(unittest.TestCase):

    def setUp(self):
        self.store = TempDatabase()
        main.app.dependency_overrides[get_db] = self.store.get_db
        self.client = TestClient(main.app)

    def tearDown(self):
        main.app.dependency_overrides.clear()
        self.store.close()

    def _token(self):
        response = self.client.post("/api/admin/login",
                                    json={"username": Config.ADMIN_USER, "password": Config.ADMIN_PASS})
        self.assertEqual(response.status_code, 200)
        return response.json()["token"]

    def _auth(self):
        return {"Authorization": f"Bearer {self._token()}"}

    def _order_payload(self, order_id, product_id, **product):
        payload = {
            "orderId": order_id,
            "product": {"id": product_id, "name": "X1", "brand": "acme", "price": 100, **product},
            "customer": {"name": "Juma", "phone": "0755000111", "region": "Arusha",
                         "address": "Njiro", "date": "2026-10-21"},
        }
        return payload

    # ---------- auth ----------

    def test_login_with_default_credentials(self):
        response = self.client.post("/api/admin/login",
                                    json={"username": Config.ADMIN_USER, "password": Config.ADMIN_PASS})
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertTrue(body["token"])
        self.assertEqual(body["message"], "Login successful")

    def test_login_rejects_bad_password(self):
        response = self.client.post("/api/admin/login", json={"username": Config.ADMIN_USER, "password": "nope"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Invalid credentials"})

    def test_missing_bearer_header(self):
        response = self.client.get("/api/orders")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Unauthorized"})

    def test_invalid_token(self):
        response = self.client.get("/api/orders", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Invalid token"})

    # ---------- products ----------

    def test_create_product_then_list(self):
        response = self.client.post("/api/products", json={"name": "X1", "brand": "Acme", "price": 100},
                                    headers=self._auth())
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])

        products = self.client.get("/api/products").json()
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0]["name"], "X1")
        self.assertEqual(products[0]["brand"], "acme")
        self.assertEqual(products[0]["stock"], 0)
        self.assertEqual(products[0]["costPrice"], 0)

    def test_create_product_requires_auth(self):
        response = self.client.post("/api/products", json={"name": "X1", "brand": "Acme"})
        self.assertEqual(response.status_code, 401)

    def test_restock(self):
        product_id = self.store.add_product(name="X1", brand="acme", price=100, cost_price=60, stock=2)
        response = self.client.patch(f"/api/products/{product_id}/restock", json={"addQty": 5, "costPrice": 70},
                                     headers=self._auth())
        body = response.json()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(body["product"]["stock"], 7)
        self.assertEqual(body["product"]["costPrice"], 70)

    def test_restock_missing_product(self):
        response = self.client.patch("/api/products/missing/restock", json={"addQty": 1}, headers=self._auth())
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Product not found"})

    def test_delete_product(self):
        product_id = self.store.add_product(name="X1", brand="acme")
        response = self.client.delete(f"/api/products/{product_id}", headers=self._auth())
        self.assertEqual(response.json(), {"success": True})
        self.assertEqual(self.client.get("/api/products").json(), [])

    # ---------- orders ----------

    def test_place_order_without_qty_decrements_one(self):
        product_id = self.store.add_product(name="X1", brand="acme", price=100, stock=4)
        response = self.client.post("/api/orders", json=self._order_payload("UB-1", product_id))
        order = response.json()["order"]
        self.assertEqual(response.status_code, 200)
        self.assertEqual(order["status"], "pending")
        self.assertEqual(order["paymentMethod"], "After Delivery")
        self.assertEqual(order["product"]["qty"], 1)
        self.assertEqual(self.store.stock_of(product_id), 3)

    def test_client_cannot_set_initial_status(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        payload = self._order_payload("UB-2", product_id, qty=2)
        payload["status"] = "delivered"
        order = self.client.post("/api/orders", json=payload).json()["order"]
        self.assertEqual(order["status"], "pending")
        self.assertEqual(self.store.stock_of(product_id), 2)

    def test_duplicate_order_id(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        self.client.post("/api/orders", json=self._order_payload("UB-3", product_id))
        response = self.client.post("/api/orders", json=self._order_payload("UB-3", product_id, qty=2))
        self.assertEqual(response.status_code, 500)
        self.assertIn("UB-3", response.json()["message"])
        self.assertEqual(self.store.stock_of(product_id), 3)

    def test_track_order(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        self.client.post("/api/orders", json=self._order_payload("UB-4", product_id))
        response = self.client.get("/api/orders/track/UB-4")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["customer"]["region"], "Arusha")
        self.assertEqual(self.client.get("/api/orders/track/UB-404").status_code, 404)

    def test_status_round_trip_over_http(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        key = self.client.post("/api/orders", json=self._order_payload("UB-5", product_id)).json()["order"]["id"]
        headers = self._auth()
        for status in ("confirmed", "delivered", "cancelled", "pending"):
            response = self.client.patch(f"/api/orders/{key}/status", json={"status": status}, headers=headers)
            self.assertEqual(response.status_code, 200)
            self.assertEqual(self.client.get("/api/orders/track/UB-5").json()["status"], status)

    def test_strict_status_mode_returns_conflict(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        key = self.client.post("/api/orders", json=self._order_payload("UB-6", product_id)).json()["order"]["id"]
        with patch.object(Config, "ORDER_STATUS_STRICT", True):
            response = self.client.patch(f"/api/orders/{key}/status", json={"status": "delivered"},
                                         headers=self._auth())
        self.assertEqual(response.status_code, 409)

    def test_list_orders_newest_first(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        for order_id in ("UB-7", "UB-8"):
            self.client.post("/api/orders", json=self._order_payload(order_id, product_id))
        orders = self.client.get("/api/orders", headers=self._auth()).json()
        self.assertEqual([o["orderId"] for o in orders], ["UB-8", "UB-7"])

    def test_decrement_failure_keeps_order_and_stock(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        with patch("ubepari.services.orders.adjust_stock", side_effect=RuntimeError("stock service down")):
            response = self.client.post("/api/orders", json=self._order_payload("UB-9", product_id, qty=2))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "stock service down"})
        self.assertEqual(self.client.get("/api/orders/track/UB-9").json()["orderId"], "UB-9")
        self.assertEqual(self.store.stock_of(product_id), 4)

    # ---------- request validation ----------

    def test_order_missing_order_id(self):
        response = self.client.post("/api/orders", json={"product": {"name": "X"}})
        body = response.json()
        self.assertEqual(response.status_code, 500)
        self.assertNotIn("detail", body)
        self.assertIn("orderId", body["message"])

    def test_order_zero_quantity_rejected_without_stock_change(self):
        product_id = self.store.add_product(name="X1", brand="acme", stock=4)
        response = self.client.post("/api/orders", json=self._order_payload("UB-10", product_id, qty=0))
        self.assertEqual(response.status_code, 500)
        self.assertIn("qty", response.json()["message"])
        self.assertEqual(self.store.stock_of(product_id), 4)
        self.assertEqual(self.client.get("/api/orders/track/UB-10").status_code, 404)

    def test_product_missing_name(self):
        response = self.client.post("/api/products", json={"brand": "Acme"}, headers=self._auth())
        self.assertEqual(response.status_code, 500)
        self.assertIn("name", response.json()["message"])
        self.assertEqual(self.client.get("/api/products").json(), [])

    # ---------- chat ----------

    def test_chat_upstream_failure_returns_fallback(self):
        failing = Mock()
        failing.complete.side_effect = UpstreamError("http_status", "502")
        with patch.object(main.controller, "gen_client", failing):
            response = self.client.post("/api/chat", json={"messages": [{"role": "user", "content": "hello"}]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["reply"], FALLBACK_REPLY)

    def test_chat_reply_with_images(self):
        self.store.add_product(name="X200 Pro", brand="acme", price=100, stock=1, image_url="https://img/x200.jpg")
        ok = Mock()
        ok.complete.return_value = "Here it is!"
        with patch.object(main.controller, "gen_client", ok):
            response = self.client.post("/api/chat", json={
                "messages": [{"role": "user", "content": "can I see a photo of the X200 laptop"}]})
        body = response.json()
        self.assertEqual(body["reply"], "Here it is!")
        self.assertEqual(body["images"], [{"url": "https://img/x200.jpg", "name": "X200 Pro", "price": 100}])

    def _chat_with(self, body=None, **kwargs):
        silent = Mock()
        silent.complete.return_value = None
        with patch.object(main.controller, "gen_client", silent):
            return self.client.post("/api/chat", json=body, **kwargs), silent

    def test_chat_messages_not_a_list(self):
        response, _ = self._chat_with({"messages": "hi"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"reply": FALLBACK_REPLY, "images": []})

    def test_chat_non_string_content(self):
        response, silent = self._chat_with({"messages": [{"role": "user", "content": 5}, "junk"]})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["reply"], FALLBACK_REPLY)
        sent = silent.complete.call_args[0][0]
        self.assertEqual(sent[1:], [{"role": "user", "content": ""}])

    def test_chat_body_not_an_object(self):
        response, _ = self._chat_with(["hello"])
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["reply"], FALLBACK_REPLY)

    def test_chat_invalid_json(self):
        response = self.client.post("/api/chat", content=b"{not json",
                                    headers={"Content-Type": "application/json"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"reply": FALLBACK_REPLY, "images": []})

    # ---------- gallery & health ----------

    def test_gallery_crud(self):
        headers = self._auth()
        created = self.client.post("/api/gallery", json={"url": "https://img/shop.jpg", "caption": "Shop"},
                                   headers=headers).json()
        self.assertTrue(created["success"])
        self.assertEqual(len(self.client.get("/api/gallery").json()), 1)
        self.client.delete(f"/api/gallery/{created['photo']['id']}", headers=headers)
        self.assertEqual(self.client.get("/api/gallery").json(), [])

    def test_gallery_post_requires_auth(self):
        self.assertEqual(self.client.post("/api/gallery", json={"url": "x"}).status_code, 401)

    def test_lifespan_creates_tables(self):
        with patch("ubepari.app.main.create_tables") as mock_create:
            with TestClient(main.app) as client:
                self.assertEqual(client.get("/api/health").status_code, 200)
        mock_create.assert_called_once_with()

    def test_health(self):
        body = self.client.get("/api/health").json()
        self.assertTrue(body["success"])
        self.assertEqual(body["status"], "healthy")
        self.assertIn("uptime", body)
        self.assertEqual(body["environment"], Config.ENVIRONMENT)


if __name__ == '__main__':
    unittest.main()
