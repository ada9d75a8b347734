"""HTTP tests for /api/order: menu and diner orders, including pizza factory fulfilment."""

import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from api_helpers import (
    auth_header,
    client,
    create_admin_user,
    create_franchise,
    random_name,
    register_diner,
)
from pizzeria.core.database import SessionLocal
from pizzeria.core.errors import FactoryError
from pizzeria.models import DinerOrder
from pizzeria.services.factory import FACTORY_FAILURE_MESSAGE, FactoryReceipt


def _menu_item() -> dict:
    return {"title": random_name(), "description": "Test pizza", "image": "pizza.png", "price": 0.001}


class TestOrderRoutes(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.diner, cls.diner_token, _ = register_diner()
        cls.admin, cls.admin_token = create_admin_user()
        client.put("/api/order/menu", json=_menu_item(), headers=auth_header(cls.admin_token))
        cls.franchise = create_franchise(cls.admin_token, [cls.admin["email"]])
        cls.store = client.post(
            f"/api/franchise/{cls.franchise['id']}/store",
            json={"name": "TestStore"},
            headers=auth_header(cls.admin_token),
        ).json()

    def _order_body(self) -> dict:
        menu_item = client.get("/api/order/menu").json()[0]
        return {
            "franchiseId": self.franchise["id"],
            "storeId": self.store["id"],
            "items": [
                {"menuId": menu_item["id"], "description": menu_item["title"], "price": menu_item["price"]}
            ],
        }

    def test_get_menu(self) -> None:
        res = client.get("/api/order/menu")
        self.assertEqual(res.status_code, 200)
        self.assertIsInstance(res.json(), list)
        self.assertGreater(len(res.json()), 0)

    def test_add_menu_item_as_admin(self) -> None:
        item = _menu_item()
        res = client.put("/api/order/menu", json=item, headers=auth_header(self.admin_token))
        self.assertEqual(res.status_code, 200)
        self.assertTrue(any(m["title"] == item["title"] for m in res.json()))

    def test_add_menu_item_fails_without_admin(self) -> None:
        res = client.put("/api/order/menu", json=_menu_item(), headers=auth_header(self.diner_token))
        self.assertEqual(res.status_code, 403)

    def test_add_menu_item_requires_auth(self) -> None:
        self.assertEqual(client.put("/api/order/menu", json=_menu_item()).status_code, 401)

    def test_get_orders_for_authenticated_user(self) -> None:
        res = client.get("/api/order", headers=auth_header(self.diner_token))
        self.assertEqual(res.status_code, 200)
        self.assertIsInstance(res.json()["orders"], list)
        self.assertEqual(res.json()["dinerId"], self.diner["id"])
        self.assertEqual(res.json()["page"], 1)

    def test_get_orders_requires_auth(self) -> None:
        self.assertEqual(client.get("/api/order").status_code, 401)

    def test_create_order(self) -> None:
        res = client.post("/api/order", json=self._order_body(), headers=auth_header(self.diner_token))
        self.assertEqual(res.status_code, 200)
        order = res.json()["order"]
        self.assertIn("id", order)
        self.assertEqual(order["storeId"], self.store["id"])
        self.assertNotIn("jwt", res.json())

    def test_orders_are_scoped_to_caller(self) -> None:
        _, token, _ = register_diner(name="hungry")
        created = client.post("/api/order", json=self._order_body(), headers=auth_header(token)).json()

        mine = client.get("/api/order", headers=auth_header(token)).json()["orders"]
        theirs = client.get("/api/order", headers=auth_header(self.diner_token)).json()["orders"]

        self.assertEqual([o["id"] for o in mine], [created["order"]["id"]])
        self.assertNotIn(created["order"]["id"], [o["id"] for o in theirs])

    def test_deleted_users_orders_are_detached(self) -> None:
        gone, token, _ = register_diner(name="leaving")
        created = client.post("/api/order", json=self._order_body(), headers=auth_header(token)).json()
        res = client.delete(f"/api/user/{gone['id']}", headers=auth_header(self.admin_token))
        self.assertEqual(res.status_code, 200)

        db = SessionLocal()
        try:
            order = db.get(DinerOrder, created["order"]["id"])
            self.assertIsNotNone(order)
            self.assertIsNone(order.diner_id)
        finally:
            db.close()

        _, newcomer_token, _ = register_diner(name="newcomer")
        orders = client.get("/api/order", headers=auth_header(newcomer_token)).json()["orders"]
        self.assertEqual(orders, [])

    def test_create_order_requires_auth(self) -> None:
        self.assertEqual(client.post("/api/order", json=self._order_body()).status_code, 401)

    def test_create_order_unknown_store(self) -> None:
        body = self._order_body()
        body["storeId"] = 10_000_000
        res = client.post("/api/order", json=body, headers=auth_header(self.diner_token))
        self.assertEqual(res.status_code, 404)

    def test_create_order_unknown_menu_item(self) -> None:
        body = self._order_body()
        body["items"][0]["menuId"] = 10_000_000
        res = client.post("/api/order", json=body, headers=auth_header(self.diner_token))
        self.assertEqual(res.status_code, 404)

    def test_create_order_without_items(self) -> None:
        body = self._order_body()
        body["items"] = []
        res = client.post("/api/order", json=body, headers=auth_header(self.diner_token))
        self.assertEqual(res.status_code, 400)


class TestOrderFactoryFulfilment(unittest.TestCase):
    """With FACTORY_URL configured, orders are only kept once the factory accepts them."""

    @classmethod
    def setUpClass(cls) -> None:
        _, cls.admin_token = create_admin_user()
        menu = client.put("/api/order/menu", json=_menu_item(), headers=auth_header(cls.admin_token)).json()
        cls.menu_item = menu[-1]
        cls.franchise = create_franchise(cls.admin_token, [])
        cls.store = client.post(
            f"/api/franchise/{cls.franchise['id']}/store",
            json={"name": "FactoryStore"},
            headers=auth_header(cls.admin_token),
        ).json()

    def setUp(self) -> None:
        _, self.token, _ = register_diner(name="factory diner")
        settings = MagicMock()
        settings.FACTORY_URL = "https://factory.test"
        patcher = patch("pizzeria.api.order.get_settings", return_value=settings)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _body(self) -> dict:
        return {
            "franchiseId": self.franchise["id"],
            "storeId": self.store["id"],
            "items": [{"menuId": self.menu_item["id"], "description": "Veggie", "price": 0.05}],
        }

    @patch("pizzeria.services.orders.send_order_to_factory", new_callable=AsyncMock)
    def test_fulfilled_order_returns_factory_jwt(self, mock_send: AsyncMock) -> None:
        mock_send.return_value = FactoryReceipt(jwt="a.b.c", report_url="https://factory.test/report/1")

        res = client.post("/api/order", json=self._body(), headers=auth_header(self.token))

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["jwt"], "a.b.c")
        self.assertEqual(res.json()["followLinkToEndChaos"], "https://factory.test/report/1")
        mock_send.assert_awaited_once()
        orders = client.get("/api/order", headers=auth_header(self.token)).json()["orders"]
        self.assertEqual([o["id"] for o in orders], [res.json()["order"]["id"]])

    @patch("pizzeria.services.orders.send_order_to_factory", new_callable=AsyncMock)
    def test_factory_failure_returns_500_and_keeps_no_order(self, mock_send: AsyncMock) -> None:
        mock_send.side_effect = FactoryError(FACTORY_FAILURE_MESSAGE, report_url="https://factory.test/report/2")

        res = client.post("/api/order", json=self._body(), headers=auth_header(self.token))

        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.json()["message"], "Failed to fulfill order at factory")
        self.assertEqual(res.json()["followLinkToEndChaos"], "https://factory.test/report/2")
        orders = client.get("/api/order", headers=auth_header(self.token)).json()["orders"]
        self.assertEqual(orders, [])


if __name__ == "__main__":
    unittest.main()
