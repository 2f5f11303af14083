"""Canteen load test scenarios.

Customer journeys build a cart, check out and pay; the kitchen journey
works the staff queue from the oldest paid order onwards.

Simulated customers may share a bearer token (and so a cart). A checkout
that finds the cart already emptied by another user answers 409 EmptyCart;
that is counted as a success and ends the journey.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    basket,
    cancellation_reason,
    customer_headers,
    payment_data,
    staff_headers,
)
from loadtests.helpers.response import error_kind, extract_error_detail
from loadtests.helpers.state import OrderState


class LunchOrderJourney(SequentialTaskSet):
    """Menu -> Add Items -> Cart -> Checkout -> Pay -> Track Order."""

    def on_start(self):
        self.state = OrderState()
        self.headers = customer_headers()

    @task
    def browse_menu(self):
        with self.client.get("/menu", catch_response=True, name="GET /menu") as resp:
            if resp.status_code == 200:
                available = [item["item_id"] for item in resp.json() if item["available"]]
                self.state.item_ids = [item_id for item_id in basket() if item_id in available]
            else:
                resp.failure(f"Menu failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def fill_cart(self):
        for item_id in self.state.item_ids:
            with self.client.post(
                "/cart/items",
                json={"item_id": item_id},
                headers=self.headers,
                catch_response=True,
                name="POST /cart/items",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Add item failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def view_cart(self):
        self.client.get("/cart", headers=self.headers, name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/cart/checkout",
            headers=self.headers,
            catch_response=True,
            name="POST /cart/checkout",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["order_id"]
                self.state.pickup_code = body["pickup_code"]
                self.state.total_amount = body["total_amount"]
            elif resp.status_code == 409 and error_kind(resp) in ("EmptyCart", "ItemUnavailable"):
                resp.success()
                self.interrupt()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def pay(self):
        with self.client.post(
            f"/orders/{self.state.order_id}/payment",
            json=payment_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /orders/{id}/payment",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Payment failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def track_order(self):
        self.client.get(f"/orders/{self.state.order_id}", headers=self.headers, name="GET /orders/{id}")
        self.client.get("/orders", headers=self.headers, name="GET /orders")

    @task
    def done(self):
        self.interrupt()


class CartBrowsingJourney(SequentialTaskSet):
    """Add Items -> Favorite One -> Change Quantity -> Remove -> Clear. Never checks out."""

    def on_start(self):
        self.headers = customer_headers()
        self.item_ids = basket()

    @task
    def add_items(self):
        for item_id in self.item_ids:
            self.client.post("/cart/items", json={"item_id": item_id}, headers=self.headers, name="POST /cart/items")

    @task
    def favorite_item(self):
        item_id = random.choice(self.item_ids)
        self.client.put(f"/favorites/{item_id}", headers=self.headers, name="PUT /favorites/{id}")
        self.client.get("/favorites", headers=self.headers, name="GET /favorites")

    @task
    def change_quantity(self):
        item_id = random.choice(self.item_ids)
        self.client.put(
            f"/cart/items/{item_id}",
            json={"quantity": random.randint(0, 3)},
            headers=self.headers,
            name="PUT /cart/items/{id}",
        )

    @task
    def remove_item(self):
        item_id = random.choice(self.item_ids)
        self.client.delete(f"/cart/items/{item_id}", headers=self.headers, name="DELETE /cart/items/{id}")

    @task
    def clear(self):
        self.client.delete("/cart", headers=self.headers, name="DELETE /cart")
        self.interrupt()


class KitchenJourney(SequentialTaskSet):
    """Queue -> Ready -> Collected, with the occasional cancellation."""

    def on_start(self):
        self.headers = staff_headers()
        self.queue = []

    @task
    def read_queue(self):
        with self.client.get("/staff/queue", headers=self.headers, catch_response=True, name="GET /staff/queue") as resp:
            if resp.status_code == 200:
                self.queue = resp.json()
            else:
                resp.failure(f"Queue failed: {resp.status_code} - {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def work_oldest_order(self):
        if not self.queue:
            self.interrupt()
            return

        entry = self.queue[0]
        if entry["status"] == "preparing" and random.random() < 0.05:
            target, reason = "cancelled", cancellation_reason()
        elif entry["status"] == "preparing":
            target, reason = "ready", None
        else:
            target, reason = "completed", None

        with self.client.put(
            f"/staff/orders/{entry['order_id']}/status",
            json={"status": target, "reason": reason},
            headers=self.headers,
            catch_response=True,
            name="PUT /staff/orders/{id}/status",
        ) as resp:
            # Another staff member got there first
            if resp.status_code == 409 and error_kind(resp) == "IllegalTransition":
                resp.success()
            elif resp.status_code != 200:
                resp.failure(f"Status change failed: {resp.status_code} - {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class KitchenStaffUser(HttpUser):
    """A member of staff working the queue."""

    wait_time = between(1, 3)
    tasks = [KitchenJourney]
