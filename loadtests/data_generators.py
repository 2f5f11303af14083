"""Faker-based data generators for Locust load test scenarios."""

import os
import random

from faker import Faker

fake = Faker()

MENU_ITEM_IDS = ["1", "2", "3", "4", "5", "6", "7", "8"]
PAYMENT_METHODS = ["cash", "card", "upi", "wallet"]

# Bearer tokens known to the server's identity provider
CUSTOMER_TOKENS = os.environ.get("CANTEEN_CUSTOMER_TOKENS", "customer-token").split(",")
STAFF_TOKEN = os.environ.get("CANTEEN_STAFF_TOKEN", "staff-token")


def customer_headers() -> dict:
    return {"Authorization": f"Bearer {random.choice(CUSTOMER_TOKENS)}"}


def staff_headers() -> dict:
    return {"Authorization": f"Bearer {STAFF_TOKEN}"}


def basket() -> list[str]:
    """A lunch order: one to four items, repeats allowed."""
    return random.choices(MENU_ITEM_IDS, k=random.randint(1, 4))


def payment_data(failure_rate: float = 0.1) -> dict:
    outcome = "failure" if random.random() < failure_rate else "success"
    return {"payment_method": random.choice(PAYMENT_METHODS), "outcome": outcome}


def cancellation_reason() -> str:
    return fake.sentence(nb_words=6)[:500]
