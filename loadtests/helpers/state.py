"""Per-user state tracking for Locust load test scenarios."""

from dataclasses import dataclass, field


@dataclass
class OrderState:
    """Tracks a single simulated customer's visit."""

    item_ids: list[str] = field(default_factory=list)
    order_id: str | None = None
    pickup_code: str | None = None
    total_amount: str | None = None
