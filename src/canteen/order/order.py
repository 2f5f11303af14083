"""Order aggregate (Event Sourced): the order ledger's unit of record.

Lines and the total are frozen at checkout; later catalog price changes never
reach a placed order. Every change after creation is one of the events in
``canteen.order.events``, applied through ``@apply`` handlers, so the same
code path serves live changes and replay.

State Machine:
    PENDING --(payment success, system)--> PREPARING --(staff)--> READY
        --(staff)--> COMPLETED
    PENDING | PREPARING --(staff)--> CANCELLED
    COMPLETED and CANCELLED are terminal.

Payment status moves PENDING -> PAID or PENDING -> FAILED, once.
"""

import json
from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import apply
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from canteen.domain import canteen
from canteen.exceptions import EmptyCart, Forbidden, IllegalTransition, InvalidState
from canteen.identity.port import Role
from canteen.order.events import (
    OrderCancelled,
    OrderCompleted,
    OrderPlaced,
    OrderReady,
    PaymentFailed,
    PaymentSucceeded,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class PaymentOutcome(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


# Transitions a staff member may request. PENDING -> PREPARING is absent on
# purpose: only a successful payment moves an order into the kitchen.
_STAFF_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED})


def staff_successors(status):
    """Statuses staff may move an order to from ``status``."""
    return _STAFF_TRANSITIONS[OrderStatus(status)]


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@canteen.entity(part_of="Order")
class OrderLine:
    """A frozen copy of a menu item at the moment of checkout."""

    item_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price_cents = Integer(required=True, min_value=0)
    quantity = Integer(required=True, min_value=1)
    prep_time_minutes = Integer(default=0, min_value=0)

    @property
    def subtotal_cents(self):
        return self.unit_price_cents * self.quantity


# ---------------------------------------------------------------------------
# Aggregate Root (Event Sourced)
# ---------------------------------------------------------------------------
@canteen.aggregate(is_event_sourced=True)
class Order:
    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    total_amount_cents = Integer(min_value=0)
    status = String(
        choices=OrderStatus,
        default=OrderStatus.PENDING.value,
    )
    payment_status = String(
        choices=PaymentStatus,
        default=PaymentStatus.PENDING.value,
    )
    payment_method = String(max_length=50)
    prep_time_minutes = Integer(default=0)
    pickup_code = String(max_length=20)
    cancelled_by = Identifier()
    cancellation_reason = String(max_length=500)
    created_at = DateTime()
    paid_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, lines_data, expected_total_cents, pickup_code):
        """Create a new unpaid order from priced cart lines.

        Args:
            user_id: The customer placing the order.
            lines_data: List of dicts with item_id, name, unit_price_cents,
                        quantity, prep_time_minutes.
            expected_total_cents: The cart amount the customer saw. The
                        order is rejected if its own total differs.
            pickup_code: Unique code the customer shows at the counter.
        """
        if not lines_data:
            raise EmptyCart({"lines": ["An order needs at least one line"]})

        total = sum(line["unit_price_cents"] * line["quantity"] for line in lines_data)
        if total != expected_total_cents:
            raise ValidationError(
                {"total_amount": [f"Order total {total} does not match the cart amount {expected_total_cents}"]}
            )
        if total <= 0:
            raise ValidationError({"total_amount": ["Order total must be greater than zero"]})

        # Items are prepared side by side, so the slowest one sets the pace
        prep_time = max(line.get("prep_time_minutes", 0) for line in lines_data)

        # Pre-generate line IDs for deterministic replay
        lines_with_ids = [{**line, "id": str(uuid4())} for line in lines_data]

        order = cls._create_new()
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                lines=json.dumps(lines_with_ids),
                total_amount_cents=total,
                prep_time_minutes=prep_time,
                pickup_code=pickup_code,
                placed_at=datetime.now(UTC),
            )
        )
        return order

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def item_count(self):
        return sum(line.quantity for line in self.lines)

    @property
    def is_terminal(self):
        return OrderStatus(self.status) in TERMINAL_STATUSES

    def _assert_not_paid_while_pending(self):
        if PaymentStatus(self.payment_status) == PaymentStatus.PAID and OrderStatus(self.status) == OrderStatus.PENDING:
            raise InvalidState({"status": ["A paid order cannot remain pending"]})

    # -------------------------------------------------------------------
    # Payment gate
    # -------------------------------------------------------------------
    def resolve_payment(self, payment_method, outcome):
        """Record the one and only payment outcome for this order."""
        if PaymentStatus(self.payment_status) != PaymentStatus.PENDING:
            raise InvalidState({"payment_status": [f"Payment was already resolved as {self.payment_status}"]})
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise InvalidState({"status": [f"Cannot take payment for an order that is {self.status}"]})

        now = datetime.now(UTC)
        if PaymentOutcome(outcome) == PaymentOutcome.SUCCESS:
            self.raise_(
                PaymentSucceeded(
                    order_id=str(self.id),
                    user_id=str(self.user_id),
                    payment_method=payment_method,
                    amount_cents=self.total_amount_cents,
                    paid_at=now,
                )
            )
        else:
            self.raise_(
                PaymentFailed(
                    order_id=str(self.id),
                    user_id=str(self.user_id),
                    payment_method=payment_method,
                    failed_at=now,
                )
            )

        self._assert_not_paid_while_pending()

    # -------------------------------------------------------------------
    # Fulfillment
    # -------------------------------------------------------------------
    def advance(self, target_status, actor_role, actor_id=None, reason=None):
        """Move the order to ``target_status`` on behalf of a staff member."""
        if actor_role not in (Role.STAFF, Role.STAFF.value):
            raise Forbidden({"actor_role": ["Only staff can change an order's status"]})

        current = OrderStatus(self.status)
        try:
            target = OrderStatus(target_status)
        except ValueError:
            raise IllegalTransition({"status": [f"Unknown order status {target_status!r}"]}) from None

        if target not in staff_successors(current):
            raise IllegalTransition({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        if target == OrderStatus.READY:
            self.raise_(OrderReady(order_id=str(self.id), actor_id=actor_id, ready_at=now))
        elif target == OrderStatus.COMPLETED:
            self.raise_(OrderCompleted(order_id=str(self.id), actor_id=actor_id, completed_at=now))
        else:
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    previous_status=current.value,
                    payment_status=self.payment_status,
                    actor_id=actor_id,
                    reason=reason,
                    cancelled_at=now,
                )
            )

        self._assert_not_paid_while_pending()

    # -------------------------------------------------------------------
    # @apply methods: rebuild state during event replay
    # -------------------------------------------------------------------
    @apply
    def _on_order_placed(self, event: OrderPlaced):
        self.id = event.order_id
        self.user_id = event.user_id
        self.status = OrderStatus.PENDING.value
        self.payment_status = PaymentStatus.PENDING.value
        self.total_amount_cents = event.total_amount_cents
        self.prep_time_minutes = event.prep_time_minutes
        self.pickup_code = event.pickup_code
        self.created_at = event.placed_at
        self.updated_at = event.placed_at

        lines_data = json.loads(event.lines) if isinstance(event.lines, str) else []
        self.lines = [OrderLine(**line_data) for line_data in lines_data]

    @apply
    def _on_payment_succeeded(self, event: PaymentSucceeded):
        self.payment_status = PaymentStatus.PAID.value
        self.status = OrderStatus.PREPARING.value
        self.payment_method = event.payment_method
        self.paid_at = event.paid_at
        self.updated_at = event.paid_at

    @apply
    def _on_payment_failed(self, event: PaymentFailed):
        self.payment_status = PaymentStatus.FAILED.value
        self.payment_method = event.payment_method
        self.updated_at = event.failed_at

    @apply
    def _on_order_ready(self, event: OrderReady):
        self.status = OrderStatus.READY.value
        self.updated_at = event.ready_at

    @apply
    def _on_order_completed(self, event: OrderCompleted):
        self.status = OrderStatus.COMPLETED.value
        self.updated_at = event.completed_at

    @apply
    def _on_order_cancelled(self, event: OrderCancelled):
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_by = event.actor_id
        self.cancellation_reason = event.reason
        self.updated_at = event.cancelled_at
