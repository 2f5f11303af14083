"""Order summary: listing and history view for customers and staff."""

import json

from protean.core.projector import on
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.order.events import (
    OrderCancelled,
    OrderCompleted,
    OrderPlaced,
    OrderReady,
    PaymentFailed,
    PaymentSucceeded,
)
from canteen.order.order import Order, OrderStatus, PaymentStatus


@canteen.projection(limit=-1)
class OrderSummary:
    order_id = Identifier(identifier=True, required=True)
    user_id = Identifier(required=True)
    status = String(required=True)
    payment_status = String(required=True)
    total_amount_cents = Integer(default=0)
    item_count = Integer(default=0)
    prep_time_minutes = Integer(default=0)
    pickup_code = String()
    created_at = DateTime()
    updated_at = DateTime()


@canteen.projector(projector_for=OrderSummary, aggregates=[Order])
class OrderSummaryProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        lines = json.loads(event.lines) if isinstance(event.lines, str) else []
        current_domain.repository_for(OrderSummary).add(
            OrderSummary(
                order_id=event.order_id,
                user_id=event.user_id,
                status=OrderStatus.PENDING.value,
                payment_status=PaymentStatus.PENDING.value,
                total_amount_cents=event.total_amount_cents,
                item_count=sum(line["quantity"] for line in lines),
                prep_time_minutes=event.prep_time_minutes,
                pickup_code=event.pickup_code,
                created_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    def _update(self, order_id, updated_at=None, **changes):
        repo = current_domain.repository_for(OrderSummary)
        summary = repo.get(order_id)
        for attr, value in changes.items():
            setattr(summary, attr, value)
        if updated_at:
            summary.updated_at = updated_at
        repo.add(summary)

    @on(PaymentSucceeded)
    def on_payment_succeeded(self, event):
        self._update(
            event.order_id,
            event.paid_at,
            status=OrderStatus.PREPARING.value,
            payment_status=PaymentStatus.PAID.value,
        )

    @on(PaymentFailed)
    def on_payment_failed(self, event):
        self._update(event.order_id, event.failed_at, payment_status=PaymentStatus.FAILED.value)

    @on(OrderReady)
    def on_order_ready(self, event):
        self._update(event.order_id, event.ready_at, status=OrderStatus.READY.value)

    @on(OrderCompleted)
    def on_order_completed(self, event):
        self._update(event.order_id, event.completed_at, status=OrderStatus.COMPLETED.value)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update(event.order_id, event.cancelled_at, status=OrderStatus.CANCELLED.value)
