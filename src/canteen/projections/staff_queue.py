"""Staff queue: the kitchen's work list of paid, unfinished orders.

Entries are tracked from the moment an order is placed so that the queue
needs nothing beyond the events themselves, but only entries whose payment
succeeded are visible (see ``canteen.order.queries.staff_queue``). A failed
payment, a collection or a cancellation drops the entry.
"""

import json

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer, String, Text
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
class StaffQueueEntry:
    order_id = Identifier(identifier=True, required=True)
    user_id = Identifier(required=True)
    status = String(required=True)
    payment_status = String(required=True)
    pickup_code = String()
    prep_time_minutes = Integer(default=0)
    item_count = Integer(default=0)
    lines = Text()  # JSON: list of {item_id, name, quantity}
    placed_at = DateTime()
    paid_at = DateTime()
    updated_at = DateTime()


@canteen.projector(projector_for=StaffQueueEntry, aggregates=[Order])
class StaffQueueProjector:
    @on(OrderPlaced)
    def on_order_placed(self, event):
        lines = json.loads(event.lines) if isinstance(event.lines, str) else []
        current_domain.repository_for(StaffQueueEntry).add(
            StaffQueueEntry(
                order_id=event.order_id,
                user_id=event.user_id,
                status=OrderStatus.PENDING.value,
                payment_status=PaymentStatus.PENDING.value,
                pickup_code=event.pickup_code,
                prep_time_minutes=event.prep_time_minutes,
                item_count=sum(line["quantity"] for line in lines),
                lines=json.dumps(
                    [{"item_id": line["item_id"], "name": line["name"], "quantity": line["quantity"]} for line in lines]
                ),
                placed_at=event.placed_at,
                updated_at=event.placed_at,
            )
        )

    @on(PaymentSucceeded)
    def on_payment_succeeded(self, event):
        repo = current_domain.repository_for(StaffQueueEntry)
        entry = repo.get(event.order_id)
        entry.status = OrderStatus.PREPARING.value
        entry.payment_status = PaymentStatus.PAID.value
        entry.paid_at = event.paid_at
        entry.updated_at = event.paid_at
        repo.add(entry)

    @on(PaymentFailed)
    def on_payment_failed(self, event):
        self._drop(event.order_id)

    @on(OrderReady)
    def on_order_ready(self, event):
        repo = current_domain.repository_for(StaffQueueEntry)
        entry = repo.get(event.order_id)
        entry.status = OrderStatus.READY.value
        entry.updated_at = event.ready_at
        repo.add(entry)

    @on(OrderCompleted)
    def on_order_completed(self, event):
        self._drop(event.order_id)

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._drop(event.order_id)

    @staticmethod
    def _drop(order_id):
        repo = current_domain.repository_for(StaffQueueEntry)
        try:
            entry = repo.get(order_id)
        except ObjectNotFoundError:
            return
        repo._dao.delete(entry)
