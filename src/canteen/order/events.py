"""Domain events for the Order aggregate.

All events are versioned, immutable facts representing state changes.
Events are persisted to the event store and used for:
- Rebuilding aggregate state via @apply (event sourcing)
- Updating the order summary and staff queue projections
"""

from protean.fields import DateTime, Identifier, Integer, String, Text

from canteen.domain import canteen


@canteen.event(part_of="Order")
class OrderPlaced:
    """A cart was checked out into a new, unpaid order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    lines = Text(required=True)  # JSON: list of frozen line dicts
    total_amount_cents = Integer(required=True)
    prep_time_minutes = Integer(required=True)
    pickup_code = String(required=True)
    placed_at = DateTime(required=True)


@canteen.event(part_of="Order")
class PaymentSucceeded:
    """Payment was captured; the order moved into the kitchen."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_method = String(required=True)
    amount_cents = Integer(required=True)
    paid_at = DateTime(required=True)


@canteen.event(part_of="Order")
class PaymentFailed:
    """Payment was declined; the order stays pending and invisible to staff."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    payment_method = String(required=True)
    failed_at = DateTime(required=True)


@canteen.event(part_of="Order")
class OrderReady:
    """The kitchen finished preparing the order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    actor_id = Identifier()
    ready_at = DateTime(required=True)


@canteen.event(part_of="Order")
class OrderCompleted:
    """The customer collected the order."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    actor_id = Identifier()
    completed_at = DateTime(required=True)


@canteen.event(part_of="Order")
class OrderCancelled:
    """Staff cancelled the order before it was ready."""

    __version__ = "v1"

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    payment_status = String(required=True)
    actor_id = Identifier()
    reason = String(max_length=500)
    cancelled_at = DateTime(required=True)
