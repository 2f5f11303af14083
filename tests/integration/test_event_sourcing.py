"""Integration tests for the order event stream and aggregate replay."""

import pytest
from canteen.cart.checkout import Checkout
from canteen.cart.items import AddItemToCart
from canteen.exceptions import IllegalTransition
from canteen.order.fulfillment import AdvanceOrderStatus
from canteen.order.order import Order
from canteen.order.payment import ResolvePayment
from protean import current_domain


def _place_order():
    for item_id in ("1", "1", "5"):
        current_domain.process(AddItemToCart(user_id="user-1", item_id=item_id), asynchronous=False)
    return current_domain.process(Checkout(user_id="user-1"), asynchronous=False)


def _stream(order_id):
    return current_domain.event_store.store.read(f"canteen::order-{order_id}")


class TestEventStorePersistence:
    def test_order_placed_stored(self):
        order_id = _place_order()
        messages = _stream(order_id)
        assert len(messages) == 1
        assert messages[0].metadata.headers.type == "Canteen.OrderPlaced.v1"

    def test_lifecycle_events_accumulate(self):
        order_id = _place_order()
        current_domain.process(
            ResolvePayment(order_id=order_id, payment_method="cash", outcome="success"), asynchronous=False
        )
        current_domain.process(
            AdvanceOrderStatus(order_id=order_id, target_status="ready", actor_role="staff"), asynchronous=False
        )
        current_domain.process(
            AdvanceOrderStatus(order_id=order_id, target_status="completed", actor_role="staff"), asynchronous=False
        )

        assert [m.metadata.headers.type for m in _stream(order_id)] == [
            "Canteen.OrderPlaced.v1",
            "Canteen.PaymentSucceeded.v1",
            "Canteen.OrderReady.v1",
            "Canteen.OrderCompleted.v1",
        ]

    def test_rejected_command_stores_nothing(self):
        order_id = _place_order()
        with pytest.raises(IllegalTransition):
            current_domain.process(
                AdvanceOrderStatus(order_id=order_id, target_status="completed", actor_role="staff"),
                asynchronous=False,
            )
        assert len(_stream(order_id)) == 1


class TestEventReplayRoundTrip:
    def test_aggregate_reconstructed_from_events(self):
        order_id = _place_order()
        current_domain.process(
            ResolvePayment(order_id=order_id, payment_method="card", outcome="success"), asynchronous=False
        )

        order = current_domain.repository_for(Order).get(order_id)
        assert order.id == order_id
        assert order.status == "preparing"
        assert order.payment_status == "paid"
        assert order.payment_method == "card"
        assert order.total_amount_cents == 1997
        assert order.prep_time_minutes == 10
        assert [line.quantity for line in order.lines] == [2, 1]

    def test_line_identities_survive_replay(self):
        order_id = _place_order()
        first = current_domain.repository_for(Order).get(order_id)
        second = current_domain.repository_for(Order).get(order_id)
        assert [line.id for line in first.lines] == [line.id for line in second.lines]


class TestCartEvents:
    def test_cart_actions_are_logged(self):
        order_id = _place_order()

        messages = current_domain.event_store.store.read("canteen::shopping_cart")
        types = [m.metadata.headers.type for m in messages if m.metadata and m.metadata.headers]
        assert types.count("Canteen.CartItemAdded.v1") == 3
        assert types[-1] == "Canteen.CartCheckedOut.v1"

        checked_out = [m for m in messages if m.metadata.headers.type == "Canteen.CartCheckedOut.v1"][0]
        assert checked_out.data["order_id"] == order_id
