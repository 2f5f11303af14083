"""Application tests for the payment gate."""

import pytest
from canteen.cart.checkout import Checkout
from canteen.cart.items import AddItemToCart
from canteen.exceptions import InvalidState
from canteen.identity import Role
from canteen.order.fulfillment import AdvanceOrderStatus
from canteen.order.order import OrderStatus, PaymentStatus
from canteen.order.payment import ResolvePayment
from canteen.order.queries import get_order
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _place_order(user_id="user-1"):
    current_domain.process(AddItemToCart(user_id=user_id, item_id="1"), asynchronous=False)
    return current_domain.process(Checkout(user_id=user_id), asynchronous=False)


def _pay(order_id, outcome="success", method="cash"):
    return current_domain.process(
        ResolvePayment(order_id=order_id, payment_method=method, outcome=outcome), asynchronous=False
    )


def _stored_event_types(order_id):
    messages = current_domain.event_store.store.read(f"canteen::order-{order_id}")
    return [m.metadata.headers.type for m in messages]


class TestResolvePayment:
    def test_success(self):
        order_id = _place_order()
        assert _pay(order_id) == order_id

        order = get_order(order_id)
        assert order.status == OrderStatus.PREPARING.value
        assert order.payment_status == PaymentStatus.PAID.value
        assert order.payment_method == "cash"

    def test_failure(self):
        order_id = _place_order()
        _pay(order_id, outcome="failure", method="card")

        order = get_order(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.payment_status == PaymentStatus.FAILED.value

    def test_second_resolution_rejected(self):
        order_id = _place_order()
        _pay(order_id)
        with pytest.raises(InvalidState):
            _pay(order_id)

        assert _stored_event_types(order_id).count("Canteen.PaymentSucceeded.v1") == 1

    def test_failed_payment_cannot_be_retried(self):
        order_id = _place_order()
        _pay(order_id, outcome="failure")
        with pytest.raises(InvalidState):
            _pay(order_id)
        assert get_order(order_id).payment_status == PaymentStatus.FAILED.value

    def test_cancelled_order_cannot_be_paid(self):
        order_id = _place_order()
        current_domain.process(
            AdvanceOrderStatus(order_id=order_id, target_status="cancelled", actor_role=Role.STAFF.value),
            asynchronous=False,
        )
        with pytest.raises(InvalidState):
            _pay(order_id)

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _pay("does-not-exist")

    def test_unknown_outcome(self):
        order_id = _place_order()
        with pytest.raises(ValidationError):
            _pay(order_id, outcome="maybe")
