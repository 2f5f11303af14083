"""Application tests for order lookups and listings."""

import pytest
from canteen.cart.checkout import Checkout
from canteen.cart.items import AddItemToCart
from canteen.exceptions import NotFound
from canteen.order.fulfillment import AdvanceOrderStatus
from canteen.order.payment import ResolvePayment
from canteen.order.queries import (
    find_by_pickup_code,
    get_order,
    list_all_orders,
    list_user_orders,
    staff_queue,
)
from protean import current_domain


def _place_order(user_id="user-1", item_id="1"):
    current_domain.process(AddItemToCart(user_id=user_id, item_id=item_id), asynchronous=False)
    return current_domain.process(Checkout(user_id=user_id), asynchronous=False)


def _pay(order_id, outcome="success"):
    current_domain.process(
        ResolvePayment(order_id=order_id, payment_method="cash", outcome=outcome), asynchronous=False
    )


def _advance(order_id, target):
    current_domain.process(
        AdvanceOrderStatus(order_id=order_id, target_status=target, actor_role="staff"), asynchronous=False
    )


class TestGetOrder:
    def test_found(self):
        order_id = _place_order()
        assert str(get_order(order_id).id) == order_id

    def test_not_found(self):
        with pytest.raises(NotFound):
            get_order("missing")


class TestListings:
    def test_user_orders_newest_first(self):
        first = _place_order()
        second = _place_order()
        third = _place_order()
        assert [summary.order_id for summary in list_user_orders("user-1")] == [third, second, first]

    def test_user_orders_only_their_own(self):
        mine = _place_order(user_id="user-1")
        _place_order(user_id="user-2")
        assert [summary.order_id for summary in list_user_orders("user-1")] == [mine]

    def test_all_orders(self):
        first = _place_order(user_id="user-1")
        second = _place_order(user_id="user-2")
        assert [summary.order_id for summary in list_all_orders()] == [second, first]

    def test_summary_tracks_status(self):
        order_id = _place_order()
        _pay(order_id)
        _advance(order_id, "ready")
        summary = list_user_orders("user-1")[0]
        assert summary.status == "ready"
        assert summary.payment_status == "paid"
        assert summary.total_amount_cents == 799


class TestStaffQueue:
    def test_unpaid_and_failed_orders_hidden(self):
        _place_order(user_id="user-1")
        failed = _place_order(user_id="user-2")
        _pay(failed, outcome="failure")
        assert staff_queue() == []

    def test_paid_orders_oldest_first(self):
        first = _place_order(user_id="user-1")
        second = _place_order(user_id="user-2")
        _pay(second)
        _pay(first)
        assert [entry.order_id for entry in staff_queue()] == [second, first]

    def test_ready_orders_stay_queued(self):
        order_id = _place_order()
        _pay(order_id)
        _advance(order_id, "ready")
        assert [entry.status for entry in staff_queue()] == ["ready"]

    def test_completed_and_cancelled_leave(self):
        done = _place_order(user_id="user-1")
        dropped = _place_order(user_id="user-2")
        kept = _place_order(user_id="user-3")
        for order_id in (done, dropped, kept):
            _pay(order_id)
        _advance(done, "ready")
        _advance(done, "completed")
        _advance(dropped, "cancelled")

        assert [entry.order_id for entry in staff_queue()] == [kept]


class TestPickupCode:
    def test_resolves_order(self):
        order_id = _place_order()
        code = get_order(order_id).pickup_code
        assert str(find_by_pickup_code(code).id) == order_id

    def test_case_and_whitespace_insensitive(self):
        order_id = _place_order()
        code = get_order(order_id).pickup_code
        assert str(find_by_pickup_code(f" {code.lower()} ").id) == order_id

    def test_unknown_code(self):
        with pytest.raises(NotFound):
            find_by_pickup_code("ZZZZZZZZ")


@pytest.mark.slow
class TestBusyLedger:
    ORDER_COUNT = 120

    @pytest.fixture
    def order_ids(self):
        order_ids = [_place_order(user_id="user-7") for _ in range(self.ORDER_COUNT)]
        for order_id in order_ids:
            _pay(order_id)
        return order_ids

    def test_user_listing_is_complete_and_newest_first(self, order_ids):
        listed = [summary.order_id for summary in list_user_orders("user-7")]
        assert listed == list(reversed(order_ids))

    def test_all_orders_listing_is_complete(self, order_ids):
        listed = [summary.order_id for summary in list_all_orders()]
        assert len(listed) == self.ORDER_COUNT
        assert listed[0] == order_ids[-1]

    def test_staff_queue_holds_every_paid_order(self, order_ids):
        assert [entry.order_id for entry in staff_queue()] == order_ids

    def test_pickup_lookup_finds_the_newest_order(self, order_ids):
        code = get_order(order_ids[-1]).pickup_code
        assert str(find_by_pickup_code(code).id) == order_ids[-1]
