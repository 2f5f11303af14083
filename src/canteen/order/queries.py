"""Read side of the order ledger.

Single orders are rebuilt from their event stream; listings come from the
projections, which are kept current in the same unit of work as the events.
The projections are registered without a row limit, so listings are complete.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from canteen.exceptions import NotFound
from canteen.order.order import Order, PaymentStatus
from canteen.projections.order_summary import OrderSummary
from canteen.projections.staff_queue import StaffQueueEntry


def get_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise NotFound({"order_id": [f"Order {order_id} does not exist"]}) from None


def list_user_orders(user_id) -> list[OrderSummary]:
    """A customer's orders, newest first."""
    repo = current_domain.repository_for(OrderSummary)
    return repo._dao.query.filter(user_id=str(user_id)).order_by("-created_at").all().items


def list_all_orders() -> list[OrderSummary]:
    """Every order in the ledger, newest first. Staff only."""
    repo = current_domain.repository_for(OrderSummary)
    return repo._dao.query.order_by("-created_at").all().items


def staff_queue() -> list[StaffQueueEntry]:
    """Paid orders the kitchen still has to prepare or hand over.

    Ordered by payment time, so the order that has waited longest comes first.
    """
    repo = current_domain.repository_for(StaffQueueEntry)
    return repo._dao.query.filter(payment_status=PaymentStatus.PAID.value).order_by("paid_at").all().items


def find_by_pickup_code(code: str) -> Order:
    """Resolve the code a customer shows at the counter to their order."""
    repo = current_domain.repository_for(OrderSummary)
    summaries = repo._dao.query.filter(pickup_code=code.strip().upper()).all().items
    if not summaries:
        raise NotFound({"pickup_code": [f"No order with pickup code {code}"]})
    return get_order(summaries[0].order_id)
