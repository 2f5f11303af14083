"""Payment gate: recording the outcome of an order's payment.

The outcome is supplied by the caller; no payment provider is contacted.
A success moves the order into the kitchen, a failure leaves it pending and
unpaid for good.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.order.order import Order, PaymentOutcome

logger = structlog.get_logger(__name__)


@canteen.command(part_of="Order")
class ResolvePayment:
    order_id = Identifier(required=True)
    payment_method = String(required=True, max_length=50)
    outcome = String(required=True, choices=PaymentOutcome)


@canteen.command_handler(part_of=Order)
class ResolvePaymentHandler:
    @handle(ResolvePayment)
    def resolve_payment(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.resolve_payment(payment_method=command.payment_method, outcome=command.outcome)
        repo.add(order)

        logger.info(
            "Payment resolved",
            order_id=str(command.order_id),
            outcome=command.outcome,
            payment_status=order.payment_status,
        )
        return str(order.id)
