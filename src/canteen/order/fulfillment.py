"""Fulfillment: staff moving an order through the kitchen."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.order.order import Order

logger = structlog.get_logger(__name__)


@canteen.command(part_of="Order")
class AdvanceOrderStatus:
    order_id = Identifier(required=True)
    target_status = String(required=True, max_length=20)
    actor_role = String(required=True, max_length=20)
    actor_id = Identifier()
    reason = String(max_length=500)


@canteen.command_handler(part_of=Order)
class AdvanceOrderStatusHandler:
    @handle(AdvanceOrderStatus)
    def advance_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous_status = order.status

        order.advance(
            target_status=command.target_status,
            actor_role=command.actor_role,
            actor_id=command.actor_id,
            reason=command.reason,
        )
        repo.add(order)

        logger.info(
            "Order status changed",
            order_id=str(command.order_id),
            from_status=previous_status,
            to_status=order.status,
            actor_id=command.actor_id,
        )
        return str(order.id)
