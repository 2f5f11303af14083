"""BDD tests for the fulfillment state machine."""

from canteen.identity import Role
from canteen.order.fulfillment import AdvanceOrderStatus
from canteen.order.queries import get_order
from protean import current_domain
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/order_state_machine.feature")


@when(parsers.cfparse('staff cancels the order because "{reason}"'))
def _(context, reason):
    current_domain.process(
        AdvanceOrderStatus(
            order_id=context["order_id"],
            target_status="cancelled",
            actor_role=Role.STAFF.value,
            actor_id="s-1",
            reason=reason,
        ),
        asynchronous=False,
    )


@then(parsers.cfparse("the order prep time is {minutes:d} minutes"))
def _(context, minutes):
    assert get_order(context["order_id"]).prep_time_minutes == minutes
