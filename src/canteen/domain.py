"""Canteen bounded context: shopping carts, the order ledger, the payment gate
and the kitchen fulfillment pipeline.

Carts are standard CQRS aggregates; orders are event sourced so that every
payment and status change is an immutable fact.
"""

from protean.domain import Domain

from canteen.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
canteen = Domain(name="canteen")
