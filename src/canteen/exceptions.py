"""Error taxonomy for the canteen domain.

Every error carries a ``messages`` dict of ``{field: [message, ...]}`` so the
API can render any of them the same way. Rule violations extend protean's
``ValidationError``, which makes the enclosing unit of work roll back.
"""

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError


class NotFound(ObjectNotFoundError):
    """An order, cart item or catalog item id is unknown."""


class ItemUnavailable(ValidationError):
    """A catalog item cannot be ordered right now."""


class EmptyCart(ValidationError):
    """Checkout was attempted on a cart without lines."""


class InvalidState(ValidationError):
    """The operation is not valid for the current payment or order status."""


class IllegalTransition(ValidationError):
    """The requested status is not a direct successor in the fulfillment graph."""


class Forbidden(ProteanException):
    """The caller's role does not allow the operation."""


class Unauthenticated(ProteanException):
    """The caller credential could not be resolved to a user."""


class DependencyUnavailable(ProteanException):
    """A collaborator (catalog, identity) timed out or is unreachable."""


class PickupCodesExhausted(ProteanException):
    """No unused pickup code could be drawn for a new order."""


# Error kind names exposed to API clients, most specific first.
ERROR_KINDS = (
    (NotFound, "NotFound"),
    (ObjectNotFoundError, "NotFound"),
    (ItemUnavailable, "ItemUnavailable"),
    (EmptyCart, "EmptyCart"),
    (InvalidState, "InvalidState"),
    (IllegalTransition, "IllegalTransition"),
    (Forbidden, "Forbidden"),
    (Unauthenticated, "Unauthenticated"),
    (DependencyUnavailable, "DependencyUnavailable"),
    (PickupCodesExhausted, "PickupCodesExhausted"),
    (ValidationError, "ValidationError"),
)


def error_kind(exc: Exception) -> str:
    """Return the public error kind name for an exception."""
    for exc_cls, name in ERROR_KINDS:
        if isinstance(exc, exc_cls):
            return name
    return type(exc).__name__


def error_messages(exc: Exception) -> dict:
    """Return the ``{field: [message]}`` payload of an exception.

    Validation errors keep their payload in ``messages``; the plain protean
    exceptions (``ObjectNotFoundError`` and friends) keep it in ``args``.
    """
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    if isinstance(messages, dict):
        return messages
    if messages is not None:
        return {"_error": [str(messages)]}
    return {"_error": [str(exc) or type(exc).__name__]}
