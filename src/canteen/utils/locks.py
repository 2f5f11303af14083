"""Per-aggregate serialization of commands.

Commands that touch the same cart or the same order run one at a time; the
lock is held until the unit of work has committed. Commands on different
carts or orders do not wait for each other.
"""

import threading
from contextlib import contextmanager

from protean.utils.globals import current_domain

# Per-user records, keyed by the aggregate a command belongs to
_USER_KEY_PREFIXES = {"ShoppingCart": "cart", "FavoriteList": "favorites"}

_registry_lock = threading.Lock()
# key -> [lock, callers holding or waiting on it]; dropped when nobody is
_locks: dict[str, list] = {}


def lock_key(command) -> str:
    """Order commands lock the order; the rest lock the user's cart or favorites."""
    order_id = getattr(command, "order_id", None)
    if order_id:
        return f"order:{order_id}"
    part_of = command.meta_.part_of
    prefix = _USER_KEY_PREFIXES[getattr(part_of, "__name__", part_of)]
    return f"{prefix}:{command.user_id}"


@contextmanager
def serialized(key: str):
    with _registry_lock:
        entry = _locks.setdefault(key, [threading.Lock(), 0])
        entry[1] += 1
    try:
        with entry[0]:
            yield
    finally:
        with _registry_lock:
            entry[1] -= 1
            if not entry[1]:
                del _locks[key]


def process_serialized(command):
    """Process ``command`` synchronously while holding its aggregate's lock."""
    with serialized(lock_key(command)):
        return current_domain.process(command, asynchronous=False)
