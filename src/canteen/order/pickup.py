"""Pickup codes: short opaque tokens customers show at the counter."""

import secrets

from canteen.exceptions import PickupCodesExhausted

# No 0/O, 1/I/L: codes are read aloud and typed by staff
PICKUP_ALPHABET = "23456789ABCDEFGHJKMNPQRSTUVWXYZ"
PICKUP_CODE_LENGTH = 8
MAX_ATTEMPTS = 10


def generate_pickup_code(length: int = PICKUP_CODE_LENGTH) -> str:
    return "".join(secrets.choice(PICKUP_ALPHABET) for _ in range(length))


def unique_pickup_code(is_taken) -> str:
    """Draw codes until ``is_taken(code)`` is False."""
    for _ in range(MAX_ATTEMPTS):
        code = generate_pickup_code()
        if not is_taken(code):
            return code
    raise PickupCodesExhausted(
        {"pickup_code": [f"Could not draw an unused pickup code in {MAX_ATTEMPTS} attempts"]}
    )
