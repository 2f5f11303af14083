"""Identity provider factory.

Provides get_identity() / set_identity() to swap implementations.
"""

from canteen.identity.memory_adapter import InMemoryIdentity
from canteen.identity.port import Caller, IdentityProvider, Role

__all__ = ["Caller", "IdentityProvider", "InMemoryIdentity", "Role", "get_identity", "reset_identity", "set_identity"]

_current_identity: IdentityProvider | None = None


def get_identity() -> IdentityProvider:
    """Return the current identity provider. Defaults to InMemoryIdentity."""
    global _current_identity
    if _current_identity is None:
        _current_identity = InMemoryIdentity()
    return _current_identity


def set_identity(provider: IdentityProvider) -> None:
    """Override the active identity provider (useful for tests)."""
    global _current_identity
    _current_identity = provider


def reset_identity() -> None:
    """Reset to the default identity provider."""
    global _current_identity
    _current_identity = None
