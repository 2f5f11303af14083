"""Identity port (abstract interface).

Resolves an opaque caller credential to a user id and a role. The ordering
core trusts the result and never inspects credentials itself.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    CUSTOMER = "customer"
    STAFF = "staff"


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: Role

    @property
    def is_staff(self) -> bool:
        return self.role == Role.STAFF


class IdentityProvider(ABC):
    """Abstract identity resolution."""

    @abstractmethod
    def resolve_caller(self, credential: str) -> Caller:
        """Return the caller behind ``credential``.

        Raises:
            Unauthenticated: the credential is unknown or malformed.
            DependencyUnavailable: the identity service could not be reached.
        """
        ...
