"""In-memory identity provider for development and testing.

Maps bearer tokens to callers. Ships with one demo customer and one demo
staff member.
"""

from canteen.exceptions import DependencyUnavailable, Unauthenticated
from canteen.identity.port import Caller, IdentityProvider, Role

DEFAULT_TOKENS = {
    "customer-token": Caller(user_id="1", role=Role.CUSTOMER),
    "staff-token": Caller(user_id="2", role=Role.STAFF),
}


class InMemoryIdentity(IdentityProvider):
    """Token table identity provider."""

    def __init__(self, tokens=None) -> None:
        self._tokens: dict[str, Caller] = dict(DEFAULT_TOKENS if tokens is None else tokens)
        self.reachable: bool = True

    def configure(self, reachable: bool) -> None:
        self.reachable = reachable

    def register(self, token: str, user_id: str, role: Role) -> Caller:
        caller = Caller(user_id=user_id, role=role)
        self._tokens[token] = caller
        return caller

    def resolve_caller(self, credential: str) -> Caller:
        if not self.reachable:
            raise DependencyUnavailable({"identity": ["Identity service is unreachable"]})

        caller = self._tokens.get(credential or "")
        if caller is None:
            raise Unauthenticated({"credential": ["Unknown or expired credential"]})
        return caller
