"""Route gating: decide allow or redirect from the request identity and the route's policy."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from authgate.schemas.auth import Role, UserRecord


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class DenyRedirect:
    target: str


Decision = Allow | DenyRedirect


class Access(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class RequireRoles:
    roles: frozenset[Role]


RoutePolicy = Access | RequireRoles


def roles(*names: str | Role) -> frozenset[Role]:
    """
    Build a role set for a route policy.

    Unknown names raise ValueError here, when the route table is defined,
    rather than silently denying every request later.
    """
    out: set[Role] = set()
    for name in names:
        if isinstance(name, Role):
            out.add(name)
            continue
        try:
            out.add(Role(str(name).strip().upper()))
        except ValueError:
            valid = ", ".join(r.value for r in Role)
            raise ValueError(f"Unknown role {name!r}; expected one of: {valid}") from None
    if not out:
        raise ValueError("A role policy needs at least one role")
    return frozenset(out)


def require_roles(*names: str | Role) -> RequireRoles:
    return RequireRoles(roles(*names))


class AccessGuard:
    """Flat two-step check: is there an identity, and is its role in the allowed set."""

    def __init__(self, login_page: str = "/login", home_page: str = "/") -> None:
        self.login_page = login_page
        self.home_page = home_page

    def require_authenticated(self, identity: UserRecord | None) -> Decision:
        if identity is None:
            return DenyRedirect(self.login_page)
        return Allow()

    def require_role(self, identity: UserRecord | None, allowed_roles: Iterable[Role]) -> Decision:
        if identity is None:
            return DenyRedirect(self.login_page)
        if identity.role not in frozenset(allowed_roles):
            return DenyRedirect(self.home_page)
        return Allow()

    def check(self, policy: RoutePolicy, identity: UserRecord | None) -> Decision:
        if policy is Access.PUBLIC:
            return Allow()
        if policy is Access.AUTHENTICATED:
            return self.require_authenticated(identity)
        return self.require_role(identity, policy.roles)
