"""
Per-route access policy descriptors.

Each route declares a RoutePolicy value next to its registration; the guard
in ``guards.authorize`` enforces it. Policies are plain frozen values so they
can be inspected and tested without running a request.
"""

import enum
from dataclasses import dataclass
from typing import FrozenSet, Optional

from cort_backend.app.models.enums import UserRole


class OwnershipLevel(str, enum.Enum):
    """
    Instance-level access rule for company-scoped routes.
    
    OWN_ONLY: caller's company_id must equal the requested company id
              (SUPER_ADMIN is always allowed)
    ANY: any caller that passed the role check
    """
    OWN_ONLY = "OWN_ONLY"
    ANY = "ANY"


@dataclass(frozen=True)
class RoutePolicy:
    """
    Access policy of a single operation.
    
    Attributes:
        roles: Roles allowed to invoke the operation. Membership is explicit;
               an empty set admits any authenticated user.
        public: Skip authentication entirely (no user context).
        ownership: Optional instance rule checked against a path parameter.
        resource_id_param: Path parameter holding the company id.
    """
    roles: FrozenSet[UserRole] = frozenset()
    public: bool = False
    ownership: Optional[OwnershipLevel] = None
    resource_id_param: str = "id"

    @classmethod
    def allow(cls, *roles: UserRole, ownership: Optional[OwnershipLevel] = None) -> "RoutePolicy":
        return cls(roles=frozenset(roles), ownership=ownership)

    def permits_role(self, role: UserRole) -> bool:
        return not self.roles or role in self.roles


PUBLIC = RoutePolicy(public=True)
AUTHENTICATED = RoutePolicy()
