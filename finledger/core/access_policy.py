"""Access Policy: the single ownership rule for per-user resources.

Invariants:
    - authorize() raises UnauthorizedAccessError when resource.user_id != principal.id
    - Callers check existence first, then ownership (NotFound and Unauthorized stay distinct)
    - require_admin() raises AdminRequiredError for non-admin principals

Design Decisions:
    - Principal is an explicit value threaded into every service call, not request-scoped magic
    - OwnedResource Protocol: any object with id/user_id can be authorized (ORM row or a plain test double)
"""

from dataclasses import dataclass
from typing import Protocol

from finledger.core.domain_types import UserId
from finledger.core.errors import (
    AdminRequiredError, ErrorContext, UnauthorizedAccessError,
)


@dataclass(frozen=True)
class Principal:
    """The authenticated identity making the current request."""
    id: UserId
    is_admin: bool = False


class OwnedResource(Protocol):
    id: int
    user_id: int


def authorize(
    resource: OwnedResource, principal: Principal, resource_type: str = "Transaction",
) -> None:
    """Fail unless the principal owns the resource."""
    if resource.user_id != principal.id:
        raise UnauthorizedAccessError(
            resource_type, resource.id,
            ErrorContext(user_id=principal.id),
        )


def require_admin(principal: Principal) -> None:
    """Fail unless the principal is an administrator."""
    if not principal.is_admin:
        raise AdminRequiredError(ErrorContext(user_id=principal.id))
