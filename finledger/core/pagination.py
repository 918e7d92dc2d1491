"""Listing & Pagination: offset/limit/sort resolution shared by user and transaction listings.

Invariants:
    - offset defaults to 0; limit defaults to 12 when absent or 0, capped at MAX_LIMIT
    - sort field resolved through an explicit allow-list; unknown names raise InvalidSortFieldError
    - sort order is case-insensitive, defaults to descending
    - Page.total counts matching rows before pagination

Design Decisions:
    - Allow-lists map API names to model attribute names (plain strings): core stays ORM-free,
      repositories turn the attribute name into a column
    - camelCase aliases accepted next to snake_case for clients of the previous API
"""

from dataclasses import dataclass, field
from typing import Generic, Mapping, TypeVar

from finledger.core.domain_types import SortOrder
from finledger.core.errors import InvalidSortFieldError

T = TypeVar("T")

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 12
MAX_LIMIT = 100
DEFAULT_SORT_FIELD = "createdAt"

TRANSACTION_SORT_FIELDS: Mapping[str, str] = {
    "id": "id",
    "amount": "amount",
    "category": "category",
    "type": "type",
    "date": "date",
    "createdAt": "created_at",
    "created_at": "created_at",
}

USER_SORT_FIELDS: Mapping[str, str] = {
    "id": "id",
    "email": "email",
    "firstName": "first_name",
    "first_name": "first_name",
    "lastName": "last_name",
    "last_name": "last_name",
    "createdAt": "created_at",
    "created_at": "created_at",
    "lastSeenAt": "last_seen_at",
    "last_seen_at": "last_seen_at",
}


@dataclass(frozen=True)
class PageRequest:
    """Validated pagination + ordering for a single listing query."""
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT
    sort_attribute: str = "created_at"
    sort_order: SortOrder = SortOrder.DESC


@dataclass
class Page(Generic[T]):
    """One page of results plus the metadata the API returns."""
    items: list[T] = field(default_factory=list)
    total: int = 0
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT

    def meta(self) -> dict:
        return {"total": self.total, "offset": self.offset, "limit": self.limit}


def resolve_sort_field(sort_fields: Mapping[str, str], name: str | None) -> str:
    """Map an API sort field name to a model attribute via the allow-list."""
    key = name or DEFAULT_SORT_FIELD
    try:
        return sort_fields[key]
    except KeyError:
        raise InvalidSortFieldError(key, sorted(sort_fields)) from None


def build_page_request(
    sort_fields: Mapping[str, str],
    offset: int | None = None,
    limit: int | None = None,
    sort_field: str | None = None,
    sort_order: SortOrder | str | None = None,
) -> PageRequest:
    """Normalize raw listing parameters into a PageRequest. Pure, no IO."""
    if not limit or limit < 0:
        limit = DEFAULT_LIMIT
    return PageRequest(
        offset=max(offset or DEFAULT_OFFSET, 0),
        limit=min(limit, MAX_LIMIT),
        sort_attribute=resolve_sort_field(sort_fields, sort_field),
        sort_order=SortOrder.parse(sort_order),
    )
