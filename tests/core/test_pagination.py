"""Pagination: defaults, limit handling, and the sort-field allow-list."""

import pytest

from finledger.core.domain_types import SortOrder
from finledger.core.errors import InvalidSortFieldError
from finledger.core.pagination import (
    DEFAULT_LIMIT, MAX_LIMIT, TRANSACTION_SORT_FIELDS, USER_SORT_FIELDS,
    Page, build_page_request, resolve_sort_field,
)


def test_defaults_when_nothing_supplied():
    page = build_page_request(TRANSACTION_SORT_FIELDS)
    assert page.offset == 0
    assert page.limit == DEFAULT_LIMIT == 12
    assert page.sort_attribute == "created_at"
    assert page.sort_order is SortOrder.DESC


def test_zero_limit_means_default():
    assert build_page_request(TRANSACTION_SORT_FIELDS, limit=0).limit == DEFAULT_LIMIT


def test_limit_is_capped():
    assert build_page_request(TRANSACTION_SORT_FIELDS, limit=10_000).limit == MAX_LIMIT


def test_negative_offset_clamped_to_zero():
    assert build_page_request(TRANSACTION_SORT_FIELDS, offset=-5).offset == 0


@pytest.mark.parametrize("name,attribute", [
    ("createdAt", "created_at"),
    ("created_at", "created_at"),
    ("amount", "amount"),
    ("date", "date"),
])
def test_transaction_sort_fields_resolve_to_attributes(name, attribute):
    assert resolve_sort_field(TRANSACTION_SORT_FIELDS, name) == attribute


def test_unknown_sort_field_is_rejected_not_passed_through():
    with pytest.raises(InvalidSortFieldError) as exc_info:
        build_page_request(TRANSACTION_SORT_FIELDS, sort_field="user_id; DROP TABLE users")
    assert exc_info.value.http_status == 400
    assert "amount" in exc_info.value.allowed


def test_owner_column_is_not_sortable():
    with pytest.raises(InvalidSortFieldError):
        resolve_sort_field(TRANSACTION_SORT_FIELDS, "user_id")


def test_password_hash_is_not_a_user_sort_field():
    with pytest.raises(InvalidSortFieldError):
        resolve_sort_field(USER_SORT_FIELDS, "password_hash")


def test_mixed_case_sort_order_accepted():
    page = build_page_request(USER_SORT_FIELDS, sort_field="lastSeenAt", sort_order="AsC")
    assert page.sort_attribute == "last_seen_at"
    assert page.sort_order is SortOrder.ASC


def test_page_meta_reports_total_offset_limit():
    page = Page(items=[1, 2], total=30, offset=12, limit=12)
    assert page.meta() == {"total": 30, "offset": 12, "limit": 12}
