"""Error hierarchy: codes, statuses, and the REST envelope."""

from finledger.core.errors import (
    DatabaseError, EmailTakenError, ErrorCategory, FinLedgerError,
    IncorrectPasswordError, InvalidCredentialsError, ResourceNotFoundError,
)


def test_not_found_envelope():
    err = ResourceNotFoundError("Transaction", 99)
    body = err.to_response()["error"]
    assert err.http_status == 404
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == "resource_not_found"
    assert body["message"] == "Transaction '99' not found"
    assert body["context"]["resource_id"] == 99


def test_email_taken_is_a_conflict():
    err = EmailTakenError("a@example.com")
    assert err.category is ErrorCategory.CONFLICT
    assert err.http_status == 409


def test_password_errors_are_distinct_codes():
    assert IncorrectPasswordError().code == "PASSWORD_INCORRECT"
    assert InvalidCredentialsError().code == "INVALID_CREDENTIALS"


def test_database_error_is_critical_and_opaque():
    err = DatabaseError("Connection or operational error", "execute")
    assert isinstance(err, FinLedgerError)
    assert err.http_status == 503
    assert err.to_response()["error"]["severity"] == "critical"
