"""Tests for core.errors types and boundary mapping."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from core.errors import (
    AppError,
    DatabaseErrorMapper,
    Err,
    ErrorCode,
    Ok,
    not_found,
    required_field,
)


class TestErrorCode:
    @pytest.mark.parametrize("code, status", [
        (ErrorCode.E2000_VALIDATION_GENERIC, 400),
        (ErrorCode.E2021_INVALID_JSON, 400),
        (ErrorCode.E4010_NOT_FOUND, 404),
        (ErrorCode.E4003_TRANSACTION_FAILED, 500),
        (ErrorCode.E4013_CHECK_CONSTRAINT, 500),
        (ErrorCode.E9001_UNEXPECTED_ERROR, 500),
    ])
    def test_http_status(self, code, status):
        assert code.http_status == status


class TestAppError:
    def test_envelope(self):
        error = AppError(code=ErrorCode.E4010_NOT_FOUND, message="NetflixShow not found")
        assert error.to_dict() == {"status": 404, "message": "NetflixShow not found", "data": None}

    def test_with_context_keeps_payload(self):
        error = AppError(code=ErrorCode.E2000_VALIDATION_GENERIC, message="bad", data={"Title": ["x"]})
        updated = error.with_context(origin="api", request_id="r-1")
        assert updated.data == {"Title": ["x"]}
        assert updated.context.origin == "api"
        assert updated.context.correlation_id == error.context.correlation_id

    def test_builders(self):
        assert not_found("NetflixShow", 7).error.message == "NetflixShow not found"
        assert not_found("NetflixShow", 7).error.metadata["entity_id"] == "7"
        assert required_field("NetflixShow").error.message == "NetflixShow must not be null"
        assert required_field("NetflixShow").error.status == 400


class TestResult:
    def test_map_and_unwrap(self):
        assert Ok(2).map(lambda v: v * 3).unwrap() == 6
        err = not_found("NetflixShow")
        assert err.map(lambda v: v * 3) is err
        assert err.unwrap_or(None) is None
        with pytest.raises(ValueError):
            err.unwrap()

    def test_pattern_matching(self):
        match Err(AppError(code=ErrorCode.E4010_NOT_FOUND, message="gone")):
            case Ok(_):
                pytest.fail("expected Err")
            case Err(error):
                assert error.status == 404


class TestDatabaseErrorMapper:
    def test_operational_error_with_action(self):
        exc = OperationalError("SELECT 1", {}, Exception("disk I/O error"))

        error = DatabaseErrorMapper("netflix_shows").map_exception(exc, "get all netflix shows")

        assert error.code is ErrorCode.E4003_TRANSACTION_FAILED
        assert error.message == "Failed to get all netflix shows: disk I/O error"
        assert error.status == 500

    def test_connection_error(self):
        exc = OperationalError("SELECT 1", {}, Exception("could not connect to server"))
        error = DatabaseErrorMapper().map_exception(exc)
        assert error.code is ErrorCode.E4001_CONNECTION_FAILED

    def test_integrity_error(self):
        exc = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: netflix_shows.title"))
        error = DatabaseErrorMapper().map_exception(exc)
        assert error.code is ErrorCode.E4013_CHECK_CONSTRAINT
        assert "NOT NULL constraint failed" in error.message

    def test_unexpected_exception(self):
        error = DatabaseErrorMapper().map_exception(KeyError("BAD"), "create netflix show")
        assert error.code is ErrorCode.E9001_UNEXPECTED_ERROR
        assert error.message == "Failed to create netflix show: 'BAD'"
