"""Tests for the domain exception hierarchy."""

from __future__ import annotations

import pytest

from fitfusion.foundation.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CascadeError,
    DomainError,
    ExecutorError,
    IdentityDeletionFailed,
    PermissionDeniedError,
    PlannerError,
    ValidationError,
)


@pytest.mark.unit
class TestDomainError:
    def test_message_and_code(self) -> None:
        err = DomainError("Something failed")
        assert err.message == "Something failed"
        assert err.error_code == "DOMAIN_ERROR"
        assert err.context == {}

    def test_str_with_context(self) -> None:
        err = DomainError("Failed", context={"owner_id": "U1"})
        assert str(err) == "Failed (owner_id=U1)"

    def test_repr(self) -> None:
        err = DomainError("Failed", context={"a": "1"})
        assert repr(err) == "DomainError('Failed', context={'a': '1'})"


@pytest.mark.unit
class TestCallerErrors:
    def test_authentication_default_message(self) -> None:
        err = AuthenticationError()
        assert err.error_code == "UNAUTHENTICATED"
        assert err.message == "User must be authenticated"

    def test_validation_error_names_field(self) -> None:
        err = ValidationError("clientId", "clientId is required")
        assert err.error_code == "INVALID_ARGUMENT"
        assert err.field == "clientId"
        assert err.message == "Invalid argument 'clientId': clientId is required"
        assert err.context == {"field": "clientId", "reason": "clientId is required"}

    def test_permission_denied_carries_reason(self) -> None:
        err = PermissionDeniedError("not-your-client", caller_id="T2")
        assert isinstance(err, AuthorizationError)
        assert err.error_code == "PERMISSION_DENIED"
        assert err.reason == "not-your-client"
        assert err.context == {"reason": "not-your-client", "caller_id": "T2"}


@pytest.mark.unit
class TestCascadeErrors:
    @pytest.mark.parametrize("cls", [PlannerError, ExecutorError])
    def test_subclasses_are_retryable_cascade_errors(self, cls: type[CascadeError]) -> None:
        err = cls("boom")
        assert isinstance(err, CascadeError)
        assert isinstance(err, DomainError)
        assert err.retryable is True

    def test_distinct_codes(self) -> None:
        assert PlannerError.error_code == "PLANNER_ERROR"
        assert ExecutorError.error_code == "EXECUTOR_ERROR"

    def test_identity_deletion_failed_keeps_cause(self) -> None:
        cause = RuntimeError("auth backend down")
        err = IdentityDeletionFailed("U1", cause)
        assert err.owner_id == "U1"
        assert err.cause is cause
        assert err.context == {"owner_id": "U1", "cause": "RuntimeError"}
        assert not isinstance(err, CascadeError)
