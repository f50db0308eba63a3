"""Tests for domain exceptions (error_code, message, details) and their HTTP status."""

import pytest

from app.core.exception_handlers import status_for
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CampusAdminException,
    DuplicateAssignmentException,
    DuplicateCodeException,
    HierarchyCycleException,
    ResourceNotFoundException,
    ValidationException,
)


def test_base_exception_default_error_code() -> None:
    """Base CampusAdminException uses class name as error_code when not provided."""
    exc = CampusAdminException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "CampusAdminException"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "CampusAdminException",
        "message": "Something failed",
        "details": {},
    }


def test_authorization_exception_carries_code_and_targets() -> None:
    exc = AuthorizationException(
        permission_code="hr.employees.update", target_unit_id=5, target_user_id=9
    )
    assert exc.error_code == "PERMISSION_DENIED"
    assert exc.message == "Permission denied: hr.employees.update"
    assert exc.details == {
        "permission_code": "hr.employees.update",
        "target_unit_id": 5,
        "target_user_id": 9,
    }


def test_authorization_exception_without_code() -> None:
    exc = AuthorizationException()
    assert exc.message == "Permission denied"
    assert exc.details == {}


def test_resource_not_found_details() -> None:
    exc = ResourceNotFoundException("org_unit", 42)
    assert exc.message == "org_unit not found: 42"
    assert exc.details == {"resource_type": "org_unit", "resource_id": "42"}


def test_duplicate_assignment_details() -> None:
    exc = DuplicateAssignmentException(
        "Role already assigned to user",
        assignment_type="user_role",
        details_extra={"user_id": 1, "role_id": 2},
    )
    assert exc.details == {"user_id": 1, "role_id": 2, "assignment_type": "user_role"}


def test_validation_exception_field() -> None:
    assert ValidationException("bad", field="code").details == {"field": "code"}
    assert ValidationException("bad").details == {}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ResourceNotFoundException("role", 1), 404),
        (AuthenticationException(), 401),
        (AuthorizationException("org_unit.update"), 403),
        (ValidationException("bad"), 400),
        (DuplicateAssignmentException("dup", assignment_type="user_role"), 409),
        (DuplicateCodeException("role", "ADMIN"), 409),
        (HierarchyCycleException(2, 4), 409),
        (CampusAdminException("other"), 400),
    ],
)
def test_status_for_maps_error_codes(exc: CampusAdminException, status: int) -> None:
    """Each domain error code maps to one HTTP status; unknown codes are 400."""
    assert status_for(exc) == status
