"""Domain exceptions for the campus administration service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class CampusAdminException(Exception):
    """Base exception for all application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(CampusAdminException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(CampusAdminException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(CampusAdminException):
    """Raised when the user lacks the permission or scope for the operation."""

    def __init__(
        self,
        permission_code: str | None = None,
        target_unit_id: int | None = None,
        target_user_id: int | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the denied permission code and optional target.

        Args:
            permission_code: Code that was checked (e.g. 'hr.employees.update').
            target_unit_id: Org unit the operation targeted, if any.
            target_user_id: User the operation targeted, if any.
            message: Human-readable message; default used when code omitted.
        """
        if permission_code:
            message = f"Permission denied: {permission_code}"
        details: dict[str, Any] = {}
        if permission_code:
            details["permission_code"] = permission_code
        if target_unit_id is not None:
            details["target_unit_id"] = target_unit_id
        if target_user_id is not None:
            details["target_user_id"] = target_user_id
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(CampusAdminException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'org_unit', 'role').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class DuplicateAssignmentException(CampusAdminException):
    """Raised when a link already exists (role-permission, user-role, primary org assignment)."""

    def __init__(
        self,
        message: str,
        assignment_type: str,
        details_extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize with message and assignment context.

        Args:
            message: Human-readable description (e.g. 'Permission already assigned to role').
            assignment_type: 'role_permission', 'user_role' or 'org_assignment'.
            details_extra: Optional extra keys (e.g. role_id, permission_id).
        """
        details = dict(details_extra or {})
        details["assignment_type"] = assignment_type
        super().__init__(message, "DUPLICATE_ASSIGNMENT", details)


class DuplicateCodeException(CampusAdminException):
    """Raised when creating a catalog entry or org unit whose code already exists."""

    def __init__(self, entity_type: str, code: str) -> None:
        super().__init__(
            f"{entity_type} with code '{code}' already exists",
            "DUPLICATE_CODE",
            {"entity_type": entity_type, "code": code},
        )


class HierarchyCycleException(CampusAdminException):
    """Raised when a structural change would make a unit its own ancestor."""

    def __init__(self, unit_id: int, parent_id: int) -> None:
        super().__init__(
            f"Moving org unit {unit_id} under {parent_id} would create a cycle",
            "HIERARCHY_CYCLE",
            {"unit_id": unit_id, "parent_id": parent_id},
        )
