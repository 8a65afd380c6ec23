"""
Shared error codes and error handling utilities for the Project Creation Wizard.
Provides the wizard's exception types and consistent error responses for the
development project service.
"""

from fastapi import HTTPException
from typing import Dict, Any, List, Optional


# Error codes for consistent API responses
class ErrorCodes:
    """Standard error codes used by the client and the project service."""

    # General errors
    INTERNAL_SERVER_ERROR = "internal_server_error"
    INVALID_REQUEST = "invalid_request"
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Project-related errors
    PROJECT_NOT_FOUND = "project_not_found"
    VALIDATION_FAILED = "validation_failed"

    # Import errors
    UPLOAD_FAILED = "upload_failed"
    UPLOAD_NOT_FOUND = "upload_not_found"
    UNSUPPORTED_FILE = "unsupported_file"

    # Wizard errors
    INVALID_STEP = "invalid_step"


class WizardError(Exception):
    """Base exception for the Project Creation Wizard."""

    def __init__(self, message: str, code: str = ErrorCodes.INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.message = message
        self.code = code


class DraftClientError(WizardError):
    """Raised when the project service cannot be reached or answers unexpectedly."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 code: str = ErrorCodes.SERVICE_UNAVAILABLE):
        super().__init__(message, code)
        self.status_code = status_code


class InvalidStepError(WizardError):
    """Raised when a step id outside of the wizard's steps is selected."""

    def __init__(self, step: Any):
        super().__init__(f"Unknown wizard step: {step!r}", ErrorCodes.INVALID_STEP)
        self.step = step


def create_error_detail(
    message: str,
    code: str,
    context: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Create a standardized error detail dictionary.

    Args:
        message: Human-readable error message
        code: Machine-readable error code
        context: Optional additional context information

    Returns:
        Standardized error detail dictionary
    """
    detail = {
        "detail": message,
        "code": code
    }

    if context:
        detail["context"] = context

    return detail


def create_validation_detail(validation_errors: Dict[str, List[str]]) -> Dict[str, Any]:
    """
    Create the payload returned when a project field fails validation.

    The ``validation_errors`` mapping is what the wizard reads to surface
    a message next to the offending field.
    """
    detail = create_error_detail(
        message="Validation error",
        code=ErrorCodes.VALIDATION_FAILED,
    )
    detail["validation_errors"] = validation_errors
    return detail


def raise_project_not_found(project_id: int) -> None:
    """Raise a standardized 404 error for missing projects."""
    raise HTTPException(
        status_code=404,
        detail=create_error_detail(
            message=f"Project '{project_id}' not found",
            code=ErrorCodes.PROJECT_NOT_FOUND,
            context={"project_id": project_id}
        )
    )


def raise_upload_not_found(project_id: int, file_upload_ids: List[int]) -> None:
    """Raise a standardized 404 error for unknown file uploads."""
    raise HTTPException(
        status_code=404,
        detail=create_error_detail(
            message="One or more file uploads were not found",
            code=ErrorCodes.UPLOAD_NOT_FOUND,
            context={"project_id": project_id, "file_upload_ids": file_upload_ids}
        )
    )


def raise_unsupported_file(filename: str) -> None:
    """Raise a standardized 400 error for files the import cannot read."""
    raise HTTPException(
        status_code=400,
        detail=create_error_detail(
            message=f"Unsupported file: {filename}",
            code=ErrorCodes.UNSUPPORTED_FILE,
            context={"filename": filename}
        )
    )
