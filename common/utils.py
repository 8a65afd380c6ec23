"""
General utility functions for the Project Creation Wizard.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import streamlit as st

from . import constants


def generate_wizard_id() -> str:
    """
    Generate a unique wizard session ID combining a UTC timestamp and short UUID.

    Format: YYYY-MM-DDTHHMMSSZ_shortUUID
    Example: 2025-06-07T103045Z_a1b2c3d4

    Returns:
        Unique wizard session identifier string
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H%M%SZ")
    short_uuid = uuid.uuid4().hex[:8]

    return f"{timestamp}_{short_uuid}"


def draft_title(existing_project_count: int) -> str:
    """Title given to a new draft, numbered after the projects that already exist."""
    return constants.DRAFT_TITLE_TEMPLATE.format(number=existing_project_count + 1)


def project_data_route(project_id: Any) -> str:
    """Route of a committed project's data view."""
    return constants.PROJECT_DATA_ROUTE_TEMPLATE.format(project_id=project_id)


def validate_title(title: Optional[str]) -> List[str]:
    """
    Check a project title against the rules the project service enforces.

    Returns:
        List of validation messages, empty when the title is valid
    """
    if title is None or not title.strip():
        return [constants.TITLE_REQUIRED_MESSAGE]
    if len(title) > constants.TITLE_MAX_LENGTH:
        return [constants.TITLE_TOO_LONG_MESSAGE]
    return []


def extract_field_error(errors: Optional[Dict[str, Any]], field: str) -> Optional[str]:
    """
    Pull the message for one field out of a validation error payload.

    The project service reports field errors either as a plain string or as
    a list of messages; only the first message of a list is surfaced.

    Args:
        errors: Mapping of field name to message(s), may be None
        field: Field to extract

    Returns:
        The message, or None when the field has no error
    """
    if not errors:
        return None

    value = errors.get(field)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None

    if value is None:
        return None
    return str(value)


def display_page_error(
    exception_object: Exception,
    wizard_id: Optional[str] = None,
    step: Optional[str] = None,
    dev_mode: bool = False
) -> None:
    """
    Display error messages in a standardized way in the Streamlit wizard.

    Args:
        exception_object: The actual exception instance that was caught
        wizard_id: Current wizard session ID (optional)
        step: Wizard step where the error occurred (optional)
        dev_mode: Whether developer mode is active, controls display of technical details
    """
    if step:
        readable_step = constants.STEP_DISPLAY_NAMES.get(step, step.title())
        user_message = f"An error occurred during the {readable_step} step: {str(exception_object)}"
    else:
        user_message = f"An unexpected error occurred: {str(exception_object)}"

    st.error(user_message)

    if dev_mode:
        st.exception(exception_object)
        if wizard_id:
            st.info(f"📝 **For developers:** filter the logs by wizard_id `{wizard_id}`")
