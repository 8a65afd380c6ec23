"""
Logging utilities for the Project Creation Wizard.
Provides wizard-scoped logging to stdout with machine-parseable JSON lines,
so that every line can be filtered by wizard session and component.
"""

import logging
import sys
import json
from typing import Optional, Dict, Any
from datetime import datetime
import numpy as np

from .constants import LOG_LEVEL, LOGGER_ROOT_NAME


def json_serializer(obj):
    """
    Custom JSON serializer that handles numpy types and other non-serializable objects.

    Args:
        obj: Object to serialize

    Returns:
        JSON-serializable version of the object
    """
    if isinstance(obj, (np.integer, np.floating)):
        return obj.item()
    elif isinstance(obj, np.ndarray):
        return obj.tolist()
    elif hasattr(obj, 'model_dump'):  # pydantic models
        return obj.model_dump()
    elif hasattr(obj, 'isoformat'):  # datetime objects
        return obj.isoformat()
    elif hasattr(obj, '__dict__'):
        return obj.__dict__
    else:
        return str(obj)


class JSONFormatter(logging.Formatter):
    """
    JSON formatter producing one object per line.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as a JSON line.

        Args:
            record: The log record to format

        Returns:
            JSON string representation of the log record
        """
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "severity": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Logger names follow pattern: project_wizard.{component}.{wizard_id}
        name_parts = record.name.split('.')
        if len(name_parts) >= 3 and name_parts[0] == LOGGER_ROOT_NAME:
            log_entry["wizard_id"] = name_parts[-1]
            log_entry["component"] = name_parts[1]

        if hasattr(record, 'extra_json') and isinstance(record.extra_json, dict):
            log_entry.update(record.extra_json)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
            log_entry["severity"] = "ERROR"

        return json.dumps(log_entry, ensure_ascii=False, separators=(',', ':'), default=json_serializer)


def get_logger(wizard_id: str, component: str = 'wizard',
               log_level: Optional[str] = None) -> logging.Logger:
    """
    Get a wizard-scoped logger that writes JSON lines to stdout.

    Args:
        wizard_id: Unique wizard session identifier
        component: Component owning the logger (default: 'wizard')
        log_level: Logging level as string (default: PROJECT_WIZARD_LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    full_logger_name = f"{LOGGER_ROOT_NAME}.{component}.{wizard_id}"
    logger = logging.getLogger(full_logger_name)

    # Don't add handlers if logger already exists and has handlers
    if logger.handlers:
        return logger

    numeric_level = getattr(logging, (log_level or LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(JSONFormatter())
    logger.addHandler(console_handler)

    # Prevent propagation to root logger to avoid duplicate messages
    logger.propagate = False

    return logger


def get_wizard_logger(wizard_id: str, component: str) -> logging.Logger:
    """Shorthand used by the wizard components."""
    return get_logger(wizard_id, component)


def get_service_logger(log_level: Optional[str] = None) -> logging.Logger:
    """Logger for the development project service, which has no wizard session."""
    return get_logger("devserver", "service", log_level)


def setup_root_logger(level: int = logging.WARNING) -> None:
    """
    Setup root logger to suppress verbose output from dependencies.

    Args:
        level: Logging level for root logger (default: WARNING)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    noisy_loggers = [
        'urllib3.connectionpool',
        'streamlit',
        'watchdog',
    ]

    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


# =============================
# STRUCTURED LOGGING HELPERS
# =============================

def log_structured_event(logger: logging.Logger, event_type: str,
                         event_data: Optional[Dict[str, Any]] = None,
                         message: str = "", level: int = logging.INFO) -> None:
    """
    Log a structured event with a consistent schema.

    Args:
        logger: Wizard-scoped logger instance
        event_type: Type of event (e.g., 'draft_created', 'commit_failed')
        event_data: Additional event-specific data
        message: Human-readable message (optional)
        level: Logging level of the event (default: INFO)
    """
    extra_json = {
        "event": event_type,
        "event_data": event_data or {}
    }

    logger.log(level, message or f"Event: {event_type}", extra={"extra_json": extra_json})


def log_structured_error(logger: logging.Logger, error_type: str, error_message: str,
                         error_context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log a structured error event.

    Args:
        logger: Wizard-scoped logger instance
        error_type: Type of error (e.g., 'autosave_failed', 'delete_failed')
        error_message: Error message
        error_context: Additional error context
    """
    extra_json = {
        "error_type": error_type,
        "error_context": error_context or {}
    }

    logger.error(error_message, extra={"extra_json": extra_json})
