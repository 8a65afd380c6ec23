"""
Constants and configuration settings for the Project Creation Wizard.
Contains step identifiers, navigation routes, draft defaults and the
environment-driven settings for the project service connection.
"""

import os
from pathlib import Path
from typing import Dict, List

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent

# Wizard step constants
NAME_STEP = "name"
IMPORT_STEP = "import"
CONFIG_STEP = "config"

# Ordered steps as rendered in the wizard header
WIZARD_STEPS = [
    NAME_STEP,
    IMPORT_STEP,
    CONFIG_STEP,
]

INITIAL_STEP = NAME_STEP

# Human-readable step names for UI display
STEP_DISPLAY_NAMES = {
    NAME_STEP: "Project Name",
    IMPORT_STEP: "Data Import",
    CONFIG_STEP: "Labeling Setup",
}

# Navigation routes
PROJECTS_ROUTE = "/projects"
PROJECT_DATA_ROUTE_TEMPLATE = "/projects/{project_id}/data"

# Draft defaults
DRAFT_TITLE_TEMPLATE = "New Project #{number}"
DEFAULT_DESCRIPTION = ""
DEFAULT_LABEL_CONFIG = "<View></View>"

# Title validation applied by the development project service
TITLE_MAX_LENGTH = 50
TITLE_REQUIRED_MESSAGE = "This field is required."
TITLE_TOO_LONG_MESSAGE = f"Ensure this field has no more than {TITLE_MAX_LENGTH} characters."

# Import phase settings
CSV_HANDLING_TASKS = "tasks"
CSV_HANDLING_TIME_SERIES = "ts"
CSV_HANDLING_CHOICES = [CSV_HANDLING_TASKS, CSV_HANDLING_TIME_SERIES]

# File types that need an explicit CSV handling decision before import
TABULAR_EXTENSIONS = [".csv", ".tsv"]
SUPPORTED_IMPORT_EXTENSIONS = [".csv", ".tsv", ".json", ".txt"]

# Delimiters used when sniffing column headers locally
TABULAR_DELIMITERS: Dict[str, str] = {
    ".csv": ",",
    ".tsv": "\t",
}

# Project service API paths
API_PROJECTS_PATH = "/api/projects"
API_PROJECT_PATH_TEMPLATE = "/api/projects/{project_id}"
API_IMPORT_PATH_TEMPLATE = "/api/projects/{project_id}/import"
API_REIMPORT_PATH_TEMPLATE = "/api/projects/{project_id}/reimport"

# Connection settings (overridable through the environment or a .env file)
API_BASE_URL = os.getenv("PROJECT_WIZARD_API_URL", "http://localhost:8080")
API_TOKEN = os.getenv("PROJECT_WIZARD_API_TOKEN")
API_TIMEOUT = int(os.getenv("PROJECT_WIZARD_API_TIMEOUT", "30"))

# Logging settings
LOG_LEVEL = os.getenv("PROJECT_WIZARD_LOG_LEVEL", "INFO")
LOGGER_ROOT_NAME = "project_wizard"

# Components that own a logger
LOG_COMPONENTS: List[str] = [
    "wizard",
    "editor",
    "import",
    "controller",
    "client",
    "service",
]
