"""
Pydantic data models for the Project Creation Wizard.
Defines the draft and committed project resources, the commit payload,
the autosave result and the view models exposed to the user interfaces.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    CSV_HANDLING_CHOICES,
    DEFAULT_DESCRIPTION,
    DEFAULT_LABEL_CONFIG,
    WIZARD_STEPS,
)


class DraftProject(BaseModel):
    """The in-progress project resource the wizard configures."""
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = ""
    description: str = DEFAULT_DESCRIPTION
    label_config: str = DEFAULT_LABEL_CONFIG


class Project(BaseModel):
    """A project as returned by the project service after an update."""
    model_config = ConfigDict(extra="allow")

    id: int
    title: str = ""
    description: Optional[str] = DEFAULT_DESCRIPTION
    label_config: Optional[str] = DEFAULT_LABEL_CONFIG


class CompositeSubmission(BaseModel):
    """
    Snapshot of everything the wizard collected, sent as a single update on commit.

    Derived from the wizard state on demand; never edited directly.
    """
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    label_config: str


class TitleUpdateResult(BaseModel):
    """Outcome of an autosave of the project title."""
    ok: bool
    errors: Dict[str, Any] = Field(default_factory=dict)


class UploadResult(BaseModel):
    """Outcome of uploading files into a draft's import area."""
    file_upload_ids: List[int] = Field(default_factory=list)
    data_columns: List[str] = Field(default_factory=list)


class StepTab(BaseModel):
    """Render data for one step tab in the wizard header."""
    step: str
    label: str
    active: bool = False
    disabled: bool = False

    @field_validator('step')
    @classmethod
    def validate_step(cls, v):
        if v not in WIZARD_STEPS:
            raise ValueError(f'step must be one of {WIZARD_STEPS}')
        return v


class CommitControl(BaseModel):
    """Render data for the global Save control."""
    disabled: bool
    waiting: bool


class CancelControl(BaseModel):
    """Render data for the Delete control."""
    waiting: bool


# =============================
# PROJECT SERVICE REQUEST MODELS
# =============================

class ProjectCreateRequest(BaseModel):
    """Body of POST /api/projects."""
    title: str = ""
    description: str = DEFAULT_DESCRIPTION
    label_config: str = DEFAULT_LABEL_CONFIG


class ProjectUpdateRequest(BaseModel):
    """Body of PATCH /api/projects/{id}; only provided fields are applied."""
    title: Optional[str] = None
    description: Optional[str] = None
    label_config: Optional[str] = None


class ReimportRequest(BaseModel):
    """Body of POST /api/projects/{id}/reimport."""
    file_upload_ids: List[int] = Field(default_factory=list)
    files_as_tasks_list: bool = True

    @classmethod
    def from_csv_handling(cls, file_upload_ids: List[int],
                          csv_handling: Optional[str]) -> "ReimportRequest":
        """Build a request from the wizard's CSV handling choice."""
        if csv_handling is not None and csv_handling not in CSV_HANDLING_CHOICES:
            raise ValueError(f'csv_handling must be one of {CSV_HANDLING_CHOICES}')
        return cls(
            file_upload_ids=list(file_upload_ids),
            files_as_tasks_list=csv_handling != "ts",
        )
