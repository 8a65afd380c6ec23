"""
Wizard state for the Project Creation Wizard.

A single ``WizardState`` instance is owned by the wizard and handed by
reference to every phase component. It holds the active step, the draft,
the three editable fields, the title validation error and the waiting flag.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel

from common import constants
from common.errors import InvalidStepError
from common.schemas import CompositeSubmission, DraftProject


class WizardStep(str, Enum):
    """The wizard's steps, in display order."""
    NAME = constants.NAME_STEP
    IMPORT = constants.IMPORT_STEP
    CONFIG = constants.CONFIG_STEP

    @classmethod
    def parse(cls, value: Union["WizardStep", str]) -> "WizardStep":
        """
        Resolve a step from its id.

        Raises:
            InvalidStepError: If ``value`` is not one of the wizard's steps
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidStepError(value)

    @property
    def label(self) -> str:
        return constants.STEP_DISPLAY_NAMES[self.value]


class WizardState(BaseModel):
    """Mutable state of one wizard instance."""

    wizard_id: str
    step: WizardStep = WizardStep(constants.INITIAL_STEP)
    draft: Optional[DraftProject] = None
    name: str = ""
    description: str = constants.DEFAULT_DESCRIPTION
    label_config: str = constants.DEFAULT_LABEL_CONFIG
    error: Optional[str] = None
    waiting: bool = False

    @property
    def has_draft(self) -> bool:
        return self.draft is not None


def build_submission(state: WizardState) -> CompositeSubmission:
    """Composite commit payload for the current field values."""
    return CompositeSubmission(
        title=state.name,
        description=state.description,
        label_config=state.label_config,
    )
