"""
Step state machine of the Project Creation Wizard.
Owns the active step and derives which tabs and controls are available from
the validation and upload state.
"""

from typing import List, Union

from common import logger as wizard_logger
from common.schemas import CancelControl, CommitControl, StepTab

from .import_phase import ImportPhaseAdapter
from .state import WizardState, WizardStep


class WizardStateMachine:
    """
    Active step plus gating of the wizard's tabs and controls.

    Tabs are always rendered. A disabled tab is styling only: selecting it
    still activates the step. The commit control, on the other hand, is
    disabled whenever the wizard cannot be committed.
    """

    def __init__(self, state: WizardState, import_phase: ImportPhaseAdapter):
        self.state = state
        self.import_phase = import_phase
        self.logger = wizard_logger.get_wizard_logger(state.wizard_id, "wizard")

    @property
    def active_step(self) -> WizardStep:
        return self.state.step

    def select_step(self, target: Union[WizardStep, str]) -> WizardStep:
        """
        Activate a step when its tab is clicked.

        Raises:
            InvalidStepError: If ``target`` is not one of the wizard's steps
        """
        step = WizardStep.parse(target)
        previous = self.state.step
        self.state.step = step

        wizard_logger.log_structured_event(
            self.logger, "step_selected",
            {"from": previous.value, "to": step.value, "tab_disabled": self.tab_disabled(step)}
        )
        return step

    def is_mounted(self, step: Union[WizardStep, str]) -> bool:
        """Only the active step's content is mounted; the others keep their data."""
        return WizardStep.parse(step) == self.state.step

    def tab_disabled(self, step: Union[WizardStep, str]) -> bool:
        step = WizardStep.parse(step)
        if step == WizardStep.NAME:
            return bool(self.state.error)
        if step == WizardStep.IMPORT:
            return self.import_phase.upload_disabled
        return False

    def tabs(self) -> List[StepTab]:
        return [
            StepTab(
                step=step.value,
                label=step.label,
                active=step == self.state.step,
                disabled=self.tab_disabled(step),
            )
            for step in WizardStep
        ]

    @property
    def can_commit(self) -> bool:
        return (
            self.state.has_draft
            and not self.import_phase.upload_disabled
            and not self.state.error
        )

    def commit_control(self) -> CommitControl:
        return CommitControl(
            disabled=not self.can_commit,
            waiting=self.state.waiting or self.import_phase.uploading,
        )

    def cancel_control(self) -> CancelControl:
        return CancelControl(waiting=self.state.waiting)
