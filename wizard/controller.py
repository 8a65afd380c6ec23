"""
Finalize/Cancel controller and the wizard facade.

The wizard ends in one of two ways: the commit merges everything collected
into a single update of the draft and opens the project, or the cancel
deletes the draft and returns to the project listing.
"""

import logging
from typing import Callable, List, Optional, Sequence, Union

from api.client import DraftResourceClient
from common import constants, logger as wizard_logger, utils
from common.errors import DraftClientError
from common.schemas import CancelControl, CommitControl, CompositeSubmission, Project, StepTab

from .draft import DraftProvider
from .editor import NameDescriptionEditor
from .import_phase import FileImportPhase, ImportPhaseAdapter
from .navigation import Navigator
from .state import WizardState, WizardStep, build_submission
from .state_machine import WizardStateMachine


class FinalizeController:
    """
    Terminal operations of the wizard.

    ``on_create`` and ``on_delete`` are the raw operations. ``commit`` and
    ``cancel`` are the user-facing controls: they honour the commit gating
    and ignore a second terminal operation while one is in flight.
    """

    def __init__(self, state: WizardState, client: DraftResourceClient,
                 import_phase: ImportPhaseAdapter, machine: WizardStateMachine,
                 navigator: Navigator, on_close: Optional[Callable[[], None]] = None):
        self.state = state
        self.client = client
        self.import_phase = import_phase
        self.machine = machine
        self.navigator = navigator
        self.on_close = on_close
        self.logger = wizard_logger.get_wizard_logger(state.wizard_id, "controller")
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    async def on_create(self) -> Optional[Project]:
        """
        Commit the draft.

        1. Finish the import; a failed import aborts with no side effects.
        2. Send title, description and label config as one update.
        3. On success open the project's data view.

        Returns:
            The committed project, or None if nothing was committed
        """
        if not self.state.has_draft:
            return None

        project_id = self.state.draft.id
        imported = await self.import_phase.finish_upload()
        if not imported:
            wizard_logger.log_structured_event(
                self.logger, "commit_aborted",
                {"project_id": project_id, "reason": "import_not_finished"},
                "Commit aborted: import did not finish", level=logging.WARNING
            )
            return None

        body = build_submission(self.state)
        wizard_logger.log_structured_event(
            self.logger, "commit_started",
            {"project_id": project_id, "body": body}
        )

        self.state.waiting = True
        try:
            response = await self.client.update_project(project_id, body)
        finally:
            self.state.waiting = False

        if response is None:
            # No retry and no rollback; the user stays on the wizard
            wizard_logger.log_structured_event(
                self.logger, "commit_failed",
                {"project_id": project_id},
                f"Commit of project {project_id} failed", level=logging.WARNING
            )
            return None

        wizard_logger.log_structured_event(
            self.logger, "commit_succeeded",
            {"project_id": response.id},
            f"Project {response.id} committed"
        )
        self.navigator.push(utils.project_data_route(response.id))
        return response

    async def on_delete(self) -> None:
        """
        Discard the draft and leave the wizard.

        The delete result is not inspected and delete failures are ignored:
        the listing is always shown afterwards.
        """
        self.state.waiting = True
        try:
            if self.state.has_draft:
                project_id = self.state.draft.id
                try:
                    await self.client.delete_project(project_id)
                    wizard_logger.log_structured_event(
                        self.logger, "draft_deleted", {"project_id": project_id}
                    )
                except DraftClientError as e:
                    wizard_logger.log_structured_error(
                        self.logger, "delete_failed", str(e),
                        {"project_id": project_id, "status_code": e.status_code}
                    )
                except Exception as e:
                    wizard_logger.log_structured_error(
                        self.logger, "delete_failed", f"Unexpected error deleting draft: {str(e)}",
                        {"project_id": project_id, "error_class": type(e).__name__}
                    )
        finally:
            self.state.waiting = False

        self.navigator.replace(constants.PROJECTS_ROUTE)
        if self.on_close is not None:
            self.on_close()

    async def commit(self) -> Optional[Project]:
        """Save control: no-op while the commit is disabled or another operation runs."""
        if self._in_flight or not self.machine.can_commit:
            return None

        self._in_flight = True
        try:
            return await self.on_create()
        finally:
            self._in_flight = False

    async def cancel(self) -> bool:
        """
        Delete control and wizard close.

        Returns:
            False if ignored because another terminal operation is running
        """
        if self._in_flight:
            self.logger.info("Cancel ignored while another operation is in flight")
            return False

        self._in_flight = True
        try:
            await self.on_delete()
        finally:
            self._in_flight = False
        return True


class CreateProjectWizard:
    """
    One instance of the project creation wizard.

    Wires the shared state to the draft provider, the editor, the import
    phase, the step state machine and the finalize controller, and exposes
    the operations the user interfaces call.
    """

    def __init__(self, client: DraftResourceClient, navigator: Navigator,
                 import_phase: Optional[ImportPhaseAdapter] = None,
                 on_close: Optional[Callable[[], None]] = None,
                 wizard_id: Optional[str] = None):
        self.state = WizardState(wizard_id=wizard_id or utils.generate_wizard_id())
        self.client = client
        self.navigator = navigator
        self.drafts = DraftProvider(client, self.state.wizard_id)
        self.import_phase = import_phase or FileImportPhase(self.state, client)
        self.machine = WizardStateMachine(self.state, self.import_phase)
        self.controller = FinalizeController(
            self.state, client, self.import_phase, self.machine, navigator, on_close
        )
        self.editor = NameDescriptionEditor(self.state, client, self.controller.commit)

    @property
    def wizard_id(self) -> str:
        return self.state.wizard_id

    @property
    def step(self) -> WizardStep:
        return self.state.step

    @property
    def composite(self) -> CompositeSubmission:
        return build_submission(self.state)

    async def open(self) -> bool:
        """
        Obtain the draft for this wizard and prefill the title from it.

        Returns:
            Whether a draft is available
        """
        draft = await self.drafts.provide()
        if draft is not None and not self.state.has_draft:
            self.state.draft = draft
            self.editor.seed_title(draft)
        return self.state.has_draft

    # Name step
    def set_name(self, value: str) -> None:
        self.editor.set_name(value)

    def set_description(self, value: str) -> None:
        self.editor.set_description(value)

    async def save_name(self) -> None:
        await self.editor.on_blur()

    async def submit_name(self):
        return await self.editor.submit()

    # Labeling setup step
    def set_label_config(self, value: str) -> None:
        self.editor.set_label_config(value)

    # Import step
    async def add_files(self, paths: Sequence[str]) -> List[int]:
        if not isinstance(self.import_phase, FileImportPhase):
            return []
        return await self.import_phase.add_files(paths)

    @property
    def columns(self) -> List[str]:
        return self.import_phase.columns

    # Steps and controls
    def select_step(self, target: Union[WizardStep, str]) -> WizardStep:
        return self.machine.select_step(target)

    def tabs(self) -> List[StepTab]:
        return self.machine.tabs()

    def commit_control(self) -> CommitControl:
        return self.machine.commit_control()

    def cancel_control(self) -> CancelControl:
        return self.machine.cancel_control()

    async def commit(self) -> Optional[Project]:
        return await self.controller.commit()

    async def cancel(self) -> bool:
        return await self.controller.cancel()

    async def close(self) -> bool:
        """Dismissing the wizard discards the draft like the Delete control."""
        return await self.controller.cancel()
