"""
Name & Description editor of the Project Creation Wizard.
Captures the project title and description, autosaves the title when the
field loses focus and surfaces the title validation error.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from api.client import DraftResourceClient
from common import logger as wizard_logger, utils
from common.errors import DraftClientError
from common.schemas import DraftProject

from .state import WizardState


class NameDescriptionEditor:
    """
    Editor for the fields collected in the name step, plus the label config
    written by the labeling setup step.

    Only the title ever reaches the service before the commit; description
    and label config stay in memory.
    """

    def __init__(self, state: WizardState, client: DraftResourceClient,
                 commit: Callable[[], Awaitable[Any]]):
        self.state = state
        self.client = client
        self._commit = commit
        self.logger = wizard_logger.get_wizard_logger(state.wizard_id, "editor")

    @property
    def name_error(self) -> Optional[str]:
        return self.state.error

    def set_name(self, value: str) -> None:
        # Any edit retracts the previous validation error until re-validated
        self.state.name = value
        self.state.error = None

    def set_description(self, value: str) -> None:
        self.state.description = value

    def set_label_config(self, value: str) -> None:
        self.state.label_config = value

    def seed_title(self, draft: DraftProject) -> None:
        """Prefill the title from a freshly created draft, unless the user already typed one."""
        if not self.state.name:
            self.set_name(draft.title)

    async def on_blur(self) -> None:
        """
        Autosave the title after the name field loses focus.

        A rejected title becomes the current validation error. Nothing is
        sent while an error is already shown or before the draft exists.
        """
        if self.state.error or not self.state.has_draft:
            return

        project_id = self.state.draft.id
        title = self.state.name
        try:
            result = await self.client.update_title(project_id, title)
        except DraftClientError as e:
            wizard_logger.log_structured_error(
                self.logger, "autosave_failed", str(e),
                {"project_id": project_id, "status_code": e.status_code}
            )
            return

        if result.ok:
            wizard_logger.log_structured_event(
                self.logger, "title_autosaved",
                {"project_id": project_id, "title": title}
            )
            return

        message = utils.extract_field_error(result.errors, "title")
        if message is None:
            wizard_logger.log_structured_error(
                self.logger, "autosave_failed", "Title update failed without a title error",
                {"project_id": project_id, "errors": result.errors}
            )
            return

        self.state.error = message
        wizard_logger.log_structured_event(
            self.logger, "title_rejected",
            {"project_id": project_id, "title": title, "error": self.state.error},
            f"Title rejected: {self.state.error}", level=logging.WARNING
        )

    async def submit(self) -> Any:
        """
        Enter key in the name form.

        Suppressed while the title has a validation error; otherwise runs
        the wizard's commit.
        """
        if self.state.error:
            return None
        return await self._commit()
