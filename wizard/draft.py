"""
Draft provisioning for the Project Creation Wizard.
Creates the draft project the wizard works on as soon as it opens.
"""

from typing import Optional

from api.client import DraftResourceClient
from common import logger as wizard_logger, utils
from common.errors import DraftClientError
from common.schemas import DraftProject


class DraftProvider:
    """
    Obtains the draft project for one wizard lifetime.

    The draft is named after the number of projects that already exist
    ("New Project #N") and is requested from the service at most once.
    """

    def __init__(self, client: DraftResourceClient, wizard_id: str):
        self.client = client
        self.wizard_id = wizard_id
        self.logger = wizard_logger.get_wizard_logger(wizard_id, "wizard")
        self._requested = False
        self._draft: Optional[DraftProject] = None

    @property
    def draft(self) -> Optional[DraftProject]:
        return self._draft

    async def provide(self) -> Optional[DraftProject]:
        """
        Create the draft on first call; later calls return the same draft.

        Returns:
            The draft, or None if the service could not create one
        """
        if self._requested:
            return self._draft
        self._requested = True

        try:
            existing = await self.client.list_projects()
            self._draft = await self.client.create_project(utils.draft_title(len(existing)))
        except DraftClientError as e:
            wizard_logger.log_structured_error(
                self.logger, "draft_creation_failed", str(e),
                {"status_code": e.status_code}
            )
            return None

        wizard_logger.log_structured_event(
            self.logger,
            "draft_created",
            {"project_id": self._draft.id, "title": self._draft.title},
            f"Draft project {self._draft.id} created"
        )
        return self._draft
