"""
Import phase of the Project Creation Wizard.

The wizard only reads two flags from the import phase (``upload_disabled``
and ``uploading``) and calls ``finish_upload()`` before committing. The
file-upload phase below is the implementation used by the app and the CLI.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from api.client import DraftResourceClient
from common import columns, constants, logger as wizard_logger
from common.errors import DraftClientError

from .state import WizardState


class ImportPhaseAdapter(ABC):
    """Boundary between the wizard and the data import subsystem."""

    @property
    @abstractmethod
    def upload_disabled(self) -> bool:
        """True while the current import input is invalid or incomplete."""

    @property
    @abstractmethod
    def uploading(self) -> bool:
        """True while an upload request is in flight."""

    @property
    def columns(self) -> List[str]:
        """Data columns detected in the imported files."""
        return []

    @property
    def page_props(self) -> Dict[str, Any]:
        """Opaque configuration passed through to the import view."""
        return {}

    @abstractmethod
    async def finish_upload(self) -> bool:
        """
        Complete any pending import before the commit.

        Returns True when there is nothing pending.
        """


class NoImportPhase(ImportPhaseAdapter):
    """Import phase for sessions that never add data."""

    @property
    def upload_disabled(self) -> bool:
        return False

    @property
    def uploading(self) -> bool:
        return False

    async def finish_upload(self) -> bool:
        return True


class FileImportPhase(ImportPhaseAdapter):
    """
    Uploads files into the draft and imports them as tasks on commit.

    Files are uploaded as soon as they are added, but only become tasks when
    ``finish_upload()`` runs. CSV and TSV files can be read either as a list
    of tasks or as time series, so the phase stays disabled until the user
    picks a handling for them.
    """

    def __init__(self, state: WizardState, client: DraftResourceClient):
        self.state = state
        self.client = client
        self.logger = wizard_logger.get_wizard_logger(state.wizard_id, "import")

        self.pending: Dict[int, str] = {}
        self.csv_handling: Optional[str] = None
        self.last_error: Optional[str] = None
        self._columns: List[str] = []
        self._uploading = False

    @property
    def upload_disabled(self) -> bool:
        return self.needs_csv_handling

    @property
    def uploading(self) -> bool:
        return self._uploading

    @property
    def columns(self) -> List[str]:
        return list(self._columns)

    @property
    def needs_csv_handling(self) -> bool:
        has_tabular = any(columns.is_tabular(name) for name in self.pending.values())
        return has_tabular and self.csv_handling is None

    @property
    def page_props(self) -> Dict[str, Any]:
        return {
            "pending_files": sorted(self.pending.values()),
            "csv_handling": self.csv_handling,
            "needs_csv_handling": self.needs_csv_handling,
            "error": self.last_error,
        }

    def set_csv_handling(self, value: Optional[str]) -> None:
        """Choose how CSV/TSV files are read: as a task list or as time series."""
        if value is not None and value not in constants.CSV_HANDLING_CHOICES:
            raise ValueError(f"csv_handling must be one of {constants.CSV_HANDLING_CHOICES}")
        self.csv_handling = value

    async def add_files(self, paths: Sequence[Union[str, Path]]) -> List[int]:
        """
        Upload files into the draft's pending import area.

        Args:
            paths: Files to upload

        Returns:
            Upload ids of the new pending files, empty if the upload failed
        """
        if not self.state.has_draft or not paths:
            return []

        paths = [Path(p) for p in paths]
        self._uploading = True
        self.last_error = None
        try:
            result = await self.client.upload_files(self.state.draft.id, paths)
        except DraftClientError as e:
            self.last_error = e.message
            wizard_logger.log_structured_error(
                self.logger, "upload_failed", str(e),
                {"files": [p.name for p in paths], "status_code": e.status_code}
            )
            return []
        finally:
            self._uploading = False

        for upload_id, path in zip(result.file_upload_ids, paths):
            self.pending[upload_id] = path.name

        detected = list(result.data_columns)
        if not detected:
            for path in paths:
                detected.extend(columns.detect_columns(path.name, path))
        self._merge_columns(detected)

        wizard_logger.log_structured_event(
            self.logger,
            "files_uploaded",
            {"file_upload_ids": result.file_upload_ids, "columns": self._columns},
            f"Uploaded {len(result.file_upload_ids)} file(s)"
        )
        return list(result.file_upload_ids)

    def remove_file(self, upload_id: int) -> None:
        """Drop a pending upload so it is not imported."""
        self.pending.pop(upload_id, None)

    def _merge_columns(self, detected: List[str]) -> None:
        for column in detected:
            if column not in self._columns:
                self._columns.append(column)

    async def finish_upload(self) -> bool:
        if not self.pending:
            return True
        if not self.state.has_draft or self.upload_disabled:
            return False

        upload_ids = sorted(self.pending)
        self._uploading = True
        try:
            imported = await self.client.reimport(self.state.draft.id, upload_ids, self.csv_handling)
        except DraftClientError as e:
            self.last_error = e.message
            wizard_logger.log_structured_error(
                self.logger, "import_failed", str(e),
                {"file_upload_ids": upload_ids}
            )
            return False
        finally:
            self._uploading = False

        if not imported:
            self.last_error = "The service rejected the import"
            wizard_logger.log_structured_event(
                self.logger, "upload_finished",
                {"file_upload_ids": upload_ids, "success": False},
                "Import was rejected", level=logging.WARNING
            )
            return False

        self.pending.clear()
        wizard_logger.log_structured_event(
            self.logger, "upload_finished",
            {"file_upload_ids": upload_ids, "success": True},
            f"Imported {len(upload_ids)} file(s)"
        )
        return True
