"""
In-process Draft Resource Client.
Keeps projects in memory with the same validation rules as the project
service; used for offline sessions of the wizard and as a test double.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from common import columns, utils
from common.errors import DraftClientError, ErrorCodes
from common.schemas import (
    CompositeSubmission,
    DraftProject,
    Project,
    TitleUpdateResult,
    UploadResult,
)

from .client import DraftResourceClient


class InMemoryDraftClient(DraftResourceClient):
    """
    Draft Resource Client storing projects in a dictionary.

    Every call is appended to ``calls`` as ``(operation, args)`` so callers
    can observe the order in which the wizard talks to the service.
    """

    def __init__(self, projects: Optional[List[Project]] = None):
        self.projects: Dict[int, Project] = {p.id: p for p in (projects or [])}
        self.uploads: Dict[int, Tuple[int, str]] = {}
        self.tasks: Dict[int, List[str]] = {}
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._next_project_id = max(self.projects, default=0) + 1
        self._next_upload_id = 1

    def _record(self, operation: str, *args) -> None:
        self.calls.append((operation, args))

    def operations(self) -> List[str]:
        """Names of the recorded calls, in order."""
        return [operation for operation, _ in self.calls]

    def _get(self, project_id: int) -> Project:
        if project_id not in self.projects:
            raise DraftClientError(
                f"Project '{project_id}' not found",
                status_code=404,
                code=ErrorCodes.PROJECT_NOT_FOUND,
            )
        return self.projects[project_id]

    async def list_projects(self) -> List[Project]:
        self._record("list_projects")
        return list(self.projects.values())

    async def create_project(self, title: str) -> DraftProject:
        self._record("create_project", title)
        project = Project(id=self._next_project_id, title=title)
        self.projects[project.id] = project
        self._next_project_id += 1
        return DraftProject(**project.model_dump())

    async def update_title(self, project_id: int, title: str) -> TitleUpdateResult:
        self._record("update_title", project_id, title)
        project = self._get(project_id)

        messages = utils.validate_title(title)
        if messages:
            return TitleUpdateResult(ok=False, errors={"title": messages})

        project.title = title
        return TitleUpdateResult(ok=True)

    async def update_project(self, project_id: int,
                             body: CompositeSubmission) -> Optional[Project]:
        self._record("update_project", project_id, body)
        if project_id not in self.projects or utils.validate_title(body.title):
            return None

        updated = self.projects[project_id].model_copy(update=body.model_dump())
        self.projects[project_id] = updated
        return updated

    async def delete_project(self, project_id: int) -> bool:
        self._record("delete_project", project_id)
        return self.projects.pop(project_id, None) is not None

    async def upload_files(self, project_id: int,
                           paths: Sequence[Union[str, Path]]) -> UploadResult:
        self._record("upload_files", project_id, tuple(str(p) for p in paths))
        self._get(project_id)

        upload_ids = []
        data_columns: List[str] = []
        for path in paths:
            path = Path(path)
            if not columns.is_supported(path.name):
                raise DraftClientError(
                    f"Unsupported file: {path.name}",
                    status_code=400,
                    code=ErrorCodes.UNSUPPORTED_FILE,
                )
            if not path.is_file():
                raise DraftClientError(
                    f"Cannot read file: {path.name}",
                    code=ErrorCodes.UPLOAD_FAILED,
                )
            self.uploads[self._next_upload_id] = (project_id, path.name)
            upload_ids.append(self._next_upload_id)
            self._next_upload_id += 1

            for column in columns.detect_columns(path.name, path):
                if column not in data_columns:
                    data_columns.append(column)

        return UploadResult(file_upload_ids=upload_ids, data_columns=data_columns)

    async def reimport(self, project_id: int, file_upload_ids: List[int],
                       csv_handling: Optional[str] = None) -> bool:
        self._record("reimport", project_id, tuple(file_upload_ids), csv_handling)
        if project_id not in self.projects:
            return False
        if any(self.uploads.get(upload_id, (None,))[0] != project_id for upload_id in file_upload_ids):
            return False

        imported = [self.uploads.pop(upload_id)[1] for upload_id in file_upload_ids]
        self.tasks.setdefault(project_id, []).extend(imported)
        return True
