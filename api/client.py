"""
Draft Resource Client for the Project Creation Wizard.
Defines the asynchronous contract the wizard consumes and its implementation
against the project service REST API.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import requests

from common import constants, logger as wizard_logger
from common.errors import DraftClientError, ErrorCodes
from common.schemas import (
    DraftProject,
    Project,
    CompositeSubmission,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    ReimportRequest,
    TitleUpdateResult,
    UploadResult,
)


class DraftResourceClient(ABC):
    """
    Operations the wizard performs against the remote project resource.

    Every operation is a suspension point; the wizard awaits one call at a
    time within each of its operations.
    """

    @abstractmethod
    async def list_projects(self) -> List[Project]:
        """Return the projects that currently exist."""

    @abstractmethod
    async def create_project(self, title: str) -> DraftProject:
        """Create a new draft project with the given title."""

    @abstractmethod
    async def update_title(self, project_id: int, title: str) -> TitleUpdateResult:
        """Save the title alone; validation failures are reported, not raised."""

    @abstractmethod
    async def update_project(self, project_id: int,
                             body: CompositeSubmission) -> Optional[Project]:
        """Apply the combined commit update. Returns None on failure."""

    @abstractmethod
    async def delete_project(self, project_id: int) -> Any:
        """Delete a project. Callers do not inspect the result."""

    @abstractmethod
    async def upload_files(self, project_id: int,
                           paths: Sequence[Union[str, Path]]) -> UploadResult:
        """Upload files into the project's pending import area."""

    @abstractmethod
    async def reimport(self, project_id: int, file_upload_ids: List[int],
                       csv_handling: Optional[str] = None) -> bool:
        """Turn pending uploads into project tasks. Returns whether it succeeded."""


class RestDraftClient(DraftResourceClient):
    """
    Draft Resource Client backed by the project service HTTP API.

    Blocking ``requests`` calls run in a worker thread so the wizard's event
    loop is never blocked.
    """

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 timeout: Optional[int] = None, session: Optional[requests.Session] = None,
                 wizard_id: str = "client"):
        self.base_url = (base_url or constants.API_BASE_URL).rstrip('/')
        self.timeout = timeout or constants.API_TIMEOUT
        self.session = session or requests.Session()
        self.logger = wizard_logger.get_wizard_logger(wizard_id, "client")

        token = token if token is not None else constants.API_TOKEN
        if token:
            self.session.headers.update({"Authorization": f"Token {token}"})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """
        Issue one HTTP request.

        Raises:
            DraftClientError: If the service cannot be reached
        """
        url = self._url(path)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            error_msg = f"{method} {url} failed: {str(e)}"
            self.logger.error(error_msg)
            raise DraftClientError(error_msg)

        self.logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    async def _call(self, method: str, path: str, **kwargs) -> requests.Response:
        return await asyncio.to_thread(self._request, method, path, **kwargs)

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    def _raise_for_status(self, response: requests.Response, action: str) -> None:
        if response.ok:
            return
        payload = self._json(response)
        if not isinstance(payload, dict):
            payload = {}
        # FastAPI nests structured error details under "detail"
        if isinstance(payload.get("detail"), dict):
            payload = payload["detail"]
        raise DraftClientError(
            f"{action} failed with status {response.status_code}: {payload.get('detail') or response.reason}",
            status_code=response.status_code,
            code=payload.get("code", ErrorCodes.INVALID_REQUEST),
        )

    async def list_projects(self) -> List[Project]:
        response = await self._call("GET", constants.API_PROJECTS_PATH)
        self._raise_for_status(response, "Listing projects")

        payload = self._json(response)
        # Paginated responses wrap the projects in "results"
        if isinstance(payload, dict):
            payload = payload.get("results", [])
        return [Project(**item) for item in payload or []]

    async def create_project(self, title: str) -> DraftProject:
        body = ProjectCreateRequest(title=title)
        response = await self._call("POST", constants.API_PROJECTS_PATH, json=body.model_dump())
        self._raise_for_status(response, "Creating draft project")
        return DraftProject(**self._json(response))

    async def update_title(self, project_id: int, title: str) -> TitleUpdateResult:
        body = ProjectUpdateRequest(title=title).model_dump(exclude_none=True)
        response = await self._call(
            "PATCH",
            constants.API_PROJECT_PATH_TEMPLATE.format(project_id=project_id),
            json=body,
        )

        if response.ok:
            return TitleUpdateResult(ok=True)

        payload = self._json(response)
        errors = payload.get("validation_errors") if isinstance(payload, dict) else None
        return TitleUpdateResult(ok=False, errors=errors or {})

    async def update_project(self, project_id: int,
                             body: CompositeSubmission) -> Optional[Project]:
        try:
            response = await self._call(
                "PATCH",
                constants.API_PROJECT_PATH_TEMPLATE.format(project_id=project_id),
                json=body.model_dump(),
            )
        except DraftClientError:
            return None

        if not response.ok:
            self.logger.warning(f"Updating project {project_id} failed with status {response.status_code}")
            return None

        payload = self._json(response)
        if not isinstance(payload, dict):
            return None
        return Project(**payload)

    async def delete_project(self, project_id: int) -> bool:
        response = await self._call(
            "DELETE",
            constants.API_PROJECT_PATH_TEMPLATE.format(project_id=project_id),
        )
        return response.ok

    async def upload_files(self, project_id: int,
                           paths: Sequence[Union[str, Path]]) -> UploadResult:
        handles = []
        try:
            files = []
            for path in paths:
                path = Path(path)
                try:
                    handle = open(path, "rb")
                except OSError as e:
                    self.logger.error(f"Cannot read upload {path}: {str(e)}")
                    raise DraftClientError(
                        f"Cannot read file: {path.name}",
                        code=ErrorCodes.UPLOAD_FAILED,
                    ) from e
                handles.append(handle)
                files.append(("file", (path.name, handle)))

            response = await self._call(
                "POST",
                constants.API_IMPORT_PATH_TEMPLATE.format(project_id=project_id),
                params={"commit_to_project": "false"},
                files=files,
            )
        finally:
            for handle in handles:
                handle.close()

        self._raise_for_status(response, "Uploading files")
        return UploadResult(**(self._json(response) or {}))

    async def reimport(self, project_id: int, file_upload_ids: List[int],
                       csv_handling: Optional[str] = None) -> bool:
        body = ReimportRequest.from_csv_handling(file_upload_ids, csv_handling)
        response = await self._call(
            "POST",
            constants.API_REIMPORT_PATH_TEMPLATE.format(project_id=project_id),
            json=body.model_dump(),
        )
        if not response.ok:
            self.logger.warning(f"Reimport for project {project_id} failed with status {response.status_code}")
        return response.ok
