"""
Project routes of the development project service.
Implements the project endpoints the wizard's REST client talks to, backed by
an in-memory store. Intended for local development of the wizard only.
"""

import io
from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter, File, Query, Response, UploadFile
from fastapi.responses import JSONResponse

from common import columns, logger as wizard_logger, utils
from common.errors import (
    create_validation_detail,
    raise_project_not_found,
    raise_unsupported_file,
    raise_upload_not_found,
)
from common.schemas import (
    Project,
    ProjectCreateRequest,
    ProjectUpdateRequest,
    ReimportRequest,
    UploadResult,
)

router = APIRouter()

logger = wizard_logger.get_service_logger()


class ProjectStore:
    """In-memory projects, pending file uploads and imported tasks."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.projects: Dict[int, Project] = {}
        self.uploads: Dict[int, Tuple[int, str, List[str]]] = {}
        self.tasks: Dict[int, List[str]] = {}
        self._next_project_id = 1
        self._next_upload_id = 1

    def get(self, project_id: int) -> Project:
        project = self.projects.get(project_id)
        if project is None:
            raise_project_not_found(project_id)
        return project

    def create(self, request: ProjectCreateRequest) -> Project:
        project = Project(id=self._next_project_id, **request.model_dump())
        self.projects[project.id] = project
        self._next_project_id += 1
        return project

    def add_upload(self, project_id: int, filename: str, data_columns: List[str]) -> int:
        upload_id = self._next_upload_id
        self.uploads[upload_id] = (project_id, filename, data_columns)
        self._next_upload_id += 1
        return upload_id


store = ProjectStore()


def _validation_response(title: Optional[str]) -> Optional[JSONResponse]:
    messages = utils.validate_title(title)
    if not messages:
        return None
    return JSONResponse(status_code=400, content=create_validation_detail({"title": messages}))


@router.get("/api/projects")
async def list_projects(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(100, ge=1, le=1000, description="Projects per page")
):
    """List projects, newest last."""
    projects = list(store.projects.values())
    start = (page - 1) * page_size
    return {
        "count": len(projects),
        "results": [p.model_dump() for p in projects[start:start + page_size]],
    }


@router.post("/api/projects", status_code=201)
async def create_project(request: ProjectCreateRequest):
    """Create a project; the wizard uses this for its draft."""
    invalid = _validation_response(request.title)
    if invalid is not None:
        return invalid

    project = store.create(request)
    logger.info(f"Created project {project.id} '{project.title}'")
    return project.model_dump()


@router.get("/api/projects/{project_id}")
async def get_project(project_id: int):
    return store.get(project_id).model_dump()


@router.patch("/api/projects/{project_id}")
async def update_project(project_id: int, request: ProjectUpdateRequest):
    """
    Apply the provided fields to a project.

    A rejected title answers 400 with ``validation_errors`` keyed by field.
    """
    project = store.get(project_id)
    changes = request.model_dump(exclude_none=True)

    if request.title is not None:
        invalid = _validation_response(request.title)
        if invalid is not None:
            logger.info(f"Rejected title for project {project_id}")
            return invalid

    updated = project.model_copy(update=changes)
    store.projects[project_id] = updated
    return updated.model_dump()


@router.delete("/api/projects/{project_id}", status_code=204)
async def delete_project(project_id: int):
    store.get(project_id)
    del store.projects[project_id]
    store.tasks.pop(project_id, None)
    for upload_id in [k for k, v in store.uploads.items() if v[0] == project_id]:
        del store.uploads[upload_id]
    logger.info(f"Deleted project {project_id}")
    return Response(status_code=204)


@router.post("/api/projects/{project_id}/import")
async def import_files(
    project_id: int,
    file: List[UploadFile] = File(..., description="Files to import"),
    commit_to_project: bool = Query(True, description="Create tasks right away")
):
    """
    Upload files into a project.

    With ``commit_to_project=false`` the files stay pending until a reimport.
    """
    store.get(project_id)

    upload_ids = []
    data_columns: List[str] = []
    for upload in file:
        if not columns.is_supported(upload.filename):
            raise_unsupported_file(upload.filename)

        content = await upload.read()
        detected = columns.detect_columns(upload.filename, io.BytesIO(content))
        upload_ids.append(store.add_upload(project_id, upload.filename, detected))
        for column in detected:
            if column not in data_columns:
                data_columns.append(column)

    if commit_to_project:
        store.tasks.setdefault(project_id, []).extend(
            store.uploads.pop(upload_id)[1] for upload_id in upload_ids
        )

    return UploadResult(file_upload_ids=upload_ids, data_columns=data_columns).model_dump()


@router.post("/api/projects/{project_id}/reimport")
async def reimport_files(project_id: int, request: ReimportRequest):
    """Turn pending uploads into tasks."""
    store.get(project_id)

    unknown = [
        upload_id for upload_id in request.file_upload_ids
        if store.uploads.get(upload_id, (None,))[0] != project_id
    ]
    if unknown:
        raise_upload_not_found(project_id, unknown)

    imported = [store.uploads.pop(upload_id)[1] for upload_id in request.file_upload_ids]
    store.tasks.setdefault(project_id, []).extend(imported)

    return {
        "task_count": len(store.tasks[project_id]),
        "files_as_tasks_list": request.files_as_tasks_list,
    }
