"""
Integration tests for the development project service.
Exercises the project endpoints through FastAPI's TestClient.
"""

import json

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.routes import projects
from common.errors import ErrorCodes


@pytest.fixture
def service():
    projects.store.reset()
    with TestClient(app) as test_client:
        yield test_client
    projects.store.reset()


def create(service, title="New Project #1"):
    response = service.post("/api/projects", json={"title": title})
    assert response.status_code == 201
    return response.json()


class TestProjectEndpoints:

    def test_health(self, service):
        assert service.get("/health").json() == {"status": "healthy"}

    def test_create_and_list(self, service):
        first = create(service, "New Project #1")
        second = create(service, "New Project #2")

        listing = service.get("/api/projects").json()
        assert listing["count"] == 2
        assert [p["id"] for p in listing["results"]] == [first["id"], second["id"]]
        assert first["label_config"] == "<View></View>"

    def test_list_pagination(self, service):
        for number in range(3):
            create(service, f"P{number}")

        page = service.get("/api/projects", params={"page": 2, "page_size": 2}).json()
        assert page["count"] == 3
        assert [p["title"] for p in page["results"]] == ["P2"]

    def test_create_requires_title(self, service):
        response = service.post("/api/projects", json={"title": ""})
        assert response.status_code == 400
        assert response.json()["validation_errors"] == {"title": ["This field is required."]}

    def test_patch_title(self, service):
        project = create(service)
        response = service.patch(f"/api/projects/{project['id']}", json={"title": "Untitled 1"})

        assert response.status_code == 200
        assert response.json()["title"] == "Untitled 1"
        assert service.get(f"/api/projects/{project['id']}").json()["title"] == "Untitled 1"

    def test_patch_rejects_long_title(self, service):
        project = create(service)
        response = service.patch(f"/api/projects/{project['id']}", json={"title": "x" * 51})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == ErrorCodes.VALIDATION_FAILED
        assert "title" in body["validation_errors"]
        assert service.get(f"/api/projects/{project['id']}").json()["title"] == "New Project #1"

    def test_patch_composite_submission(self, service):
        project = create(service)
        submission = {"title": "Reviews", "description": "Sentiment", "label_config": "<View/>"}

        updated = service.patch(f"/api/projects/{project['id']}", json=submission).json()
        assert {key: updated[key] for key in submission} == submission

    def test_patch_without_title_keeps_it(self, service):
        project = create(service)
        updated = service.patch(f"/api/projects/{project['id']}", json={"description": "Only this"}).json()

        assert updated["title"] == "New Project #1"
        assert updated["description"] == "Only this"

    def test_delete(self, service):
        project = create(service)

        assert service.delete(f"/api/projects/{project['id']}").status_code == 204
        assert service.get(f"/api/projects/{project['id']}").status_code == 404

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/projects/99"),
        ("patch", "/api/projects/99"),
        ("delete", "/api/projects/99"),
    ])
    def test_unknown_project(self, service, method, path):
        kwargs = {"json": {"title": "x"}} if method == "patch" else {}
        response = getattr(service, method)(path, **kwargs)

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == ErrorCodes.PROJECT_NOT_FOUND


class TestImportEndpoints:

    def test_pending_upload_then_reimport(self, service):
        project = create(service)
        files = [("file", ("reviews.csv", b"text,rating\nGreat,5\n", "text/csv"))]

        upload = service.post(f"/api/projects/{project['id']}/import",
                              params={"commit_to_project": "false"}, files=files).json()
        assert upload["data_columns"] == ["text", "rating"]
        assert projects.store.tasks.get(project["id"]) is None

        response = service.post(f"/api/projects/{project['id']}/reimport", json={
            "file_upload_ids": upload["file_upload_ids"],
            "files_as_tasks_list": True,
        })
        assert response.status_code == 200
        assert response.json()["task_count"] == 1
        assert projects.store.tasks[project["id"]] == ["reviews.csv"]

    def test_import_commits_by_default(self, service):
        project = create(service)
        payload = json.dumps([{"image": "a.png"}]).encode()

        service.post(f"/api/projects/{project['id']}/import",
                     files=[("file", ("tasks.json", payload, "application/json"))])
        assert projects.store.tasks[project["id"]] == ["tasks.json"]

    def test_unsupported_file(self, service):
        project = create(service)
        response = service.post(f"/api/projects/{project['id']}/import",
                                files=[("file", ("archive.zip", b"PK", "application/zip"))])

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == ErrorCodes.UNSUPPORTED_FILE

    def test_reimport_of_foreign_upload(self, service):
        owner = create(service, "Owner")
        other = create(service, "Other")
        upload = service.post(f"/api/projects/{owner['id']}/import",
                              params={"commit_to_project": "false"},
                              files=[("file", ("notes.txt", b"hello", "text/plain"))]).json()

        response = service.post(f"/api/projects/{other['id']}/reimport",
                                json={"file_upload_ids": upload["file_upload_ids"]})
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == ErrorCodes.UPLOAD_NOT_FOUND

    def test_delete_drops_pending_uploads(self, service):
        project = create(service)
        service.post(f"/api/projects/{project['id']}/import",
                     params={"commit_to_project": "false"},
                     files=[("file", ("notes.txt", b"hello", "text/plain"))])

        service.delete(f"/api/projects/{project['id']}")
        assert projects.store.uploads == {}
