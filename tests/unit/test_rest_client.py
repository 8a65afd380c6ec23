"""
Tests for the REST Draft Resource Client against a scripted HTTP session.
"""

import pytest
import requests

from conftest import run
from api.client import RestDraftClient
from common.errors import DraftClientError, ErrorCodes
from common.schemas import CompositeSubmission


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, reason="OK"):
        self.status_code = status_code
        self._payload = payload
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    """Session returning queued responses and recording requests."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.headers = {}

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(*responses, token=""):
    session = FakeSession(*responses)
    client = RestDraftClient(base_url="http://service/", token=token, timeout=5,
                             session=session, wizard_id="rest")
    return client, session


class TestRestDraftClient:

    def test_token_header(self):
        _, session = make_client(token="secret")
        assert session.headers["Authorization"] == "Token secret"

    def test_list_projects_paginated(self):
        client, session = make_client(FakeResponse(payload={
            "count": 2,
            "results": [{"id": 1, "title": "A"}, {"id": 2, "title": "B", "task_number": 4}],
        }))
        projects = run(client.list_projects())

        assert [p.id for p in projects] == [1, 2]
        assert session.requests[0][:2] == ("GET", "http://service/api/projects")
        assert session.requests[0][2]["timeout"] == 5

    def test_list_projects_plain_list(self):
        client, _ = make_client(FakeResponse(payload=[{"id": 5, "title": "E"}]))
        assert run(client.list_projects())[0].title == "E"

    def test_create_project(self):
        client, session = make_client(FakeResponse(201, {"id": 9, "title": "New Project #3"}))
        draft = run(client.create_project("New Project #3"))

        assert draft.id == 9
        method, url, kwargs = session.requests[0]
        assert (method, url) == ("POST", "http://service/api/projects")
        assert kwargs["json"]["title"] == "New Project #3"

    def test_update_title_ok(self):
        client, session = make_client(FakeResponse(200, {"id": 9, "title": "Untitled 1"}))
        result = run(client.update_title(9, "Untitled 1"))

        assert result.ok
        method, url, kwargs = session.requests[0]
        assert (method, url) == ("PATCH", "http://service/api/projects/9")
        assert kwargs["json"] == {"title": "Untitled 1"}

    def test_update_title_validation_errors(self):
        client, _ = make_client(FakeResponse(400, {
            "detail": "Validation error",
            "validation_errors": {"title": ["This field is required."]},
        }, reason="Bad Request"))
        result = run(client.update_title(9, ""))

        assert not result.ok
        assert result.errors == {"title": ["This field is required."]}

    def test_update_title_failure_without_body(self):
        client, _ = make_client(FakeResponse(500, None, reason="Server Error"))
        result = run(client.update_title(9, "x"))
        assert not result.ok
        assert result.errors == {}

    def test_update_project_sends_composite(self):
        body = CompositeSubmission(title="T", description="D", label_config="<View/>")
        client, session = make_client(FakeResponse(200, {"id": 42, "title": "T"}))

        project = run(client.update_project(42, body))

        assert project.id == 42
        assert session.requests[0][2]["json"] == {"title": "T", "description": "D", "label_config": "<View/>"}

    @pytest.mark.parametrize("response", [
        FakeResponse(400, {"validation_errors": {"title": ["bad"]}}),
        FakeResponse(200, None),
        requests.exceptions.ConnectionError("refused"),
    ])
    def test_update_project_failure_is_none(self, response):
        body = CompositeSubmission(title="T", description="", label_config="<View/>")
        client, _ = make_client(response)
        assert run(client.update_project(42, body)) is None

    def test_delete_project(self):
        client, session = make_client(FakeResponse(204, None))
        assert run(client.delete_project(7)) is True
        assert session.requests[0][:2] == ("DELETE", "http://service/api/projects/7")

    def test_transport_error_raises(self):
        client, _ = make_client(requests.exceptions.Timeout("timed out"))
        with pytest.raises(DraftClientError):
            run(client.delete_project(7))

    def test_error_detail_nested_by_service(self):
        client, _ = make_client(FakeResponse(404, {
            "detail": {"detail": "Project '3' not found", "code": ErrorCodes.PROJECT_NOT_FOUND},
        }, reason="Not Found"))
        with pytest.raises(DraftClientError) as exc_info:
            run(client.create_project("x"))

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == ErrorCodes.PROJECT_NOT_FOUND
        assert "not found" in exc_info.value.message

    def test_upload_files_multipart(self, tmp_path):
        data = tmp_path / "a.csv"
        data.write_text("text\nhello\n", encoding="utf-8")
        client, session = make_client(FakeResponse(200, {"file_upload_ids": [11], "data_columns": ["text"]}))

        result = run(client.upload_files(3, [data]))

        assert result.file_upload_ids == [11]
        method, url, kwargs = session.requests[0]
        assert url == "http://service/api/projects/3/import"
        assert kwargs["params"] == {"commit_to_project": "false"}
        assert kwargs["files"][0][1][0] == "a.csv"
        assert kwargs["files"][0][1][1].closed

    def test_reimport(self):
        client, session = make_client(FakeResponse(201, {"task_count": 2}))
        assert run(client.reimport(3, [11, 12], "ts")) is True
        assert session.requests[0][2]["json"] == {"file_upload_ids": [11, 12], "files_as_tasks_list": False}

    def test_unreadable_upload_raises_client_error(self, tmp_path):
        client, session = make_client()

        with pytest.raises(DraftClientError) as exc_info:
            run(client.upload_files(3, [tmp_path / "missing.csv"]))

        assert exc_info.value.code == ErrorCodes.UPLOAD_FAILED
        assert session.requests == []
