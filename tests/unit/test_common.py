"""
Tests for the shared utilities: title rules, error extraction, column
detection and JSON logging.
"""

import io
import json
import logging

import numpy as np
import pytest

from common import columns, constants, logger as wizard_logger, utils


class TestUtils:

    def test_draft_title(self):
        assert utils.draft_title(0) == "New Project #1"
        assert utils.draft_title(41) == "New Project #42"

    def test_project_data_route(self):
        assert utils.project_data_route(42) == "/projects/42/data"

    def test_wizard_id_format(self):
        wizard_id = utils.generate_wizard_id()
        timestamp, short_uuid = wizard_id.split("_")
        assert timestamp.endswith("Z")
        assert len(short_uuid) == 8

    @pytest.mark.parametrize("title,expected", [
        ("Untitled 1", []),
        ("", [constants.TITLE_REQUIRED_MESSAGE]),
        ("   ", [constants.TITLE_REQUIRED_MESSAGE]),
        (None, [constants.TITLE_REQUIRED_MESSAGE]),
        ("x" * 51, [constants.TITLE_TOO_LONG_MESSAGE]),
        ("x" * 50, []),
    ])
    def test_validate_title(self, title, expected):
        assert utils.validate_title(title) == expected

    @pytest.mark.parametrize("errors,expected", [
        ({"title": ["This field is required."]}, "This field is required."),
        ({"title": "Taken"}, "Taken"),
        ({"title": []}, None),
        ({"description": ["bad"]}, None),
        ({}, None),
        (None, None),
    ])
    def test_extract_field_error(self, errors, expected):
        assert utils.extract_field_error(errors, "title") == expected


class TestColumns:

    def test_csv_header(self):
        buffer = io.BytesIO(b"text,label\nhello,pos\n")
        assert columns.detect_columns("data.csv", buffer) == ["text", "label"]

    def test_tsv_header(self):
        buffer = io.BytesIO(b"audio\tspeaker\nx.wav\tA\n")
        assert columns.detect_columns("data.tsv", buffer) == ["audio", "speaker"]

    def test_json_plain_records(self):
        buffer = io.BytesIO(json.dumps([{"text": "a", "meta": 1}, {"text": "b"}]).encode())
        assert columns.detect_columns("tasks.json", buffer) == ["text", "meta"]

    def test_json_wrapped_records(self):
        buffer = io.BytesIO(json.dumps({"data": {"image": "x.png"}}).encode())
        assert columns.detect_columns("task.json", buffer) == ["image"]

    def test_text_file(self):
        assert columns.detect_columns("notes.txt", io.BytesIO(b"hello")) == ["text"]

    def test_broken_json(self):
        assert columns.detect_columns("broken.json", io.BytesIO(b"{not json")) == []

    def test_tabular_and_supported(self):
        assert columns.is_tabular("A.CSV")
        assert not columns.is_tabular("a.json")
        assert columns.is_supported("a.txt")
        assert not columns.is_supported("a.zip")


class TestLogger:

    def test_json_lines_carry_wizard_context(self):
        test_logger = wizard_logger.get_wizard_logger("wiz123", "controller")
        stream = io.StringIO()
        test_logger.handlers[0].stream = stream

        wizard_logger.log_structured_event(
            test_logger, "commit_succeeded", {"project_id": np.int64(42)}, "Project 42 committed"
        )

        entry = json.loads(stream.getvalue().strip())
        assert entry["message"] == "Project 42 committed"
        assert entry["wizard_id"] == "wiz123"
        assert entry["component"] == "controller"
        assert entry["event"] == "commit_succeeded"
        assert entry["event_data"] == {"project_id": 42}
        assert entry["severity"] == "INFO"

    def test_logger_configured_once(self):
        first = wizard_logger.get_logger("once", "wizard")
        second = wizard_logger.get_logger("once", "wizard")
        assert first is second
        assert len(second.handlers) == 1
        assert second.propagate is False

    def test_structured_error(self):
        test_logger = wizard_logger.get_wizard_logger("wiz-err", "editor")
        stream = io.StringIO()
        test_logger.handlers[0].stream = stream

        wizard_logger.log_structured_error(test_logger, "autosave_failed", "refused", {"project_id": 3})

        entry = json.loads(stream.getvalue().strip())
        assert entry["severity"] == "ERROR"
        assert entry["error_type"] == "autosave_failed"
        assert entry["error_context"] == {"project_id": 3}

    def test_warning_level_events(self):
        test_logger = wizard_logger.get_wizard_logger("wiz-warn", "controller")
        stream = io.StringIO()
        test_logger.handlers[0].stream = stream

        wizard_logger.log_structured_event(test_logger, "commit_failed", level=logging.WARNING)
        assert json.loads(stream.getvalue())["severity"] == "WARNING"
