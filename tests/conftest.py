"""
Shared fixtures for the Project Creation Wizard tests.
"""

import asyncio
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).parent.parent))

from api.memory_client import InMemoryDraftClient
from common.schemas import Project
from wizard import CreateProjectWizard, HistoryNavigator, ImportPhaseAdapter


class FakeImportPhase(ImportPhaseAdapter):
    """
    Import phase with scripted flags and finish result.

    ``finish_upload`` records itself in the client's call log so tests can
    check it ran before the commit update.
    """

    def __init__(self, client=None, finish_result=True, upload_disabled=False, uploading=False):
        self.client = client
        self.finish_result = finish_result
        self._upload_disabled = upload_disabled
        self._uploading = uploading
        self.finish_calls = 0

    @property
    def upload_disabled(self):
        return self._upload_disabled

    @upload_disabled.setter
    def upload_disabled(self, value):
        self._upload_disabled = value

    @property
    def uploading(self):
        return self._uploading

    @uploading.setter
    def uploading(self, value):
        self._uploading = value

    @property
    def columns(self):
        return ["text"]

    async def finish_upload(self):
        self.finish_calls += 1
        if self.client is not None:
            self.client.calls.append(("finish_upload", ()))
        return self.finish_result


def run(coro):
    """Run a wizard coroutine to completion."""
    return asyncio.run(coro)


@pytest.fixture
def client():
    """In-memory client that already holds two projects."""
    return InMemoryDraftClient(projects=[
        Project(id=1, title="Existing A"),
        Project(id=2, title="Existing B"),
    ])


@pytest.fixture
def navigator():
    return HistoryNavigator()


@pytest.fixture
def import_phase(client):
    return FakeImportPhase(client)


@pytest.fixture
def wizard(client, navigator, import_phase):
    """Wizard with its draft already created."""
    instance = CreateProjectWizard(client, navigator, import_phase=import_phase, wizard_id="test")
    run(instance.open())
    return instance


@pytest.fixture
def unopened_wizard(client, navigator, import_phase):
    """Wizard whose draft was never created."""
    return CreateProjectWizard(client, navigator, import_phase=import_phase, wizard_id="test-unopened")
