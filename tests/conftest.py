"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import pytest

from reeve.repoflow.models import Workspace
from tests.helpers.repoflow_fake import FakeRepoFlowGateway

WORKSPACE_ID = "ws-abc"
WORKSPACE_NAME = "example"


@pytest.fixture
def gateway() -> FakeRepoFlowGateway:
    """Return an in-memory gateway holding the ``example`` workspace."""
    return FakeRepoFlowGateway([Workspace(id=WORKSPACE_ID, name=WORKSPACE_NAME)])
