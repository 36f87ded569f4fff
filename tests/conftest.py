import datetime

import pytest

from costboard.engine.storage import MemoryKeyValueStore
from costboard.persistence import SqliteProjectStore, StaticIdentity
from costboard.workspace import Workspace

TODAY = datetime.date(2025, 1, 1)


@pytest.fixture
def identity():
    return StaticIdentity("user-1")


@pytest.fixture
def project_store(tmp_path):
    return SqliteProjectStore(str(tmp_path / "projects.sqlite"))


@pytest.fixture
def workspace(project_store, identity):
    return Workspace(
        store=MemoryKeyValueStore(),
        project_store=project_store,
        identity=identity,
        today=lambda: TODAY,
    )
