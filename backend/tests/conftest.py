from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from notekeeper.core.models.collection import CollectionKind
from notekeeper.core.repositories.implementations.filesystem.collection_repository import (
    FileCollectionRepository,
)
from notekeeper.core.repositories.implementations.filesystem.note_repository import (
    FileNoteRepository,
)
from notekeeper.dependencies import get_storage_root
from notekeeper.main import app


@pytest.fixture
def storage_root(tmp_path):
    yield tmp_path / "notes"


@pytest.fixture
def note_repo(storage_root):
    yield FileNoteRepository(storage_root)


@pytest.fixture
def tag_repo(storage_root):
    yield FileCollectionRepository(storage_root, CollectionKind.TAG)


@pytest.fixture
def client(storage_root):
    app.dependency_overrides[get_storage_root] = lambda: storage_root
    with TestClient(app=app) as tester:
        yield tester
    app.dependency_overrides.clear()
