# =============================================================================
# tests/conftest.py
# Pytest Configuration and Fixtures
# =============================================================================

import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from edunexus_core.api import RemoteStoreClient, StorageConfig
from edunexus_core.offline import InMemoryLocalStore, SQLiteLocalStore
from edunexus_core.services import StorageService

API_URL = "http://backend.test/api"
COLLECTION_NAMES = ("users", "quizzes", "results", "materials", "messages")


# =============================================================================
# FAKE BACKEND
# =============================================================================

def make_response(status: int = 200, payload: Any = None, text: Optional[str] = None) -> MagicMock:
    """Build a requests.Response look-alike"""
    if text is None:
        text = "" if payload is None else json.dumps(payload)

    response = MagicMock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.content = text.encode()
    response.json.side_effect = lambda: json.loads(text)
    return response


class FakeBackend:
    """
    In-process stand-in for the backend, plugged in as the client's session.

    Set ``up = False`` to simulate an unreachable server.
    """

    def __init__(self):
        self.up = True
        self.headers: Dict[str, str] = {}
        self.collections: Dict[str, List[Dict]] = {name: [] for name in COLLECTION_NAMES}
        self.calls: List[tuple] = []
        self.init_calls = 0

    def request(self, method, url, json=None, **kwargs):
        self.calls.append((method, url, json))
        if not self.up:
            raise requests.exceptions.ConnectionError("Connection refused")

        path = url[len(API_URL):]

        if method == "GET":
            return make_response(200, list(self.collections[path.strip("/")]))

        if path == "/init":
            self.init_calls += 1
            return make_response(200, {"status": "initialized"})

        if path == "/users/login":
            for user in self.collections["users"]:
                if user["id"] == json["userId"]:
                    user["lastLogin"] = "2030-01-01T00:00:00.000Z"
            return make_response(200, {"success": True})

        self.collections[path.strip("/")].append(json)
        return make_response(201, json)

    def close(self):
        pass


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def config():
    return StorageConfig(api_url=API_URL, db_path=":memory:")


@pytest.fixture
def remote(config, backend):
    return RemoteStoreClient(config, session=backend)


@pytest.fixture
def local_store():
    return InMemoryLocalStore()


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteLocalStore(tmp_path / "edunexus.db")
    store.initialize()
    yield store
    store.close()


@pytest.fixture
def storage(config, remote, local_store):
    service = StorageService(config, remote=remote, local=local_store)
    yield service
    service.close()


@pytest.fixture
def mock_session():
    """Mock requests.Session for client-level tests"""
    session = MagicMock()
    session.headers = {}
    return session


@pytest.fixture
def response_factory():
    return make_response
