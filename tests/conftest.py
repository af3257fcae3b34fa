"""
Global pytest fixtures for the go-link test suite.

Responsibilities:
    - Provide a fresh FastAPI TestClient via the app factory for integration tests
    - Provide an isolated in-memory Storage for direct testing
    - Provide Resolver and LinkSearch fixtures wired to that Storage

Why an app factory?
    Using `create_app(storage=...)` gives each test fresh in-memory state and
    lets a test reach into the very store the routes use.
"""

import pytest
from fastapi.testclient import TestClient

from main import create_app
from golinks.resolver.resolver import Resolver
from golinks.search.search import LinkSearch
from golinks.storage.storage import Storage


@pytest.fixture
def storage() -> Storage:
    """Fresh in-memory Storage backend."""
    return Storage()


@pytest.fixture
def resolver(storage: Storage) -> Resolver:
    return Resolver(storage)


@pytest.fixture
def search(storage: Storage) -> LinkSearch:
    return LinkSearch(storage)


@pytest.fixture
def client(storage: Storage) -> TestClient:
    """
    TestClient over a new app bound to the `storage` fixture.

    Redirects are not followed so tests can assert on Location headers.
    """
    app = create_app(storage=storage)
    return TestClient(app, follow_redirects=False)
