"""Shared test fixtures for the OS Grid Reference API test suite."""

import pytest

from osgrid.main import app


@pytest.fixture()
def client():
    """FastAPI test client."""
    from fastapi.testclient import TestClient

    with TestClient(app) as c:
        yield c
