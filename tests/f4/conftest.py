"""Fixtures for F4 tests - web API and pages."""

import pytest
from fastapi.testclient import TestClient

from academy.web.api import create_app


@pytest.fixture
def client(data_dir):
    """Create test client over the sample curriculum."""
    app = create_app()
    return TestClient(app)
