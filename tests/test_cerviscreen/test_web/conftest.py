from __future__ import annotations

import pytest

from cerviscreen.web.app import create_app


@pytest.fixture
def app(store, assessor):
    """Create a Flask app for testing."""
    application = create_app(store=store, assessor=assessor)
    application.config["TESTING"] = True
    return application


@pytest.fixture
def client(app):
    """Create a Flask test client."""
    return app.test_client()
