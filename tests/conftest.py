"""
Shared fixtures: a valid intake payload and an API client wired to a
temporary blueprint store and a mocked email endpoint.
"""

import copy
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app import rules
from app.config import Settings
from app.main import app, get_mailer, get_store
from app.mailer import IntakeMailer
from app.store import BlueprintStore


@pytest.fixture
def intake():
    """Return a fresh copy of the wizard's default (valid) intake payload."""
    return copy.deepcopy(rules.DEFAULT_INTAKE)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        RESEND_API_KEY="re_test_key",
        INTAKE_RECEIVER_EMAIL="intake@example.com",
        BLUEPRINT_STORE_DIR=tmp_path / "blueprints",
    )


@pytest.fixture
def store(settings):
    return BlueprintStore(settings.BLUEPRINT_STORE_DIR)


@pytest.fixture
def sent():
    """Requests captured by the mocked email endpoint."""
    return []


@pytest.fixture
def email_status():
    """Status code the mocked email endpoint answers with; tests may change it."""
    return {"code": 200}


@pytest.fixture
def mailer(settings, sent, email_status):
    def handler(request: httpx.Request) -> httpx.Response:
        sent.append({"headers": dict(request.headers), "body": json.loads(request.content)})
        return httpx.Response(email_status["code"], json={"id": "email-1"})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    yield IntakeMailer(settings, client=client)
    client.close()


@pytest.fixture
def client(store, mailer):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()
