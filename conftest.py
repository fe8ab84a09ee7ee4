import pytest
from types import SimpleNamespace

import docusign_client
from app import create_app
from config import Settings

SIGNING_ENV = ("ACCESS_TOKEN", "ACCOUNT_ID", "USER_FULLNAME", "USER_EMAIL",
               "BASE_URL", "RETURN_URL", "PROJECT_DOMAIN", "ENVELOPE_SOURCE")


class FakeEnvelopesApi:
    """Records calls in order; answers like EnvelopesApi."""
    calls = []
    api_clients = []
    envelope_id = "env-123"
    url = "https://demo.docusign.net/Signing/StartInSession.aspx?t=abc"
    error = None
    view_error = None

    def __init__(self, api_client=None):
        self.api_clients.append(api_client)

    def create_envelope(self, account_id, envelope_definition=None):
        self.calls.append(("create_envelope", account_id, envelope_definition))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(envelope_id=self.envelope_id)

    def create_recipient_view(self, account_id, envelope_id, recipient_view_request=None):
        self.calls.append(("create_recipient_view", account_id, envelope_id, recipient_view_request))
        if self.view_error is not None:
            raise self.view_error
        return SimpleNamespace(url=self.url)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in SIGNING_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def envelopes_api(monkeypatch):
    fake = type("RecordingEnvelopesApi", (FakeEnvelopesApi,), {"calls": [], "api_clients": []})
    monkeypatch.setattr(docusign_client, "EnvelopesApi", fake)
    return fake


@pytest.fixture
def settings():
    return Settings.from_env({"HOST": "localhost", "PORT": "3000"})


@pytest.fixture
def client(settings, envelopes_api):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app.test_client()
