"""Shared fixtures: a CalendlyService wired to a mocked requests.Session."""
import json
from unittest.mock import MagicMock

import pytest

from calendly_cli.calendly_client import CalendlyClient
from calendly_cli.services.calendly_service import CalendlyService

USER_URI = "https://api.calendly.com/users/USER123"
ORG_URI = "https://api.calendly.com/organizations/ORG456"

ME = {
    "resource": {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "timezone": "Europe/London",
        "scheduling_url": "https://calendly.com/ada",
        "current_organization": ORG_URI,
        "uri": USER_URI,
    }
}


def make_response(status=200, payload=None, text=None):
    r = MagicMock()
    r.status_code = status
    if payload is not None:
        r.text = json.dumps(payload)
        r.json.return_value = payload
    else:
        r.text = text or ""
        r.json.side_effect = ValueError("No JSON object could be decoded")
    r.content = r.text.encode("utf-8")
    return r


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return CalendlyClient("test-token", session=session)


@pytest.fixture
def service(client):
    return CalendlyService(client)


def calls(session):
    """(method, url, kwargs) for every request the mocked session received"""
    return [(c.args[0], c.args[1], c.kwargs) for c in session.request.call_args_list]
