import os

import pytest
import requests

# Keep tests offline and independent of any local .env.
os.environ["PINATA_JWT"] = ""
os.environ["ENVIRONMENT"] = "test"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakePinata:
    """Stands in for ``requests.post`` and replays queued outcomes in order."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, str):
            return FakeResponse(payload={"IpfsHash": outcome, "PinSize": 1})
        return outcome


@pytest.fixture
def fake_pinata(monkeypatch):
    def install(*outcomes):
        fake = FakePinata(*outcomes)
        monkeypatch.setattr("stamp_api.services.storage_service.requests.post", fake)
        return fake

    return install


@pytest.fixture
def timeout_error():
    return requests.Timeout("read timed out")


@pytest.fixture
def connection_error():
    return requests.ConnectionError("connection refused")
