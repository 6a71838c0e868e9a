import json
from unittest.mock import MagicMock

import pytest

from huesheets.config import Settings
from huesheets.servicios.oauth_bootstrap import ClientSecret

TEMP_SENSOR = {
    "type": "ZLLTemperature",
    "uniqueid": "AA",
    "state": {"lastupdated": "2020-01-01T00:00:00", "temperature": 2150},
}


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            import requests
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, payload, status_code=200):
        self.response = FakeResponse(payload, status_code)
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        return self.response


@pytest.fixture
def settings(tmp_path):
    return Settings(
        HUE_IP="192.168.1.10",
        HUE_APP_USERNAME="appuser",
        HUE_TIMEOUT=None,
        SENSOR_TYPE="ZLLTemperature",
        GOOGLE_SHEET_ID="sheet-123",
        GOOGLE_SHEET_RANGE="Sheet1!A:D",
        OAUTH_CLIENT_PATH=str(tmp_path / "secrets" / "oauth_client.json"),
        OAUTH_TOKEN_PATH=str(tmp_path / "home" / ".credentials" / "google-api-creds.json"),
        EXPORT_DIR=str(tmp_path / "out"),
    )


@pytest.fixture
def client_secret():
    return ClientSecret(client_id="X", client_secret="Y", redirect_uri="Z")


@pytest.fixture
def write_json():
    def _write(path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sheets_client():
    client = MagicMock()
    client.http_client.values_append.return_value = {
        "spreadsheetId": "sheet-123",
        "updates": {"updatedRows": 1},
    }
    return client
