import logging
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import config  # noqa: E402
from config import ConfigurationManager  # noqa: E402
from relayhub_uploader.payload import AdditionalDataTemplate  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    for name in ("RELAYHUB_TOKEN", "RELAYHUB_BASE_URL", "RELAYHUB_START_INDEX"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda *args, **kwargs: False)
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()
    app_logger = logging.getLogger("relayhub_uploader")
    app_logger.handlers.clear()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def template_data():
    return {
        "declaration": [
            {"objectIdentification": {"objectName": "TR-EXP-", "objectType": "export"}},
            {"objectIdentification": {"objectName": "TR-TRN-", "objectType": "transit"}},
        ],
        "meta": {"channel": "sftp"},
    }


@pytest.fixture
def template(template_data):
    return AdditionalDataTemplate(template_data)


def make_shipment(root: Path, name: str, files: dict) -> Path:
    folder = root / name
    folder.mkdir(parents=True)
    for filename, content in files.items():
        (folder / filename).write_bytes(content)
    return folder


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", reason=""):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeSession:
    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.headers = {}
        self.calls = []
        self.closed = False

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise AssertionError("No queued fake response")
        return self.responses.pop(0)

    def close(self):
        self.closed = True
