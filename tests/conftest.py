import json

import pytest

from tests.helpers import ENTRY_JS, DummyResp


@pytest.fixture
def app_files():
    return {
        "package.json": json.dumps({"name": "app", "type": "module", "main": "index.js"}, indent=2),
        "index.js": ENTRY_JS,
        "config.js": "export default { owner: 'Y' };\n",
        "lib/bot.js": "export function start() {}\n",
    }


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get; set `.response` (or `.exc`) before the call."""
    calls = []

    class _Fake:
        response = DummyResp()
        exc = None

        def __call__(self, url, headers=None, stream=False, timeout=None):
            calls.append({"url": url, "headers": headers or {}, "stream": stream, "timeout": timeout})
            if self.exc is not None:
                raise self.exc
            return self.response

    fake = _Fake()
    fake.calls = calls
    monkeypatch.setattr("requests.get", fake)
    return fake
