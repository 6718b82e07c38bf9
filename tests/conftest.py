"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient

from ethicaldrive.main import app
from ethicaldrive.narrative.client import NarrativeError
from ethicaldrive.routes.analyze_route import get_narrative_client


class FakeNarrativeClient:
    """Stands in for NarrativeClient; records prompts, never touches the network"""

    def __init__(self, fail=False, video_output=None):
        self.fail = fail
        self.video_output = video_output or {
            "objects": [],
            "positions": [],
            "signals": [],
            "context": "",
            "scenario_summary": "Nothing of note.",
        }
        self.calls = []

    async def generate(self, prompt, images=None):
        self.calls.append((prompt, images))
        if self.fail:
            raise NarrativeError("service down")
        if images:
            return self.video_output
        if '"scenario_summary"' in prompt:
            return {"scenario_summary": "A generated summary."}
        return {"explanation": "A generated explanation."}


@pytest.fixture
def fake_narrative():
    return FakeNarrativeClient()


@pytest.fixture
def api(fake_narrative):
    app.dependency_overrides[get_narrative_client] = lambda: fake_narrative
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
