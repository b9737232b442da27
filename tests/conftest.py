"""Pytest configuration and shared fixtures"""
import pytest

from netdash.api.schemas import TelemetryPayload
from netdash.core.config import DashboardConfig
from netdash.core.errors import TransportError
from netdash.dashboard.controller import DashboardController
from netdash.dashboard.state import DashboardState
from netdash.dashboard.surface import Document, RenderSurfaceManager


class FakeSource:
    """Telemetry source returning queued outcomes; the last one repeats."""

    def __init__(self, *outcomes, data_url="http://test/net.json"):
        self.outcomes = list(outcomes)
        self.data_url = data_url
        self.calls = 0

    async def fetch(self):
        self.calls += 1
        outcome = self.outcomes[0] if len(self.outcomes) == 1 else self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return TelemetryPayload.model_validate(outcome)


@pytest.fixture
def eth0_payload():
    """Two-sample payload from the end-to-end example"""
    return {
        "scales": ["t0", "t1"],
        "series_vec": [{"name": "eth0", "data": [0, 2048]}],
    }


@pytest.fixture
def rich_payload():
    """Two interfaces with markers, colors and a bar series"""
    return {
        "scales": ["12:00:00", "12:00:05", "12:00:10"],
        "series_vec": [
            {
                "name": "eth0 rx",
                "data": [1024, 3072, 2048],
                "color": "#5470c6",
                "show_avg_line": True,
                "show_max_point": True,
            },
            {
                "name": "eth0 tx",
                "data": [512, 256, 128],
                "type": "bar",
            },
        ],
    }


@pytest.fixture
def empty_payload():
    return {"scales": [], "series_vec": []}


@pytest.fixture
def state():
    return DashboardState(data_url="http://test/net.json")


@pytest.fixture
def document():
    return Document()


@pytest.fixture
def manager(state, document):
    return RenderSurfaceManager(state, document, container_id="chart")


@pytest.fixture
def config():
    return DashboardConfig(server="http://test", interval=5)


@pytest.fixture
def failing_source():
    return FakeSource(TransportError("connection refused"))


@pytest.fixture
def make_controller(config):
    """Build a controller around a fake telemetry source"""
    def _make(*outcomes):
        return DashboardController(config, source=FakeSource(*outcomes))
    return _make


@pytest.fixture
def make_source():
    return FakeSource
