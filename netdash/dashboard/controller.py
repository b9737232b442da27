"""
Dashboard Controller

Builds the dashboard context (state, document, surface manager, reflow
handler, poller) from configuration and exposes the data the web layer
renders. All methods return plain Python structures.
"""

import logging
from typing import Any, Dict, Optional

from ..core.config import DashboardConfig
from ..http_client import NetdashHttpClient
from ..tasks.poller import TelemetryPoller, TelemetrySource
from .reflow import ViewportReflow
from .state import DashboardState
from .surface import Document, RenderSurfaceManager

logger = logging.getLogger("netdash.dashboard")


class DashboardController:
    """Owns the one dashboard context of the process."""

    def __init__(self, config: DashboardConfig, source: Optional[TelemetrySource] = None):
        self.config = config
        data_url = config.resolve_data_url()
        if source is None:
            source = TelemetrySource(NetdashHttpClient(config.server, timeout=config.timeout), data_url)

        self.state = DashboardState(data_url=data_url)
        self.document = Document()
        self.manager = RenderSurfaceManager(self.state, self.document, config.container_id)
        self.reflow = ViewportReflow(self.state, self.document)
        self.poller = TelemetryPoller(
            self.state,
            self.manager,
            source,
            interval=config.poll_period,
            skip_when_busy=config.skip_when_busy,
        )

    def start(self):
        return self.poller.start()

    async def shutdown(self) -> None:
        await self.poller.stop()
        self.manager.dispose()

    def get_surface_data(self) -> Dict[str, Any]:
        """Snapshot of the dashboard for the page template and the JSON API."""
        data = {
            "state": self.state.poll_state.value,
            "data_url": self.state.data_url,
            "interval": self.poller.interval,
            "last_update": self.state.last_update,
            "last_error": self.state.last_error,
        }
        data.update(self.manager.describe())
        return data
