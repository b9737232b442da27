"""
Telemetry poller background task.

Fetches the telemetry document on a fixed cadence and drives the adapter
and the render surface. A poll ends in one of three states (rendered,
empty, failed); none of them stops the ticker.
"""

import asyncio
import json
import logging
import time
from typing import Optional, Set
from urllib.error import HTTPError, URLError

from pydantic import ValidationError

from ..api.schemas import TelemetryPayload
from ..core.errors import DashboardError, DecodeError, TransportError
from ..dashboard.adapter import adapt, build_chart_option
from ..dashboard.state import DashboardState, PollState
from ..dashboard.surface import RenderSurfaceManager
from ..http_client import NetdashHttpClient

logger = logging.getLogger("netdash.poller")

FAILED_MESSAGE = "failed to fetch data"


class TelemetrySource:
    """Reads one TelemetryPayload from the telemetry endpoint."""

    def __init__(self, http_client: NetdashHttpClient, data_url: str):
        self.http_client = http_client
        self.data_url = data_url

    def fetch_sync(self) -> TelemetryPayload:
        """
        Blocking fetch and validation.

        Raises:
            TransportError: connection failure, timeout or non-2xx status
            DecodeError: body is not JSON or not a telemetry payload
        """
        try:
            document = self.http_client.get_json(self.data_url)
        except HTTPError as e:
            raise TransportError(f"HTTP {e.code} from {self.data_url}", status=e.code) from e
        except (URLError, OSError) as e:
            raise TransportError(f"failed to reach {self.data_url}: {e}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"invalid JSON from {self.data_url}: {e}") from e

        try:
            return TelemetryPayload.model_validate(document)
        except ValidationError as e:
            raise DecodeError(f"unexpected payload shape from {self.data_url}: {e}") from e

    async def fetch(self) -> TelemetryPayload:
        # Run blocking fetch in executor to avoid blocking event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.fetch_sync)


class TelemetryPoller:
    """
    Fetch-and-refresh loop.

    With skip_when_busy (the default) a tick that fires while a poll is
    still outstanding is skipped. Without it polls may overlap and the
    last one to finish decides what is shown.
    """

    def __init__(
        self,
        state: DashboardState,
        manager: RenderSurfaceManager,
        source: TelemetrySource,
        interval: float = 5,
        skip_when_busy: bool = True,
    ):
        self.state = state
        self.manager = manager
        self.source = source
        self.interval = interval
        self.skip_when_busy = skip_when_busy
        self.ticks = 0
        self._in_flight: Set[asyncio.Task] = set()
        self._connection_failed = False

    @property
    def empty_message(self) -> str:
        return f"no data yet, wait {self.interval * 2:g} seconds"

    @property
    def busy(self) -> bool:
        return bool(self._in_flight)

    def _transition(self, new_state: PollState) -> None:
        logger.debug("poll state %s -> %s", self.state.poll_state.value, new_state.value)
        self.state.poll_state = new_state

    def _fail(self, error: Exception) -> None:
        self._connection_failed = True
        self.state.last_error = str(error)
        self.manager.show_placeholder(FAILED_MESSAGE)
        self._transition(PollState.FAILED)

    async def poll_once(self) -> PollState:
        """Run one fetch-adapt-render cycle and return the resulting state."""
        self._transition(PollState.FETCHING)
        try:
            payload = await self.source.fetch()
            adapted = adapt(payload)

            if adapted.empty:
                self.manager.show_placeholder(self.empty_message)
                self._transition(PollState.EMPTY)
            else:
                option = build_chart_option(adapted)
                with self.state.lock:
                    surface = self.manager.ensure_surface()
                    surface.apply(option)
                self._transition(PollState.RENDERED)

            self.state.last_error = None
            if self._connection_failed:
                logger.info("telemetry fetch recovered: %s", self.source.data_url)
                self._connection_failed = False

        except DashboardError as e:
            logger.error("poll of %s failed: %s", self.source.data_url, e)
            self._fail(e)
        except Exception as e:
            logger.exception("unexpected error during poll of %s: %s", self.source.data_url, e)
            self._fail(e)

        self.state.last_update = time.time()
        return self.state.poll_state

    def tick(self) -> Optional[asyncio.Task]:
        """Launch one poll as a task; None when skipped by the in-flight guard."""
        self.ticks += 1
        if self.skip_when_busy and self._in_flight:
            logger.debug("previous poll still in flight, skipping tick %d", self.ticks)
            return None

        task = asyncio.get_running_loop().create_task(self.poll_once())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def run(self) -> None:
        """Tick immediately, then every interval seconds, until cancelled."""
        logger.info("polling %s every %ss", self.source.data_url, self.interval)
        while True:
            self.tick()
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        """Schedule the ticker on the running loop and record its handle."""
        handle = self.state.poll_handle
        if handle is not None and not handle.done():
            return handle
        handle = asyncio.get_running_loop().create_task(self.run())
        self.state.poll_handle = handle
        return handle

    async def stop(self) -> None:
        """Cancel the ticker and any outstanding polls."""
        tasks = list(self._in_flight)
        if self.state.poll_handle is not None:
            tasks.append(self.state.poll_handle)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self.state.poll_handle = None
        logger.info("stopped polling %s", self.source.data_url)
