#!/usr/bin/env python3
"""
netdash FastAPI application factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..core.config import DashboardConfig
from ..dashboard.controller import DashboardController
from .routes import create_dashboard_routes

logger = logging.getLogger("netdash.server")


def create_app(config: DashboardConfig, controller: Optional[DashboardController] = None) -> FastAPI:
    """Create the web app; the poller runs for the lifetime of the app."""
    if controller is None:
        controller = DashboardController(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("starting telemetry poller for %s", controller.state.data_url)
        controller.start()
        try:
            yield
        finally:
            await controller.shutdown()

    app = FastAPI(title="netdash", lifespan=lifespan)
    app.state.controller = controller
    app.include_router(create_dashboard_routes(controller))
    return app
