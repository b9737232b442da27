#!/usr/bin/env python3
"""
Dashboard Routes - Web UI and Surface API
"""

import logging
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..dashboard.controller import DashboardController
from ..web.template_helpers import setup_template_filters
from .schemas import ViewportRequest

logger = logging.getLogger("netdash.server")

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


def create_dashboard_routes(controller: DashboardController) -> APIRouter:
    """Create dashboard page and surface API routes."""
    router = APIRouter()
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    setup_template_filters(templates)

    def render_page(request: Request):
        surface_data = controller.get_surface_data()
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "page_title": "netdash",
                "container_id": controller.manager.container_id,
                **surface_data,
            },
            headers={"Refresh": str(controller.poller.interval)},
        )

    @router.get("/", response_class=HTMLResponse)
    def dashboard_main(request: Request):
        """Dashboard page - the chart, or the placeholder when there is nothing to draw."""
        return render_page(request)

    @router.get("/net", response_class=HTMLResponse)
    def dashboard_net(request: Request):
        return render_page(request)

    @router.get("/api/surface")
    def get_surface():
        return controller.get_surface_data()

    @router.post("/api/viewport")
    def update_viewport(viewport: ViewportRequest):
        """Re-fit the active surface to the reported page size."""
        try:
            resized = controller.reflow.on_resize(viewport.width, viewport.height)
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        return {"resized": resized, "width": viewport.width, "height": viewport.height}

    @router.get("/health")
    def health():
        return {"status": "ok", "state": controller.state.poll_state.value}

    return router
