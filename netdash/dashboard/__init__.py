"""
netdash Dashboard Module

Payload shaping, axis scaling and render-surface lifecycle in pure Python.
The controller (dashboard.controller) wires these to the poller.
"""

from .adapter import AdaptedPayload, RenderableSeries, adapt, build_chart_option
from .axis import axis_max, pick_interval
from .state import DashboardState, PollState
from .surface import RenderSurfaceManager

__all__ = [
    "AdaptedPayload",
    "DashboardState",
    "PollState",
    "RenderSurfaceManager",
    "RenderableSeries",
    "adapt",
    "axis_max",
    "build_chart_option",
    "pick_interval",
]
