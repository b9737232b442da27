"""
Viewport reflow - re-fits the active surface when the page is resized.
"""

import logging

from .surface import Document
from .state import DashboardState

logger = logging.getLogger("netdash.dashboard")


class ViewportReflow:

    def __init__(self, state: DashboardState, document: Document):
        self.state = state
        self.document = document

    def on_resize(self, width: int, height: int) -> bool:
        """
        Record the new viewport and re-fit the active surface to it.

        Returns:
            True if a surface was resized, False when none is active
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid viewport size {width}x{height}")

        with self.state.lock:
            self.document.viewport = (width, height)
            surface = self.state.active_surface
            if surface is None:
                return False
            surface.resize(width, height)

        logger.debug("resized render surface to %dx%d", width, height)
        return True
