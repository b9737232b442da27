"""
Render surface lifecycle.

A render surface is a live chart renderer bound to a container attached to
the document. At most one surface is alive at a time: every switch to the
placeholder, and every rebuild, disposes the previous renderer first.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from .state import DashboardState

logger = logging.getLogger("netdash.dashboard")

DEFAULT_VIEWPORT = (1200, 600)


class Container:
    """Attachable element identified by a stable id."""

    def __init__(self, element_id: str, text: Optional[str] = None):
        self.element_id = element_id
        self.text = text
        self.attached = False


class Document:
    """Holds the attached containers by id, plus the current viewport size."""

    def __init__(self, viewport: Tuple[int, int] = DEFAULT_VIEWPORT):
        self.viewport = viewport
        self._elements: Dict[str, Container] = {}

    def attach(self, container: Container) -> None:
        """Attach container, detaching any element that holds the same id."""
        previous = self._elements.get(container.element_id)
        if previous is not None:
            previous.attached = False
        self._elements[container.element_id] = container
        container.attached = True

    def get(self, element_id: str) -> Optional[Container]:
        return self._elements.get(element_id)


class ChartRenderer:
    """Chart instance bound to one container; keeps the last applied option."""

    def __init__(self, container: Container, width: int, height: int):
        self.container = container
        self.width = width
        self.height = height
        self.option: Optional[Dict[str, Any]] = None
        self.disposed = False

    def set_option(self, option: Dict[str, Any]) -> None:
        if self.disposed:
            raise RuntimeError(f"renderer for '{self.container.element_id}' is disposed")
        self.option = option

    def resize(self, width: int, height: int) -> None:
        if self.disposed:
            return
        self.width = width
        self.height = height

    def dispose(self) -> None:
        self.option = None
        self.disposed = True


class RenderSurface:
    def __init__(self, container: Container, renderer: ChartRenderer):
        self.container = container
        self.renderer = renderer

    @property
    def disposed(self) -> bool:
        return self.renderer.disposed

    def apply(self, option: Dict[str, Any]) -> None:
        self.renderer.set_option(option)

    def resize(self, width: int, height: int) -> None:
        self.renderer.resize(width, height)

    def dispose(self) -> None:
        self.renderer.dispose()

    def snapshot(self) -> Dict[str, Any]:
        return {
            "container": self.container.element_id,
            "width": self.renderer.width,
            "height": self.renderer.height,
            "option": self.renderer.option,
        }


class RenderSurfaceManager:
    """
    Owns the render-target lifecycle.

    All methods mutate the one container slot and `state.active_surface`
    under `state.lock`.
    """

    def __init__(
        self,
        state: DashboardState,
        document: Document,
        container_id: str = "chart",
        renderer_factory: Callable[[Container, int, int], ChartRenderer] = ChartRenderer,
    ):
        self.state = state
        self.document = document
        self.container_id = container_id
        self.renderer_factory = renderer_factory

    def ensure_surface(self) -> RenderSurface:
        """Return the live surface, building one if the dashboard has none."""
        with self.state.lock:
            if self.state.active_surface is not None:
                return self.state.active_surface

            container = Container(self.container_id)
            self.document.attach(container)
            width, height = self.document.viewport
            surface = RenderSurface(container, self.renderer_factory(container, width, height))
            self.state.active_surface = surface
            logger.debug("created render surface in #%s (%dx%d)", self.container_id, width, height)
            return surface

    def show_placeholder(self, text: str) -> None:
        """Drop the live surface and show only text in a fresh container."""
        with self.state.lock:
            self.dispose()
            self.document.attach(Container(self.container_id, text=text))

    def dispose(self) -> None:
        with self.state.lock:
            surface = self.state.active_surface
            if surface is None:
                return
            surface.dispose()
            self.state.active_surface = None
            logger.debug("disposed render surface in #%s", self.container_id)

    def describe(self) -> Dict[str, Any]:
        """What the container currently shows: a surface snapshot or placeholder text."""
        with self.state.lock:
            surface = self.state.active_surface
            container = self.document.get(self.container_id)
            return {
                "surface": surface.snapshot() if surface is not None else None,
                "placeholder": container.text if container is not None and surface is None else None,
            }
