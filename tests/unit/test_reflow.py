"""Unit tests for viewport reflow"""
import pytest

from netdash.dashboard.reflow import ViewportReflow


class TestViewportReflow:

    def test_noop_without_surface(self, state, document):
        reflow = ViewportReflow(state, document)
        assert reflow.on_resize(640, 480) is False
        assert document.viewport == (640, 480)

    def test_resizes_active_surface(self, state, document, manager):
        surface = manager.ensure_surface()
        reflow = ViewportReflow(state, document)

        assert reflow.on_resize(640, 480) is True
        assert (surface.renderer.width, surface.renderer.height) == (640, 480)

    def test_new_surface_picks_up_last_size(self, state, document, manager):
        ViewportReflow(state, document).on_resize(300, 200)
        surface = manager.ensure_surface()
        assert (surface.renderer.width, surface.renderer.height) == (300, 200)

    def test_after_placeholder_is_noop(self, state, document, manager):
        surface = manager.ensure_surface()
        manager.show_placeholder("failed to fetch data")

        assert ViewportReflow(state, document).on_resize(640, 480) is False
        assert surface.renderer.width == 1200

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-1, 5)])
    def test_rejects_invalid_size(self, state, document, width, height):
        with pytest.raises(ValueError):
            ViewportReflow(state, document).on_resize(width, height)
