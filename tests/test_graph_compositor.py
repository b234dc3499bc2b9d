from __future__ import annotations

import pytest

from plotcore.graph_canvas import RecordingCanvas
from plotcore.graph_compositor import Compositor
from plotcore.graph_types import Color, Pos

try:
    from hypothesis import given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


DEPTHS = st.floats(min_value=0.0, max_value=1.0, allow_nan=False)
ORIGIN = Pos(0.0, 0.0)


@given(depths=st.lists(DEPTHS, max_size=40))
def test_flush_order_is_ascending_depth(depths: list[float]) -> None:
    """Back-to-front: drawn depths never decrease."""
    canvas = RecordingCanvas()
    compositor = Compositor(canvas)
    for i, depth in enumerate(depths):
        compositor.line(depth, ORIGIN, Pos(float(i), 0.0), Color(0, 0, 0), float(i))
    order = [d for d, _, _ in compositor.sorted_entries()]
    assert order == sorted(depths)
    assert compositor.flush() == len(depths)
    drawn = [call.args[1] for call in canvas.of("line_segment")]
    assert [depths[int(w)] for w in drawn] == sorted(depths)
    assert len(compositor) == 0


def test_equal_depths_keep_submission_order() -> None:
    canvas = RecordingCanvas()
    compositor = Compositor(canvas)
    colors = [Color(i, 0, 0) for i in range(5)]
    for color in colors:
        compositor.point(0.25, ORIGIN, color)
    compositor.flush()
    assert [call.args[1] for call in canvas.of("rect_filled")] == colors


def test_fast_mode_draws_immediately() -> None:
    canvas = RecordingCanvas()
    compositor = Compositor(canvas, fast=True, point_size=7.0)
    compositor.point(0.9, ORIGIN, Color(1, 2, 3))
    compositor.line(0.1, ORIGIN, Pos(1.0, 1.0), Color(4, 5, 6), 2.0)
    assert canvas.names() == ["rect_filled", "line_segment"]
    assert canvas.calls[0].args[2] == 7.0
    assert len(compositor) == 0
    assert compositor.flush() == 0


def test_missing_depth_bypasses_buffer() -> None:
    canvas = RecordingCanvas()
    compositor = Compositor(canvas)
    compositor.point(None, ORIGIN, Color(0, 0, 0))
    assert canvas.names() == ["rect_filled"]
    assert len(compositor) == 0
