"""World/screen transforms, anchored zoom and the 3D projector."""

from __future__ import annotations

import math

import pytest

from plotcore.graph_transform import Projector, get_new_offset, in_screen, to_coord, to_screen, zoom_at
from plotcore.graph_types import Pos, Vec2, Vec3
from plotcore.graph_view import ViewState

try:
    from hypothesis import given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


COORDS = st.floats(min_value=-1e3, max_value=1e3, allow_nan=False, allow_infinity=False)
ZOOMS = st.floats(min_value=0.05, max_value=20.0, allow_nan=False, allow_infinity=False)
OFFSETS = st.floats(min_value=-500.0, max_value=500.0, allow_nan=False, allow_infinity=False)
PIXELS = st.floats(min_value=0.0, max_value=800.0, allow_nan=False, allow_infinity=False)


def _view(width: float = 800, height: float = 600, is_3d: bool = False) -> ViewState:
    view = ViewState()
    view.set_screen(width, height, is_3d)
    return view


def test_origin_maps_to_screen_centre() -> None:
    """Bound (-2, 2) on an 800x600 screen puts the origin at (400, 300)."""
    view = _view()
    assert view.delta == pytest.approx(200.0)
    assert to_screen(view, 0.0, 0.0) == Pos(400.0, 300.0)
    assert to_coord(view, Pos(400.0, 300.0)) == pytest.approx((0.0, 0.0))


def test_y_axis_points_up_on_screen() -> None:
    view = _view()
    assert to_screen(view, 0.0, 1.0).y < to_screen(view, 0.0, 0.0).y
    assert to_screen(view, 1.0, 0.0).x > to_screen(view, 0.0, 0.0).x


@given(x=COORDS, y=COORDS, zx=ZOOMS, zy=ZOOMS, ox=OFFSETS, oy=OFFSETS)
def test_to_coord_inverts_to_screen(x: float, y: float, zx: float, zy: float, ox: float, oy: float) -> None:
    """Projecting to pixels and back recovers the world point."""
    view = _view()
    view.zoom = Vec2(zx, zy)
    view.offset = Vec2(ox, oy)
    cx, cy = to_coord(view, to_screen(view, x, y))
    assert cx == pytest.approx(x, rel=1e-9, abs=1e-6)
    assert cy == pytest.approx(y, rel=1e-9, abs=1e-6)


@given(px=PIXELS, py=PIXELS, factor=st.floats(min_value=0.1, max_value=10.0), zx=ZOOMS, zy=ZOOMS)
def test_zoom_at_keeps_anchor_fixed(px: float, py: float, factor: float, zx: float, zy: float) -> None:
    """The world point under the anchor pixel does not move when zooming."""
    view = _view()
    view.zoom = Vec2(zx, zy)
    anchor = Vec2(px, py)
    before = to_coord(view, Pos(px, py))
    zoom_at(view, factor, anchor)
    after = to_coord(view, Pos(px, py))
    assert view.zoom.x == pytest.approx(zx * factor)
    assert after[0] == pytest.approx(before[0], rel=1e-9, abs=1e-6)
    assert after[1] == pytest.approx(before[1], rel=1e-9, abs=1e-6)


def test_zoom_at_single_axis_leaves_other_axis() -> None:
    view = _view()
    zoom_at(view, 2.0, Vec2(100.0, 100.0), axes="x")
    assert view.zoom == Vec2(2.0, 1.0)
    assert view.offset.y == 0.0


def test_get_new_offset_centres_world_point() -> None:
    view = _view()
    view.offset = get_new_offset(view, Vec2(1.0, 1.0))
    assert to_coord(view, Pos(400.0, 300.0)) == pytest.approx((1.0, 1.0))


def test_in_screen_tolerates_two_pixels() -> None:
    view = _view()
    assert in_screen(view, Pos(-1.0, 599.0))
    assert in_screen(view, Pos(801.5, 0.0))
    assert not in_screen(view, Pos(-3.0, 10.0))
    assert not in_screen(view, Pos(10.0, 603.0))


def test_projector_origin_is_screen_centre_with_half_depth() -> None:
    view = _view(is_3d=True)
    pos, depth = Projector(view).vec3_to_pos_depth(Vec3(0.0, 0.0, 0.0))
    assert pos == pytest.approx((400.0, 300.0))
    assert depth == pytest.approx(0.5)


def test_projector_fast_mode_has_no_depth() -> None:
    view = _view(is_3d=True)
    _, depth = Projector(view, fast=True).vec3_to_pos_depth(Vec3(1.0, 1.0, 1.0))
    assert depth is None


def test_projector_depth_stays_in_unit_interval_for_box_corners() -> None:
    view = _view(is_3d=True)
    projector = Projector(view)
    s = view.bound_span * 0.5
    for x in (-s, s):
        for y in (-s, s):
            for z in (-s, s):
                _, depth = projector.vec3_to_pos_depth(Vec3(x, y, z), False)
                assert 0.0 <= depth <= 1.0


def test_projector_apply_zoom_scales_point() -> None:
    view = _view(is_3d=True)
    view.zoom_3d = Vec3(2.0, 2.0, 2.0)
    projector = Projector(view)
    zoomed, _ = projector.vec3_to_pos_depth(Vec3(0.5, 0.0, 0.0), True)
    plain, _ = projector.vec3_to_pos_depth(Vec3(1.0, 0.0, 0.0), False)
    assert zoomed == pytest.approx(plain)
    assert math.isfinite(zoomed.x)
