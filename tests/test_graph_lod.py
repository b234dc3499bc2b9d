"""Data-request protocol: request shapes per mode and pull semantics."""

from __future__ import annotations

import logging

import pytest

from plotcore.graph_lod import LodController, build_request
from plotcore.graph_types import (
    BoundWidth,
    BoundWidth3D,
    GraphMode,
    PrecDimension,
    PrecMult,
    PrecSlice,
    Vec2,
    Vec3,
)
from plotcore.graph_view import ViewState


def _view(is_3d: bool = False) -> ViewState:
    view = ViewState()
    view.set_screen(800, 600, is_3d)
    return view


def _request(view: ViewState, mode: GraphMode, *, is_3d_data: bool, is_3d: bool, prec: float = 1.0, mult: float = 1.0):
    return build_request(view, mode, is_3d_data=is_3d_data, is_3d=is_3d, prec=prec, mult=mult)


def test_2d_normal_requests_visible_x_range() -> None:
    req = _request(_view(), GraphMode.NORMAL, is_3d_data=False, is_3d=False)
    assert isinstance(req, BoundWidth)
    assert (req.lo, req.hi) == pytest.approx((-2.0, 2.0))
    assert req.prec == PrecMult(1.0)


def test_2d_request_follows_pan_and_zoom() -> None:
    view = _view()
    view.zoom = Vec2(2.0, 2.0)
    req = _request(view, GraphMode.POLAR, is_3d_data=False, is_3d=False, prec=0.5)
    assert req.hi - req.lo == pytest.approx(2.0)
    assert req.prec == PrecMult(0.5)


def test_2d_flatten_requests_var_range() -> None:
    view = _view()
    view.var = Vec2(0.0, 3.0)
    req = _request(view, GraphMode.FLATTEN, is_3d_data=False, is_3d=False)
    assert req == BoundWidth(0.0, 3.0, PrecMult(1.0))


def test_2d_depth_requests_z_range() -> None:
    view = _view(True)
    view.zoom_3d = Vec3(1.0, 1.0, 2.0)
    view.offset_3d = Vec3(0.0, 0.0, 0.5)
    req = _request(view, GraphMode.DEPTH, is_3d_data=False, is_3d=True)
    assert req == BoundWidth(-1.5, 0.5, PrecMult(1.0))


def test_3d_normal_requests_box_with_offsets() -> None:
    view = _view(True)
    view.offset_3d = Vec3(1.0, 0.5, 0.0)
    req = _request(view, GraphMode.NORMAL, is_3d_data=True, is_3d=True)
    assert req == BoundWidth3D(-1.0, -2.5, 3.0, 1.5, PrecMult(1.0))


def test_domain_coloring_requests_one_sample_per_cell() -> None:
    view = _view()
    req = _request(view, GraphMode.DOMAIN_COLORING, is_3d_data=True, is_3d=False, mult=0.5)
    assert isinstance(req, BoundWidth3D)
    assert req.prec == PrecDimension(400, 300)
    assert (req.lo_x, req.hi_x) == pytest.approx((-2.0, 2.0))
    assert (req.lo_y, req.hi_y) == pytest.approx((1.5, -1.5))


def test_slice_view_axis_selects_span() -> None:
    view = _view()
    req = _request(view, GraphMode.SLICE, is_3d_data=True, is_3d=True)
    assert (req.lo_x, req.hi_x) == pytest.approx((-2.0, 2.0))
    assert (req.lo_y, req.hi_y) == (-2.0, 2.0)
    assert req.prec == PrecSlice(1.0)
    view.view_x = False
    view.var = Vec2(0.0, 1.0)
    req = _request(view, GraphMode.FLATTEN, is_3d_data=True, is_3d=False)
    assert req == BoundWidth3D(-2.0, 0.0, 2.0, 1.0, PrecSlice(1.0))


def test_no_request_for_flat_data_in_3d_render() -> None:
    assert _request(_view(True), GraphMode.NORMAL, is_3d_data=False, is_3d=True) is None


def test_update_res_is_pull_based() -> None:
    """A dirty period yields exactly one request."""
    view = _view()
    lod = LodController()
    first = lod.update_res(view, GraphMode.NORMAL, is_3d_data=False, is_3d=False, prec=1.0)
    assert first is not None
    assert lod.update_res(view, GraphMode.NORMAL, is_3d_data=False, is_3d=False, prec=1.0) is None
    lod.mark_dirty()
    lod.mark_dirty()
    assert lod.update_res(view, GraphMode.NORMAL, is_3d_data=False, is_3d=False, prec=1.0) is not None
    assert lod.update_res(view, GraphMode.NORMAL, is_3d_data=False, is_3d=False, prec=1.0) is None


def test_changed_slot_hint() -> None:
    lod = LodController()
    assert lod.take() == (True, None)
    lod.mark_dirty(2)
    assert lod.take() == (True, 2)
    lod.mark_dirty(3)
    lod.mark_dirty(3)
    assert lod.take() == (True, 3)
    lod.mark_dirty(1)
    lod.mark_dirty(2)
    assert lod.take() == (True, None)
    lod.mark_dirty(1)
    lod.mark_dirty()
    assert lod.take() == (True, None)
    assert lod.take() == (False, None)


def test_update_res_logs_request(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="plotcore.graph_lod")
    LodController().update_res(_view(), GraphMode.NORMAL, is_3d_data=False, is_3d=False, prec=1.0)
    assert "update_res mode=normal" in caplog.text
