"""Keyboard, pointer and gesture handling in :meth:`Graph.keybinds`."""

from __future__ import annotations

import math

import numpy as np
import pytest

from plotcore import Graph
from plotcore.graph_input import InputState, Key, Keybinds, Modifiers, Multi
from plotcore.graph_mode import mode_order
from plotcore.graph_transform import to_coord
from plotcore.graph_types import GraphMode, Lines, Pos, Show, Vec2, Vec3, Width, Width3D

CTRL = Modifiers(ctrl=True)
SHIFT = Modifiers(shift=True)
CTRL_SHIFT = Modifiers(ctrl=True, shift=True)


def _graph(*, complex_data: bool = False, three_d: bool = False, **kwargs) -> Graph:
    if three_d:
        values = np.zeros(16, dtype=complex if complex_data else float)
        grids = [Width3D(values, -2.0, -2.0, 2.0, 2.0)]
    else:
        values = np.linspace(-1.0, 1.0, 9)
        grids = [Width(values * (1 + 1j) if complex_data else values, -2.0, 2.0)]
    graph = Graph(grids, names=["f"], **kwargs)
    graph.set_screen(800, 600)
    graph.update_res()
    return graph


def _press(graph: Graph, *keys: Key, modifiers: Modifiers = Modifiers()) -> None:
    graph.keybinds(InputState(keys_pressed=list(keys), modifiers=modifiers))


def _move_pointer(graph: Graph, x: float, y: float) -> None:
    graph.keybinds(InputState(pointer_pos=Vec2(x, y)))


def test_drag_pans_and_release_requests_data() -> None:
    graph = _graph()
    graph.keybinds(InputState(pointer_pos=Vec2(100.0, 100.0), pointer=True))
    assert tuple(graph.view.offset) == (0.0, 0.0)
    graph.keybinds(InputState(pointer_pos=Vec2(110.0, 95.0), pointer=False))
    assert tuple(graph.view.offset) == (10.0, -5.0)
    assert graph.view.mouse_held
    graph.update_res()
    graph.keybinds(InputState(pointer_pos=Vec2(110.0, 95.0)))
    assert not graph.view.mouse_held
    assert graph.dirty


def test_drag_rotates_in_3d() -> None:
    graph = _graph(three_d=True)
    start = graph.view.angle.x
    graph.keybinds(InputState(pointer_pos=Vec2(100.0, 100.0), pointer=True))
    graph.keybinds(InputState(pointer_pos=Vec2(164.0, 100.0), pointer=False))
    assert graph.view.angle.x == pytest.approx(start - 64.0 / 512.0)
    assert tuple(graph.view.offset) == (0.0, 0.0)


def test_arrow_keys_pan_2d() -> None:
    graph = _graph()
    _press(graph, Key.ARROW_LEFT)
    assert graph.view.offset.x == pytest.approx(200.0)
    assert graph.dirty
    graph.update_res()
    _press(graph, Key.ARROW_UP)
    assert graph.view.offset.y == pytest.approx(200.0)
    assert not graph.dirty


def test_arrow_pan_shrinks_when_zoomed_in() -> None:
    graph = _graph()
    graph.view.zoom = Vec2(4.0, 4.0)
    _press(graph, Key.ARROW_RIGHT)
    assert graph.view.offset.x == pytest.approx(-25.0)


def test_zoom_key_keeps_pointer_world_point() -> None:
    graph = _graph()
    _move_pointer(graph, 400.0, 300.0)
    _move_pointer(graph, 500.0, 200.0)
    before = to_coord(graph.view, Pos(500.0, 200.0))
    _press(graph, Key.EQUALS)
    assert tuple(graph.view.zoom) == (2.0, 2.0)
    assert to_coord(graph.view, Pos(500.0, 200.0)) == pytest.approx(before)
    assert graph.dirty


def test_axis_zoom_keys() -> None:
    graph = _graph()
    _press(graph, Key.EQUALS, modifiers=CTRL)
    assert tuple(graph.view.zoom) == (2.0, 1.0)
    _press(graph, Key.UNDERSCORE, modifiers=SHIFT)
    assert tuple(graph.view.zoom) == (2.0, 0.5)


def test_zoom_keys_scale_box_axes_in_3d() -> None:
    graph = _graph(three_d=True)
    _press(graph, Key.MINUS)
    assert graph.view.zoom_3d == Vec3(0.5, 0.5, 0.5)
    _press(graph, Key.PLUS, modifiers=CTRL_SHIFT)
    assert graph.view.zoom_3d == Vec3(0.5, 0.5, 1.0)


def test_scroll_zooms_about_anchor() -> None:
    graph = _graph()
    graph.keybinds(InputState(raw_scroll_delta=Vec2(0.0, 512.0)))
    assert graph.view.zoom.x == pytest.approx(math.e)
    assert graph.view.zoom.y == pytest.approx(math.e)
    assert to_coord(graph.view, Pos(400.0, 300.0)) == pytest.approx((0.0, 0.0), abs=1e-12)


def test_ctrl_scroll_zooms_x_only() -> None:
    graph = _graph()
    graph.keybinds(InputState(raw_scroll_delta=Vec2(0.0, -512.0), modifiers=CTRL))
    assert graph.view.zoom.x == pytest.approx(1.0 / math.e)
    assert graph.view.zoom.y == 1.0


def test_mode_keys_cycle() -> None:
    graph = _graph(complex_data=True)
    order = mode_order(True, False)
    _press(graph, Key.B)
    assert graph.mode is order[1]
    _press(graph, Key.B, modifiers=SHIFT)
    assert graph.mode is GraphMode.NORMAL
    _press(graph, Key.B, modifiers=SHIFT)
    assert graph.mode is order[-1]


def test_precision_keys_scale_prec_and_slice() -> None:
    graph = _graph()
    graph.view.slice = -3
    _press(graph, Key.OPEN_BRACKET)
    assert graph.view.prec == 0.5
    assert graph.view.slice == -1
    _press(graph, Key.CLOSE_BRACKET)
    assert graph.view.prec == 1.0
    assert graph.view.slice == -2
    assert graph.dirty


def test_line_style_cycles() -> None:
    graph = _graph()
    _press(graph, Key.L)
    assert graph.options.lines is Lines.POINTS
    _press(graph, Key.L)
    assert graph.options.lines is Lines.LINES_POINTS
    _press(graph, Key.L)
    assert graph.options.lines is Lines.LINES


def test_toggles() -> None:
    graph = _graph()
    _press(graph, Key.Z)
    _press(graph, Key.X)
    _press(graph, Key.C)
    opts = graph.options
    assert opts.disable_lines and opts.disable_axis and opts.disable_coord
    _press(graph, Key.Z)
    assert not opts.disable_lines


def test_unbound_action_is_ignored() -> None:
    graph = _graph(keybinds=Keybinds(lines=None))
    _press(graph, Key.Z)
    assert not graph.options.disable_lines


def test_modifiers_must_match_exactly() -> None:
    graph = _graph()
    _press(graph, Key.Z, modifiers=CTRL)
    assert not graph.options.disable_lines


def test_reset_restores_view() -> None:
    graph = _graph()
    graph.view.zoom = Vec2(3.0, 3.0)
    graph.view.offset = Vec2(5.0, 5.0)
    graph.view.prec = 4.0
    _press(graph, Key.T)
    assert tuple(graph.view.zoom) == (1.0, 1.0)
    assert tuple(graph.view.offset) == (0.0, 0.0)
    assert graph.view.prec == 1.0
    assert graph.dirty


def test_3d_arrow_snaps_angle() -> None:
    graph = _graph(three_d=True)
    step = math.pi / 64.0
    _press(graph, Key.ARROW_LEFT)
    assert graph.view.angle.x == pytest.approx(10 * step)
    _press(graph, Key.ARROW_RIGHT)
    _press(graph, Key.ARROW_RIGHT)
    assert graph.view.angle.x == pytest.approx(12 * step)


def test_ctrl_arrow_moves_3d_offset() -> None:
    graph = _graph(three_d=True)
    _press(graph, Key.ARROW_LEFT, modifiers=CTRL)
    assert graph.view.offset_3d == Vec3(-1.0, 0.0, 0.0)
    assert graph.dirty


def test_3d_box_keys() -> None:
    graph = _graph(three_d=True)
    _press(graph, Key.U)
    _press(graph, Key.P)
    assert not graph.options.show_box
    assert graph.options.ignore_bounds
    graph.view.box_size = 1.2
    _press(graph, Key.SEMICOLON)
    assert graph.view.box_size == pytest.approx(1.1)
    for _ in range(3):
        _press(graph, Key.QUOTE)
    assert graph.view.box_size == pytest.approx(math.sqrt(2.0))


def test_dark_mode_toggle() -> None:
    graph = _graph()
    _press(graph, Key.D, modifiers=CTRL_SHIFT)
    assert graph.style.is_dark
    _press(graph, Key.D, modifiers=CTRL_SHIFT)
    assert not graph.style.is_dark


def test_view_key_cycles_channels_for_complex_data_only() -> None:
    graph = _graph(complex_data=True)
    _press(graph, Key.I)
    assert graph.options.show is Show.REAL
    _press(graph, Key.I)
    assert graph.options.show is Show.IMAG
    real = _graph()
    _press(real, Key.I)
    assert real.options.show is Show.COMPLEX


def test_pinch_zooms_and_pans_2d() -> None:
    graph = _graph()
    graph.keybinds(InputState(multi=Multi(zoom_delta=2.0, translation_delta=Vec2(4.0, 0.0))))
    assert tuple(graph.view.zoom) == (2.0, 2.0)
    assert graph.view.offset.x == pytest.approx(-200.0 + 2.0)
    assert graph.view.mouse_held


def test_pinch_resizes_box_in_3d() -> None:
    graph = _graph(three_d=True)
    graph.keybinds(InputState(multi=Multi(zoom_delta=2.0)))
    assert graph.view.box_size == pytest.approx(math.sqrt(3.0) / 2.0)


def test_ruler_toggles_at_pointer() -> None:
    graph = _graph()
    _move_pointer(graph, 600.0, 100.0)
    _press(graph, Key.N)
    assert tuple(graph.view.ruler_pos) == pytest.approx((1.0, 1.0))
    _press(graph, Key.N)
    assert graph.view.ruler_pos is None


def test_slice_keys_only_in_slice_modes() -> None:
    graph = _graph(three_d=True)
    _press(graph, Key.PERIOD)
    assert graph.view.slice == 0
    graph.set_mode(GraphMode.SLICE)
    _press(graph, Key.PERIOD)
    _press(graph, Key.PERIOD)
    _press(graph, Key.COMMA)
    assert graph.view.slice == 1
    _press(graph, Key.SLASH)
    assert graph.view.view_x is False


def test_fast_key_toggles_fast_rendering() -> None:
    graph = _graph(three_d=True)
    _press(graph, Key.F)
    assert graph.options.fast_3d and graph.options.reduced_move
    assert graph.fast_3d()
