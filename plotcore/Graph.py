"""Interactive function-plot orchestrator.

Purpose
-------
Defines :class:`Graph`, the object callers hold on to. It owns the view
state, the mode state machine, the level-of-detail controller, the last data
grids received from the data source and the rendering options, and turns them
into draw calls on a :class:`~plotcore.graph_canvas.Canvas` once per frame.

Concepts and structure
----------------------
A host drives a graph with a simple loop::

    graph.keybinds(input_state)        # apply one frame of input
    request = graph.update_res()       # poll for a data request
    if request is not None:
        bound, slot = request
        graph.set_data(evaluate(bound))  # data source; may arrive later
    graph.update(canvas, width, height)  # draw the frame

The graph never evaluates functions and never blocks waiting for data. It
always draws the last grids it received.

Architecture notes
------------------
- Stateless math lives in :mod:`plotcore.graph_transform`, clipping in
  :mod:`plotcore.graph_clip`, compositing in :mod:`plotcore.graph_compositor`
  and overlays in :mod:`plotcore.graph_axes`. This module holds the per-grid
  dispatch (which grid kinds draw what in which mode) and the frame order.
- Slice modes keep ``is_3d`` in sync with the data but render through the 2D
  path; :attr:`Graph.renders_3d` is the flag the frame pipeline and the input
  handler act on.

Important gotchas
-----------------
- 3D grids must be square (``side * side`` samples). A non-square grid logs a
  warning and only its leading ``side * side`` samples are drawn.
- The domain-coloring image is cached. It is rebuilt when new data arrives,
  when the requested grid size changes or when a coloring flag is toggled.

Examples
--------
>>> import numpy as np
>>> from plotcore import Graph, RecordingCanvas, Width
>>> g = Graph([Width(np.linspace(-1.0, 1.0, 9), -2.0, 2.0)], names=["f"])
>>> canvas = RecordingCanvas()
>>> g.update(canvas, 800, 600)
>>> canvas.names()[0]
'clear'
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, Iterable, Optional, Sequence, Union

import numpy as np
import plotly.graph_objects as go

from .InputConvert import InputRange
from .PlotlyCanvas import PlotlyCanvas
from .domain_coloring import domain_color_image
from .graph_axes import AxesPainter
from .graph_canvas import Canvas
from .graph_clip import Clipper, PointState
from .graph_compositor import Compositor
from .graph_input import InputState, Keybinds
from .graph_lod import LodController
from .graph_mode import GraphModeController
from .graph_style import split_options
from .graph_transform import Projector, to_coord, to_screen, zoom_at
from .graph_types import (
    Bound,
    ComplexSample,
    Constant,
    Coord,
    Coord3D,
    DepthColor,
    GraphList,
    GraphMode,
    Grid,
    Lines,
    NoData,
    Point,
    Pos,
    Show,
    Vec2,
    Width,
    Width3D,
    grids_are_3d,
    grids_are_complex,
    spread,
)
from .graph_view import ViewState

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

CONSTANT_SAMPLES = 17

_NEXT_LINES = {Lines.LINES: Lines.POINTS, Lines.POINTS: Lines.LINES_POINTS, Lines.LINES_POINTS: Lines.LINES}
_NEXT_SHOW = {Show.COMPLEX: Show.REAL, Show.REAL: Show.IMAG, Show.IMAG: Show.COMPLEX}
_NEXT_DEPTH_COLOR = {
    DepthColor.NONE: DepthColor.VERTICAL,
    DepthColor.VERTICAL: DepthColor.DEPTH,
    DepthColor.DEPTH: DepthColor.NONE,
}

Place2D = Callable[[float, float], tuple[float, float]]
Place3D = Callable[[float, float, float], tuple[float, float, float]]


def _cartesian(x: float, v: float) -> tuple[float, float]:
    return x, v


def _polar(x: float, v: float) -> tuple[float, float]:
    return math.cos(x) * v, math.sin(x) * v


def _transposed(x: float, v: float) -> tuple[float, float]:
    return v, x


def _surface(x: float, y: float, v: float) -> tuple[float, float, float]:
    return x, y, v


def _spherical(x: float, y: float, v: float) -> tuple[float, float, float]:
    cx = math.cos(x)
    return v * cx * math.sin(y), v * cx * math.cos(y), v * math.sin(x)


class Graph:
    """Interactive 2D/3D plot of externally sampled functions.

    Parameters
    ----------
    grids : sequence of Grid, optional
        Initial data, one grid per data slot.
    names : sequence of str, optional
        Legend names per data slot; empty names are not listed.
    bound : (float, float), default=(-2, 2)
        Visible world range on every axis at zoom 1.
    mode : GraphMode or str, default="normal"
        Initial graph mode.
    is_complex : bool, optional
        Whether the data has an imaginary channel. Derived from ``grids``
        when omitted.
    is_3d_data : bool, optional
        Whether the data has two inputs. Derived from ``grids`` when omitted.
    keybinds : Keybinds, optional
        Key binding table used by :meth:`keybinds`.
    **options
        Style and rendering options; see
        :data:`plotcore.graph_style.GRAPH_OPTION_DOCS`.

    Raises
    ------
    KeyError
        If an unknown option keyword is given.
    ValueError
        If ``bound`` is not a finite ``(lo, hi)`` pair with ``lo < hi`` or
        ``mode`` is not a known mode.
    """

    __slots__ = [
        "view", "style", "options", "lod", "modes", "keybind_table", "names",
        "_grids", "_image_cache", "_last_interact", "_last_multi",
        "_render_info_last_log_t", "_render_debug_last_log_t",
    ]

    def __init__(
        self,
        grids: Optional[Sequence[Grid]] = None,
        names: Optional[Sequence[str]] = None,
        *,
        bound: Sequence[Any] = (-2.0, 2.0),
        mode: Union[GraphMode, str] = GraphMode.NORMAL,
        is_complex: Optional[bool] = None,
        is_3d_data: Optional[bool] = None,
        keybinds: Optional[Keybinds] = None,
        **options: Any,
    ) -> None:
        self.style, self.options = split_options(options)
        b = InputRange(bound, "bound")
        self.view = ViewState(bound=b, var=b.copy())
        self.lod = LodController()
        self.modes = GraphModeController(on_change=self.lod.mark_dirty)
        self.keybind_table = keybinds if keybinds is not None else Keybinds()
        self.names: list[str] = list(names) if names is not None else []
        self._grids: list[Grid] = []
        self._image_cache: dict[int, tuple[tuple[int, int, bool, bool], np.ndarray]] = {}
        self._last_interact: Optional[Vec2] = None
        self._last_multi = False
        self._render_info_last_log_t = 0.0
        self._render_debug_last_log_t = 0.0

        if grids is not None:
            self.set_data(grids)
        self.modes.set_is_complex(grids_are_complex(self._grids) if is_complex is None else is_complex)
        self.modes.set_is_3d_data(grids_are_3d(self._grids) if is_3d_data is None else is_3d_data)
        self.modes.set_mode(mode)

    # --- Properties ---

    @property
    def mode(self) -> GraphMode:
        """Current graph mode."""
        return self.modes.mode

    @property
    def is_3d(self) -> bool:
        return self.modes.is_3d

    @property
    def is_3d_data(self) -> bool:
        return self.modes.is_3d_data

    @property
    def is_complex(self) -> bool:
        return self.modes.is_complex

    @property
    def renders_3d(self) -> bool:
        """Whether frames are drawn through the 3D projector."""
        return self.modes.renders_3d

    @property
    def grids(self) -> tuple[Grid, ...]:
        """Last data received from the data source."""
        return tuple(self._grids)

    @property
    def dirty(self) -> bool:
        """Whether a data request is pending for the next :meth:`update_res`."""
        return self.lod.dirty

    def fast_3d(self) -> bool:
        """Whether the current 3D frame skips depth sorting."""
        opts = self.options
        return self.renders_3d and (opts.fast_3d or (opts.fast_3d_move and self.view.mouse_held))

    def effective_prec(self) -> float:
        """Sampling precision for the next request.

        Reduced to ``log10(prec + 1)`` while dragging a 2D plot with
        ``reduced_move`` enabled.
        """
        view = self.view
        if view.mouse_held and not self.renders_3d and self.options.reduced_move:
            return math.log10(view.prec + 1.0)
        return view.prec

    # --- Data ---

    def set_data(self, grids: Iterable[Grid]) -> None:
        """Replace the plotted grids.

        Called by the data source in response to a request from
        :meth:`update_res`. Grids are drawn as-is on the next frame; this does
        not mark the graph dirty.

        Raises
        ------
        TypeError
            If an element is not a grid.
        """
        new = list(grids)
        for grid in new:
            if not isinstance(grid, (Width, Coord, Width3D, Coord3D, Constant, Point, GraphList, NoData)):
                raise TypeError(f"Expected a grid, got {type(grid).__name__}")
        self._grids = new
        self._image_cache.clear()

    def clear_data(self) -> None:
        """Drop all grids and the domain-coloring cache."""
        self.set_data([])

    def set_name(self, slot: int, name: str) -> None:
        """Rename data slot ``slot`` and request fresh data for it only."""
        if slot < 0:
            raise ValueError(f"slot must be non-negative, got {slot}")
        while len(self.names) <= slot:
            self.names.append("")
        self.names[slot] = name
        self.lod.mark_dirty(slot)

    def set_mode(self, mode: Union[GraphMode, str]) -> None:
        """Switch graph mode (a :class:`GraphMode` or its name)."""
        self.modes.set_mode(mode)

    def set_is_complex(self, new: bool) -> None:
        self.modes.set_is_complex(new)

    def set_is_3d_data(self, new: bool) -> None:
        self.modes.set_is_3d_data(new)

    def reset_3d(self) -> None:
        """Derive ``is_3d_data`` from the current grids."""
        self.modes.set_is_3d_data(grids_are_3d(self._grids))

    def recalculate(self, slot: Optional[int] = None) -> None:
        """Mark the graph dirty so :meth:`update_res` issues a request."""
        self.lod.mark_dirty(slot)

    def update_res(self) -> Optional[tuple[Bound, Optional[int]]]:
        """Poll for a data request.

        Returns
        -------
        tuple or None
            ``(bound, changed_slot)`` once per dirty period. ``changed_slot`` is
            the only data slot whose definition changed, or ``None`` when
            every slot must be resampled.
        """
        return self.lod.update_res(
            self.view,
            self.mode,
            is_3d_data=self.is_3d_data,
            is_3d=self.is_3d,
            prec=self.effective_prec(),
            mult=self.options.mult,
        )

    # --- View ---

    def set_screen(self, width: float, height: float) -> None:
        """Set the viewport size in pixels.

        Raises
        ------
        ValueError
            If either dimension is not positive.
        """
        if not (width > 0 and height > 0):
            raise ValueError(f"Screen size must be positive, got {width}x{height}")
        changed = self.view.set_screen(width, height, self.renders_3d)
        if changed and self.mode is GraphMode.DOMAIN_COLORING:
            self.recalculate()

    def reset_view(self) -> None:
        """Restore zoom, pan, rotation, var range, slice and precision defaults."""
        self.view.reset()
        self.recalculate()

    def set_dark_mode(self) -> None:
        self.style = self.style.dark()

    def set_light_mode(self) -> None:
        self.style = self.style.light()

    # SECTION: input

    def keybinds(self, state: InputState) -> None:
        """Apply one frame of input to the view.

        Parameters
        ----------
        state : InputState
            Keys, modifiers, pointer and gesture input collected this frame.
        """
        view, opts, keys = self.view, self.options, self.keybind_table
        is_3d = self.renders_3d

        if state.pointer_pos is not None:
            mpos = Pos(state.pointer_pos.x, state.pointer_pos.y)
            if view.mouse_position is None:
                view.mouse_position = mpos
            elif mpos != view.mouse_position:
                view.mouse_moved = True
                view.mouse_position = mpos

        self._pointer_input(state, is_3d)

        pressed = state.pressed
        ax = view.delta / (2.0 * view.zoom.x if view.zoom.x > 1.0 else 1.0)
        ay = view.delta / (2.0 * view.zoom.y if view.zoom.y > 1.0 else 1.0)
        for binding, axis, steps, sign in (
            (keys.left, "x", -1, 1.0),
            (keys.right, "x", 1, -1.0),
            (keys.up, "y", -1, 1.0),
            (keys.down, "y", 1, -1.0),
        ):
            if not pressed(binding):
                continue
            if is_3d:
                view.step_angle(axis, steps)
            elif axis == "x":
                view.offset.x += sign * ax
                self.recalculate()
            else:
                if self.mode is GraphMode.DOMAIN_COLORING:
                    self.recalculate()
                view.offset.y += sign * ay

        if pressed(keys.lines):
            opts.disable_lines = not opts.disable_lines
        if pressed(keys.axis):
            opts.disable_axis = not opts.disable_axis
        if pressed(keys.coord):
            opts.disable_coord = not opts.disable_coord

        if is_3d:
            self._keys_3d(state)
        else:
            self._keys_2d(state)

        self._zoom_keys(state, is_3d)

        if self.is_3d_data and self.mode in (
            GraphMode.SLICE,
            GraphMode.FLATTEN,
            GraphMode.DEPTH,
            GraphMode.POLAR,
            GraphMode.SLICE_POLAR,
        ):
            if pressed(keys.slice_up):
                self.recalculate()
                view.slice += 1
            if pressed(keys.slice_down):
                self.recalculate()
                view.slice -= 1
            if pressed(keys.slice_view):
                self.recalculate()
                view.view_x = not view.view_x

        if self.mode is GraphMode.DOMAIN_COLORING and pressed(keys.log_scale):
            opts.log_scale = not opts.log_scale
        if pressed(keys.line_style):
            opts.lines = _NEXT_LINES[opts.lines]

        for binding, action in (
            (keys.var_down, lambda: view.shift_var(-1)),
            (keys.var_up, lambda: view.shift_var(1)),
            (keys.var_in, lambda: view.scale_var(0.5)),
            (keys.var_out, lambda: view.scale_var(2.0)),
        ):
            if pressed(binding):
                action()
                self.recalculate()

        if pressed(keys.prec_up):
            self.recalculate()
            view.prec *= 0.5
            view.slice = int(view.slice / 2)
        if pressed(keys.prec_down):
            self.recalculate()
            view.prec *= 2.0
            view.slice *= 2

        if pressed(keys.ruler):
            last = view.ruler_pos
            view.ruler_pos = None
            if view.mouse_position is not None:
                view.ruler_pos = Vec2(*to_coord(view, view.mouse_position))
            if last == view.ruler_pos:
                view.ruler_pos = None
        if self.is_complex and pressed(keys.view):
            opts.show = _NEXT_SHOW[opts.show]
        if pressed(keys.mode_up):
            self.modes.mode_up()
        if pressed(keys.mode_down):
            self.modes.mode_down()
        if pressed(keys.fast):
            opts.fast_3d = not opts.fast_3d
            opts.reduced_move = not opts.reduced_move
            self.recalculate()
        if pressed(keys.reset):
            self.reset_view()
        if pressed(keys.toggle_dark_mode):
            if self.style.is_dark:
                self.set_light_mode()
            else:
                self.set_dark_mode()
        if pressed(keys.only_real):
            opts.only_real = not opts.only_real

    def _pointer_input(self, state: InputState, is_3d: bool) -> None:
        """Pinch, drag and release handling."""
        view = self.view
        multi = state.multi
        if multi is not None:
            self._last_multi = True
            zd = multi.zoom_delta
            if zd != 1.0:
                if is_3d:
                    view.box_size /= zd
                else:
                    zoom_at(view, zd, view.anchor())
                    self.recalculate()
            if is_3d:
                view.rotate(multi.translation_delta.x, multi.translation_delta.y)
            else:
                view.pan(multi.translation_delta.x, multi.translation_delta.y)
                self.recalculate()
            view.mouse_held = True
        elif state.pointer is not None:
            last = self._last_interact
            if state.pointer is False and not self._last_multi and state.pointer_pos is not None and last is not None:
                dx = state.pointer_pos.x - last.x
                dy = state.pointer_pos.y - last.y
                if is_3d:
                    view.rotate(dx, dy)
                else:
                    view.pan(dx, dy)
                    self.recalculate()
                view.mouse_held = True
            self._last_multi = False
        elif view.mouse_held:
            self._last_multi = False
            view.mouse_held = False
            if not is_3d:
                self.recalculate()
        else:
            self._last_multi = False
        self._last_interact = state.pointer_pos.copy() if state.pointer_pos is not None else None

    def _keys_3d(self, state: InputState) -> None:
        view, opts, keys = self.view, self.options, self.keybind_table
        pressed = state.pressed
        s = view.bound_span / 4.0
        moves_request = self.mode not in (GraphMode.DEPTH, GraphMode.POLAR)
        for binding, axis, step in (
            (keys.left_3d, "x", -s),
            (keys.right_3d, "x", s),
            (keys.down_3d, "y", s),
            (keys.up_3d, "y", -s),
        ):
            if pressed(binding):
                if moves_request:
                    self.recalculate()
                setattr(view.offset_3d, axis, getattr(view.offset_3d, axis) + step)
        for binding, step in ((keys.in_3d, s), (keys.out_3d, -s)):
            if pressed(binding):
                view.offset_3d.z += step
                if not moves_request:
                    self.recalculate()
        if pressed(keys.ignore_bounds):
            opts.ignore_bounds = not opts.ignore_bounds
        if pressed(keys.color_depth):
            opts.color_depth = _NEXT_DEPTH_COLOR[opts.color_depth]
        if pressed(keys.zoom_in_3d):
            view.nudge_box_size(-0.1)
        if pressed(keys.zoom_out_3d):
            view.nudge_box_size(0.1)
        if pressed(keys.show_box):
            opts.show_box = not opts.show_box
        view.rotate(state.raw_scroll_delta.x, state.raw_scroll_delta.y)

    def _keys_2d(self, state: InputState) -> None:
        view, opts = self.view, self.options
        if state.pressed(self.keybind_table.domain_alternate):
            opts.domain_alternate = not opts.domain_alternate
        rt = math.exp(state.raw_scroll_delta.y / 512.0)
        if rt != 1.0:
            ctrl, shift = state.modifiers.ctrl, state.modifiers.shift
            axes = "xy" if ctrl == shift else ("x" if ctrl else "y")
            zoom_at(view, rt, view.anchor(), axes)
            self.recalculate()

    def _zoom_keys(self, state: InputState, is_3d: bool) -> None:
        view, keys = self.view, self.keybind_table
        pressed = state.pressed
        for factor, bindings in (
            (0.5, (keys.zoom_out, keys.zoom_out_x, keys.zoom_out_y, keys.zoom_out_z)),
            (2.0, (keys.zoom_in, keys.zoom_in_x, keys.zoom_in_y, keys.zoom_in_z)),
        ):
            whole, x, y, z = (pressed(b) for b in bindings)
            if not (whole or x or y or z):
                continue
            if is_3d:
                if whole:
                    view.zoom_3d = view.zoom_3d * factor
                else:
                    axis = "x" if x else ("y" if y else "z")
                    setattr(view.zoom_3d, axis, getattr(view.zoom_3d, axis) * factor)
            elif whole or x or y:
                zoom_at(view, factor, view.anchor(), "xy" if whole else ("x" if x else "y"))
            self.recalculate()

    # SECTION: frame

    def update(self, canvas: Canvas, width: float, height: float, reason: str = "frame") -> None:
        """Draw one frame of the current data onto ``canvas``.

        Parameters
        ----------
        canvas : Canvas
            Draw-call sink, e.g. :class:`~plotcore.graph_canvas.RecordingCanvas`
            or :class:`~plotcore.PlotlyCanvas.PlotlyCanvas`.
        width, height : float
            Viewport size in pixels.
        reason : str, optional
            Free-form tag included in the render log.

        Raises
        ------
        ValueError
            If the viewport size is not positive.
        """
        self.set_screen(width, height)
        canvas.clear(self.style.background_color)
        painter = AxesPainter(self.view, self.style, self.options, canvas, self.mode)
        if not self.renders_3d:
            if self.mode is GraphMode.DOMAIN_COLORING:
                self._plot(canvas)
                painter.write_axis()
            elif self.modes.is_polar:
                painter.write_polar_axis()
                self._plot(canvas)
            else:
                painter.write_axis()
                self._plot(canvas)
            painter.write_text()
            painter.write_coord(self.sample_at)
        else:
            fast = self.fast_3d()
            projector = Projector(self.view, fast=fast)
            compositor = Compositor(canvas, fast=fast, point_size=self.style.point_size)
            self._plot(canvas, compositor, projector)
            painter.write_axis_3d(projector, compositor)
            compositor.flush()
            painter.write_angle()
        painter.write_label(self.names, self.options.show if self.is_complex else Show.REAL)
        self._log_render(reason)

    def to_plotly(self, width: float = 800.0, height: float = 600.0) -> go.Figure:
        """Render one frame into a Plotly figure of ``width`` x ``height`` pixels."""
        canvas = PlotlyCanvas(width, height, font_size=self.style.font_size * 0.75)
        self.update(canvas, width, height, reason="to_plotly")
        return canvas.figure()

    def _log_render(self, reason: str) -> None:
        """Log frame information with rate-limiting."""
        now = time.monotonic()
        if logger.isEnabledFor(logging.INFO) and (now - self._render_info_last_log_t) > 1.0:
            self._render_info_last_log_t = now
            logger.info(f"render(reason={reason}) mode={self.mode.value} grids={len(self._grids)}")

        if logger.isEnabledFor(logging.DEBUG) and (now - self._render_debug_last_log_t) > 0.5:
            self._render_debug_last_log_t = now
            view = self.view
            logger.debug(f"view zoom={tuple(view.zoom)} offset={tuple(view.offset)} angle={tuple(view.angle)}")

    def sample_at(self, x: float, y: float) -> Optional[complex]:
        """Value of the domain-coloring grid at world point ``(x, y)``, if sampled."""
        grid = next((g for g in self._grids if isinstance(g, Width3D)), None)
        if grid is None:
            return None
        lenx, leny = self._image_size()
        if lenx == 0 or leny == 0 or grid.end_x == grid.start_x or grid.end_y == grid.start_y:
            return None
        i = round((x - grid.start_x) / (grid.end_x - grid.start_x) * lenx)
        j = round((y - grid.start_y) / (grid.end_y - grid.start_y) * leny)
        i = min(max(i, 0), lenx - 1)
        j = min(max(j, 0), leny - 1)
        idx = i + j * lenx
        if idx >= len(grid.values):
            return None
        return grid.values[idx].to_complex()

    # SECTION: per-grid drawing

    def _plot(
        self,
        canvas: Canvas,
        compositor: Optional[Compositor] = None,
        projector: Optional[Projector] = None,
    ) -> None:
        style, opts = self.style, self.options
        clipper = Clipper(
            self.view,
            canvas,
            compositor,
            projector,
            lines=opts.lines,
            line_width=style.line_width,
            point_size=style.point_size,
            ignore_bounds=opts.ignore_bounds,
            depth_color=opts.color_depth,
        )
        for k, grid in enumerate(self._grids):
            self._plot_grid(canvas, clipper, k, grid)

    def _plot_grid(self, canvas: Canvas, clipper: Clipper, k: int, grid: Grid) -> None:
        mode = self.mode
        in_3d = self.renders_3d
        if isinstance(grid, GraphList):
            for sub in grid.grids:
                self._plot_grid(canvas, clipper, k, sub)
        elif isinstance(grid, (Width, Coord)):
            if isinstance(grid, Width):
                points = list(zip(grid.positions(), grid.values))
            else:
                points = list(grid.points)
            if mode is GraphMode.NORMAL:
                self._channels_2d(clipper, k, points, _cartesian)
            elif mode is GraphMode.POLAR:
                self._channels_2d(clipper, k, points, _polar)
            elif mode is GraphMode.FLATTEN:
                self._flatten(clipper, k, [v for _, v in points])
            elif mode is GraphMode.DEPTH and in_3d:
                self._depth(clipper, k, points)
        elif isinstance(grid, Width3D):
            self._plot_width_3d(canvas, clipper, k, grid)
        elif isinstance(grid, Coord3D):
            if in_3d and mode in (GraphMode.NORMAL, GraphMode.POLAR):
                place = _surface if mode is GraphMode.NORMAL else _spherical
                self._path_3d(clipper, k, grid.points, place)
        elif isinstance(grid, Constant):
            self._plot_constant(canvas, clipper, k, grid)
        elif isinstance(grid, Point):
            if in_3d:
                return
            x, y = _polar(grid.x, grid.y) if self.modes.is_polar else (grid.x, grid.y)
            canvas.rect_filled(to_screen(self.view, x, y), self.style.main(k), self.style.point_size)

    def _plot_width_3d(self, canvas: Canvas, clipper: Clipper, k: int, grid: Width3D) -> None:
        mode = self.mode
        values = grid.values
        if mode in (GraphMode.NORMAL, GraphMode.POLAR):
            if not self.renders_3d:
                return
            side = grid.side
            if not grid.is_square:
                logger.warning(
                    "Width3D grid of %d samples is not square; drawing the leading %dx%d block",
                    len(values),
                    side,
                    side,
                )
            if side < 2:
                return
            xs = spread(side, grid.start_x, grid.end_x)
            ys = spread(side, grid.start_y, grid.end_y)
            cells = ((xs[n % side], ys[n // side], values[n]) for n in range(side * side))
            self._surface_3d(clipper, k, side, cells, _surface if mode is GraphMode.NORMAL else _spherical)
            return
        if mode is GraphMode.DOMAIN_COLORING:
            canvas.image(self._domain_image(k, grid), Vec2(self.view.screen.x, self.view.screen.y))
            return
        if self.view.view_x:
            lo, hi = grid.start_x, grid.end_x
        else:
            lo, hi = grid.start_y, grid.end_y
        points = list(zip(spread(len(values), lo, hi), values))
        if mode is GraphMode.SLICE:
            self._channels_2d(clipper, k, points, _cartesian)
        elif mode is GraphMode.SLICE_POLAR:
            self._channels_2d(clipper, k, points, _polar)
        elif mode is GraphMode.FLATTEN:
            self._flatten(clipper, k, values)
        elif mode is GraphMode.DEPTH and self.renders_3d:
            self._depth(clipper, k, points)

    def _plot_constant(self, canvas: Canvas, clipper: Clipper, k: int, grid: Constant) -> None:
        view, mode = self.view, self.mode
        value = grid.value
        if mode in (GraphMode.NORMAL, GraphMode.SLICE):
            n = CONSTANT_SAMPLES
            if self.renders_3d:
                o3 = view.offset_3d
                xs = spread(n, view.bound.x + o3.x, view.bound.y + o3.x)
                ys = spread(n, view.bound.x - o3.y, view.bound.y - o3.y)
                cells = ((xs[i % n], ys[i // n], value) for i in range(n * n))
                self._surface_3d(clipper, k, n, cells, _surface)
                return
            start = to_coord(view, Pos(0.0, 0.0))
            end = to_coord(view, Pos(view.screen.x, view.screen.y))
            if grid.on_x:
                points = [(x, value) for x in spread(n, start[0], end[0])]
                self._channels_2d(clipper, k, points, _cartesian)
            else:
                points = [(y, value) for y in spread(n, start[1], end[1])]
                self._channels_2d(clipper, k, points, _transposed)
        elif mode in (GraphMode.POLAR, GraphMode.SLICE_POLAR) and not self.renders_3d:
            origin = to_screen(view, 0.0, 0.0)
            opts, style = self.options, self.style
            if value.im is not None:
                if opts.only_real:
                    if value.im != 0.0:
                        return
                elif math.isfinite(value.im):
                    radius = to_screen(view, abs(value.im), 0.0).x - origin.x
                    canvas.circle(origin, radius, style.alt(k), style.line_width)
            if value.re is not None and math.isfinite(value.re):
                radius = to_screen(view, abs(value.re), 0.0).x - origin.x
                canvas.circle(origin, radius, style.main(k), style.line_width)

    # --- sample walkers ---

    def _channels_2d(
        self,
        clipper: Clipper,
        k: int,
        points: Iterable[tuple[float, ComplexSample]],
        place: Place2D,
    ) -> None:
        """Draw the real and imaginary channels of ``(x, sample)`` pairs as polylines."""
        show, only_real = self.options.show, self.options.only_real
        main, alt = self.style.main(k), self.style.alt(k)
        a: Optional[Pos] = None
        b: Optional[Pos] = None
        for x, sample in points:
            if not show.imag or sample.im is None:
                b = None
            elif only_real:
                if sample.im != 0.0:
                    a = b = None
                    continue
                b = None
            else:
                b = clipper.draw_point(*place(x, sample.im), alt, b)
            if show.real and sample.re is not None:
                a = clipper.draw_point(*place(x, sample.re), main, a)
            else:
                a = None

    def _flatten(self, clipper: Clipper, k: int, samples: Iterable[ComplexSample]) -> None:
        """Draw ``(re, im)`` as a path in the plane."""
        color = self.style.main(k)
        last: Optional[Pos] = None
        for sample in samples:
            if sample.re is not None and sample.im is not None:
                last = clipper.draw_point(sample.re, sample.im, color, last)
            else:
                last = None

    def _depth(self, clipper: Clipper, k: int, points: Iterable[tuple[float, ComplexSample]]) -> None:
        """Draw ``(re, im, x)`` as a 3D path."""
        color = self.style.main(k)
        last: Optional[PointState] = None
        for x, sample in points:
            if sample.re is not None and sample.im is not None:
                last = clipper.draw_point_3d(sample.re, sample.im, x, color, last)
            else:
                last = None

    def _path_3d(
        self,
        clipper: Clipper,
        k: int,
        points: Iterable[tuple[float, float, ComplexSample]],
        place: Place3D,
    ) -> None:
        show, only_real = self.options.show, self.options.only_real
        main, alt = self.style.main(k), self.style.alt(k)
        last: Optional[PointState] = None
        last_im: Optional[PointState] = None
        for x, y, sample in points:
            if not show.imag or sample.im is None:
                last_im = None
            elif only_real:
                if sample.im != 0.0:
                    last = last_im = None
                    continue
                last_im = None
            else:
                last_im = clipper.draw_point_3d(*place(x, y, sample.im), alt, last_im)
            if show.real and sample.re is not None:
                last = clipper.draw_point_3d(*place(x, y, sample.re), main, last)
            else:
                last = None

    def _surface_3d(
        self,
        clipper: Clipper,
        k: int,
        side: int,
        cells: Iterable[tuple[float, float, ComplexSample]],
        place: Place3D,
    ) -> None:
        """Draw a row-major ``side`` x ``side`` grid as a connected mesh."""
        show, only_real = self.options.show, self.options.only_real
        main, alt = self.style.main(k), self.style.alt(k)
        last_re: list[Optional[PointState]] = []
        last_im: list[Optional[PointState]] = []
        cur_re: list[Optional[PointState]] = []
        cur_im: list[Optional[PointState]] = []
        for n, (x, y, sample) in enumerate(cells):
            i, j = n % side, n // side
            p_im: Optional[PointState] = None
            if show.imag and sample.im is not None:
                if only_real:
                    if sample.im != 0.0:
                        cur_im.append(None)
                        cur_re.append(None)
                        if i == side - 1:
                            last_im, cur_im = cur_im, []
                            last_re, cur_re = cur_re, []
                        continue
                else:
                    p_im = clipper.draw_point_3d(
                        *place(x, y, sample.im),
                        alt,
                        cur_im[i - 1] if i else None,
                        last_im[i] if j else None,
                    )
            cur_im.append(p_im)
            p_re: Optional[PointState] = None
            if show.real and sample.re is not None:
                p_re = clipper.draw_point_3d(
                    *place(x, y, sample.re),
                    main,
                    cur_re[i - 1] if i else None,
                    last_re[i] if j else None,
                )
            cur_re.append(p_re)
            if i == side - 1:
                last_im, cur_im = cur_im, []
                last_re, cur_re = cur_re, []

    # --- domain coloring ---

    def _image_size(self) -> tuple[int, int]:
        scale = self.effective_prec() * self.options.mult
        return int(self.view.screen.x * scale), int(self.view.screen.y * scale)

    def _domain_image(self, k: int, grid: Width3D) -> np.ndarray:
        lenx, leny = self._image_size()
        opts = self.options
        key = (lenx, leny, opts.domain_alternate, opts.log_scale)
        cached = self._image_cache.get(k)
        if cached is None or cached[0] != key:
            image = domain_color_image(
                grid.values, lenx, leny, alternate=opts.domain_alternate, log_scale=opts.log_scale
            )
            cached = self._image_cache[k] = (key, image)
        return cached[1]


__all__ = ["CONSTANT_SAMPLES", "Graph"]
