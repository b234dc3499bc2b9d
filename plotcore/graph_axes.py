"""Axes, grids, tick labels and text overlays.

Purpose
-------
:class:`AxesPainter` draws everything that is not sample data: the 2D
cartesian grid and its tick labels, the polar grid, the 3D bounding-box
wireframe with its tick labels, the pointer/ruler coordinate readout, the 3D
camera-angle readout and the per-slot legend.

Architecture notes
------------------
The painter is rebuilt every frame from the view, style and options. It
writes 2D elements straight to the canvas. The 3D wireframe goes through the
frame's :class:`~plotcore.graph_compositor.Compositor` so box edges are depth
sorted together with the data: back edges get depth 0 and front edges depth 1.

Important gotchas
-----------------
Grid spacing follows the zoom rounded to a power of two, so lines stay put
while zooming between powers and jump by a factor two at the boundary.
"""

from __future__ import annotations

import math
from typing import Callable, Optional, Sequence

from .graph_canvas import Canvas
from .graph_compositor import Compositor
from .graph_transform import Projector, to_coord, to_screen
from .graph_types import Align, GraphMode, Pos, Show, Vec3
from .graph_style import GraphStyle, RenderOptions
from .graph_view import TAU, ViewState

SQRT3 = math.sqrt(3.0)

BOX_EDGES: tuple[tuple[int, int], ...] = (
    (0, 1),
    (1, 3),
    (3, 2),
    (2, 0),
    (4, 5),
    (5, 7),
    (7, 6),
    (6, 4),
    (0, 4),
    (1, 5),
    (2, 6),
    (3, 7),
)


def _round_half_away(x: float) -> float:
    return math.copysign(math.floor(abs(x) + 0.5), x)


def format_number(x: float) -> str:
    """Shortest readable text for a tick value; scientific past 8 characters."""
    if math.isfinite(x) and float(x).is_integer():
        s = str(int(x))
    else:
        s = repr(float(x))
    if len(s) > 8:
        s = format_sci(x)
    return s


def format_sci(x: float) -> str:
    """Scientific notation with a trimmed mantissa, e.g. ``1.5E-3``."""
    if not math.isfinite(x):
        return repr(float(x))
    mantissa, exponent = f"{x:.6E}".split("E")
    mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}E{int(exponent)}"


def edge_axis(k: int) -> str:
    """Axis drawn by box edge ``k``: edges 8-11 run along x, odd along y, even along z."""
    if k >= 8:
        return "x"
    return "y" if k % 2 else "z"


class AxesPainter:
    """Draw non-data elements for one frame."""

    def __init__(
        self,
        view: ViewState,
        style: GraphStyle,
        options: RenderOptions,
        canvas: Canvas,
        mode: GraphMode = GraphMode.NORMAL,
    ) -> None:
        self.view = view
        self.style = style
        self.options = options
        self.canvas = canvas
        self.mode = mode

    @property
    def is_polar(self) -> bool:
        return self.mode in (GraphMode.POLAR, GraphMode.SLICE_POLAR)

    def _text(self, pos: Pos, align: Align, text: str) -> None:
        self.canvas.text(pos, align, text, self.style.text_color)

    # SECTION: 2D cartesian grid

    def _minor(self, zoom: float, count: int) -> float:
        """Grid lines per world unit (times two) for ``count`` lines per span."""
        view = self.view
        delta = 2.0 ** _round_half_away(-math.log2(zoom))
        return count * view.screen.x / (2.0 * view.delta * delta * view.bound_span**2)

    def _ranges(self, minorx: float, minory: float) -> tuple[int, int, int, int]:
        view = self.view
        s = view.screen.x / view.bound_span
        ox = view.screen_offset.x + view.offset.x
        oy = view.screen_offset.y + view.offset.y
        nx = math.ceil(((-1.0 / view.zoom.x - ox) / s) * 2.0 * minorx)
        mx = math.floor((((view.screen.x + 1.0) / view.zoom.x - ox) / s) * 2.0 * minorx)
        ny = math.ceil(((oy + 1.0 / view.zoom.y) / s) * 2.0 * minory)
        my = math.floor(((oy - (view.screen.y + 1.0) / view.zoom.y) / s) * 2.0 * minory)
        return nx, mx, ny, my

    def write_axis(self) -> None:
        """Minor and major grid lines, or just the axes when lines are disabled."""
        view, style, opts = self.view, self.style, self.options
        count = opts.line_major * opts.line_minor
        minorx = self._minor(view.zoom.x, count)
        minory = self._minor(view.zoom.y, count)
        if not opts.disable_lines and self.mode is not GraphMode.DOMAIN_COLORING:
            nx, mx, ny, my = self._ranges(minorx, minory)
            for j in range(nx, mx + 1):
                if j % opts.line_minor != 0:
                    x = to_screen(view, j / (2.0 * minorx), 0.0).x
                    self.canvas.vline(x, view.screen.y, style.axis_color_light)
            for j in range(my, ny + 1):
                if j % opts.line_minor != 0:
                    y = to_screen(view, 0.0, j / (2.0 * minory)).y
                    self.canvas.hline(view.screen.x, y, style.axis_color_light)
        minorx /= opts.line_minor
        minory /= opts.line_minor
        nx, mx, ny, my = self._ranges(minorx, minory)
        if not opts.disable_lines:
            for j in range(nx, mx + 1):
                x = to_screen(view, j / (2.0 * minorx), 0.0).x
                self.canvas.vline(x, view.screen.y, style.axis_color)
            for j in range(my, ny + 1):
                y = to_screen(view, 0.0, j / (2.0 * minory)).y
                self.canvas.hline(view.screen.x, y, style.axis_color)
        elif not opts.disable_axis:
            origin = to_screen(view, 0.0, 0.0)
            if nx <= 0 <= mx:
                self.canvas.vline(origin.x, view.screen.y, style.axis_color)
            if my <= 0 <= ny:
                self.canvas.hline(view.screen.x, origin.y, style.axis_color)

    def write_text(self) -> None:
        """Numeric tick labels along both axes (pinned to the border when off-screen)."""
        view, style, opts = self.view, self.style, self.options
        if opts.disable_axis:
            return
        minorx = self._minor(view.zoom.x, opts.line_major)
        minory = self._minor(view.zoom.y, opts.line_major)
        nx, mx, ny, my = self._ranges(minorx, minory)

        align_bottom = False
        if my <= 0 < ny:
            y = to_screen(view, 0.0, 0.0).y
        elif my < 0:
            y = 0.0
        else:
            align_bottom = True
            y = view.screen.y
        for j in range(nx - 1, mx + 1):
            if self.is_polar and j == 0:
                continue
            value = j / (2.0 * minorx)
            x = to_screen(view, value, 0.0).x
            py = y if align_bottom else min(y, view.screen.y - style.font_size)
            self._text(
                Pos(x + 2.0, py),
                Align.LEFT_BOTTOM if align_bottom else Align.LEFT_TOP,
                format_number(value),
            )

        align_right = False
        if nx <= 0 <= mx:
            x = to_screen(view, 0.0, 0.0).x
        elif mx > 0:
            x = 0.0
        else:
            align_right = True
            x = view.screen.x
        for j in range(my, ny + 2):
            if j == 0:
                continue
            value = j / (2.0 * minory)
            label = format_number(value)
            y = to_screen(view, 0.0, value).y
            px = x + 2.0
            if not align_right:
                px = min(px, view.screen.x - style.font_width * len(label))
            self._text(Pos(px, y), Align.RIGHT_TOP if align_right else Align.LEFT_TOP, label)

    # SECTION: polar grid

    def write_polar_axis(self) -> None:
        """Radial spokes every 15 degrees plus minor/major circles about the origin."""
        view, style, opts = self.view, self.style, self.options
        o = to_screen(view, 0.0, 0.0)
        if not opts.disable_lines and not opts.disable_axis:
            slopes = (2.0 - SQRT3, 2.0 + SQRT3, 1.0, 1.0 / SQRT3, SQRT3)
            for edge in (view.screen.x, 0.0):
                for run in (o.x - edge, edge - o.x):
                    for slope in slopes:
                        end = Pos(edge, o.y + run * slope)
                        self.canvas.line_segment((o, end), 1.0, style.axis_color_light)
        if opts.disable_axis:
            return

        centre = to_coord(view, Pos(view.screen.x / 2.0, view.screen.y / 2.0))
        origin_visible = 0.0 < o.x < view.screen.x and 0.0 < o.y < view.screen.y
        sign = -1.0 if origin_visible else 1.0
        if (centre[0] >= 0.0) == (centre[1] <= 0.0):
            corners = (Pos(0.0, 0.0), Pos(view.screen.x, view.screen.y))
        else:
            corners = (Pos(0.0, view.screen.y), Pos(view.screen.x, 0.0))
        ra, rb = (math.hypot(*to_coord(view, c)) for c in corners)
        lo, hi = sign * min(ra, rb), max(ra, rb)

        s = view.screen.x / view.bound_span
        ox = view.screen_offset.x + view.offset.x
        minor = self._minor(view.zoom.x, opts.line_major * opts.line_minor)

        def ring_range(density: float) -> range:
            n = math.ceil(((to_screen(view, lo, 0.0).x / view.zoom.x - ox) / s) * 2.0 * density)
            m = math.floor(((to_screen(view, hi, 0.0).x / view.zoom.x - ox) / s) * 2.0 * density)
            return range(max(n, 1), m + 1)

        for j in ring_range(minor):
            if j % opts.line_minor != 0:
                x = to_screen(view, j / (2.0 * minor), 0.0).x
                self.canvas.circle(o, x - o.x, style.axis_color_light, 1.0)
        major = minor / opts.line_minor
        for j in ring_range(major):
            x = to_screen(view, j / (2.0 * major), 0.0).x
            self.canvas.circle(o, x - o.x, style.axis_color, 1.0)
        self.canvas.vline(o.x, view.screen.y, style.axis_color)
        self.canvas.hline(view.screen.x, o.y, style.axis_color)

    # SECTION: 3D box

    def write_axis_3d(self, projector: Projector, compositor: Compositor) -> None:
        """Bounding-box wireframe plus tick labels on the three visible edges."""
        view, style, opts = self.view, self.style, self.options
        s = view.bound_span * 0.5
        corners = [Vec3(x, y, z) for x in (-s, s) for y in (-s, s) for z in (-s, s)]
        vertices = [projector.vec3_to_pos_depth(c, False) for c in corners]

        # lowest on screen, ties to the right
        xl = 0
        for i in range(1, 8):
            p, q = vertices[i][0], vertices[xl][0]
            if p.y > q.y or (p.y == q.y and p.x > q.x):
                xl = i
        # leftmost vertex sharing an edge with xl
        zl = 0
        for i in range(1, 8):
            p, q = vertices[i][0], vertices[zl][0]
            touches = any((i in e) and (xl in e) for e in BOX_EDGES)
            if (p.x < q.x or (p.x == q.x and p.y > q.y)) and touches:
                zl = i

        fast = vertices[0][1] is None
        mean = 0.0
        if not fast:
            mean = sum(vertices[i][1] + vertices[j][1] for i, j in BOX_EDGES) / len(BOX_EDGES)

        def edge_depth(i: int, j: int) -> Optional[float]:
            if fast:
                return None
            return 0.0 if vertices[i][1] + vertices[j][1] < mean else 1.0

        for k, (i, j) in enumerate(BOX_EDGES):
            axis = edge_axis(k)
            labelled = (axis == "z" and zl in (i, j)) or (axis != "z" and xl in (i, j))
            if labelled:
                if not opts.disable_axis or opts.show_box:
                    compositor.line(edge_depth(i, j), vertices[i][0], vertices[j][0], style.axis_color, 2.0)
                if not opts.disable_axis:
                    self._label_edge(axis, vertices[min(i, j)][0], vertices[max(i, j)][0])
            elif opts.show_box:
                compositor.line(edge_depth(i, j), vertices[i][0], vertices[j][0], style.axis_color, 2.0)

    def _label_edge(self, axis: str, start: Pos, end: Pos) -> None:
        view = self.view
        zoom = getattr(view.zoom_3d, axis)
        offset = {"x": -view.offset_3d.x, "y": view.offset_3d.y, "z": view.offset_3d.z}[axis]
        align = Align.RIGHT_CENTER if axis == "z" else Align.CENTER_TOP
        first = math.ceil(view.bound.x / zoom)
        last = math.floor(view.bound.y / zoom)
        mid = Pos((start.x + end.x) * 0.5, (start.y + end.y) * 0.5)
        if axis == "z":
            n = format_number(first + (last - first) // 2 - offset)
            self._text(mid, align, "z" + " " * len(n))
        else:
            self._text(mid, align, " \n" + axis)
        span = last - first
        for i in range(first, last + 1):
            t = (i - first) / span if span else 0.0
            pos = Pos(start.x + (end.x - start.x) * t, start.y + (end.y - start.y) * t)
            self._text(pos, align, format_number(i - offset))

    # SECTION: readouts

    def write_coord(self, sample_at: Optional[Callable[[float, float], Optional[complex]]] = None) -> None:
        """Pointer coordinates (bottom left) and ruler deltas (bottom right).

        ``sample_at`` looks up the domain-coloring value under the pointer.
        """
        view, style, opts = self.view, self.style, self.options
        if not view.mouse_moved or view.mouse_position is None:
            return
        pointer = view.mouse_position
        x, y = to_coord(view, pointer)
        unit = opts.angle_unit
        if not opts.disable_coord:
            rows = [format_sci(x), format_sci(y)]
            if self.mode is GraphMode.DOMAIN_COLORING and sample_at is not None:
                z = sample_at(x, y)
                if z is not None:
                    rows += [
                        format_sci(z.real),
                        format_sci(z.imag),
                        format_sci(abs(z)),
                        format_number(unit.from_radians(math.atan2(z.imag, z.real))),
                    ]
            elif self.is_polar:
                rows = [format_sci(math.hypot(x, y)), format_number(unit.from_radians(math.atan2(y, x)))]
            self._text(Pos(0.0, view.screen.y), Align.LEFT_BOTTOM, "\n".join(rows))
        if view.ruler_pos is not None:
            dx = x - view.ruler_pos.x
            dy = y - view.ruler_pos.y
            text = "\n".join(
                [
                    format_sci(dx),
                    format_sci(dy),
                    format_sci(math.hypot(dx, dy)),
                    format_number(unit.from_radians(math.atan2(dy, dx))),
                ]
            )
            self._text(Pos(view.screen.x, view.screen.y), Align.RIGHT_BOTTOM, text)
            anchor = to_screen(view, view.ruler_pos.x, view.ruler_pos.y)
            self.canvas.line_segment((pointer, anchor), 1.0, style.axis_color)

    def write_angle(self) -> None:
        """Azimuth and elevation in whole degrees."""
        view = self.view
        if self.options.disable_coord:
            return
        azimuth = _round_half_away(view.angle.x / TAU * 360.0)
        elevation = _round_half_away((0.25 - view.angle.y / TAU) * 360.0) % 360.0
        self._text(
            Pos(0.0, view.screen.y),
            Align.LEFT_BOTTOM,
            f"{format_number(azimuth)}\n{format_number(elevation)}",
        )

    def write_label(self, names: Sequence[str], show: Show) -> None:
        """Legend in the top-right corner: one swatch line per named slot."""
        view, style = self.view, self.style
        if self.mode is GraphMode.DOMAIN_COLORING:
            return
        x = view.screen.x - 48.0
        top = 0.0
        inset = 3.5

        def row(label: str, color) -> None:
            y = float(_round_half_away(top + 3.0 * style.font_size / 4.0))
            self._text(Pos(x, top), Align.RIGHT_TOP, label)
            self.canvas.line_segment(
                (Pos(x + inset, y), Pos(view.screen.x - inset, y)), style.line_width, color
            )

        for k, name in enumerate(names):
            if not name:
                continue
            if self.mode in (GraphMode.FLATTEN, GraphMode.DEPTH) or show is Show.REAL:
                row(name, style.main(k))
            elif show is Show.IMAG:
                row(f"im:{name}", style.alt(k))
            else:
                row(f"re:{name}", style.main(k))
                top += style.font_size
                row(f"im:{name}", style.alt(k))
            top += style.font_size


__all__ = ["AxesPainter", "BOX_EDGES", "edge_axis", "format_number", "format_sci"]
