"""Turning sample points into clipped draw primitives.

Purpose
-------
:class:`Clipper` receives samples one at a time, projects them and emits the
primitives that connect them to their predecessors.

Concepts and structure
----------------------
- 2D: :meth:`Clipper.draw_point` culls segments whose two endpoints are both
  off-screen and returns the new "last" screen position, or ``None`` to break
  the polyline.
- 3D: :meth:`Clipper.draw_point_3d` works against the visible box
  ``[bound.x / zoom_3d, bound.y / zoom_3d]`` on every axis. Each call may
  connect to two predecessors (left and up neighbours in a surface grid).
  A segment with one endpoint outside the box is shortened to the box
  boundary by :func:`clip_segment_to_box` before it is projected.
- Non-finite coordinates never raise. They return ``None`` so the caller's
  polyline is broken at that sample.

Important gotchas
-----------------
- The 3D offset is applied here (``x - off.x``, ``y + off.y``,
  ``z + off.z``), so callers pass raw sample coordinates.
- 3D primitives go through the :class:`~plotcore.graph_compositor.Compositor`;
  2D primitives go straight to the canvas.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Optional

from .domain_coloring import depth_tint
from .graph_canvas import Canvas
from .graph_compositor import Compositor
from .graph_transform import Projector, in_screen, to_screen
from .graph_types import Color, DepthColor, Lines, Pos, Vec3
from .graph_view import ViewState

BoxLimits = tuple[tuple[float, float], tuple[float, float], tuple[float, float]]


class PointState(NamedTuple):
    """State carried from one 3D sample to the next."""

    pos: Pos
    depth: Optional[float]
    world: Vec3
    inside: bool


def box_limits(view: ViewState) -> BoxLimits:
    """Visible box per axis: ``(bound.x / zoom_3d.k, bound.y / zoom_3d.k)``."""
    z = view.zoom_3d
    b = view.bound
    return ((b.x / z.x, b.y / z.x), (b.x / z.y, b.y / z.y), (b.x / z.z, b.y / z.z))


def inside_box(p: Vec3, limits: BoxLimits) -> bool:
    return all(lo <= p[axis] <= hi for axis, (lo, hi) in enumerate(limits))


def clip_segment_to_box(anchor: Vec3, other: Vec3, limits: BoxLimits) -> Vec3:
    """Move ``other`` along the segment toward ``anchor`` onto the box boundary.

    Axes are processed in x, y, z order. On each axis where ``other`` lies
    beyond an edge, the point is replaced by the intersection of the segment
    with that edge's plane. ``anchor`` is assumed to be inside the box.

    Examples
    --------
    >>> limits = ((-1.0, 1.0),) * 3
    >>> clip_segment_to_box(Vec3(0.0, 0.0, 0.0), Vec3(2.0, 0.0, 0.0), limits)
    Vec3(x=1.0, y=0.0, z=0.0)
    """
    vi = other
    for axis, (lo, hi) in enumerate(limits):
        coord = anchor[axis]
        ci = vi[axis]
        if ci < lo:
            vi = anchor + (vi - anchor) * ((lo - coord) / (ci - coord))
        elif ci > hi:
            vi = anchor + (vi - anchor) * ((hi - coord) / (ci - coord))
    return vi


class Clipper:
    """Per-frame sample → primitive assembler.

    Parameters
    ----------
    view : ViewState
        Camera state for the frame.
    canvas : Canvas
        Target of 2D primitives.
    compositor : Compositor, optional
        Target of 3D primitives. Required for :meth:`draw_point_3d`.
    projector : Projector, optional
        3D projector; built from ``view`` when omitted.
    lines : Lines
        Whether to emit segments, point markers or both.
    line_width, point_size : float
        Primitive sizes in pixels.
    ignore_bounds : bool
        Treat every 3D point as inside the box (no clipping).
    depth_color : DepthColor
        Hue-shift policy for 3D colors.
    """

    def __init__(
        self,
        view: ViewState,
        canvas: Canvas,
        compositor: Optional[Compositor] = None,
        projector: Optional[Projector] = None,
        *,
        lines: Lines = Lines.LINES,
        line_width: float = 3.0,
        point_size: float = 5.0,
        ignore_bounds: bool = False,
        depth_color: DepthColor = DepthColor.NONE,
    ) -> None:
        self.view = view
        self.canvas = canvas
        self.compositor = compositor
        self.projector = projector if projector is not None else Projector(view)
        self.lines = lines
        self.line_width = line_width
        self.point_size = point_size
        self.ignore_bounds = ignore_bounds
        self.depth_color = depth_color
        self.limits = box_limits(view)

    # SECTION: 2D

    def draw_point(self, x: float, y: float, color: Color, last: Optional[Pos]) -> Optional[Pos]:
        """Project one 2D sample and connect it to ``last``."""
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        pos = to_screen(self.view, x, y)
        is_in = in_screen(self.view, pos)
        if self.lines.draws_points and is_in:
            self.canvas.rect_filled(pos, color, self.point_size)
        if not self.lines.draws_lines:
            return None
        if last is not None and (is_in or in_screen(self.view, last)):
            self.canvas.line_segment((last, pos), self.line_width, color)
        return pos

    # SECTION: 3D

    def _tint(self, color: Color, depth: Optional[float], z: float) -> Color:
        height = 2.0 * self.view.bound.y / self.view.zoom_3d.z
        return depth_tint(color, depth, z, self.depth_color, height)

    def _segment(self, a: tuple[Pos, Optional[float]], b: tuple[Pos, Optional[float]], z: float, color: Color) -> None:
        depth = None
        if a[1] is not None and b[1] is not None:
            depth = (a[1] + b[1]) * 0.5
        self.compositor.line(depth, b[0], a[0], self._tint(color, depth, z), self.line_width)

    def _connect(self, cur: PointState, prev: PointState, color: Color) -> None:
        project = self.projector.vec3_to_pos_depth
        if cur.inside and prev.inside:
            self._segment((cur.pos, cur.depth), (prev.pos, prev.depth), cur.world.z, color)
        elif cur.inside:
            clipped = project(clip_segment_to_box(cur.world, prev.world, self.limits), True)
            self._segment((cur.pos, cur.depth), clipped, cur.world.z, color)
        elif prev.inside:
            clipped = project(clip_segment_to_box(prev.world, cur.world, self.limits), True)
            self._segment((prev.pos, prev.depth), clipped, prev.world.z, color)

    def draw_point_3d(
        self,
        x: float,
        y: float,
        z: float,
        color: Color,
        prev_a: Optional[PointState] = None,
        prev_b: Optional[PointState] = None,
    ) -> Optional[PointState]:
        """Project one 3D sample and connect it to up to two predecessors.

        Returns the state to pass as a predecessor next time, or ``None`` when
        the sample is non-finite or only point markers are drawn.
        """
        off = self.view.offset_3d
        v = Vec3(x - off.x, y + off.y, z + off.z)
        if not v.is_finite():
            return None
        pos, depth = self.projector.vec3_to_pos_depth(v, True)
        inside = self.ignore_bounds or inside_box(v, self.limits)
        if self.lines.draws_points and inside:
            self.compositor.point(depth, pos, self._tint(color, depth, v.z))
        if not self.lines.draws_lines:
            return None
        state = PointState(pos, depth, v, inside)
        for prev in (prev_a, prev_b):
            if prev is not None:
                self._connect(state, prev, color)
        return state


__all__ = ["BoxLimits", "Clipper", "PointState", "box_limits", "clip_segment_to_box", "inside_box"]
