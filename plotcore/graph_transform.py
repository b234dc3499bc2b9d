"""World ↔ screen transforms and the 3D projector.

Purpose
-------
Pure functions that map between world coordinates and screen pixels for the
2D view, the anchor-preserving zoom rule, and :class:`Projector`, which maps
3D world points to screen positions plus a normalized depth scalar.

Concepts and structure
----------------------
- ``to_screen``/``to_coord`` are exact inverses for a fixed ``ViewState``.
- ``zoom_at`` changes zoom and pan together so the anchor pixel keeps showing
  the same world point.
- ``Projector`` caches ``sin``/``cos`` of the camera angles for one frame.
  Its depth output is ``None`` in fast mode, which turns depth compositing
  into a pass-through.

Examples
--------
>>> from plotcore.graph_view import ViewState
>>> view = ViewState()
>>> _ = view.set_screen(800, 600, is_3d=False)
>>> to_screen(view, 0.0, 0.0)
Pos(x=400.0, y=300.0)
"""

from __future__ import annotations

import math
from typing import Optional

from .graph_types import Pos, Vec2, Vec3
from .graph_view import ViewState

SQRT3 = math.sqrt(3.0)


def to_screen(view: ViewState, x: float, y: float) -> Pos:
    """Map a world point to screen pixels."""
    s = view.screen.x / view.bound_span
    ox = view.screen_offset.x + view.offset.x
    oy = view.screen_offset.y + view.offset.y
    return Pos((x * s + ox) * view.zoom.x, (oy - y * s) * view.zoom.y)


def to_coord(view: ViewState, pos: Pos) -> tuple[float, float]:
    """Map screen pixels back to world coordinates (inverse of :func:`to_screen`)."""
    s = view.bound_span / view.screen.x
    ox = view.screen_offset.x + view.offset.x
    oy = view.screen_offset.y + view.offset.y
    return ((pos.x / view.zoom.x - ox) * s, (oy - pos.y / view.zoom.y) * s)


def get_new_offset(view: ViewState, center: Vec2) -> Vec2:
    """Return the pan offset that puts the world point ``center`` mid-screen."""
    s = view.screen.x / view.bound_span
    ox = center.x * s
    oy = center.y * s
    return Vec2(
        view.screen.x / (view.zoom.x * 2.0) - ox - view.screen_offset.x,
        oy - view.screen_offset.y + view.screen.y / (view.zoom.y * 2.0),
    )


def in_screen(view: ViewState, pos: Pos) -> bool:
    """Viewport test with a 2 pixel margin."""
    return -2.0 < pos.x < view.screen.x + 2.0 and -2.0 < pos.y < view.screen.y + 2.0


def zoom_at(view: ViewState, factor: float, anchor: Vec2, axes: str = "xy") -> None:
    """Multiply zoom by ``factor`` on ``axes`` keeping the ``anchor`` pixel fixed.

    Parameters
    ----------
    view : ViewState
        View to mutate in place.
    factor : float
        Zoom multiplier; values above 1 zoom in.
    anchor : Vec2
        Screen pixel that must keep showing the same world point.
    axes : str
        Any combination of ``"x"`` and ``"y"``.
    """
    for axis in axes:
        old = getattr(view.zoom, axis)
        new = old * factor
        setattr(view.zoom, axis, new)
        pan = getattr(anchor, axis) * (1.0 / old - 1.0 / new)
        setattr(view.offset, axis, getattr(view.offset, axis) - pan)


class Projector:
    """Per-frame 3D → screen projection.

    Parameters
    ----------
    view : ViewState
        Camera state read by reference.
    fast : bool
        When True, depth is not computed and every call returns ``None`` depth.
    """

    def __init__(self, view: ViewState, fast: bool = False) -> None:
        self.view = view
        self.fast = fast
        self.sin_phi, self.cos_phi = math.sin(view.angle.x), math.cos(view.angle.x)
        self.sin_theta, self.cos_theta = math.sin(view.angle.y), math.cos(view.angle.y)

    def vec3_to_pos_depth(self, p: Vec3, apply_zoom: bool = True) -> tuple[Pos, Optional[float]]:
        """Project ``p`` to the screen.

        ``apply_zoom`` scales the point by ``zoom_3d`` first; the bounding box
        wireframe is drawn without it.
        """
        view = self.view
        if apply_zoom:
            p = p * view.zoom_3d
        x1 = p.x * self.cos_phi + p.y * self.sin_phi
        y1 = -p.x * self.sin_phi + p.y * self.cos_phi
        z2 = -p.z * self.cos_theta - y1 * self.sin_theta
        s = view.delta / view.box_size
        pos = Pos(x1 * s + view.screen.x * 0.5, z2 * s + view.screen.y * 0.5)
        if self.fast:
            return pos, None
        depth = (p.z * self.sin_theta - y1 * self.cos_theta) / (view.bound_span * SQRT3) + 0.5
        return pos, depth


__all__ = ["Projector", "get_new_offset", "in_screen", "to_coord", "to_screen", "zoom_at"]
