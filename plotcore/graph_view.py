"""Camera/view model for one plot.

Purpose
-------
``ViewState`` owns everything that describes *where* the plot is looking:
2D zoom and pan, 3D zoom/offset/rotation, the visible bound, the free
variable range used by flatten/depth modes, the 3D box scale and the slice
index. It also keeps the per-frame screen geometry (``screen``,
``screen_offset`` and ``delta``) and the pointer state interaction handlers
need for anchored zoom.

Architecture notes
------------------
The state is plain data plus a few small mutators. Transform functions in
:mod:`plotcore.graph_transform` read it by reference and never copy it.
Marking the plot dirty after a mutation is the caller's job (see
:class:`plotcore.graph_lod.LodController`).

Important gotchas
-----------------
``bound.x < bound.y`` and strictly positive zoom are preconditions. They are
not checked at runtime.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from .graph_types import Pos, Vec2, Vec3

TAU = 2.0 * math.pi
DEFAULT_ANGLE = math.pi / 6.0
DEFAULT_BOX_SIZE = math.sqrt(3.0)


@dataclass
class ViewState:
    """Mutable camera state of a plot.

    Parameters
    ----------
    bound : Vec2
        Visible world range ``(lo, hi)`` used on every axis at zoom 1.
    var : Vec2
        Free-variable range for flatten and depth modes.
    zoom : Vec2
        Independent per-axis 2D zoom.
    zoom_3d : Vec3
        Per-axis 3D zoom; the visible box is ``bound / zoom_3d``.
    offset : Vec2
        2D pan offset in pixels at zoom 1.
    offset_3d : Vec3
        3D pan offset in world units.
    angle : Vec2
        Azimuth (``x``) and elevation (``y``) in radians, wrapped to ``[0, 2π)``.
    box_size : float
        3D cube scale; larger values shrink the projected box.
    slice : int
        Index of the current cross-section in slice modes.
    prec : float
        Sampling precision multiplier requested from the data source.
    view_x : bool
        Slice along the x axis (True) or the y axis (False).
    """

    bound: Vec2 = field(default_factory=lambda: Vec2(-2.0, 2.0))
    var: Vec2 = field(default_factory=lambda: Vec2(-2.0, 2.0))
    zoom: Vec2 = field(default_factory=lambda: Vec2(1.0, 1.0))
    zoom_3d: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))
    offset: Vec2 = field(default_factory=Vec2)
    offset_3d: Vec3 = field(default_factory=Vec3)
    angle: Vec2 = field(default_factory=lambda: Vec2(DEFAULT_ANGLE, DEFAULT_ANGLE))
    box_size: float = DEFAULT_BOX_SIZE
    slice: int = 0
    prec: float = 1.0
    view_x: bool = True

    # Frame geometry, refreshed by set_screen().
    screen: Vec2 = field(default_factory=Vec2)
    screen_offset: Vec2 = field(default_factory=Vec2)
    delta: float = 0.0

    # Pointer state.
    mouse_position: Optional[Pos] = None
    mouse_moved: bool = False
    mouse_held: bool = False
    ruler_pos: Optional[Vec2] = None

    @property
    def bound_span(self) -> float:
        return self.bound.y - self.bound.x

    def reset(self) -> None:
        """Restore the interactive camera parameters to their defaults."""
        self.offset_3d = Vec3()
        self.offset = Vec2()
        self.var = self.bound.copy()
        self.zoom = Vec2(1.0, 1.0)
        self.zoom_3d = Vec3(1.0, 1.0, 1.0)
        self.slice = 0
        self.angle = Vec2(DEFAULT_ANGLE, DEFAULT_ANGLE)
        self.box_size = DEFAULT_BOX_SIZE
        self.prec = 1.0
        self.mouse_position = None
        self.mouse_moved = False

    def set_screen(self, width: float, height: float, is_3d: bool) -> bool:
        """Update frame geometry for a ``width`` x ``height`` viewport.

        Returns
        -------
        bool
            True when ``screen_offset`` changed, which invalidates pixel-exact
            requests such as the domain-coloring grid.
        """
        self.screen = Vec2(float(width), float(height))
        base = min(self.screen.x, self.screen.y) if is_3d else self.screen.x
        self.delta = base / self.bound_span
        new_offset = Vec2(
            self.screen.x * 0.5 - self.delta * (self.bound.x + self.bound.y) * 0.5,
            self.screen.y * 0.5,
        )
        changed = new_offset != self.screen_offset
        self.screen_offset = new_offset
        return changed

    def anchor(self) -> Vec2:
        """Pixel anchor for zooming: the pointer once it moved, else ``screen_offset``."""
        if self.mouse_moved and self.mouse_position is not None:
            return Vec2(self.mouse_position.x, self.mouse_position.y)
        return self.screen_offset.copy()

    def pan(self, dx: float, dy: float) -> None:
        """Pan by a pixel delta, compensating for the current zoom."""
        self.offset.x += dx / self.zoom.x
        self.offset.y += dy / self.zoom.y

    def rotate(self, dx: float, dy: float) -> None:
        """Rotate the 3D camera by a pixel drag (512 px per radian)."""
        self.angle.x = (self.angle.x - dx / 512.0) % TAU
        self.angle.y = (self.angle.y + dy / 512.0) % TAU

    def step_angle(self, axis: str, steps: int) -> None:
        """Snap the azimuth (``"x"``) or elevation (``"y"``) to the next π/64 step."""
        b = math.pi / 64.0
        t = getattr(self.angle, axis) / b + steps
        # round half away from zero
        t = math.copysign(math.floor(abs(t) + 0.5), t)
        setattr(self.angle, axis, (t * b) % TAU)

    def shift_var(self, quarters: int) -> None:
        """Move the free-variable range by a quarter of its width per step."""
        s = (self.var.y - self.var.x) / 4.0 * quarters
        self.var.x += s
        self.var.y += s

    def scale_var(self, factor: float) -> None:
        """Scale the free-variable range about its midpoint."""
        mid = (self.var.x + self.var.y) * 0.5
        half = (self.var.y - self.var.x) * 0.5 * factor
        self.var = Vec2(mid - half, mid + half)

    def nudge_box_size(self, amount: float) -> None:
        """Grow or shrink the 3D box, snapping near 1, √2 and √3."""
        if amount < 0 and self.box_size <= 0.1:
            return
        self.box_size += amount
        if abs(self.box_size - 1.0) < 0.05:
            self.box_size = 1.0
        if abs(self.box_size - math.sqrt(2.0)) < 0.1:
            self.box_size = math.sqrt(2.0)
        if abs(self.box_size - math.sqrt(3.0)) < 0.1:
            self.box_size = math.sqrt(3.0)


__all__ = ["DEFAULT_ANGLE", "DEFAULT_BOX_SIZE", "TAU", "ViewState"]
