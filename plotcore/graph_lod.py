"""Level-of-detail data-request protocol.

Purpose
-------
The plot never evaluates functions itself. When the visible domain or the
sampling precision changes it marks itself dirty; the caller polls
:meth:`LodController.update_res` once per tick and, when dirty, receives
exactly one ``Bound`` describing the domain and resolution to sample next.

Concepts and structure
----------------------
- ``LodController`` holds the dirty flag and the "which data slot changed"
  hint. Marking dirty twice with different slots collapses the hint to
  ``None`` ("everything").
- ``build_request`` is the pure mapping from ``(is_3d_data, mode)`` and the
  view to the request.

Important gotchas
-----------------
- The request is pull-based and non-blocking. The plot keeps rendering the
  last grids it received until ``Graph.set_data`` is called again.
- ``DomainColoring`` asks for one sample per rendered cell; the returned grid
  must be exactly ``width * height`` long or missing cells render black.
"""

from __future__ import annotations

import logging
from typing import Optional

from .graph_transform import to_coord
from .graph_types import (
    Bound,
    BoundWidth,
    BoundWidth3D,
    GraphMode,
    Pos,
    PrecDimension,
    PrecMult,
    PrecSlice,
)
from .graph_view import ViewState

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def _visible_x(view: ViewState) -> tuple[tuple[float, float], tuple[float, float]]:
    return to_coord(view, Pos(0.0, 0.0)), to_coord(view, Pos(view.screen.x, view.screen.y))


def _along_view_axis(view: ViewState, lo: float, hi: float, prec: float) -> BoundWidth3D:
    """Span ``[lo, hi]`` on the viewed axis and ``bound`` on the frozen one."""
    if view.view_x:
        return BoundWidth3D(lo, view.bound.x, hi, view.bound.y, PrecSlice(prec))
    return BoundWidth3D(view.bound.x, lo, view.bound.y, hi, PrecSlice(prec))


def build_request(
    view: ViewState,
    mode: GraphMode,
    *,
    is_3d_data: bool,
    is_3d: bool,
    prec: float,
    mult: float = 1.0,
) -> Optional[Bound]:
    """Compute the data request for the current view.

    Parameters
    ----------
    view : ViewState
        Current camera state.
    mode : GraphMode
        Active graph mode.
    is_3d_data : bool
        Whether the data source produces two-input grids.
    is_3d : bool
        Current rendering flag of the mode controller.
    prec : float
        Effective precision (already reduced while dragging, if enabled).
    mult : float
        Quality multiplier for the domain-coloring grid.

    Returns
    -------
    Bound or None
        ``None`` only for a 3D-rendered plot of one-input data outside depth
        mode, which has nothing to request.
    """
    bound, z3, o3 = view.bound, view.zoom_3d, view.offset_3d
    if is_3d_data:
        if mode in (GraphMode.NORMAL, GraphMode.POLAR):
            return BoundWidth3D(
                bound.x / z3.x + o3.x,
                bound.x / z3.y - o3.y,
                bound.y / z3.x + o3.x,
                bound.y / z3.y - o3.y,
                PrecMult(view.prec),
            )
        if mode is GraphMode.DOMAIN_COLORING:
            c, cf = _visible_x(view)
            return BoundWidth3D(
                c[0],
                c[1],
                cf[0],
                cf[1],
                PrecDimension(int(view.screen.x * prec * mult), int(view.screen.y * prec * mult)),
            )
        if mode is GraphMode.SLICE:
            c, cf = _visible_x(view)
            return _along_view_axis(view, c[0], cf[0], prec)
        if mode in (GraphMode.FLATTEN, GraphMode.SLICE_POLAR):
            return _along_view_axis(view, view.var.x, view.var.y, view.prec)
        # depth
        return _along_view_axis(view, bound.x / z3.z - o3.z, bound.y / z3.z - o3.z, view.prec)
    if mode is GraphMode.DEPTH:
        return BoundWidth(bound.x / z3.z - o3.z, bound.y / z3.z - o3.z, PrecMult(view.prec))
    if is_3d:
        return None
    if mode is GraphMode.FLATTEN:
        return BoundWidth(view.var.x, view.var.y, PrecMult(prec))
    c, cf = _visible_x(view)
    return BoundWidth(c[0], cf[0], PrecMult(prec))


class LodController:
    """Dirty flag plus the changed-slot hint for the data-request protocol."""

    def __init__(self) -> None:
        self.dirty = True
        self._slot: Optional[int] = None

    def mark_dirty(self, slot: Optional[int] = None) -> None:
        """Request new data, optionally naming the one data slot that changed."""
        if not self.dirty:
            self._slot = slot
        elif self._slot != slot:
            self._slot = None
        self.dirty = True

    def take(self) -> tuple[bool, Optional[int]]:
        """Consume the dirty flag, returning ``(was_dirty, changed_slot)``."""
        was_dirty = self.dirty
        slot = self._slot
        self.dirty = False
        self._slot = None
        return was_dirty, slot

    def update_res(
        self,
        view: ViewState,
        mode: GraphMode,
        *,
        is_3d_data: bool,
        is_3d: bool,
        prec: float,
        mult: float = 1.0,
    ) -> Optional[tuple[Bound, Optional[int]]]:
        """Return ``(bound, changed_slot)`` once per dirty period, else ``None``."""
        was_dirty, slot = self.take()
        if not was_dirty:
            return None
        request = build_request(
            view, mode, is_3d_data=is_3d_data, is_3d=is_3d, prec=prec, mult=mult
        )
        if request is None:
            return None
        logger.debug("update_res mode=%s request=%s slot=%s", mode.value, request, slot)
        return request, slot


__all__ = ["LodController", "build_request"]
