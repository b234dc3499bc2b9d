"""Graph-mode state machine.

The plot is always in exactly one of the seven :class:`GraphMode` values.
``mode_up``/``mode_down`` cycle through an ordering chosen by whether the data
is complex and whether it is two-dimensional input (3D data). Every
transition recomputes the ``is_3d`` rendering flag and notifies the owner so
it can mark the view dirty.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from .graph_types import GraphMode

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


MODE_ORDERS: dict[tuple[bool, bool], tuple[GraphMode, ...]] = {
    (True, True): (
        GraphMode.NORMAL,
        GraphMode.POLAR,
        GraphMode.SLICE,
        GraphMode.SLICE_POLAR,
        GraphMode.FLATTEN,
        GraphMode.DEPTH,
        GraphMode.DOMAIN_COLORING,
    ),
    (True, False): (GraphMode.NORMAL, GraphMode.POLAR, GraphMode.FLATTEN, GraphMode.DEPTH),
    (False, True): (GraphMode.NORMAL, GraphMode.POLAR, GraphMode.SLICE, GraphMode.SLICE_POLAR),
    (False, False): (GraphMode.NORMAL, GraphMode.POLAR),
}

SLICE_MODES = (GraphMode.SLICE, GraphMode.SLICE_POLAR)
POLAR_MODES = (GraphMode.POLAR, GraphMode.SLICE_POLAR)


def mode_order(is_complex: bool, is_3d_data: bool) -> tuple[GraphMode, ...]:
    """Return the cycling order for a data kind."""
    return MODE_ORDERS[(bool(is_complex), bool(is_3d_data))]


def is_3d_for(mode: GraphMode, is_3d_data: bool) -> bool:
    """Rendering flag for ``mode``: Depth is always 3D, DomainColoring/Flatten never."""
    if mode is GraphMode.DEPTH:
        return True
    if mode in (GraphMode.DOMAIN_COLORING, GraphMode.FLATTEN):
        return False
    return is_3d_data


class GraphModeController:
    """Owns the current mode and the ``is_3d`` rendering flag.

    Parameters
    ----------
    on_change : callable, optional
        Invoked with no arguments after every mode transition or data-kind
        change. The plot uses it to mark itself dirty.
    """

    def __init__(self, on_change: Optional[Callable[[], None]] = None) -> None:
        self._mode = GraphMode.NORMAL
        self._is_3d = False
        self._is_3d_data = False
        self._is_complex = False
        self._on_change = on_change

    @property
    def mode(self) -> GraphMode:
        return self._mode

    @property
    def is_3d(self) -> bool:
        return self._is_3d

    @property
    def is_3d_data(self) -> bool:
        return self._is_3d_data

    @property
    def is_complex(self) -> bool:
        return self._is_complex

    @property
    def is_polar(self) -> bool:
        return self._mode in POLAR_MODES

    @property
    def renders_3d(self) -> bool:
        """Whether frames go through the 3D projector.

        Slice modes extract a one-dimensional cross-section and are drawn flat
        even though ``is_3d`` follows the data for them.
        """
        return self._is_3d and self._mode not in SLICE_MODES

    @property
    def order(self) -> tuple[GraphMode, ...]:
        return mode_order(self._is_complex, self._is_3d_data)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def set_mode(self, mode: Union[GraphMode, str]) -> None:
        """Switch to ``mode`` (a :class:`GraphMode` or its name)."""
        mode = GraphMode.coerce(mode)
        self._is_3d = is_3d_for(mode, self._is_3d_data)
        if mode is not self._mode:
            logger.debug("graph mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode
        self._changed()

    def _step(self, step: int) -> None:
        order = self.order
        if self._mode not in order:
            return
        pt = order.index(self._mode)
        self.set_mode(order[(pt + step) % len(order)])

    def mode_up(self) -> None:
        self._step(1)

    def mode_down(self) -> None:
        self._step(-1)

    def set_is_complex(self, new: bool) -> None:
        """Declare whether the data is complex; drops complex-only modes."""
        self._is_complex = bool(new)
        if not self._is_complex and self._mode in (
            GraphMode.DEPTH,
            GraphMode.DOMAIN_COLORING,
            GraphMode.FLATTEN,
        ):
            self._mode = GraphMode.NORMAL
            self._is_3d = self._is_3d_data
            self._changed()

    def set_is_3d_data(self, new: bool) -> None:
        """Declare whether the data has two inputs; drops 3D-only modes."""
        self._is_3d_data = bool(new)
        if not self._is_3d_data and self._mode in (
            GraphMode.SLICE,
            GraphMode.DOMAIN_COLORING,
            GraphMode.SLICE_POLAR,
        ):
            self._mode = GraphMode.NORMAL
        self._is_3d = is_3d_for(self._mode, self._is_3d_data)
        self._changed()


__all__ = [
    "GraphModeController",
    "MODE_ORDERS",
    "POLAR_MODES",
    "SLICE_MODES",
    "is_3d_for",
    "mode_order",
]
