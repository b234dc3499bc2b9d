"""Drawing backend contract.

The engine never owns pixels. Every frame is expressed as calls on a
:class:`Canvas`: a structural protocol so any object with these methods can
serve as the backend. :class:`RecordingCanvas` keeps the calls in memory,
which is what headless callers and the test-suite use;
:class:`plotcore.PlotlyCanvas.PlotlyCanvas` turns them into a Plotly figure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence, runtime_checkable

from .graph_types import Align, Color, Pos, Vec2


@runtime_checkable
class Canvas(Protocol):
    """Operations the renderer issues, in screen pixels."""

    def line_segment(self, points: Sequence[Pos], width: float, color: Color) -> None: ...

    def rect_filled(self, pos: Pos, color: Color, size: float) -> None: ...

    def circle(self, center: Pos, radius: float, color: Color, width: float) -> None: ...

    def hline(self, width: float, y: float, color: Color) -> None: ...

    def vline(self, x: float, height: float, color: Color) -> None: ...

    def text(self, pos: Pos, align: Align, text: str, color: Color) -> None: ...

    def image(self, handle: Any, size: Vec2) -> None: ...

    def clear(self, color: Color) -> None: ...


@dataclass(frozen=True)
class CanvasCall:
    """One recorded canvas operation."""

    method: str
    args: tuple


class RecordingCanvas:
    """In-memory canvas that records every call in order.

    Examples
    --------
    >>> canvas = RecordingCanvas()
    >>> canvas.rect_filled(Pos(1.0, 2.0), Color(0, 0, 0), 5.0)
    >>> canvas.names()
    ['rect_filled']
    """

    def __init__(self) -> None:
        self.calls: list[CanvasCall] = []

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append(CanvasCall(method, args))

    def line_segment(self, points: Sequence[Pos], width: float, color: Color) -> None:
        self._record("line_segment", tuple(points), width, color)

    def rect_filled(self, pos: Pos, color: Color, size: float) -> None:
        self._record("rect_filled", pos, color, size)

    def circle(self, center: Pos, radius: float, color: Color, width: float) -> None:
        self._record("circle", center, radius, color, width)

    def hline(self, width: float, y: float, color: Color) -> None:
        self._record("hline", width, y, color)

    def vline(self, x: float, height: float, color: Color) -> None:
        self._record("vline", x, height, color)

    def text(self, pos: Pos, align: Align, text: str, color: Color) -> None:
        self._record("text", pos, align, text, color)

    def image(self, handle: Any, size: Vec2) -> None:
        self._record("image", handle, size)

    def clear(self, color: Color) -> None:
        self._record("clear", color)

    def names(self) -> list[str]:
        return [c.method for c in self.calls]

    def of(self, method: str) -> list[CanvasCall]:
        """Return the recorded calls of one kind."""
        return [c for c in self.calls if c.method == method]

    def reset(self) -> None:
        self.calls.clear()


__all__ = ["Canvas", "CanvasCall", "RecordingCanvas"]
