"""Painter's-algorithm compositing for 3D frames.

In accurate mode every primitive is buffered with its depth and the buffer is
drawn back to front (ascending depth, stable for equal depths) when the frame
is flushed. In fast mode there is no depth: primitives go straight to the
canvas in submission order and :meth:`Compositor.flush` has nothing to do.
"""

from __future__ import annotations

from typing import Optional

from .graph_canvas import Canvas
from .graph_types import Color, DrawPrimitive, Line, PointMark, Pos


class Compositor:
    """Collect ``(depth, primitive, color)`` entries for one frame.

    Parameters
    ----------
    canvas : Canvas
        Destination of the draw calls.
    fast : bool
        Skip buffering and sorting; draw immediately.
    point_size : float
        Size passed to ``rect_filled`` for point primitives.
    """

    def __init__(self, canvas: Canvas, fast: bool = False, point_size: float = 5.0) -> None:
        self.canvas = canvas
        self.fast = fast
        self.point_size = point_size
        self._buffer: list[tuple[float, DrawPrimitive, Color]] = []

    def __len__(self) -> int:
        return len(self._buffer)

    @property
    def entries(self) -> list[tuple[float, DrawPrimitive, Color]]:
        return list(self._buffer)

    def add(self, depth: Optional[float], primitive: DrawPrimitive, color: Color) -> None:
        """Queue a primitive, or draw it right away when no depth is available."""
        if self.fast or depth is None:
            self._draw(primitive, color)
        else:
            self._buffer.append((depth, primitive, color))

    def line(self, depth: Optional[float], start: Pos, end: Pos, color: Color, width: float) -> None:
        self.add(depth, Line(start, end, width), color)

    def point(self, depth: Optional[float], pos: Pos, color: Color) -> None:
        self.add(depth, PointMark(pos), color)

    def _draw(self, primitive: DrawPrimitive, color: Color) -> None:
        if isinstance(primitive, Line):
            self.canvas.line_segment((primitive.start, primitive.end), primitive.width, color)
        else:
            self.canvas.rect_filled(primitive.pos, color, self.point_size)

    def sorted_entries(self) -> list[tuple[float, DrawPrimitive, Color]]:
        """Entries in drawing order (ascending depth, insertion order for ties)."""
        return sorted(self._buffer, key=lambda entry: entry[0])

    def flush(self) -> int:
        """Draw the buffered primitives back to front and empty the buffer.

        Returns the number of primitives drawn.
        """
        ordered = self.sorted_entries()
        self._buffer.clear()
        for _, primitive, color in ordered:
            self._draw(primitive, color)
        return len(ordered)


__all__ = ["Compositor"]
