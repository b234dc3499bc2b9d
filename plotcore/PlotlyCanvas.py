"""Plotly backend for the drawing contract.

:class:`PlotlyCanvas` implements :class:`~plotcore.graph_canvas.Canvas` by
collecting one frame of draw calls and building a
``plotly.graph_objects.Figure`` from them on demand:

- line segments are merged into one ``Scatter`` trace per (color, width),
  with ``None`` gaps between segments;
- filled point markers become square ``Scatter`` markers per (color, size);
- circles and the full-width/height grid lines become layout shapes;
- text becomes layout annotations anchored according to :class:`Align`;
- the domain-coloring image becomes a ``go.Image`` stretched over the screen.

Axes are in screen pixels with the y axis reversed, so the figure matches the
renderer's top-left origin.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from .graph_types import Align, Color, Pos, Vec2

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

_ANCHORS: dict[Align, tuple[str, str]] = {
    Align.LEFT_TOP: ("left", "top"),
    Align.LEFT_CENTER: ("left", "middle"),
    Align.LEFT_BOTTOM: ("left", "bottom"),
    Align.CENTER_TOP: ("center", "top"),
    Align.CENTER_CENTER: ("center", "middle"),
    Align.RIGHT_TOP: ("right", "top"),
    Align.RIGHT_CENTER: ("right", "middle"),
    Align.RIGHT_BOTTOM: ("right", "bottom"),
}


def css_color(color: Color) -> str:
    """Return a Plotly color string, e.g. ``rgb(255,85,85)``."""
    return f"rgb({int(color.r)},{int(color.g)},{int(color.b)})"


class PlotlyCanvas:
    """Collect draw calls and render them as a Plotly figure.

    Parameters
    ----------
    width, height : float
        Figure size in pixels; the axes span ``[0, width]`` x ``[0, height]``.
    font_size : float
        Annotation font size in pixels.
    """

    def __init__(self, width: float = 800.0, height: float = 600.0, font_size: float = 14.0) -> None:
        self.width = float(width)
        self.height = float(height)
        self.font_size = float(font_size)
        self.background: Color = Color(255, 255, 255)
        self._segments: dict[tuple[Color, float], tuple[list[Optional[float]], list[Optional[float]]]] = {}
        self._markers: dict[tuple[Color, float], tuple[list[float], list[float]]] = {}
        self._shapes: list[dict[str, Any]] = []
        self._annotations: list[dict[str, Any]] = []
        self._image: Optional[tuple[np.ndarray, Vec2]] = None

    # --- Canvas protocol ---

    def clear(self, color: Color) -> None:
        """Start a new frame on a ``color`` background."""
        self.background = color
        self._segments = {}
        self._markers = {}
        self._shapes = []
        self._annotations = []
        self._image = None

    def line_segment(self, points: Sequence[Pos], width: float, color: Color) -> None:
        xs, ys = self._segments.setdefault((color, float(width)), ([], []))
        if xs:
            xs.append(None)
            ys.append(None)
        for p in points:
            xs.append(float(p.x))
            ys.append(float(p.y))

    def rect_filled(self, pos: Pos, color: Color, size: float) -> None:
        xs, ys = self._markers.setdefault((color, float(size)), ([], []))
        xs.append(float(pos.x))
        ys.append(float(pos.y))

    def circle(self, center: Pos, radius: float, color: Color, width: float) -> None:
        r = abs(float(radius))
        self._shapes.append(
            dict(
                type="circle",
                x0=center.x - r,
                y0=center.y - r,
                x1=center.x + r,
                y1=center.y + r,
                line=dict(color=css_color(color), width=width),
            )
        )

    def hline(self, width: float, y: float, color: Color) -> None:
        self._shapes.append(
            dict(type="line", x0=0.0, y0=y, x1=width, y1=y, line=dict(color=css_color(color), width=1))
        )

    def vline(self, x: float, height: float, color: Color) -> None:
        self._shapes.append(
            dict(type="line", x0=x, y0=0.0, x1=x, y1=height, line=dict(color=css_color(color), width=1))
        )

    def text(self, pos: Pos, align: Align, text: str, color: Color) -> None:
        xanchor, yanchor = _ANCHORS[align]
        self._annotations.append(
            dict(
                x=float(pos.x),
                y=float(pos.y),
                text=text.replace("\n", "<br>"),
                xanchor=xanchor,
                yanchor=yanchor,
                showarrow=False,
                font=dict(color=css_color(color), size=self.font_size),
            )
        )

    def image(self, handle: Any, size: Vec2) -> None:
        """Stretch an ``(h, w, 3)`` uint8 image over ``size`` pixels."""
        self._image = (np.asarray(handle), size)

    # --- Figure ---

    @property
    def shapes(self) -> list[dict[str, Any]]:
        return list(self._shapes)

    @property
    def annotations(self) -> list[dict[str, Any]]:
        return list(self._annotations)

    def figure(self) -> go.Figure:
        """Build a ``go.Figure`` of the current frame."""
        fig = go.Figure()
        if self._image is not None:
            img, size = self._image
            if img.ndim == 3 and img.shape[0] and img.shape[1]:
                fig.add_trace(
                    go.Image(
                        z=img,
                        x0=0.0,
                        y0=0.0,
                        dx=size.x / img.shape[1],
                        dy=size.y / img.shape[0],
                        hoverinfo="skip",
                    )
                )
        for (color, width), (xs, ys) in self._segments.items():
            fig.add_trace(
                go.Scatter(
                    x=xs,
                    y=ys,
                    mode="lines",
                    line=dict(color=css_color(color), width=width),
                    showlegend=False,
                    hoverinfo="skip",
                )
            )
        for (color, size), (xs, ys) in self._markers.items():
            fig.add_trace(
                go.Scatter(
                    x=xs,
                    y=ys,
                    mode="markers",
                    marker=dict(color=css_color(color), size=size, symbol="square"),
                    showlegend=False,
                    hoverinfo="skip",
                )
            )
        bg = css_color(self.background)
        fig.update_layout(
            width=self.width,
            height=self.height,
            margin=dict(l=0, r=0, t=0, b=0),
            plot_bgcolor=bg,
            paper_bgcolor=bg,
            shapes=self._shapes,
            annotations=self._annotations,
            showlegend=False,
        )
        fig.update_xaxes(range=[0.0, self.width], visible=False, showgrid=False, zeroline=False)
        fig.update_yaxes(range=[self.height, 0.0], visible=False, showgrid=False, zeroline=False)
        logger.debug(
            "plotly frame traces=%d shapes=%d annotations=%d",
            len(fig.data),
            len(self._shapes),
            len(self._annotations),
        )
        return fig


__all__ = ["PlotlyCanvas", "css_color"]
