"""Configuration contracts for plots.

This module centralizes the discoverable option metadata for
:class:`plotcore.Graph`: colors and sizes live in :class:`GraphStyle`,
rendering switches in :class:`RenderOptions`. ``GRAPH_OPTION_DOCS`` documents
every keyword accepted by ``Graph(...)`` so interactive users and tests have a
single place to look.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from .graph_types import AngleUnit, Color, DepthColor, Lines, Show

MAIN_COLORS: tuple[Color, ...] = (
    Color(255, 85, 85),
    Color(85, 85, 255),
    Color(255, 85, 255),
    Color(85, 255, 85),
    Color(85, 255, 255),
    Color(255, 255, 85),
)
ALT_COLORS: tuple[Color, ...] = (
    Color(170, 0, 0),
    Color(0, 0, 170),
    Color(170, 0, 170),
    Color(0, 170, 0),
    Color(0, 170, 170),
    Color(170, 170, 0),
)


@dataclass
class GraphStyle:
    """Colors and primitive sizes.

    ``main_colors`` color the real channel of data slot ``k`` (modulo the
    palette length), ``alt_colors`` the imaginary channel.
    """

    main_colors: tuple[Color, ...] = MAIN_COLORS
    alt_colors: tuple[Color, ...] = ALT_COLORS
    axis_color: Color = Color(0, 0, 0)
    axis_color_light: Color = Color(220, 220, 220)
    background_color: Color = Color(255, 255, 255)
    text_color: Color = Color(0, 0, 0)
    line_width: float = 3.0
    point_size: float = 5.0
    font_size: float = 18.0
    font_width: float = 9.0

    def main(self, k: int) -> Color:
        return self.main_colors[k % len(self.main_colors)]

    def alt(self, k: int) -> Color:
        return self.alt_colors[k % len(self.alt_colors)]

    @property
    def is_dark(self) -> bool:
        return self.background_color == Color(0, 0, 0)

    def dark(self) -> "GraphStyle":
        """Return a copy with the dark palette."""
        return replace(
            self,
            axis_color=Color(220, 220, 220),
            axis_color_light=Color(35, 35, 35),
            text_color=Color(255, 255, 255),
            background_color=Color(0, 0, 0),
        )

    def light(self) -> "GraphStyle":
        """Return a copy with the light palette."""
        return replace(
            self,
            axis_color=Color(0, 0, 0),
            axis_color_light=Color(220, 220, 220),
            text_color=Color(0, 0, 0),
            background_color=Color(255, 255, 255),
        )


@dataclass
class RenderOptions:
    """Rendering switches toggled by keybinds or set up front."""

    lines: Lines = Lines.LINES
    show: Show = Show.COMPLEX
    fast_3d: bool = False
    fast_3d_move: bool = False
    reduced_move: bool = False
    ignore_bounds: bool = False
    color_depth: DepthColor = DepthColor.NONE
    show_box: bool = True
    disable_lines: bool = False
    disable_axis: bool = False
    disable_coord: bool = False
    domain_alternate: bool = True
    log_scale: bool = False
    only_real: bool = False
    mult: float = 1.0
    line_major: int = 8
    line_minor: int = 4
    angle_unit: AngleUnit = AngleUnit.RADIANS


GRAPH_OPTION_DOCS: dict[str, str] = {
    "lines": "Line style: lines, points or lines_points.",
    "show": "Complex channels to plot: complex, real or imag.",
    "fast_3d": "Skip depth sorting in 3D for speed (occlusion may be wrong).",
    "fast_3d_move": "Enable fast 3D automatically while the camera is dragged.",
    "reduced_move": "Request lower precision (log10(prec+1)) while dragging in 2D.",
    "ignore_bounds": "Do not clip 3D data to the visible box.",
    "color_depth": "Tint 3D colors: none, vertical (by height) or depth (by view distance).",
    "show_box": "Draw the 3D bounding box wireframe.",
    "disable_lines": "Hide grid lines (axes stay visible).",
    "disable_axis": "Hide axes and tick labels.",
    "disable_coord": "Hide the pointer coordinate readout.",
    "domain_alternate": "Use the smooth domain-coloring formula instead of sine banding.",
    "log_scale": "Apply log10 before domain coloring.",
    "only_real": "Only plot samples whose imaginary part is zero.",
    "mult": "Quality multiplier for the domain-coloring sample grid.",
    "line_major": "Number of major grid lines across the visible range.",
    "line_minor": "Minor grid lines per major interval.",
    "angle_unit": "Unit for polar and 3D angle readouts: radians, degrees or gradians.",
    "line_width": "Line width in pixels.",
    "point_size": "Point marker size in pixels.",
    "main_colors": "Palette for real parts, indexed by data slot.",
    "alt_colors": "Palette for imaginary parts, indexed by data slot.",
    "axis_color": "Color of the axes and major grid lines.",
    "axis_color_light": "Color of minor grid lines.",
    "background_color": "Canvas clear color.",
    "text_color": "Color of tick labels and readouts.",
    "font_size": "Text line height in pixels, used to stack labels.",
    "font_width": "Approximate glyph width in pixels, used to keep labels on screen.",
}

_ENUM_OPTIONS = {
    "lines": Lines,
    "show": Show,
    "color_depth": DepthColor,
    "angle_unit": AngleUnit,
}


def split_options(kwargs: dict[str, Any]) -> tuple[GraphStyle, RenderOptions]:
    """Build style and render options from ``Graph(**kwargs)`` keywords.

    Enum-valued options accept either the enum member or its string value.

    Raises
    ------
    KeyError
        If a keyword is not a known option.
    ValueError
        If an enum option is given an unknown string value.
    """
    style_names = {f.name for f in fields(GraphStyle)}
    render_names = {f.name for f in fields(RenderOptions)}
    style_kwargs: dict[str, Any] = {}
    render_kwargs: dict[str, Any] = {}
    for key, value in kwargs.items():
        if key in _ENUM_OPTIONS and isinstance(value, str):
            value = _ENUM_OPTIONS[key](value.strip().lower())
        if key in style_names:
            style_kwargs[key] = value
        elif key in render_names:
            render_kwargs[key] = value
        else:
            raise KeyError(f"Unknown graph option: {key!r}. Known options: {sorted(GRAPH_OPTION_DOCS)}")
    return GraphStyle(**style_kwargs), RenderOptions(**render_kwargs)


__all__ = [
    "ALT_COLORS",
    "GRAPH_OPTION_DOCS",
    "GraphStyle",
    "MAIN_COLORS",
    "RenderOptions",
    "split_options",
]
