"""Top-level public API for the ``plotcore`` package.

This module re-exports the plotting surface so users can import from a single
namespace, for example:

>>> from plotcore import Graph, RecordingCanvas, Width  # doctest: +SKIP

It exposes both the :class:`Graph` orchestrator and the lower-level building
blocks (view state, transforms, clipping, compositing, domain coloring and the
canvas contract) for custom hosts and backends.
"""

from .domain_coloring import color_of, domain_color_image, shift_hue
from .Graph import Graph
from .graph_axes import AxesPainter, format_number, format_sci
from .graph_canvas import Canvas, CanvasCall, RecordingCanvas
from .graph_clip import Clipper, PointState, clip_segment_to_box
from .graph_compositor import Compositor
from .graph_input import InputState, Key, Keybinds, Keys, Modifiers, Multi
from .graph_lod import LodController, build_request
from .graph_mode import GraphModeController, mode_order
from .graph_style import GRAPH_OPTION_DOCS, GraphStyle, RenderOptions
from .graph_transform import Projector, to_coord, to_screen, zoom_at
from .graph_types import (
    Align,
    AngleUnit,
    BoundWidth,
    BoundWidth3D,
    Color,
    ComplexSample,
    Constant,
    Coord,
    Coord3D,
    DepthColor,
    GraphList,
    GraphMode,
    Lines,
    NoData,
    Point,
    Pos,
    PrecDimension,
    PrecMult,
    PrecSlice,
    Show,
    Vec2,
    Vec3,
    Width,
    Width3D,
)
from .graph_view import ViewState
from .InputConvert import InputConvert, InputRange
from .PlotlyCanvas import PlotlyCanvas

__all__ = [
    "Align",
    "AngleUnit",
    "AxesPainter",
    "BoundWidth",
    "BoundWidth3D",
    "Canvas",
    "CanvasCall",
    "Clipper",
    "Color",
    "ComplexSample",
    "Compositor",
    "Constant",
    "Coord",
    "Coord3D",
    "DepthColor",
    "GRAPH_OPTION_DOCS",
    "Graph",
    "GraphList",
    "GraphMode",
    "GraphModeController",
    "GraphStyle",
    "InputConvert",
    "InputRange",
    "InputState",
    "Key",
    "Keybinds",
    "Keys",
    "Lines",
    "LodController",
    "Modifiers",
    "Multi",
    "NoData",
    "PlotlyCanvas",
    "Point",
    "PointState",
    "Pos",
    "PrecDimension",
    "PrecMult",
    "PrecSlice",
    "Projector",
    "RecordingCanvas",
    "RenderOptions",
    "Show",
    "Vec2",
    "Vec3",
    "ViewState",
    "Width",
    "Width3D",
    "build_request",
    "clip_segment_to_box",
    "color_of",
    "domain_color_image",
    "format_number",
    "format_sci",
    "mode_order",
    "shift_hue",
    "to_coord",
    "to_screen",
    "zoom_at",
]
