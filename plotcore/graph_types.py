"""Value types shared by the plotting engine.

Purpose
-------
This module defines the small, mostly immutable records that flow between the
view model, the projection/clipping pipeline and the data-source collaborator:
vectors and screen positions, colors, complex samples, sample grids, draw
primitives and the ``Bound``/``Prec`` data requests.

Concepts and structure
----------------------
- ``Vec2``/``Vec3`` are mutable world-space vectors used for view state
  (zoom, offsets, angles) and for 3D sample positions.
- ``Pos`` is an immutable screen-space position in pixels.
- ``ComplexSample`` carries an optional real and an optional imaginary
  channel. An absent channel means "not plotted" for that channel.
- Sample grids are a closed set of frozen dataclasses (``Width``, ``Coord``,
  ``Width3D``, ``Coord3D``, ``Constant``, ``Point``, ``GraphList`` and
  ``NoData``). Consumers dispatch on them with ``isinstance``.
- ``Line``/``PointMark`` are the draw primitives the compositor sorts.
- ``BoundWidth``/``BoundWidth3D`` plus ``PrecMult``/``PrecSlice``/
  ``PrecDimension`` form the request sent to the data source.

Important gotchas
-----------------
- Grid constructors accept NumPy arrays. A real-dtype array becomes
  real-only samples, a complex-dtype array becomes full complex samples.
- ``Width3D`` values are a row-major square grid; index ``i + n*j`` addresses
  column ``i`` of row ``j``.

Examples
--------
>>> import numpy as np
>>> grid = Width(np.linspace(-1.0, 1.0, 5), -2.0, 2.0)
>>> grid.values[0]
ComplexSample(re=-1.0, im=None)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, NamedTuple, Optional, Sequence, Union

import numpy as np


# SECTION: vectors and screen positions


@dataclass
class Vec2:
    """Mutable two-component world-space vector."""

    x: float = 0.0
    y: float = 0.0

    def copy(self) -> "Vec2":
        return Vec2(self.x, self.y)

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass
class Vec3:
    """Mutable three-component world-space vector.

    Supports the handful of arithmetic operations the clipping code needs:
    addition, subtraction, scalar or component-wise multiplication and
    per-axis indexing (``v[0]`` is ``x``).
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def copy(self) -> "Vec3":
        return Vec3(self.x, self.y, self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, axis: int) -> float:
        return (self.x, self.y, self.z)[axis]

    def __add__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vec3") -> "Vec3":
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Union[float, "Vec3"]) -> "Vec3":
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y) and math.isfinite(self.z)


class Pos(NamedTuple):
    """Screen-space position in pixels (origin top-left, y grows downward)."""

    x: float
    y: float


class Color(NamedTuple):
    """8-bit RGB color."""

    r: int
    g: int
    b: int


def saturating_u8(value: float) -> int:
    """Convert a float to a byte, truncating toward zero and clamping.

    NaN maps to 0, values above 255 map to 255 and negative values map to 0.
    """
    if math.isnan(value):
        return 0
    if value >= 255.0:
        return 255
    if value <= 0.0:
        return 0
    return int(value)


# SECTION: samples


@dataclass(frozen=True)
class ComplexSample:
    """One evaluated sample with optional real and imaginary channels.

    Parameters
    ----------
    re : float or None
        Real channel, or ``None`` when the real part is not plotted.
    im : float or None
        Imaginary channel, or ``None`` when the imaginary part is not plotted.
    """

    re: Optional[float] = None
    im: Optional[float] = None

    @classmethod
    def real(cls, y: float) -> "ComplexSample":
        return cls(float(y), None)

    @classmethod
    def imag(cls, z: float) -> "ComplexSample":
        return cls(None, float(z))

    @classmethod
    def complex(cls, y: float, z: float) -> "ComplexSample":
        return cls(float(y), float(z))

    @classmethod
    def from_value(cls, value: Any) -> "ComplexSample":
        """Coerce a Python/NumPy scalar or an existing sample."""
        if isinstance(value, ComplexSample):
            return value
        if isinstance(value, (complex, np.complexfloating)):
            return cls(float(value.real), float(value.imag))
        return cls(float(value), None)

    def to_complex(self) -> complex:
        """Return the sample as a Python complex, absent channels as zero."""
        return complex(self.re if self.re is not None else 0.0, self.im if self.im is not None else 0.0)


def samples_from_array(values: Any) -> tuple[ComplexSample, ...]:
    """Normalize an array-like of values into a tuple of samples.

    Real dtypes produce real-only samples, complex dtypes produce full complex
    samples. Sequences already holding ``ComplexSample`` objects pass through.
    """
    if isinstance(values, np.ndarray):
        flat = values.ravel()
        if np.iscomplexobj(flat):
            return tuple(ComplexSample(float(v.real), float(v.imag)) for v in flat)
        return tuple(ComplexSample(float(v), None) for v in flat.astype(float))
    return tuple(ComplexSample.from_value(v) for v in values)


# SECTION: sample grids


def spread(n: int, start: float, end: float) -> np.ndarray:
    """Positions of ``n`` evenly spaced samples from ``start`` to ``end``.

    Fewer than two samples have no spacing; their positions are NaN so the
    clipper drops them.
    """
    if n < 2:
        return np.full(max(n, 0), np.nan)
    t = np.arange(n) / (n - 1) - 0.5
    return t * (end - start) + (start + end) * 0.5


@dataclass(frozen=True)
class Width:
    """Uniformly spaced 1D samples over ``[start, end]``."""

    values: tuple[ComplexSample, ...]
    start: float
    end: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", samples_from_array(self.values))

    def positions(self) -> np.ndarray:
        """Return the x position of every sample."""
        return spread(len(self.values), self.start, self.end)


@dataclass(frozen=True)
class Coord:
    """Explicit ``(x, value)`` pairs, drawn in order."""

    points: tuple[tuple[float, ComplexSample], ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "points",
            tuple((float(x), ComplexSample.from_value(v)) for x, v in self.points),
        )


@dataclass(frozen=True)
class Width3D:
    """Uniform square grid of samples over a rectangle (row-major)."""

    values: tuple[ComplexSample, ...]
    start_x: float
    start_y: float
    end_x: float
    end_y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", samples_from_array(self.values))

    @property
    def side(self) -> int:
        """Side length of the square grid (integer square root of the size)."""
        return math.isqrt(len(self.values))

    @property
    def is_square(self) -> bool:
        return self.side * self.side == len(self.values)


@dataclass(frozen=True)
class Coord3D:
    """Explicit ``(x, y, value)`` triples, drawn as a 3D path."""

    points: tuple[tuple[float, float, ComplexSample], ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "points",
            tuple((float(x), float(y), ComplexSample.from_value(v)) for x, y, v in self.points),
        )


@dataclass(frozen=True)
class Constant:
    """A constant function; ``on_x`` selects a horizontal (True) or vertical line."""

    value: ComplexSample
    on_x: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", ComplexSample.from_value(self.value))


@dataclass(frozen=True)
class Point:
    """A single marked point in the plane."""

    x: float
    y: float


@dataclass(frozen=True)
class GraphList:
    """Several grids that share one color slot."""

    grids: tuple["Grid", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "grids", tuple(self.grids))


@dataclass(frozen=True)
class NoData:
    """Placeholder for a slot whose data has not arrived yet."""


Grid = Union[Width, Coord, Width3D, Coord3D, Constant, Point, GraphList, NoData]


def _walk(grids: Iterable[Grid]):
    for grid in grids:
        if isinstance(grid, GraphList):
            yield from _walk(grid.grids)
        else:
            yield grid


def grids_are_3d(grids: Iterable[Grid]) -> bool:
    """Return True when any grid carries two-dimensional input data."""
    return any(isinstance(g, (Width3D, Coord3D)) for g in _walk(grids))


def grids_are_complex(grids: Iterable[Grid]) -> bool:
    """Return True when any sample carries an imaginary channel."""
    for g in _walk(grids):
        if isinstance(g, (Width, Width3D)):
            samples: Sequence[ComplexSample] = g.values
        elif isinstance(g, Coord):
            samples = [v for _, v in g.points]
        elif isinstance(g, Coord3D):
            samples = [v for _, _, v in g.points]
        elif isinstance(g, Constant):
            samples = [g.value]
        else:
            continue
        if any(s.im is not None for s in samples):
            return True
    return False


# SECTION: modes and rendering enums


class GraphMode(Enum):
    """Axis mapping of the plot; decides whether the 3D projector is engaged."""

    NORMAL = "normal"
    SLICE = "slice"
    DOMAIN_COLORING = "domain_coloring"
    FLATTEN = "flatten"
    DEPTH = "depth"
    POLAR = "polar"
    SLICE_POLAR = "slice_polar"

    @classmethod
    def coerce(cls, value: Union["GraphMode", str]) -> "GraphMode":
        """Accept a ``GraphMode`` or its (case-insensitive) name/value.

        Raises
        ------
        ValueError
            If ``value`` does not name a mode.
        """
        if isinstance(value, GraphMode):
            return value
        key = str(value).strip().lower().replace("-", "_").replace(" ", "_")
        for mode in cls:
            if key in (mode.value, mode.name.lower()):
                return mode
        raise ValueError(f"Unknown graph mode: {value!r}")


class Lines(Enum):
    LINES = "lines"
    POINTS = "points"
    LINES_POINTS = "lines_points"

    @property
    def draws_points(self) -> bool:
        return self is not Lines.LINES

    @property
    def draws_lines(self) -> bool:
        return self is not Lines.POINTS


class Show(Enum):
    """Which channels of a complex sample are plotted."""

    COMPLEX = "complex"
    REAL = "real"
    IMAG = "imag"

    @property
    def real(self) -> bool:
        return self is not Show.IMAG

    @property
    def imag(self) -> bool:
        return self is not Show.REAL


class DepthColor(Enum):
    """How 3D colors are tinted: not at all, by height or by view depth."""

    NONE = "none"
    VERTICAL = "vertical"
    DEPTH = "depth"


class AngleUnit(Enum):
    RADIANS = "radians"
    DEGREES = "degrees"
    GRADIANS = "gradians"

    def from_radians(self, value: float) -> float:
        if self is AngleUnit.DEGREES:
            return math.degrees(value)
        if self is AngleUnit.GRADIANS:
            return value * 200.0 / math.pi
        return value


class Align(Enum):
    """Text anchor passed to the canvas."""

    LEFT_TOP = "left_top"
    LEFT_CENTER = "left_center"
    LEFT_BOTTOM = "left_bottom"
    CENTER_TOP = "center_top"
    CENTER_CENTER = "center_center"
    RIGHT_TOP = "right_top"
    RIGHT_CENTER = "right_center"
    RIGHT_BOTTOM = "right_bottom"


# SECTION: draw primitives


@dataclass(frozen=True)
class Line:
    start: Pos
    end: Pos
    width: float


@dataclass(frozen=True)
class PointMark:
    pos: Pos


DrawPrimitive = Union[Line, PointMark]


# SECTION: data requests


@dataclass(frozen=True)
class PrecMult:
    """Sample density multiplier relative to the data source's default."""

    factor: float


@dataclass(frozen=True)
class PrecSlice:
    """Density multiplier for a slice/flatten request over a 2D domain."""

    factor: float


@dataclass(frozen=True)
class PrecDimension:
    """Exact grid dimensions, one sample per rendered cell."""

    width: int
    height: int


Prec = Union[PrecMult, PrecSlice, PrecDimension]


@dataclass(frozen=True)
class BoundWidth:
    lo: float
    hi: float
    prec: Prec


@dataclass(frozen=True)
class BoundWidth3D:
    lo_x: float
    lo_y: float
    hi_x: float
    hi_y: float
    prec: Prec


Bound = Union[BoundWidth, BoundWidth3D]


__all__ = [
    "Align",
    "AngleUnit",
    "Bound",
    "BoundWidth",
    "BoundWidth3D",
    "Color",
    "ComplexSample",
    "Constant",
    "Coord",
    "Coord3D",
    "DepthColor",
    "DrawPrimitive",
    "GraphList",
    "GraphMode",
    "Grid",
    "Line",
    "Lines",
    "NoData",
    "Point",
    "PointMark",
    "Pos",
    "Prec",
    "PrecDimension",
    "PrecMult",
    "PrecSlice",
    "Show",
    "Vec2",
    "Vec3",
    "Width",
    "Width3D",
    "grids_are_3d",
    "grids_are_complex",
    "samples_from_array",
    "saturating_u8",
    "spread",
]
