"""Complex → color mapping and perceptual hue shifting.

Purpose
-------
Domain coloring paints every cell of the visible rectangle with a color
derived from the complex value sampled there: hue encodes the argument,
saturation and value encode the magnitude. This module also provides the
Oklab hue rotation used to tint 3D surfaces by depth or height.

Concepts and structure
----------------------
- :func:`domain_colors` is the vectorized NumPy kernel. It maps arrays of real
  and imaginary parts to an ``(..., 3)`` uint8 array.
- :func:`color_of` is the scalar entry point, a thin wrapper over the kernel.
- :func:`domain_color_image` builds a full ``(height, width, 3)`` image from a
  row-major sample grid.
- :func:`shift_hue` rotates a color's hue in Oklab by ``diff * 2π``.
- :func:`depth_tint` applies the :class:`~plotcore.graph_types.DepthColor`
  policy used by the 3D pipeline.

Important gotchas
-----------------
- Byte conversion truncates toward zero and saturates to ``[0, 255]``; NaN
  becomes 0. Poles and zeros therefore map to well-defined colors.
- Two formulas exist. ``alternate=True`` blends smoothly with an arctangent
  lightness curve, ``alternate=False`` bands the real and imaginary parts with
  sines. ``log_scale`` applies ``log10`` to magnitude/components first.

Examples
--------
>>> color_of(complex(1.0, 0.0), alternate=False, log_scale=False)
Color(r=0, g=0, b=0)
"""

from __future__ import annotations

import math
from typing import Any, Sequence

import numpy as np

from .graph_types import Color, ComplexSample, DepthColor, saturating_u8

TAU = 2.0 * math.pi


def _fract(x: np.ndarray) -> np.ndarray:
    """Signed fractional part (``x - trunc(x)``)."""
    return x - np.trunc(x)


def _to_u8(c: np.ndarray) -> np.ndarray:
    c = np.nan_to_num(c * 255.0, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(c, 0.0, 255.0).astype(np.uint8)


def hsv_to_rgb(hue: Any, sat: Any, val: Any) -> np.ndarray:
    """Sector-formula HSV → RGB on arrays; ``hue`` is in ``[0, 6)`` sectors.

    Returns an ``(..., 3)`` uint8 array.
    """
    hue = np.asarray(hue, dtype=float)
    sat = np.asarray(sat, dtype=float)
    val = np.asarray(val, dtype=float)
    shape = np.broadcast(hue, sat, val).shape
    hue, sat, val = (np.broadcast_to(a, shape).ravel() for a in (hue, sat, val))

    i = np.floor(hue)
    f = _fract(hue)
    p = val * (1.0 - sat)
    q = val * (1.0 - sat * f)
    t = val * (1.0 - sat * (1.0 - f))
    sector = np.where(np.isfinite(i) & (i > 0), i, 0).astype(np.int64) % 6

    r = np.select([sector == 0, sector == 1, sector == 2, sector == 3, sector == 4], [val, q, p, p, t], val)
    g = np.select([sector == 0, sector == 1, sector == 2, sector == 3, sector == 4], [t, val, val, q, p], p)
    b = np.select([sector == 0, sector == 1, sector == 2, sector == 3, sector == 4], [p, p, t, val, val], q)

    grey = sat == 0.0
    r = np.where(grey, val, r)
    g = np.where(grey, val, g)
    b = np.where(grey, val, b)
    return np.stack([_to_u8(r), _to_u8(g), _to_u8(b)], axis=-1).reshape(shape + (3,))


def domain_colors(re: Any, im: Any, *, alternate: bool = True, log_scale: bool = False) -> np.ndarray:
    """Vectorized complex → RGB kernel.

    Parameters
    ----------
    re, im : array_like
        Real and imaginary parts (broadcast together).
    alternate : bool
        Use the smooth blend formula instead of the sine banding one.
    log_scale : bool
        Apply ``log10`` to the magnitude (and components, in classic mode).

    Returns
    -------
    numpy.ndarray
        uint8 array of shape ``broadcast(re, im).shape + (3,)``.
    """
    x = np.asarray(re, dtype=float)
    y = np.asarray(im, dtype=float)
    with np.errstate(all="ignore"):
        hue = 6.0 * (1.0 - np.arctan2(y, x) / TAU)
        mag = np.hypot(x, y)
        if alternate:
            sat = np.abs(np.sin((np.log10(mag) if log_scale else mag) * math.pi)) ** 0.125
            n1 = np.abs(x) / (np.abs(x) + 1.0)
            n2 = np.abs(y) / (np.abs(y) + 1.0)
            n3 = (n1 * n2) ** 0.0625
            n4 = np.arctan(mag) * 2.0 / math.pi
            lig = 0.8 * (n3 * (n4 - 0.5) + 0.5)
            val = np.where(lig < 0.5, lig * (1.0 + sat), lig * (1.0 - sat) + sat)
            sat = np.where(val == 0.0, 0.0, 2.0 * (1.0 - lig / val))
        else:
            t1 = np.sin((np.log10(np.abs(x)) if log_scale else x) * math.pi)
            t2 = np.sin((np.log10(np.abs(y)) if log_scale else y) * math.pi)
            sat = (1.0 + _fract(np.log10(mag) if log_scale else mag)) * 0.5
            val = np.abs(t1 * t2) ** 0.125
        return hsv_to_rgb(hue, sat, val)


def color_of(value: Any, *, alternate: bool = True, log_scale: bool = False) -> Color:
    """Color of one complex value (a ``complex``, number or :class:`ComplexSample`).

    Absent channels of a sample count as zero.
    """
    z = value.to_complex() if isinstance(value, ComplexSample) else complex(value)
    rgb = domain_colors(z.real, z.imag, alternate=alternate, log_scale=log_scale)
    return Color(int(rgb[0]), int(rgb[1]), int(rgb[2]))


def domain_color_image(
    values: Sequence[ComplexSample] | np.ndarray,
    width: int,
    height: int,
    *,
    alternate: bool = True,
    log_scale: bool = False,
) -> np.ndarray:
    """Render a row-major grid of samples into a ``(height, width, 3)`` image.

    Cells beyond the end of a short grid stay black; extra samples are ignored.
    """
    n = max(int(width), 0) * max(int(height), 0)
    image = np.zeros((n, 3), dtype=np.uint8)
    if isinstance(values, np.ndarray):
        z = values.ravel().astype(complex)[:n]
    else:
        z = np.array([s.to_complex() for s in values[:n]], dtype=complex)
    if z.size:
        image[: z.size] = domain_colors(z.real, z.imag, alternate=alternate, log_scale=log_scale)
    return image.reshape((max(int(height), 0), max(int(width), 0), 3))


# SECTION: Oklab hue rotation

_RGB_TO_LMS = np.array(
    [
        [0.4122214694707629, 0.5363325372617349, 0.0514459932675022],
        [0.2119034958178251, 0.6806995506452344, 0.1073969535369405],
        [0.0883024591900564, 0.2817188391361215, 0.6299787016738222],
    ]
)
_LMS_TO_LAB = np.array(
    [
        [0.210454268309314, 0.7936177747023054, -0.0040720430116193],
        [1.9779985324311684, -2.42859224204858, 0.450593709617411],
        [0.0259040424655478, 0.7827717124575296, -0.8086757549230774],
    ]
)
_LAB_TO_LMS = np.array(
    [
        [1.0, 0.3963377773761749, 0.2158037573099136],
        [1.0, -0.1055613458156586, -0.0638541728258133],
        [1.0, -0.0894841775298119, -1.2914855480194092],
    ]
)
_LMS_TO_RGB = np.array(
    [
        [4.07674163607596, -3.3077115392580635, 0.2309699031821046],
        [-1.2684379732850317, 2.6097573492876887, -0.3413193760026572],
        [-0.0041960761386754, -0.7034186179359363, 1.7076146940746116],
    ]
)


def rgb_to_oklab(color: Sequence[float]) -> np.ndarray:
    """Convert RGB in ``[0, 1]`` to ``(L, a, b)``."""
    lms = np.cbrt(_RGB_TO_LMS @ np.asarray(color, dtype=float))
    return _LMS_TO_LAB @ lms


def oklab_to_rgb(lab: Sequence[float]) -> np.ndarray:
    """Convert ``(L, a, b)`` back to RGB in ``[0, 1]`` (unclamped)."""
    lms = (_LAB_TO_LMS @ np.asarray(lab, dtype=float)) ** 3
    return _LMS_TO_RGB @ lms


def shift_hue(diff: float, color: Color) -> Color:
    """Rotate the hue of ``color`` by ``diff`` turns in Oklab, keeping L and chroma."""
    lab = rgb_to_oklab((color.r / 255.0, color.g / 255.0, color.b / 255.0))
    chroma = math.hypot(lab[1], lab[2])
    hue = (math.atan2(lab[2], lab[1]) + TAU * diff) % TAU
    lab[1] = chroma * math.cos(hue)
    lab[2] = chroma * math.sin(hue)
    rgb = oklab_to_rgb(lab)
    return Color(*(saturating_u8(float(c) * 255.0) for c in rgb))


def depth_tint(color: Color, depth: float | None, z: float, mode: DepthColor, height: float) -> Color:
    """Tint a 3D primitive color.

    ``VERTICAL`` shifts by ``z / height`` (``height`` is the full visible
    z extent), ``DEPTH`` by the normalized depth, ``NONE`` leaves the color.
    Without a depth (fast mode) the color is never changed.
    """
    if depth is None or mode is DepthColor.NONE:
        return color
    if mode is DepthColor.VERTICAL:
        return shift_hue(z / height, color)
    return shift_hue(depth, color)


__all__ = [
    "color_of",
    "depth_tint",
    "domain_color_image",
    "domain_colors",
    "hsv_to_rgb",
    "oklab_to_rgb",
    "rgb_to_oklab",
    "shift_hue",
]
