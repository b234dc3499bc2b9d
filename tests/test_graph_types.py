"""Sample grids, value coercion and the small enums shared by every module."""

from __future__ import annotations

import math

import numpy as np
import pytest

from plotcore.graph_types import (
    AngleUnit,
    ComplexSample,
    Constant,
    Coord,
    Coord3D,
    GraphList,
    GraphMode,
    Lines,
    NoData,
    Point,
    Show,
    Vec3,
    Width,
    Width3D,
    grids_are_3d,
    grids_are_complex,
    saturating_u8,
    samples_from_array,
)


@pytest.mark.parametrize("value, byte", [(math.nan, 0), (-3.0, 0), (12.9, 12), (255.0, 255), (1e9, 255)])
def test_saturating_u8(value: float, byte: int) -> None:
    assert saturating_u8(value) == byte


def test_samples_from_real_and_complex_arrays() -> None:
    assert samples_from_array(np.array([1.0, 2.0])) == (ComplexSample(1.0, None), ComplexSample(2.0, None))
    assert samples_from_array(np.array([[1 + 2j]])) == (ComplexSample(1.0, 2.0),)
    assert samples_from_array([3, 1j]) == (ComplexSample(3.0, None), ComplexSample(0.0, 1.0))


def test_sample_constructors() -> None:
    assert ComplexSample.real(2) == ComplexSample(2.0, None)
    assert ComplexSample.imag(2) == ComplexSample(None, 2.0)
    assert ComplexSample.imag(2).to_complex() == 2j


def test_width_positions_include_endpoints() -> None:
    grid = Width(np.zeros(5), -2.0, 2.0)
    assert list(grid.positions()) == pytest.approx([-2.0, -1.0, 0.0, 1.0, 2.0])
    assert np.isnan(Width(np.zeros(1), -2.0, 2.0).positions()).all()
    assert Width(np.zeros(0), -2.0, 2.0).positions().shape == (0,)


def test_width3d_side() -> None:
    assert Width3D(np.zeros(16), 0.0, 0.0, 1.0, 1.0).is_square
    grid = Width3D(np.zeros(17), 0.0, 0.0, 1.0, 1.0)
    assert grid.side == 4
    assert not grid.is_square


def test_grid_kind_detection() -> None:
    real_line = Width(np.zeros(3), 0.0, 1.0)
    assert not grids_are_3d([real_line, Point(0.0, 0.0), NoData()])
    assert grids_are_3d([GraphList([real_line, Coord3D([(0.0, 0.0, 1.0)])])])
    assert not grids_are_complex([real_line, Constant(1.0)])
    assert grids_are_complex([Coord([(0.0, 1j)])])
    assert grids_are_complex([GraphList([Constant(1 + 1j)])])


def test_vec3_arithmetic() -> None:
    a = Vec3(1.0, 2.0, 3.0)
    assert a + a == Vec3(2.0, 4.0, 6.0)
    assert a - a == Vec3()
    assert 2.0 * a == a * Vec3(2.0, 2.0, 2.0)
    assert a[2] == 3.0
    assert not Vec3(math.inf, 0.0, 0.0).is_finite()


@pytest.mark.parametrize("name", ["slice_polar", "Slice Polar", "SLICE-POLAR", GraphMode.SLICE_POLAR])
def test_graph_mode_coerce(name) -> None:
    assert GraphMode.coerce(name) is GraphMode.SLICE_POLAR


def test_channel_and_line_flags() -> None:
    assert Show.COMPLEX.real and Show.COMPLEX.imag
    assert not Show.REAL.imag and not Show.IMAG.real
    assert Lines.LINES_POINTS.draws_points and Lines.LINES_POINTS.draws_lines
    assert not Lines.POINTS.draws_lines


def test_angle_units() -> None:
    assert AngleUnit.DEGREES.from_radians(math.pi) == pytest.approx(180.0)
    assert AngleUnit.GRADIANS.from_radians(math.pi) == pytest.approx(200.0)
    assert AngleUnit.RADIANS.from_radians(1.0) == 1.0
