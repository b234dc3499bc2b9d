from __future__ import annotations

import math

import numpy as np
import pytest

from plotcore.InputConvert import InputConvert, InputRange
from plotcore.graph_types import Vec2


@pytest.mark.parametrize(
    "obj, expected",
    [
        (3, 3.0),
        (np.float32(0.5), 0.5),
        ("2.25", 2.25),
        (" 1e3 ", 1000.0),
        ("pi", math.pi),
        ("-2*pi", -2.0 * math.pi),
        ("tau", 2.0 * math.pi),
        ("E", math.e),
        ("1+0j", 1.0),
    ],
)
def test_float_conversion(obj, expected) -> None:
    assert InputConvert(obj, float) == pytest.approx(expected)


def test_complex_and_int_targets() -> None:
    assert InputConvert("1+2j", complex) == 1 + 2j
    assert InputConvert(3.9, int) == 3
    assert InputConvert("4.0", int, truncate=False) == 4


def test_truncation_rules() -> None:
    assert InputConvert(2 + 3j, float) == 2.0
    with pytest.raises(ValueError, match="imaginary part"):
        InputConvert(2 + 3j, float, truncate=False)
    with pytest.raises(ValueError, match="exact integer"):
        InputConvert(3.5, int, truncate=False)


@pytest.mark.parametrize("obj", ["", "banana", "x*pi", None, [1.0]])
def test_rejects_unconvertible(obj) -> None:
    with pytest.raises(ValueError):
        InputConvert(obj, float)


def test_unsupported_target_type() -> None:
    with pytest.raises(NotImplementedError):
        InputConvert(1, str)


def test_input_range() -> None:
    assert InputRange(("-1", 2)) == Vec2(-1.0, 2.0)
    with pytest.raises(ValueError, match="pair"):
        InputRange(5)
    with pytest.raises(ValueError, match="lo < hi"):
        InputRange((1, 1), "bound")
    with pytest.raises(ValueError, match="lo < hi"):
        InputRange(("-inf", 0))
