# === SECTION: InputConvert [id: InputConvert]===
from __future__ import annotations

from typing import Any, Sequence, Type, TypeVar

import numpy as np

from .graph_types import Vec2

T = TypeVar("T", int, float, complex)

_NAMED_CONSTANTS = {
    "pi": np.pi,
    "tau": 2.0 * np.pi,
    "e": np.e,
    "inf": np.inf,
}


def InputConvert(obj: Any, dest_type: Type[T] = float, truncate: bool = True) -> T:
    """
    Convert `obj` to `dest_type`.

    Supported destination types:
    - float (strictly real)
    - int
    - complex

    Rules:
    - If `obj` is a number (Python or NumPy scalar): cast via dest_type(obj).
    - If `obj` is a string:
        1) try float(s) or complex(s)
        2) else accept a named constant (``pi``, ``tau``, ``e``, ``inf``),
           optionally signed and scaled, e.g. ``"-2*pi"``.

    Truncation Rules (`truncate`):
    - When converting Complex -> Real (float/int):
        - If `truncate=True`: Discard imaginary part (projection to real).
        - If `truncate=False`: Raise ValueError if imaginary part != 0.
    - When converting Float -> Int:
        - If `truncate=True`: Truncate decimal part (e.g., 3.9 -> 3).
        - If `truncate=False`: Require exact integer (e.g., 3.0 -> 3, 3.1 -> Error).

    Raises
    ------
    NotImplementedError
        If dest_type is unsupported.
    ValueError
        If conversion fails or violates truncation rules.
    """
    if dest_type not in (float, int, complex):
        raise NotImplementedError(
            f"Unsupported destination type: {dest_type!r}. Only float, int, and complex are supported."
        )

    def _coerce_numeric_value(x: complex) -> T:
        if dest_type is complex:
            return complex(x)  # type: ignore[return-value]

        if x.imag != 0 and not truncate:
            raise ValueError(
                f"Could not convert non-real {x!r} to {dest_type.__name__}: imaginary part is non-zero."
            )
        r_val = x.real

        if dest_type is float:
            return float(r_val)  # type: ignore[return-value]

        if not r_val.is_integer():
            if not truncate:
                raise ValueError(f"Could not convert {x!r} to int: value is not an exact integer.")
            if not np.isfinite(r_val):
                raise ValueError(f"Could not convert {x!r} to int: value is not finite.")
        return int(r_val)  # type: ignore[return-value]

    # Fast path: numeric types (exclude bool)
    if isinstance(obj, (int, float, complex, np.number)) and not isinstance(obj, (bool, np.bool_)):
        try:
            return _coerce_numeric_value(complex(obj))
        except (TypeError, OverflowError) as e:
            raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}.") from e

    if isinstance(obj, str):
        s = obj.strip()
        if s == "":
            raise ValueError(f"Cannot convert empty string to {dest_type.__name__}.")

        try:
            return _coerce_numeric_value(complex(float(s)))
        except ValueError:
            pass

        # complex strings such as "1+2j"
        try:
            return _coerce_numeric_value(complex(s.replace(" ", "")))
        except ValueError:
            pass

        return _coerce_numeric_value(complex(_parse_named(s, dest_type)))

    try:
        return _coerce_numeric_value(complex(obj))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Could not convert {obj!r} to {dest_type.__name__}.") from e


def _parse_named(s: str, dest_type: type) -> float:
    """Parse ``[sign][factor*]name`` where ``name`` is a named constant."""
    text = s.replace(" ", "").lower()
    sign = 1.0
    if text[:1] in "+-":
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]
    factor = 1.0
    if "*" in text:
        head, _, text = text.partition("*")
        try:
            factor = float(head)
        except ValueError as e:
            raise ValueError(f"Could not convert {s!r} to {dest_type.__name__}.") from e
    if text not in _NAMED_CONSTANTS:
        raise ValueError(f"Could not convert {s!r} to {dest_type.__name__}.")
    return sign * factor * _NAMED_CONSTANTS[text]


def InputRange(obj: Sequence[Any], name: str = "range") -> Vec2:
    """
    Convert a ``(lo, hi)`` pair to a :class:`Vec2` of floats.

    Raises
    ------
    ValueError
        If `obj` is not a pair, an endpoint does not convert, or ``lo >= hi``.
    """
    try:
        lo, hi = obj
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must be a (lo, hi) pair, got {obj!r}.") from e
    lo_f = InputConvert(lo, float, truncate=False)
    hi_f = InputConvert(hi, float, truncate=False)
    if not (np.isfinite(lo_f) and np.isfinite(hi_f)) or lo_f >= hi_f:
        raise ValueError(f"{name} must satisfy finite lo < hi, got ({lo_f}, {hi_f}).")
    return Vec2(lo_f, hi_f)

# === END OF SECTION: InputConvert [id: InputConvert]===
