"""Normalized input snapshot and key bindings.

Event sourcing (windowing toolkits, notebooks, touch screens) is outside the
engine. Whatever produces input converts one frame worth of events into an
:class:`InputState` and hands it to :meth:`plotcore.Graph.keybinds`.

A binding (:class:`Keys`) matches when its key was pressed this frame *and*
the held modifiers are exactly the binding's modifiers. A binding without
modifiers only matches when no modifier is held.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from .graph_types import Vec2


class Key(Enum):
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    EQUALS = "Equals"
    PLUS = "Plus"
    MINUS = "Minus"
    UNDERSCORE = "Underscore"
    OPEN_BRACKET = "OpenBracket"
    CLOSE_BRACKET = "CloseBracket"
    PERIOD = "Period"
    COMMA = "Comma"
    SLASH = "Slash"
    SEMICOLON = "Semicolon"
    QUOTE = "Quote"
    B = "B"
    C = "C"
    D = "D"
    F = "F"
    I = "I"  # noqa: E741
    L = "L"
    N = "N"
    O = "O"  # noqa: E741
    P = "P"
    T = "T"
    U = "U"
    X = "X"
    Y = "Y"
    Z = "Z"


@dataclass(frozen=True)
class Modifiers:
    alt: bool = False
    ctrl: bool = False
    shift: bool = False
    mac_cmd: bool = False
    command: bool = False

    def is_false(self) -> bool:
        return not (self.alt or self.ctrl or self.shift or self.mac_cmd or self.command)

    def with_alt(self) -> "Modifiers":
        return replace(self, alt=True)

    def with_ctrl(self) -> "Modifiers":
        return replace(self, ctrl=True)

    def with_shift(self) -> "Modifiers":
        return replace(self, shift=True)


@dataclass(frozen=True)
class Keys:
    """A key plus the exact modifier set required (``None`` = no modifiers)."""

    key: Key
    modifiers: Optional[Modifiers] = None


@dataclass
class Multi:
    """Multi-touch gesture deltas for one frame."""

    zoom_delta: float = 1.0
    translation_delta: Vec2 = field(default_factory=Vec2)


@dataclass
class InputState:
    """Input collected during one frame.

    Parameters
    ----------
    keys_pressed : list[Key]
        Keys pressed this frame.
    modifiers : Modifiers
        Modifiers currently held.
    raw_scroll_delta : Vec2
        Scroll wheel delta in pixels.
    pointer_pos : Vec2 or None
        Pointer position in screen pixels.
    pointer : bool or None
        ``None`` when the primary button is up; ``True`` on the frame it was
        pressed, ``False`` while it stays down.
    pointer_right : bool or None
        Same for the secondary button.
    multi : Multi or None
        Present when a multi-touch gesture is active.
    """

    keys_pressed: list[Key] = field(default_factory=list)
    modifiers: Modifiers = field(default_factory=Modifiers)
    raw_scroll_delta: Vec2 = field(default_factory=Vec2)
    pointer_pos: Optional[Vec2] = None
    pointer: Optional[bool] = None
    pointer_right: Optional[bool] = None
    multi: Optional[Multi] = None

    def pressed(self, keys: Optional[Keys]) -> bool:
        """Return True when ``keys`` fired this frame with exactly its modifiers."""
        if keys is None:
            return False
        if keys.modifiers is None:
            mods_ok = self.modifiers.is_false()
        else:
            mods_ok = self.modifiers == keys.modifiers
        return mods_ok and keys.key in self.keys_pressed

    def reset(self) -> None:
        """Clear per-frame fields; call after the frame was processed."""
        self.raw_scroll_delta = Vec2()
        self.keys_pressed = []
        if self.pointer is not None:
            self.pointer = False
        if self.pointer_right is not None:
            self.pointer_right = False
        self.multi = None


_CTRL = Modifiers(ctrl=True)
_SHIFT = Modifiers(shift=True)
_CTRL_SHIFT = Modifiers(ctrl=True, shift=True)
_CTRL_ALT = Modifiers(ctrl=True, alt=True)


def _k(key: Key, modifiers: Optional[Modifiers] = None):
    return field(default_factory=lambda: Keys(key, modifiers))


@dataclass
class Keybinds:
    """Action → key binding table. Set a field to ``None`` to unbind it."""

    left: Optional[Keys] = _k(Key.ARROW_LEFT)
    right: Optional[Keys] = _k(Key.ARROW_RIGHT)
    up: Optional[Keys] = _k(Key.ARROW_UP)
    down: Optional[Keys] = _k(Key.ARROW_DOWN)
    zoom_in: Optional[Keys] = _k(Key.EQUALS)
    zoom_out: Optional[Keys] = _k(Key.MINUS)
    zoom_in_x: Optional[Keys] = _k(Key.EQUALS, _CTRL)
    zoom_out_x: Optional[Keys] = _k(Key.MINUS, _CTRL)
    zoom_in_y: Optional[Keys] = _k(Key.PLUS, _SHIFT)
    zoom_out_y: Optional[Keys] = _k(Key.UNDERSCORE, _SHIFT)
    zoom_in_z: Optional[Keys] = _k(Key.PLUS, _CTRL_SHIFT)
    zoom_out_z: Optional[Keys] = _k(Key.UNDERSCORE, _CTRL_SHIFT)
    lines: Optional[Keys] = _k(Key.Z)
    axis: Optional[Keys] = _k(Key.X)
    coord: Optional[Keys] = _k(Key.C)
    left_3d: Optional[Keys] = _k(Key.ARROW_LEFT, _CTRL)
    right_3d: Optional[Keys] = _k(Key.ARROW_RIGHT, _CTRL)
    up_3d: Optional[Keys] = _k(Key.ARROW_UP, _CTRL)
    down_3d: Optional[Keys] = _k(Key.ARROW_DOWN, _CTRL)
    in_3d: Optional[Keys] = _k(Key.ARROW_DOWN, _CTRL_ALT)
    out_3d: Optional[Keys] = _k(Key.ARROW_UP, _CTRL_ALT)
    ignore_bounds: Optional[Keys] = _k(Key.P)
    color_depth: Optional[Keys] = _k(Key.O)
    zoom_in_3d: Optional[Keys] = _k(Key.SEMICOLON)
    zoom_out_3d: Optional[Keys] = _k(Key.QUOTE)
    show_box: Optional[Keys] = _k(Key.U)
    domain_alternate: Optional[Keys] = _k(Key.Y)
    slice_up: Optional[Keys] = _k(Key.PERIOD)
    slice_down: Optional[Keys] = _k(Key.COMMA)
    slice_view: Optional[Keys] = _k(Key.SLASH)
    log_scale: Optional[Keys] = _k(Key.L, _CTRL)
    line_style: Optional[Keys] = _k(Key.L)
    var_up: Optional[Keys] = _k(Key.ARROW_RIGHT, _SHIFT)
    var_down: Optional[Keys] = _k(Key.ARROW_LEFT, _SHIFT)
    var_in: Optional[Keys] = _k(Key.ARROW_UP, _SHIFT)
    var_out: Optional[Keys] = _k(Key.ARROW_DOWN, _SHIFT)
    prec_up: Optional[Keys] = _k(Key.OPEN_BRACKET)
    prec_down: Optional[Keys] = _k(Key.CLOSE_BRACKET)
    ruler: Optional[Keys] = _k(Key.N)
    view: Optional[Keys] = _k(Key.I)
    mode_up: Optional[Keys] = _k(Key.B)
    mode_down: Optional[Keys] = _k(Key.B, _SHIFT)
    reset: Optional[Keys] = _k(Key.T)
    fast: Optional[Keys] = _k(Key.F)
    toggle_dark_mode: Optional[Keys] = _k(Key.D, _CTRL_SHIFT)
    only_real: Optional[Keys] = _k(Key.O, _CTRL_SHIFT)


__all__ = ["InputState", "Key", "Keybinds", "Keys", "Modifiers", "Multi"]
