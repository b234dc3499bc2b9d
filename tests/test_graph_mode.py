"""Graph-mode state machine: ordering, cycling, the 3D flag and fallbacks."""

from __future__ import annotations

import pytest

from plotcore.graph_mode import MODE_ORDERS, GraphModeController, is_3d_for, mode_order
from plotcore.graph_types import GraphMode


def _controller(is_complex: bool, is_3d_data: bool) -> GraphModeController:
    ctrl = GraphModeController()
    ctrl.set_is_complex(is_complex)
    ctrl.set_is_3d_data(is_3d_data)
    return ctrl


@pytest.mark.parametrize("kind", sorted(MODE_ORDERS))
def test_mode_up_cycles_back_to_start(kind: tuple[bool, bool]) -> None:
    """Pressing mode-up once per mode returns to the starting mode."""
    ctrl = _controller(*kind)
    order = mode_order(*kind)
    seen = [ctrl.mode]
    for _ in range(len(order)):
        ctrl.mode_up()
        seen.append(ctrl.mode)
    assert seen[0] is seen[-1] is GraphMode.NORMAL
    assert tuple(seen[:-1]) == order


@pytest.mark.parametrize("kind", sorted(MODE_ORDERS))
def test_mode_down_undoes_mode_up(kind: tuple[bool, bool]) -> None:
    ctrl = _controller(*kind)
    for mode in mode_order(*kind):
        ctrl.set_mode(mode)
        ctrl.mode_up()
        ctrl.mode_down()
        assert ctrl.mode is mode


def test_mode_down_from_normal_wraps_to_last() -> None:
    ctrl = _controller(True, True)
    ctrl.mode_down()
    assert ctrl.mode is GraphMode.DOMAIN_COLORING


def test_mode_outside_order_does_not_cycle() -> None:
    ctrl = _controller(True, False)
    ctrl.set_mode(GraphMode.SLICE)
    ctrl.mode_up()
    assert ctrl.mode is GraphMode.SLICE


def test_is_3d_flag_per_mode() -> None:
    assert is_3d_for(GraphMode.DEPTH, False) is True
    assert is_3d_for(GraphMode.DOMAIN_COLORING, True) is False
    assert is_3d_for(GraphMode.FLATTEN, True) is False
    assert is_3d_for(GraphMode.NORMAL, True) is True
    assert is_3d_for(GraphMode.POLAR, False) is False
    assert is_3d_for(GraphMode.SLICE, True) is True


def test_slice_modes_render_flat() -> None:
    ctrl = _controller(True, True)
    ctrl.set_mode("slice")
    assert ctrl.is_3d is True
    assert ctrl.renders_3d is False
    ctrl.set_mode(GraphMode.NORMAL)
    assert ctrl.renders_3d is True


def test_set_mode_accepts_names_and_rejects_unknown() -> None:
    ctrl = GraphModeController()
    ctrl.set_mode("Domain Coloring")
    assert ctrl.mode is GraphMode.DOMAIN_COLORING
    with pytest.raises(ValueError, match="Unknown graph mode"):
        ctrl.set_mode("sideways")


def test_losing_complex_falls_back_to_normal() -> None:
    ctrl = _controller(True, False)
    ctrl.set_mode(GraphMode.DEPTH)
    assert ctrl.is_3d is True
    ctrl.set_is_complex(False)
    assert ctrl.mode is GraphMode.NORMAL
    assert ctrl.is_3d is False


def test_losing_3d_data_falls_back_to_normal() -> None:
    ctrl = _controller(False, True)
    ctrl.set_mode(GraphMode.SLICE_POLAR)
    ctrl.set_is_3d_data(False)
    assert ctrl.mode is GraphMode.NORMAL
    assert ctrl.is_3d is False


def test_every_transition_notifies_owner() -> None:
    calls: list[None] = []
    ctrl = GraphModeController(on_change=lambda: calls.append(None))
    ctrl.set_mode(GraphMode.POLAR)
    ctrl.mode_up()
    ctrl.set_is_3d_data(True)
    assert len(calls) == 3
