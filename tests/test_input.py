from __future__ import annotations

from tetris_sim.game.input import InputState


def test_press_hold_release_edges() -> None:
    first = InputState.advance(InputState(), left=True)
    assert first.left and first.dleft == 1

    held = InputState.advance(first, left=True)
    assert held.left and held.dleft == 0

    released = InputState.advance(held)
    assert not released.left and released.dleft == -1


def test_edges_are_independent_per_button() -> None:
    prev = InputState.advance(InputState(), up=True, space=True)
    cur = InputState.advance(prev, up=True, down=True)
    assert (cur.dleft, cur.dright, cur.dup, cur.ddown, cur.dspace) == (0, 0, 0, 1, -1)


def test_pressed_builds_single_tick_edges() -> None:
    inp = InputState.pressed(right=True, space=True)
    assert inp.dright == 1 and inp.dspace == 1
    assert inp.dleft == inp.dup == inp.ddown == 0
