from __future__ import annotations

import pytest

from pychip8.video import SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer


def test_draw_sets_pixels_from_msb() -> None:
    fb = FrameBuffer()

    collided = fb.draw_sprite(2, 3, b"\x81")

    assert not collided
    assert fb.is_set(2, 3)
    assert fb.is_set(9, 3)
    assert not fb.is_set(3, 3)


def test_redraw_erases_and_reports_collision() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(0, 0, b"\xFF")

    collided = fb.draw_sprite(4, 0, b"\x80")

    assert collided
    assert not fb.is_set(4, 0)
    assert fb.is_set(3, 0)


def test_origin_wraps_and_edges_clip() -> None:
    fb = FrameBuffer()

    fb.draw_sprite(SCREEN_WIDTH + 60, SCREEN_HEIGHT + 31, b"\xFF\xFF")

    assert fb.is_set(60, 31)
    assert fb.is_set(63, 31)
    assert not fb.is_set(0, 31)
    assert not fb.is_set(60, 0)
    assert sum(fb.pixels()) == 4


def test_clear_blanks_screen() -> None:
    fb = FrameBuffer()
    fb.draw_sprite(0, 0, b"\xF0\x90")

    fb.clear()

    assert not any(fb.pixels())


def test_render_text() -> None:
    fb = FrameBuffer(width=4, height=2)
    fb.draw_sprite(0, 0, b"\xA0")

    assert fb.render_text() == "#.#.\n...."


def test_is_set_bounds_checked() -> None:
    with pytest.raises(IndexError):
        FrameBuffer().is_set(SCREEN_WIDTH, 0)
