"""
Unit tests for the History snapshot stack.
"""

import pytest
from PIL import Image

from IS_Libs.DocumentLib.history import History


def _gray(level):
    return Image.new("RGBA", (1, 1), (level, level, level, 255))


class TestHistory:
    """Tests for History."""

    def test_starts_empty(self):
        history = History(capacity=3)
        assert len(history) == 0
        assert not history
        assert history.capacity == 3

    def test_push_pop_is_last_in_first_out(self):
        history = History()
        history.push(_gray(1))
        history.push(_gray(2))

        assert history.pop().getpixel((0, 0))[0] == 2
        assert history.pop().getpixel((0, 0))[0] == 1

    def test_push_stores_a_copy(self):
        history = History()
        raster = _gray(10)
        history.push(raster)
        raster.putpixel((0, 0), (0, 0, 0, 0))

        stored = history.pop()

        assert stored is not raster
        assert stored.getpixel((0, 0)) == (10, 10, 10, 255)

    def test_capacity_evicts_oldest(self):
        history = History(capacity=3)
        for level in range(5):
            history.push(_gray(level))

        assert len(history) == 3
        assert [history.pop().getpixel((0, 0))[0] for _ in range(3)] == [4, 3, 2]
        assert not history

    def test_unbounded(self):
        history = History()
        for level in range(50):
            history.push(_gray(level))
        assert len(history) == 50

    def test_clear(self):
        history = History()
        history.push(_gray(1))
        history.clear()
        assert len(history) == 0

    def test_pop_empty_raises(self):
        with pytest.raises(IndexError):
            History().pop()

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            History(capacity=0)
