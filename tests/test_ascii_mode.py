"""
Tests for luminance to character mapping.
"""

import math

import numpy as np
import pytest

from aspix.rendering.ascii_mode import AsciiRenderer, char_index, map_char
from aspix.rendering.renderer import ASCII_CHARS, DETAILED_ASCII_CHARS


class TestCharIndex:
    def test_ends_of_range(self):
        assert char_index(0.0, 10) == 0
        assert char_index(1.0, 10) == 9

    def test_floor(self):
        # 0.5 * 9 = 4.5 -> 4
        assert char_index(0.5, 10) == 4

    def test_invert_mirrors(self):
        for v in np.linspace(0.0, 1.0, 23):
            assert char_index(v, 70, invert=True) == 69 - char_index(v, 70)

    @pytest.mark.parametrize("value", [-1.0, 1.5, 1e9, -math.inf, math.inf, math.nan])
    def test_out_of_range_is_clamped(self, value):
        assert 0 <= char_index(value, 10) <= 9

    def test_positive_infinity_is_top(self):
        assert char_index(math.inf, 10) == 9
        assert char_index(-math.inf, 10) == 0

    def test_single_char_ramp(self):
        assert char_index(0.7, 1) == 0
        assert char_index(0.7, 1, invert=True) == 0


class TestMapChar:
    def test_basic_ramp(self):
        assert map_char(0.0, ASCII_CHARS) == "@"
        assert map_char(1.0, ASCII_CHARS) == " "
        assert map_char(0.0, ASCII_CHARS, invert=True) == " "
        assert map_char(1.0, ASCII_CHARS, invert=True) == "@"

    def test_detailed_ramp(self):
        assert map_char(0.0, DETAILED_ASCII_CHARS) == "$"
        assert map_char(1.0, DETAILED_ASCII_CHARS) == " "


class TestAsciiRenderer:
    @pytest.fixture
    def renderer(self):
        return AsciiRenderer()

    def test_grid_matches_scalar_rule(self, renderer):
        grid = np.linspace(0.0, 1.0, 30).reshape(3, 10)
        lines = renderer.render(grid, ASCII_CHARS)
        for y, line in enumerate(lines):
            assert line == "".join(map_char(v, ASCII_CHARS) for v in grid[y])

    def test_grid_inverted_matches_scalar_rule(self, renderer):
        grid = np.linspace(0.0, 1.0, 30).reshape(5, 6)
        lines = renderer.render(grid, DETAILED_ASCII_CHARS, invert=True)
        for y, line in enumerate(lines):
            assert line == "".join(map_char(v, DETAILED_ASCII_CHARS, True) for v in grid[y])

    def test_dimensions(self, renderer):
        lines = renderer.render(np.zeros((4, 7)), ASCII_CHARS)
        assert len(lines) == 4
        assert all(len(line) == 7 for line in lines)

    def test_unicode_glyphs(self, renderer):
        lines = renderer.render(np.array([[0.0, 1.0]]), "█ ")
        assert lines == ["█ "]

    @pytest.mark.parametrize("invert", [False, True])
    def test_infinities_match_scalar_rule(self, renderer, invert):
        grid = np.array([[math.inf, -math.inf, math.nan]])
        line = renderer.render(grid, ASCII_CHARS, invert)[0]
        assert line == "".join(map_char(v, ASCII_CHARS, invert) for v in grid[0])
        assert line[0] == map_char(1.0, ASCII_CHARS, invert)
