"""Test raw/render column conversion with tabs."""

import pytest

from quill.projection import cx_to_rx, rx_to_cx, to_render


class TestToRender:

    def test_plain_text_unchanged(self):
        assert to_render("hello") == "hello"

    def test_leading_tab_expands_to_tab_stop(self):
        assert to_render("\tx") == " " * 8 + "x"

    def test_tab_after_text_reaches_next_stop(self):
        assert to_render("abc\td") == "abc" + " " * 5 + "d"

    def test_tab_at_stop_boundary_takes_full_width(self):
        assert to_render("12345678\tx") == "12345678" + " " * 8 + "x"

    def test_consecutive_tabs(self):
        assert len(to_render("\t\t")) == 16


class TestColumnMapping:

    @pytest.mark.parametrize("chars,cx,rx", [
        ("abc", 0, 0),
        ("abc", 2, 2),
        ("abc", 3, 3),
        ("\tx", 1, 8),
        ("\tx", 2, 9),
        ("ab\tc", 3, 8),
        ("ab\t\tc", 4, 16),
    ])
    def test_cx_to_rx(self, chars, cx, rx):
        assert cx_to_rx(chars, cx) == rx

    def test_cx_to_rx_is_monotonic(self):
        chars = "a\tbc\t\td\te"
        values = [cx_to_rx(chars, cx) for cx in range(len(chars) + 1)]
        assert values == sorted(values)

    def test_cx_to_rx_at_end_is_render_length(self):
        chars = "x\ty\t"
        assert cx_to_rx(chars, len(chars)) == len(to_render(chars))

    @pytest.mark.parametrize("chars", ["plain", "\tx", "a\tb\tc", ""])
    def test_rx_to_cx_inverts_cx_to_rx(self, chars):
        for cx in range(len(chars) + 1):
            assert rx_to_cx(chars, cx_to_rx(chars, cx)) == cx

    def test_rx_inside_tab_maps_to_the_tab(self):
        assert rx_to_cx("\tx", 0) == 0
        assert rx_to_cx("\tx", 3) == 0
        assert rx_to_cx("\tx", 7) == 0
        assert rx_to_cx("\tx", 8) == 1

    def test_rx_past_end_maps_to_line_length(self):
        assert rx_to_cx("abc", 10) == 3
        assert rx_to_cx("", 4) == 0
