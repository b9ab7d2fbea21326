"""Test frame composition against a fake terminal that renders styles as markers."""

import pytest

from quill.constants import EditorConstants
from quill.model import Document
from quill.search import SearchNav, SearchSession
from quill.syntax import HLDB
from quill.view import FrameRenderer
from quill.viewport import Cursor, Viewport


@pytest.fixture
def renderer(fake_term):
    return FrameRenderer(fake_term, version="9.9")


def viewport(rows=10, cols=40, row_offset=0, col_offset=0):
    return Viewport(row_offset, col_offset, screen_rows=rows, screen_cols=cols)


class TestRows:

    def test_rows_past_end_are_filler(self, renderer):
        doc = Document(["one", "two"])
        rows = renderer.draw_rows(doc, viewport(rows=5))
        assert rows[:2] == ["one", "two"]
        assert rows[2:] == ["~"] * 3

    def test_welcome_banner_on_empty_document(self, renderer):
        rows = renderer.draw_rows(Document(), viewport(rows=9, cols=40))
        banner = rows[3]
        assert "quill editor -- version 9.9" in banner
        assert banner.startswith("~")
        assert len(banner) == (40 - len(EditorConstants.WELCOME_MESSAGE.format("9.9"))) // 2 + \
            len(EditorConstants.WELCOME_MESSAGE.format("9.9"))
        assert [r for i, r in enumerate(rows) if i != 3] == ["~"] * 8

    def test_welcome_banner_truncated_to_width(self, renderer):
        assert renderer.welcome_row(10) == "quill edit"

    def test_no_banner_when_document_has_lines(self, renderer):
        rows = renderer.draw_rows(Document([""]), viewport(rows=9))
        assert all("version" not in row for row in rows)

    def test_rows_follow_offsets(self, renderer):
        doc = Document([f"line {i}" for i in range(20)])
        rows = renderer.draw_rows(doc, viewport(rows=3, cols=4, row_offset=5, col_offset=2))
        assert rows == ["ne 5", "ne 6", "ne 7"]

    def test_tabs_drawn_expanded(self, renderer):
        rows = renderer.draw_rows(Document(["\tx"]), viewport(rows=1))
        assert rows == [" " * 8 + "x"]


class TestDrawLine:

    def test_plain_line_has_no_style_sequences(self, renderer):
        doc = Document(["no markup here"], syntax=HLDB[0])
        line = doc.lines[0]
        assert renderer.draw_line(line, line.highlight, viewport()) == "no markup here"

    def test_runs_are_coalesced(self, renderer):
        doc = Document(["return 12345;"], syntax=HLDB[0])
        line = doc.lines[0]
        out = renderer.draw_line(line, line.highlight, viewport())
        assert out == "<yellow>return<normal> <red>12345<normal>;"
        assert out.count("<yellow>") == 1
        assert out.count("<red>") == 1

    def test_style_reset_at_end_of_colored_line(self, renderer):
        doc = Document(["// comment"], syntax=HLDB[0])
        line = doc.lines[0]
        out = renderer.draw_line(line, line.highlight, viewport())
        assert out == "<cyan>// comment<normal>"

    def test_style_applies_inside_horizontal_slice(self, renderer):
        doc = Document(["x = \"abcdef\""], syntax=HLDB[0])
        line = doc.lines[0]
        out = renderer.draw_line(line, line.highlight, viewport(cols=3, col_offset=6))
        assert out == "<magenta>bcd<normal>"


class TestStatusBar:

    def test_unnamed_clean_document(self, renderer):
        bar = renderer.status_bar(Document(["a", "b"]), Cursor(), 40)
        assert bar.startswith("<reverse>") and bar.endswith("<normal>")
        text = bar[len("<reverse>"):-len("<normal>")]
        assert len(text) == 40
        assert text.startswith("[No Name] - 2 lines ")
        assert text.endswith("text | 1/2")

    def test_modified_named_document(self, renderer):
        doc = Document(["x"], filename="a_very_long_file_name_indeed.c", syntax=HLDB[0])
        doc.insert_char(0, 0, "y")
        bar = renderer.status_bar(doc, Cursor(cy=1), 60)
        assert "a_very_long_file_nam - 1 lines (modified)" in bar
        assert bar.endswith("c | 2/1<normal>")

    def test_narrow_terminal_truncates(self, renderer):
        bar = renderer.status_bar(Document(["a"]), Cursor(), 12)
        assert bar == "<reverse>[No Name] - <normal>"


class TestCompose:

    def test_message_truncated_to_width(self, renderer):
        frame = renderer.compose(Document(), Cursor(), viewport(cols=5), message="Hello world")
        assert frame.message == "Hello"

    def test_no_message(self, renderer):
        assert renderer.compose(Document(), Cursor(), viewport()).message == ""

    def test_cursor_position_is_screen_relative(self, renderer):
        doc = Document(["\tabc"] * 30)
        frame = renderer.compose(doc, Cursor(cx=2, cy=12), viewport(rows=5, row_offset=10, col_offset=3))
        assert (frame.cursor_y, frame.cursor_x) == (2, 9 - 3)
        assert len(frame.rows) == 5

    def test_search_match_drawn_without_touching_line(self, renderer):
        doc = Document(["int foo;", "foo"], syntax=HLDB[0])
        before = list(doc.lines[0].highlight)
        search = SearchSession()
        search.begin(Cursor(), viewport())
        search.step(doc, "foo", SearchNav.EDIT)

        rows = renderer.draw_rows(doc, viewport(rows=2), search)
        assert rows[0] == "<green>int<normal> <blue>foo<normal>;"
        assert rows[1] == "foo"
        assert doc.lines[0].highlight == before
