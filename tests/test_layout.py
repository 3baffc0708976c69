"""Tests for the layout cursor and block renderers."""

from __future__ import annotations

import pytest
from fpdf import FPDF

from prep_export.blocks import lead_height, render_block, render_markdown
from prep_export.config import LayoutConfig
from prep_export.cursor import LayoutCursor
from prep_export.markup import Blockquote, Code, Heading, ListBlock, ListItem, MarkdownItParser, Paragraph, Raw, Space

LONG_TEXT = " ".join(["Interview preparation needs steady practice."] * 40)


@pytest.fixture
def cursor(layout_config: LayoutConfig) -> LayoutCursor:
    return LayoutCursor(FPDF(unit="mm", format=(layout_config.page_width, layout_config.page_height)), layout_config)


def _in_bounds(cursor: LayoutCursor) -> bool:
    return cursor.config.margin <= cursor.y <= cursor.config.bottom


class TestCursor:
    """Page-break bookkeeping."""

    def test_starts_on_first_page_at_margin(self, cursor: LayoutCursor) -> None:
        assert cursor.page_count == 1
        assert cursor.y == cursor.config.margin

    def test_ensure_space_keeps_page_when_it_fits(self, cursor: LayoutCursor) -> None:
        cursor.y = 100
        cursor.ensure_space(50)
        assert cursor.page_count == 1
        assert cursor.y == 100

    def test_ensure_space_breaks_page(self, cursor: LayoutCursor) -> None:
        cursor.y = 275
        assert cursor.ensure_space(5) == cursor.config.margin
        assert cursor.page_count == 2

    def test_exact_fit_does_not_break(self, cursor: LayoutCursor) -> None:
        cursor.y = cursor.config.bottom - 10
        cursor.ensure_space(10)
        assert cursor.page_count == 1

    def test_advance_clamps_to_bottom(self, cursor: LayoutCursor) -> None:
        cursor.y = 270
        assert cursor.advance(20) == cursor.config.bottom
        assert cursor.page_count == 1

    def test_mark_records_page_and_position(self, cursor: LayoutCursor) -> None:
        cursor.new_page()
        cursor.y = 42
        cursor.mark("marker")
        (placement,) = cursor.placements
        assert (placement.page, placement.kind, placement.y) == (2, "marker", 42)

    def test_wrap_empty_text(self, cursor: LayoutCursor) -> None:
        cursor.set_font()
        assert cursor.wrap("   ", 100, 5) == []

    def test_wrap_long_text(self, cursor: LayoutCursor) -> None:
        cursor.set_font()
        lines = cursor.wrap(LONG_TEXT, cursor.content_width, 5)
        assert len(lines) > 5

    def test_core_font_text_is_latin1(self, cursor: LayoutCursor) -> None:
        assert cursor.text("a → b … 中") == "a -> b ... ?"


class TestBlocks:
    """Per-block vertical rhythm."""

    def test_heading_sizes(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Heading(depth=1, text="Top"))
        assert cursor.y == pytest.approx(20 + 16 * 0.4 + 3)

    def test_small_heading_is_clamped(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Heading(depth=6, text="Small"))
        assert cursor.y == pytest.approx(20 + 11 * 0.4 + 3)

    def test_heading_is_not_left_alone_at_page_bottom(self, cursor: LayoutCursor) -> None:
        cursor.y = cursor.config.bottom - 8
        render_block(cursor, Heading(depth=1, text="Kept with its body"))
        (placement,) = cursor.placements
        assert (placement.page, placement.y) == (2, cursor.config.margin)

    def test_paragraph_wraps(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Paragraph(text=LONG_TEXT))
        assert cursor.y > 20 + 2 * 5 + 4
        assert [p.kind for p in cursor.placements] == ["paragraph"]

    def test_space_advances(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Space())
        assert cursor.y == pytest.approx(22)

    def test_space_scales_with_blank_lines(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Space(lines=3))
        assert cursor.y == pytest.approx(26)

    def test_raw_is_body_text(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Raw(text="a | b"))
        assert [p.kind for p in cursor.placements] == ["raw"]
        assert cursor.y == pytest.approx(20 + 5 + 4)

    def test_list_items_and_children(self, cursor: LayoutCursor) -> None:
        block = ListBlock(
            items=(
                ListItem("first", children=(ListBlock(items=(ListItem("nested"),)),)),
                ListItem("second"),
            ),
            ordered=True,
            start=7,
        )
        render_block(cursor, block)
        assert [p.kind for p in cursor.placements] == ["list_item", "list_item", "list_item"]

    def test_empty_list_item_paints_nothing(self, cursor: LayoutCursor) -> None:
        render_block(cursor, ListBlock(items=(ListItem(""),)))
        assert cursor.placements == []

    def test_code_block_gap(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Code(text="x = 1", language="python"))
        assert cursor.y == pytest.approx(20 + 4 + 4 + 4 + 4)

    def test_blockquote_splits_across_pages(self, cursor: LayoutCursor) -> None:
        cursor.y = 250
        render_block(cursor, Blockquote(text=LONG_TEXT, title="Note"))
        assert cursor.page_count == 2
        assert _in_bounds(cursor)
        assert [p.kind for p in cursor.placements] == ["blockquote"]

    def test_empty_blockquote_paints_nothing(self, cursor: LayoutCursor) -> None:
        render_block(cursor, Blockquote(text=""))
        assert cursor.placements == []
        assert cursor.y == 20

    def test_lead_height_per_block(self, cursor: LayoutCursor) -> None:
        assert lead_height(cursor, Code(text="x")) == pytest.approx(12)
        assert lead_height(cursor, Heading(depth=1, text="h")) == pytest.approx(12)
        assert lead_height(cursor, Blockquote(text="q")) == pytest.approx(10)
        assert lead_height(cursor, Paragraph(text="p")) == pytest.approx(5)


class TestMarkdown:
    """Whole documents keep the cursor on the page."""

    def test_empty_markdown_is_a_no_op(self, cursor: LayoutCursor) -> None:
        assert render_markdown(cursor, MarkdownItParser(), "") == 20
        assert cursor.placements == []

    def test_cursor_stays_in_bounds_after_every_block(self, cursor: LayoutCursor) -> None:
        parser = MarkdownItParser()
        markup = "\n\n".join(
            [
                "# Heading",
                LONG_TEXT,
                "- " + LONG_TEXT + "\n- short",
                "> " + LONG_TEXT,
                "```python\n" + "\n".join(f"x_{n} = {n}" for n in range(90)) + "\n```",
                "| k | v |\n|---|---|\n| a | 1 |",
            ]
            * 4
        )
        for block in parser.parse(markup):
            render_block(cursor, block)
            assert _in_bounds(cursor), block

        assert cursor.page_count > 3
        assert all(1 <= p.page <= cursor.page_count for p in cursor.placements)
        assert all(cursor.config.margin <= p.y <= cursor.config.bottom for p in cursor.placements)
