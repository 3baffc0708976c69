from __future__ import annotations

from .code_blocks import render_code_block
from .cursor import LayoutCursor
from .markup import Block, Blockquote, Code, Heading, ListBlock, MarkupParser, Paragraph, Raw, Space

BODY_SIZE = 10
BULLET = "•"
BULLET_WIDTH = 6.0
LIST_TEXT_INSET = 8.0
QUOTE_INSET = 5.0
HEADING_KEEP = 12.0
SPACE_GAP = 2.0
_QUOTE_TEXT = (100, 100, 100)
_QUOTE_RULE = (200, 200, 200)


def _frame(cursor: LayoutCursor, indent: float) -> tuple[float, float]:
    return cursor.left + indent, cursor.content_width - indent


def heading_size(block: Heading) -> int:
    return max(16 - (block.depth - 1) * 2, 11)


def lead_height(cursor: LayoutCursor, block: Block) -> float:
    """Room ``block`` asks for before it paints its first line."""
    config = cursor.config
    if isinstance(block, Heading):
        return max(heading_size(block) * 0.4, HEADING_KEEP)
    if isinstance(block, Code):
        return 2 * config.code_padding + config.code_line_height
    if isinstance(block, Blockquote):
        return 2 * config.line_height
    return config.line_height


def render_heading(cursor: LayoutCursor, block: Heading, indent: float = 0.0) -> None:
    x, width = _frame(cursor, indent)
    size = heading_size(block)
    line_height = size * 0.4
    cursor.set_font("B", size)
    cursor.pdf.set_text_color(0, 0, 0)
    lines = cursor.wrap(block.text, width, line_height)
    if not lines:
        return
    # keep a heading with the start of what follows it
    cursor.ensure_space(max(line_height, HEADING_KEEP))
    cursor.mark("heading")
    cursor.place_lines(lines, x, width, line_height)
    cursor.advance(3)


def _render_body_text(cursor: LayoutCursor, text: str, kind: str, indent: float) -> None:
    x, width = _frame(cursor, indent)
    line_height = cursor.config.line_height
    cursor.set_font("", BODY_SIZE)
    cursor.pdf.set_text_color(0, 0, 0)
    lines = cursor.wrap(text, width, line_height)
    if not lines:
        return
    cursor.ensure_space(line_height)
    cursor.mark(kind)
    cursor.place_lines(lines, x, width, line_height)
    cursor.advance(4)


def render_paragraph(cursor: LayoutCursor, block: Paragraph, indent: float = 0.0) -> None:
    _render_body_text(cursor, block.text, "paragraph", indent)


def render_raw(cursor: LayoutCursor, block: Raw, indent: float = 0.0) -> None:
    _render_body_text(cursor, block.text, "raw", indent)


def render_list(cursor: LayoutCursor, block: ListBlock, indent: float = 0.0) -> None:
    x, width = _frame(cursor, indent)
    line_height = cursor.config.line_height
    for index, item in enumerate(block.items):
        cursor.set_font("", BODY_SIZE)
        cursor.pdf.set_text_color(0, 0, 0)
        lines = cursor.wrap(item.text, width - LIST_TEXT_INSET, line_height)
        if lines:
            bullet = f"{block.start + index}." if block.ordered else BULLET
            cursor.ensure_space(line_height)
            cursor.mark("list_item")
            cursor.pdf.set_xy(x, cursor.y)
            cursor.pdf.cell(BULLET_WIDTH, line_height, cursor.text(bullet))
            cursor.place_lines(lines, x + BULLET_WIDTH, width - LIST_TEXT_INSET, line_height)
        for child in item.children:
            render_block(cursor, child, indent + BULLET_WIDTH)
    cursor.advance(2)


def render_blockquote(cursor: LayoutCursor, block: Blockquote, indent: float = 0.0) -> None:
    x, width = _frame(cursor, indent)
    pdf = cursor.pdf
    line_height = cursor.config.line_height
    text_width = width - 2 * QUOTE_INSET
    rows: list[tuple[str, str]] = []
    if block.title:
        cursor.set_font("B", BODY_SIZE)
        rows += [("B", line) for line in cursor.wrap(block.title, text_width, line_height)]
    cursor.set_font("I", BODY_SIZE)
    rows += [("I", line) for line in cursor.wrap(block.text, text_width, line_height)]
    if not rows:
        return

    def draw_rule(start: float, end: float) -> None:
        pdf.set_draw_color(*_QUOTE_RULE)
        pdf.set_line_width(0.5)
        pdf.line(x, start, x, end)

    cursor.ensure_space(2 * line_height)
    cursor.mark("blockquote")
    pdf.set_text_color(*_QUOTE_TEXT)
    segment_start = cursor.y
    for style, line in rows:
        if not cursor.fits(line_height):
            # the rule for this page only spans lines already placed on it
            draw_rule(segment_start, cursor.y)
            cursor.new_page()
            segment_start = cursor.y
        cursor.set_font(style, BODY_SIZE)
        cursor.paint_line(line, x + QUOTE_INSET, text_width, line_height)
    draw_rule(segment_start, cursor.y)
    pdf.set_text_color(0, 0, 0)
    pdf.set_draw_color(0, 0, 0)
    cursor.advance(4)


def render_block(cursor: LayoutCursor, block: Block, indent: float = 0.0) -> None:
    if isinstance(block, Heading):
        render_heading(cursor, block, indent)
    elif isinstance(block, Paragraph):
        render_paragraph(cursor, block, indent)
    elif isinstance(block, ListBlock):
        render_list(cursor, block, indent)
    elif isinstance(block, Blockquote):
        render_blockquote(cursor, block, indent)
    elif isinstance(block, Code):
        render_code_block(cursor, block.text, block.language, indent)
        cursor.advance(4)
    elif isinstance(block, Space):
        cursor.advance(SPACE_GAP * block.lines)
    elif isinstance(block, Raw):
        render_raw(cursor, block, indent)


def render_blocks(cursor: LayoutCursor, blocks: list[Block], indent: float = 0.0) -> float:
    for block in blocks:
        render_block(cursor, block, indent)
    return cursor.y


def render_markdown(cursor: LayoutCursor, parser: MarkupParser, markup: str, indent: float = 0.0) -> float:
    return render_blocks(cursor, parser.parse(markup), indent)
