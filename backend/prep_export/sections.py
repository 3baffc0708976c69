from __future__ import annotations

from .blocks import BULLET, lead_height, render_blocks, render_markdown
from .cursor import LayoutCursor
from .errors import InvalidRecordError
from .markup import MarkupParser
from .schemas import MCQ, OpeningBrief, RapidFire, RevisionTopic

_BLACK = (0, 0, 0)
_MUTED = (100, 100, 100)
_ANSWER_GREEN = (34, 139, 34)


def answer_letter(mcq: MCQ) -> str:
    try:
        index = mcq.options.index(mcq.answer)
    except ValueError as e:
        raise InvalidRecordError(f"MCQ answer {mcq.answer!r} matches none of its options") from e
    return chr(ord("A") + index)


def _percent(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _section_title(cursor: LayoutCursor, title: str, underline: float) -> None:
    pdf = cursor.pdf
    cursor.ensure_space(14)
    cursor.set_font("B", 16)
    pdf.set_text_color(*_BLACK)
    cursor.mark("section_title")
    cursor.paint_line(cursor.text(title), cursor.left, cursor.content_width, 7)
    pdf.set_draw_color(*_BLACK)
    pdf.set_line_width(0.5)
    pdf.line(cursor.left, cursor.y, cursor.left + underline, cursor.y)
    cursor.advance(6)


def _label(
    cursor: LayoutCursor,
    text: str,
    *,
    style: str = "",
    size: float = 10,
    color: tuple[int, int, int] = _BLACK,
    indent: float = 0.0,
    line_height: float = 5.0,
) -> None:
    width = cursor.content_width - indent
    cursor.set_font(style, size)
    cursor.pdf.set_text_color(*color)
    cursor.place_lines(cursor.wrap(text, width, line_height), cursor.left + indent, width, line_height)
    cursor.pdf.set_text_color(*_BLACK)


def _numbered(
    cursor: LayoutCursor,
    parser: MarkupParser,
    number: str,
    markup: str,
    *,
    number_indent: float,
    body_indent: float,
    style: str = "",
    size: float = 10,
) -> None:
    """Stamp ``number`` in the left gutter and render ``markup`` beside it."""
    line_height = cursor.config.line_height
    blocks = parser.parse(markup)
    # the number shares a page with the first line of its body
    cursor.ensure_space(max(line_height, lead_height(cursor, blocks[0])) if blocks else line_height)
    cursor.set_font(style, size)
    cursor.pdf.set_text_color(*_BLACK)
    cursor.mark("item_number")
    cursor.pdf.set_xy(cursor.left + number_indent, cursor.y)
    cursor.pdf.cell(body_indent - number_indent, line_height, cursor.text(number))
    page, start = cursor.page_count, cursor.y
    render_blocks(cursor, blocks, body_indent)
    if cursor.page_count == page and cursor.y == start:
        cursor.advance(line_height)


def compose_opening_brief(cursor: LayoutCursor, parser: MarkupParser, brief: OpeningBrief) -> None:
    _section_title(cursor, "Opening Brief", 40)
    _label(cursor, f"Experience Match: {_percent(brief.experience_match)}%", style="B", size=11, line_height=6)
    _label(cursor, f"Recommended Prep Time: {brief.prep_time}", style="B", size=11, line_height=6)
    cursor.advance(2)
    if brief.key_skills:
        _label(cursor, "Key Skills:", style="B", size=11)
        for skill in brief.key_skills:
            _label(cursor, f"{BULLET} {skill}", indent=5)
        cursor.advance(3)
    render_markdown(cursor, parser, brief.content)
    cursor.advance(10)


def compose_revision_topics(cursor: LayoutCursor, parser: MarkupParser, topics: list[RevisionTopic]) -> None:
    _section_title(cursor, "Revision Topics", 45)
    for index, topic in enumerate(topics, start=1):
        cursor.ensure_space(25)
        cursor.mark("topic")
        _label(cursor, f"{index}. {topic.title}", style="B", size=12, line_height=6)
        _label(
            cursor,
            f"Confidence: {topic.confidence} | Reason: {topic.reason}",
            color=_MUTED,
            line_height=6,
        )
        render_markdown(cursor, parser, topic.content)
        cursor.advance(8)


def compose_mcqs(cursor: LayoutCursor, parser: MarkupParser, mcqs: list[MCQ]) -> None:
    _section_title(cursor, "Multiple Choice Questions", 70)
    for index, mcq in enumerate(mcqs, start=1):
        letter = answer_letter(mcq)
        cursor.ensure_space(40)
        cursor.mark("mcq")
        _numbered(cursor, parser, f"{index}.", mcq.question, number_indent=0, body_indent=8, style="B", size=11)
        cursor.advance(2)
        for opt_index, option in enumerate(mcq.options):
            cursor.ensure_space(8)
            _numbered(cursor, parser, f"{chr(ord('A') + opt_index)}.", option, number_indent=5, body_indent=15)
        cursor.advance(2)
        _label(cursor, f"Answer: {letter}", style="B", color=_ANSWER_GREEN, indent=5)
        render_markdown(cursor, parser, f"**Explanation:** {mcq.explanation}", 5)
        cursor.advance(8)


def compose_rapid_fire(cursor: LayoutCursor, parser: MarkupParser, items: list[RapidFire]) -> None:
    _section_title(cursor, "Rapid-Fire Questions", 55)
    for index, item in enumerate(items, start=1):
        cursor.ensure_space(20)
        cursor.mark("rapid_fire")
        _numbered(cursor, parser, f"{index}.", item.question, number_indent=0, body_indent=8, style="B", size=11)
        render_markdown(cursor, parser, f"**Answer:** {item.answer}", 5)
        cursor.advance(6)
