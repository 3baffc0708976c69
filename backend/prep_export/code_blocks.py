"""Code block pagination.

A page is a hard boundary for a filled rectangle, so a long code block is
planned into page-sized chunks first and every chunk gets its own panel.
Only the first chunk has rounded top corners and the language label; only
the last chunk has rounded bottom corners. Every later chunk opens with a
"continued" marker.
"""

from __future__ import annotations

from dataclasses import dataclass

from fpdf.enums import Corner

from .config import LayoutConfig
from .cursor import LayoutCursor
from .highlight import tokenize_line
from .logging_utils import get_logger

log = get_logger(__name__)

CONTINUED_LABEL = "…continued"
CONTINUED_HEIGHT = 4.0
CODE_FONT_SIZE = 8
LABEL_FONT_SIZE = 7
_PANEL_FILL = (40, 44, 52)
_LABEL_COLOR = (150, 150, 150)
_CONTINUED_COLOR = (100, 100, 100)


@dataclass(frozen=True)
class PageChunk:
    lines: tuple[str, ...]
    is_first: bool
    is_last: bool


def _header_height(config: LayoutConfig, first: bool) -> float:
    return config.code_padding + (0.0 if first else CONTINUED_HEIGHT)


def chunk_height(chunk: PageChunk, config: LayoutConfig) -> float:
    return _header_height(config, chunk.is_first) + len(chunk.lines) * config.code_line_height + config.code_padding


def plan_code_chunks(lines: list[str], start_y: float, config: LayoutConfig) -> list[PageChunk]:
    """Partition ``lines`` so each chunk's panel fits the page it starts on.

    The first chunk starts at ``start_y``; later chunks start at the top
    margin of a fresh page. A chunk always takes at least one line.
    """
    line_height = config.code_line_height
    padding = config.code_padding
    groups: list[list[str]] = []
    current: list[str] = []
    y = start_y + _header_height(config, True)
    for line in lines:
        if current and y + line_height + padding > config.bottom:
            groups.append(current)
            current = []
            y = config.margin + _header_height(config, False)
        current.append(line)
        y += line_height
    groups.append(current)
    last = len(groups) - 1
    return [PageChunk(lines=tuple(group), is_first=idx == 0, is_last=idx == last) for idx, group in enumerate(groups)]


def _corners(chunk: PageChunk) -> tuple[Corner, ...]:
    corners: list[Corner] = []
    if chunk.is_first:
        corners += [Corner.TOP_LEFT, Corner.TOP_RIGHT]
    if chunk.is_last:
        corners += [Corner.BOTTOM_LEFT, Corner.BOTTOM_RIGHT]
    return tuple(corners)


def _paint_chunk(cursor: LayoutCursor, chunk: PageChunk, language: str, x: float, width: float) -> None:
    pdf = cursor.pdf
    config = cursor.config
    padding = config.code_padding
    top = cursor.y
    height = chunk_height(chunk, config)

    pdf.set_fill_color(*_PANEL_FILL)
    corners = _corners(chunk)
    if corners:
        pdf.rect(x, top, width, height, style="F", round_corners=corners, corner_radius=config.code_radius)
    else:
        pdf.rect(x, top, width, height, style="F")
    cursor.mark("code_chunk")

    pdf.set_font(cursor.fonts.body, "", LABEL_FONT_SIZE)
    if chunk.is_first and language:
        pdf.set_text_color(*_LABEL_COLOR)
        label = cursor.text(language.upper())
        pdf.set_xy(x + width - padding - 40, top + 0.5)
        pdf.cell(40, 3, label, align="R")
        cursor.mark("code_label")
    if not chunk.is_first:
        pdf.set_text_color(*_CONTINUED_COLOR)
        pdf.set_xy(x + padding, top + 1)
        pdf.cell(width - 2 * padding, 3, cursor.text(CONTINUED_LABEL))
        cursor.mark("code_continued")

    cursor.y = top + _header_height(config, chunk.is_first)
    cursor.set_font(size=CODE_FONT_SIZE, mono=True)
    line_height = config.code_line_height
    for line in chunk.lines:
        text_x = x + padding
        baseline = cursor.y + line_height * 0.75
        for span in tokenize_line(line):
            text = cursor.text(span.text, mono=True)
            pdf.set_text_color(*span.rgb)
            pdf.text(text_x, baseline, text)
            text_x += pdf.get_string_width(text)
        cursor.y += line_height
    cursor.y = top + height


def render_code_block(cursor: LayoutCursor, code: str, language: str = "", indent: float = 0.0) -> list[PageChunk]:
    config = cursor.config
    x = cursor.left + indent
    width = cursor.content_width - indent
    cursor.ensure_space(2 * config.code_padding + config.code_line_height)
    chunks = plan_code_chunks(code.split("\n"), cursor.y, config)
    if len(chunks) > 1:
        log.debug("Code block (%s) split into %d chunks", language or "plain", len(chunks))
    for idx, chunk in enumerate(chunks):
        if idx > 0:
            cursor.new_page()
        _paint_chunk(cursor, chunk, language, x, width)
    cursor.pdf.set_text_color(0, 0, 0)
    return chunks
