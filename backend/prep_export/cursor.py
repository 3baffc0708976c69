from __future__ import annotations

from dataclasses import dataclass

from fpdf import FPDF
from fpdf.enums import MethodReturnValue

from .config import LayoutConfig
from .fonts import FontSet


@dataclass(frozen=True)
class Placement:
    page: int
    kind: str
    y: float


class LayoutCursor:
    """Vertical write position for one document.

    ``y`` is measured in millimetres from the top edge of the current page.
    Every renderer asks :meth:`ensure_space` before painting, so after any
    append ``config.margin <= y <= config.bottom`` holds.
    """

    def __init__(self, pdf: FPDF, config: LayoutConfig, fonts: FontSet | None = None) -> None:
        self.pdf = pdf
        self.config = config
        self.fonts = fonts or FontSet()
        self.placements: list[Placement] = []
        # the cursor is the only thing allowed to break pages
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_margins(config.margin, config.margin, config.margin)
        if self.pdf.page_no() == 0:
            self.pdf.add_page()
        self.y = config.margin

    @property
    def page_count(self) -> int:
        return self.pdf.page_no()

    @property
    def top(self) -> float:
        return self.config.margin

    @property
    def bottom(self) -> float:
        return self.config.bottom

    @property
    def left(self) -> float:
        return self.config.margin

    @property
    def content_width(self) -> float:
        return self.config.content_width

    def fits(self, required: float) -> bool:
        return self.y + required <= self.bottom

    def new_page(self) -> float:
        self.pdf.add_page()
        self.y = self.top
        return self.y

    def ensure_space(self, required: float) -> float:
        if not self.fits(required):
            self.new_page()
        return self.y

    def advance(self, dy: float) -> float:
        # a trailing gap never spills past the page; the next ensure_space breaks instead
        self.y = min(self.y + dy, self.bottom)
        return self.y

    def mark(self, kind: str) -> None:
        self.placements.append(Placement(page=self.page_count, kind=kind, y=self.y))

    def set_font(self, style: str = "", size: float = 10, *, mono: bool = False) -> None:
        family = self.fonts.mono if mono else self.fonts.body
        self.pdf.set_font(family, "" if mono else style, size)

    def text(self, value: str, *, mono: bool = False) -> str:
        return self.fonts.sanitize(value, mono=mono)

    def wrap(self, value: str, width: float, line_height: float) -> list[str]:
        """Split text into lines that fit ``width`` in the current font."""
        safe = self.text(value)
        if not safe.strip():
            return []
        lines = self.pdf.multi_cell(width, line_height, safe, dry_run=True, output=MethodReturnValue.LINES)
        return [str(line) for line in lines]

    def paint_line(self, value: str, x: float, width: float, line_height: float, *, align: str = "L") -> None:
        self.pdf.set_xy(x, self.y)
        self.pdf.cell(width, line_height, value, align=align)
        self.y += line_height

    def place_lines(self, lines: list[str], x: float, width: float, line_height: float) -> None:
        for line in lines:
            self.ensure_space(line_height)
            self.paint_line(line, x, width, line_height)
