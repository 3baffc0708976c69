from __future__ import annotations

import re
from datetime import date, datetime, timezone

from fpdf import FPDF

from .config import LayoutConfig, load_layout_config
from .cursor import LayoutCursor
from .fonts import register_fonts
from .logging_utils import get_logger
from .markup import MarkdownItParser, MarkupParser
from .schemas import ExportOptions, InterviewExport, JobDetails
from .sections import (
    answer_letter,
    compose_mcqs,
    compose_opening_brief,
    compose_rapid_fire,
    compose_revision_topics,
)

log = get_logger(__name__)

DOCUMENT_TITLE = "Interview Preparation"
FILENAME_PREFIX = "interview-prep"
SECTION_BREAK_SPACE = 60
# pinned so identical input yields identical documents
_CREATION_DATE = datetime(2000, 1, 1, tzinfo=timezone.utc)
_WHITESPACE_RE = re.compile(r"\s+")
_FILENAME_STRIP_RE = re.compile(r"[^a-z0-9-]")


def _filename_part(value: str) -> str:
    return _FILENAME_STRIP_RE.sub("", _WHITESPACE_RE.sub("-", value.lower()))


def export_filename(job: JobDetails, today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"{FILENAME_PREFIX}_{_filename_part(job.company)}_{_filename_part(job.title)}_{today.isoformat()}.pdf"


def _write_title(cursor: LayoutCursor, job: JobDetails) -> None:
    pdf = cursor.pdf
    pdf.set_text_color(0, 0, 0)
    cursor.set_font("B", 24)
    cursor.mark("title")
    cursor.paint_line(cursor.text(DOCUMENT_TITLE), cursor.left, cursor.content_width, 10, align="C")
    cursor.advance(5)
    cursor.set_font("B", 14)
    cursor.place_lines(cursor.wrap(f"{job.title} at {job.company}", cursor.content_width, 7), cursor.left, cursor.content_width, 7)
    cursor.advance(3)


def build_interview_pdf(
    record: InterviewExport,
    options: ExportOptions | None = None,
    config: LayoutConfig | None = None,
    parser: MarkupParser | None = None,
) -> LayoutCursor:
    """Lay out the whole export and return the cursor that produced it.

    Each call owns its document, cursor and parser, so concurrent exports
    never share layout state.
    """
    options = options or ExportOptions()
    config = config or load_layout_config()
    parser = parser or MarkdownItParser()
    modules = record.modules
    job = record.job_details

    if options.include_mcqs:
        for mcq in modules.mcqs:
            answer_letter(mcq)

    pdf = FPDF(orientation="portrait", unit="mm", format=(config.page_width, config.page_height))
    pdf.set_creation_date(_CREATION_DATE)
    fonts = register_fonts(pdf, config.font_dir)
    pdf.set_title(fonts.sanitize(f"{DOCUMENT_TITLE}: {job.title} at {job.company}"))
    pdf.set_creator("prep-export")
    cursor = LayoutCursor(pdf, config, fonts)

    _write_title(cursor, job)
    sections: list[str] = []
    if options.include_opening_brief and modules.opening_brief:
        compose_opening_brief(cursor, parser, modules.opening_brief)
        sections.append("opening_brief")
    if options.include_topics and modules.revision_topics:
        cursor.ensure_space(SECTION_BREAK_SPACE)
        compose_revision_topics(cursor, parser, modules.revision_topics)
        sections.append("revision_topics")
    if options.include_mcqs and modules.mcqs:
        cursor.ensure_space(SECTION_BREAK_SPACE)
        compose_mcqs(cursor, parser, modules.mcqs)
        sections.append("mcqs")
    if options.include_rapid_fire and modules.rapid_fire:
        cursor.ensure_space(SECTION_BREAK_SPACE)
        compose_rapid_fire(cursor, parser, modules.rapid_fire)
        sections.append("rapid_fire")

    log.info(
        "Rendered interview export for %r at %r: sections=%s pages=%d",
        job.title,
        job.company,
        ",".join(sections) or "none",
        cursor.page_count,
    )
    return cursor


def render_interview_pdf(
    record: InterviewExport,
    options: ExportOptions | None = None,
    config: LayoutConfig | None = None,
    parser: MarkupParser | None = None,
) -> bytes:
    cursor = build_interview_pdf(record, options, config=config, parser=parser)
    return bytes(cursor.pdf.output())
