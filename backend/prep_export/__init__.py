from __future__ import annotations

from .errors import ExportError, InvalidRecordError
from .pdf_export import build_interview_pdf, export_filename, render_interview_pdf
from .schemas import ExportOptions, InterviewExport

__all__ = [
    "ExportError",
    "ExportOptions",
    "InterviewExport",
    "InvalidRecordError",
    "build_interview_pdf",
    "export_filename",
    "render_interview_pdf",
]
