from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query, Response

from .config import load_layout_config
from .errors import ExportError
from .logging_utils import get_logger
from .pdf_export import export_filename, render_interview_pdf
from .schemas import ExportOptions, InterviewExport

log = get_logger(__name__)

app = FastAPI(title="prep-export")


def _flag(value: str | None) -> bool:
    # only an explicit "false" turns a section off
    return value != "false"


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.post("/export/pdf")
def export_pdf(
    record: InterviewExport,
    include_opening_brief: str | None = Query(default=None, alias="includeOpeningBrief"),
    include_topics: str | None = Query(default=None, alias="includeTopics"),
    include_mcqs: str | None = Query(default=None, alias="includeMCQs"),
    include_rapid_fire: str | None = Query(default=None, alias="includeRapidFire"),
) -> Response:
    options = ExportOptions(
        include_opening_brief=_flag(include_opening_brief),
        include_topics=_flag(include_topics),
        include_mcqs=_flag(include_mcqs),
        include_rapid_fire=_flag(include_rapid_fire),
    )
    try:
        content = render_interview_pdf(record, options, config=load_layout_config())
    except ExportError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        log.exception("PDF export failed for %r at %r", record.job_details.title, record.job_details.company)
        raise HTTPException(status_code=500, detail="Failed to export PDF") from e

    filename = export_filename(record.job_details)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
