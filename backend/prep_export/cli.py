from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from .errors import ExportError
from .pdf_export import export_filename, render_interview_pdf
from .schemas import ExportOptions, InterviewExport


def log(msg: str) -> None:
    print(msg, file=sys.stderr)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="prep-export", description="Render an interview-prep JSON record to PDF.")
    p.add_argument("input", help="Path to the interview JSON record")
    p.add_argument("-o", "--output-dir", default=".", help="Directory for the generated PDF")
    p.add_argument("--no-brief", action="store_true", help="Leave out the opening brief")
    p.add_argument("--no-topics", action="store_true", help="Leave out revision topics")
    p.add_argument("--no-mcqs", action="store_true", help="Leave out multiple choice questions")
    p.add_argument("--no-rapid-fire", action="store_true", help="Leave out rapid-fire questions")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    src = Path(args.input)
    try:
        raw = json.loads(src.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        log(f"error: cannot read {src}: {e}")
        return 2

    try:
        record = InterviewExport.model_validate(raw)
    except ValidationError as e:
        log(f"error: invalid interview record in {src}:\n{e}")
        return 2

    options = ExportOptions(
        include_opening_brief=not args.no_brief,
        include_topics=not args.no_topics,
        include_mcqs=not args.no_mcqs,
        include_rapid_fire=not args.no_rapid_fire,
    )
    try:
        content = render_interview_pdf(record, options)
    except ExportError as e:
        log(f"error: {e}")
        return 2

    out_dir = Path(args.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / export_filename(record.job_details)
    out_path.write_bytes(content)
    print(out_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
