"""Test setup for prep_export."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
BACKEND = ROOT / "backend"
if str(BACKEND) not in sys.path:
    sys.path.insert(0, str(BACKEND))

from prep_export.config import LayoutConfig  # noqa: E402
from prep_export.schemas import InterviewExport  # noqa: E402


@pytest.fixture
def layout_config() -> LayoutConfig:
    """A4 geometry with core fonts only."""
    return LayoutConfig()


@pytest.fixture
def interview_payload() -> dict:
    """A small camelCase record shaped like the stored interview document."""
    return {
        "_id": "abc123",
        "jobDetails": {"title": "Sr. Engineer", "company": "Acme Corp!", "description": "Build things"},
        "modules": {
            "openingBrief": {
                "content": "## Summary\n\nYou match most of the **core** requirements.\n\n- Python\n- SQL",
                "experienceMatch": 82,
                "keySkills": ["Python", "Distributed systems"],
                "prepTime": "2 weeks",
            },
            "revisionTopics": [
                {
                    "id": "t1",
                    "title": "Event loops",
                    "content": "An event loop runs callbacks.\n\n```python\nimport asyncio\nasyncio.run(main())\n```",
                    "reason": "Listed in the job description",
                    "confidence": "medium",
                }
            ],
            "mcqs": [
                {
                    "id": "m1",
                    "question": "What does `len([])` return?",
                    "options": ["0", "1", "None", "Error"],
                    "answer": "0",
                    "explanation": "An empty list has length zero.",
                }
            ],
            "rapidFire": [
                {"id": "r1", "question": "GIL?", "answer": "Global interpreter lock."},
            ],
        },
    }


@pytest.fixture
def interview(interview_payload: dict) -> InterviewExport:
    return InterviewExport.model_validate(interview_payload)
