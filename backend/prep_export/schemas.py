from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobDetails(_Record):
    title: str
    company: str


class OpeningBrief(_Record):
    content: str = ""
    experience_match: float = Field(ge=0, le=100)
    key_skills: list[str] = Field(default_factory=list)
    prep_time: str = ""


class RevisionTopic(_Record):
    title: str
    content: str = ""
    reason: str = ""
    confidence: Literal["low", "medium", "high"]


class MCQ(_Record):
    question: str
    options: list[str] = Field(min_length=1, max_length=26)
    answer: str
    explanation: str = ""

    @model_validator(mode="after")
    def _answer_matches_option(self) -> "MCQ":
        if self.answer not in self.options:
            raise ValueError(f"answer {self.answer!r} does not match any option")
        return self


class RapidFire(_Record):
    question: str
    answer: str


class InterviewModules(_Record):
    opening_brief: OpeningBrief | None = None
    revision_topics: list[RevisionTopic] = Field(default_factory=list)
    mcqs: list[MCQ] = Field(default_factory=list)
    rapid_fire: list[RapidFire] = Field(default_factory=list)


class InterviewExport(_Record):
    job_details: JobDetails
    modules: InterviewModules = Field(default_factory=InterviewModules)


class ExportOptions(_Record):
    include_opening_brief: bool = True
    include_topics: bool = True
    include_mcqs: bool = Field(default=True, alias="includeMCQs")
    include_rapid_fire: bool = True
