from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecommendedLevel = Literal["Junior", "Mid", "Senior", "Lead", "Principal", "Unknown"]
UNKNOWN_LEVEL: RecommendedLevel = "Unknown"
# Whole-number scores stay integers when stored.
FitScore = Annotated[int, Field(ge=0, le=100)] | Annotated[float, Field(ge=0, le=100)]


def _unique_sorted(values: list[str]) -> list[str]:
    return sorted({value for value in values if value})


class CandidateFields(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    skills: list[str] = Field(default_factory=list)

    @field_validator("skills")
    @classmethod
    def _normalize_skills(cls, value: list[str]) -> list[str]:
        return _unique_sorted(value)


class CandidateRecord(CandidateFields):
    candidate_id: str = Field(min_length=1)
    bucket: str
    file_key: str
    raw_text: str


class FitAssessment(BaseModel):
    """Role fit as returned by the model, keyed the way the prompt declares it."""

    model_config = ConfigDict(populate_by_name=True)

    fit_score: FitScore | None = Field(alias="fitScore")
    summary: str
    key_strengths: list[str] = Field(default_factory=list, alias="keyStrengths")
    concerns: list[str] = Field(default_factory=list)
    skills_matched: list[str] = Field(default_factory=list, alias="skillsMatched")
    skills_missing: list[str] = Field(default_factory=list, alias="skillsMissing")
    recommended_level: RecommendedLevel = Field(alias="recommendedLevel")

    @classmethod
    def fallback(cls, raw_text: str) -> "FitAssessment":
        return cls(
            fit_score=None,
            summary=raw_text,
            key_strengths=[],
            concerns=[],
            skills_matched=[],
            skills_missing=[],
            recommended_level=UNKNOWN_LEVEL,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)
