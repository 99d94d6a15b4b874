from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

RoleCategory = Literal["Technology", "Management", "Design", "Marketing", "Sales", "Analysis"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionAssessment(_CamelModel):
    name: str
    score: int = Field(default=0, ge=0, le=10)
    max_score: Literal[10] = 10
    feedback: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    issues: list[str] = Field(default_factory=list)


class KeyFindings(_CamelModel):
    strengths: list[str] = Field(default_factory=list)
    major_issues: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    ats_compatibility: int = Field(default=0, ge=0, le=10)
    improvement_priority: list[str] = Field(default_factory=list)


class JobAlignment(_CamelModel):
    match_score: int = Field(default=0, ge=0, le=10)
    relevant_experience: list[str] = Field(default_factory=list)
    skill_gaps: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ResumeAnalysis(_CamelModel):
    overall_score: int = Field(default=0, ge=0, le=100)
    max_overall_score: Literal[100] = 100
    summary: str
    sections: list[SectionAssessment] = Field(default_factory=list)
    key_findings: KeyFindings = Field(default_factory=KeyFindings)
    job_alignment: JobAlignment = Field(default_factory=JobAlignment)


class JobRole(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(min_length=1, max_length=80)
    title: str = Field(min_length=1, max_length=120)
    category: RoleCategory
    common_skills: tuple[str, ...] = ()
