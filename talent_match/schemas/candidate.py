"""Candidate profile supplied by the external candidate source."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WorkExperience(BaseModel):
    model_config = ConfigDict(frozen=True)

    company: str = Field(default="", description="Employer name")
    title: str = Field(default="", description="Role title")
    start_date: date = Field(..., description="First day in the role")
    end_date: Optional[date] = Field(default=None, description="Last day in the role; None while current")
    description: str = Field(default="", description="What the candidate did in the role")
    skills_used: List[str] = Field(default_factory=list, description="Skill tags for this role")


class Education(BaseModel):
    model_config = ConfigDict(frozen=True)

    institution: str = Field(default="", description="School or university")
    degree: str = Field(..., description="Degree or qualification earned")
    field_of_study: str = Field(default="", description="Major or field")


class CandidateProfile(BaseModel):
    """Read-only candidate record; discarded after scoring."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Candidate identifier")
    full_name: str = Field(default="", description="Display name")
    experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list, description="Flat skill list")
