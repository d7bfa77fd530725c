"""Job posting schema as read from the job store at match time."""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ExperienceLevel(str, Enum):
    ENTRY = "ENTRY"
    JUNIOR = "JUNIOR"
    MID = "MID"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    EXECUTIVE = "EXECUTIVE"


class JobRequirements(BaseModel):
    """Structured requirements of a job posting. Every set may be empty."""

    model_config = ConfigDict(frozen=True)

    experience_level: ExperienceLevel = Field(default=ExperienceLevel.MID, description="Seniority of the role")
    years_experience: float = Field(default=0, ge=0, description="Minimum years of relevant experience")
    required_skills: List[str] = Field(default_factory=list, description="Skills a candidate must have")
    preferred_skills: List[str] = Field(default_factory=list, description="Nice-to-have skills")
    qualifications: List[str] = Field(default_factory=list, description="Required degrees or qualifications")
    responsibilities: List[str] = Field(default_factory=list, description="Duties of the role")


class Job(BaseModel):
    """Job posting; immutable for the duration of one matching call."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Job identifier")
    title: str = Field(default="", description="Job title")
    description: str = Field(default="", description="Free-text job description")
    creator_id: str = Field(default="", description="Recruiter who posted the job")
    requirements: JobRequirements = Field(default_factory=JobRequirements)
    skills: List[str] = Field(default_factory=list, description="Flat skill list used for embedding text")
