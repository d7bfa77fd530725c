"""Structured match ratios: skills, experience and education, each in [0, 1]."""

from datetime import date
from typing import Iterable, Optional

from talent_match.schemas.candidate import Education, WorkExperience
from talent_match.utils.date_parser import total_experience_years
from talent_match.utils.helpers import normalize_terms


def skill_match_score(required_skills: Iterable[str], candidate_skills: Iterable[str]) -> float:
    """Share of required skills the candidate has. No requirement is trivially satisfied."""
    required = normalize_terms(required_skills)
    if not required:
        return 1.0
    return len(required & normalize_terms(candidate_skills)) / len(required)


def experience_match_score(
    required_years: float,
    experience: Iterable[WorkExperience],
    now: Optional[date] = None,
) -> float:
    """Candidate years over required years, capped at 1.0; 1.0 when nothing is required."""
    if required_years <= 0:
        return 1.0
    return min(total_experience_years(experience, now) / required_years, 1.0)


def education_match_score(required_qualifications: Iterable[str], education: Iterable[Education]) -> float:
    """Share of required qualifications held by the candidate, same empty policy as skills."""
    required = normalize_terms(required_qualifications)
    if not required:
        return 1.0
    return len(required & normalize_terms(e.degree for e in education)) / len(required)
