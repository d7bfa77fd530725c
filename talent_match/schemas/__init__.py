"""Schema exports."""

from .candidate import CandidateProfile, Education, WorkExperience
from .job import ExperienceLevel, Job, JobRequirements
from .match import CandidateMatch, MatchOptions, MatchWeightings, SimilarityResult

__all__ = [
    "CandidateMatch",
    "CandidateProfile",
    "Education",
    "ExperienceLevel",
    "Job",
    "JobRequirements",
    "MatchOptions",
    "MatchWeightings",
    "SimilarityResult",
    "WorkExperience",
]
