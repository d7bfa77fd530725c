"""Match options, similarity results and per-candidate match records."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from talent_match.config import DEFAULT_WEIGHTINGS, MATCH_MAX_RESULTS, MATCH_SIMILARITY_THRESHOLD


class MatchWeightings(BaseModel):
    """Coefficients of the composite score.

    They should sum to 1.0 but this is not enforced: a weighting that sums to
    more than 1 can push composite scores above 1.
    """

    model_config = ConfigDict(frozen=True)

    skills: float = Field(default=DEFAULT_WEIGHTINGS["skills"])
    experience: float = Field(default=DEFAULT_WEIGHTINGS["experience"])
    education: float = Field(default=DEFAULT_WEIGHTINGS["education"])
    description: float = Field(default=DEFAULT_WEIGHTINGS["description"])


class MatchOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold: float = Field(
        default=MATCH_SIMILARITY_THRESHOLD, ge=0, le=1, description="Minimum composite score to keep a match"
    )
    max_results: int = Field(default=MATCH_MAX_RESULTS, gt=0, description="Maximum number of matches returned")
    weightings: MatchWeightings = Field(default_factory=MatchWeightings)
    required_skills: Optional[List[str]] = Field(
        default=None, description="Overrides the job's required skills for skill matching"
    )
    force_refresh: bool = Field(default=False, description="Bypass the result cache")


class SimilarityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float
    confidence: float
    cosine: float
    euclidean_normalized: float


class CandidateMatch(BaseModel):
    """Scored (job, candidate) pair."""

    model_config = ConfigDict(frozen=True)

    candidate_id: str
    score: float = Field(..., description="Weighted composite score")
    skill_match: float
    experience_match: float
    education_match: float
    description_match: float = Field(..., description="Embedding similarity score")
    confidence: float
