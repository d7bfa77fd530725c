"""Composite job-candidate score from structured sub-scores and embedding similarity."""

from datetime import date
from typing import Callable, Iterable, Optional

from talent_match.ranking.structured_scorer import (
    education_match_score,
    experience_match_score,
    skill_match_score,
)
from talent_match.schemas.candidate import CandidateProfile
from talent_match.schemas.job import Job
from talent_match.schemas.match import CandidateMatch, MatchWeightings, SimilarityResult
from talent_match.utils.date_parser import today


class MatchScorer:
    """
    score = skills * w.skills + experience * w.experience
            + education * w.education + similarity * w.description

    Weights are applied as given. A weighting that does not sum to 1.0 is the
    caller's choice and can move scores outside [0, 1].
    """

    def __init__(self, clock: Callable[[], date] = today) -> None:
        self._clock = clock

    def score(
        self,
        job: Job,
        candidate: CandidateProfile,
        similarity: SimilarityResult,
        weights: MatchWeightings,
        required_skills: Optional[Iterable[str]] = None,
    ) -> CandidateMatch:
        if required_skills is None:
            required_skills = job.requirements.required_skills
        skill_match = skill_match_score(required_skills, candidate.skills)
        experience_match = experience_match_score(
            job.requirements.years_experience, candidate.experience, now=self._clock()
        )
        education_match = education_match_score(job.requirements.qualifications, candidate.education)

        composite = (
            skill_match * weights.skills
            + experience_match * weights.experience
            + education_match * weights.education
            + similarity.score * weights.description
        )
        return CandidateMatch(
            candidate_id=candidate.id,
            score=composite,
            skill_match=skill_match,
            experience_match=experience_match,
            education_match=education_match,
            description_match=similarity.score,
            confidence=similarity.confidence,
        )
