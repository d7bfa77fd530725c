"""Ranking: similarity, structured scoring, composite scoring and the matching orchestrator."""

from .match_scorer import MatchScorer
from .orchestrator import MatchingOrchestrator, build_orchestrator, rank_matches
from .similarity import calculate_similarity
from .structured_scorer import education_match_score, experience_match_score, skill_match_score

__all__ = [
    "MatchScorer",
    "MatchingOrchestrator",
    "build_orchestrator",
    "rank_matches",
    "calculate_similarity",
    "skill_match_score",
    "experience_match_score",
    "education_match_score",
]
