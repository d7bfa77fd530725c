"""Candidate sources: lazy, finite streams of candidate profiles for a job."""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Optional, Union

from pydantic import ValidationError

from talent_match.schemas.candidate import CandidateProfile
from talent_match.utils.logger import get_logger

logger = get_logger(__name__)


class CandidateSource(ABC):
    """Read-only provider of candidates scoped to a job."""

    @abstractmethod
    def iter_candidates(self, job_id: str) -> AsyncIterator[CandidateProfile]:
        """Yield candidates for job_id one at a time; callers pull at their own pace."""
        ...


class InMemoryCandidateSource(CandidateSource):
    """Candidates held in memory, optionally scoped per job id."""

    def __init__(
        self,
        candidates: Iterable[CandidateProfile] = (),
        by_job: Optional[dict] = None,
    ) -> None:
        self._candidates: List[CandidateProfile] = list(candidates)
        self._by_job: dict = dict(by_job or {})

    async def iter_candidates(self, job_id: str) -> AsyncIterator[CandidateProfile]:
        pool = self._by_job.get(job_id, self._candidates)
        for candidate in pool:
            yield candidate
            await asyncio.sleep(0)


class JsonlCandidateSource(CandidateSource):
    """
    Stream candidates from a JSON-lines file, one profile object per line.
    A line may carry "job_ids": [...] to restrict it to those jobs; lines
    without it apply to every job. Invalid lines are logged and skipped.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)

    async def iter_candidates(self, job_id: str) -> AsyncIterator[CandidateProfile]:
        with self._path.open("r", encoding="utf-8") as fh:
            for line_no, line in enumerate(fh, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                    job_ids = record.pop("job_ids", None)
                    if job_ids is not None and job_id not in job_ids:
                        continue
                    candidate = CandidateProfile(**record)
                except (json.JSONDecodeError, ValidationError, TypeError, AttributeError) as e:
                    logger.warning("Skipping invalid candidate at %s:%s: %s", self._path.name, line_no, e)
                    continue
                yield candidate
                await asyncio.sleep(0)
