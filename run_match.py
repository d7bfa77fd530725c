"""Rank candidates for one job from the command line.

Use: python run_match.py job.json candidates.jsonl [--threshold 0.7] [--max-results 10] [--refresh]
"""
import argparse
import asyncio
import json
import sys

from talent_match import MatchingDeadlineExceeded, MatchingUnavailable, MatchOptions, build_orchestrator
from talent_match.schemas.job import Job
from talent_match.services.candidate_source import JsonlCandidateSource


async def _run(args: argparse.Namespace) -> int:
    with open(args.job, "r", encoding="utf-8") as fh:
        job = Job(**json.load(fh))
    overrides = {"force_refresh": args.refresh}
    if args.threshold is not None:
        overrides["threshold"] = args.threshold
    if args.max_results is not None:
        overrides["max_results"] = args.max_results

    orchestrator = build_orchestrator(JsonlCandidateSource(args.candidates), provider=args.provider)
    try:
        matches = await orchestrator.find_matches(job, MatchOptions(**overrides), timeout=args.timeout)
    except MatchingUnavailable as e:
        print(f"Matching unavailable: {e}", file=sys.stderr)
        return 2
    except MatchingDeadlineExceeded as e:
        print(f"Matching timed out: {e}", file=sys.stderr)
        return 3

    for rank, m in enumerate(matches, 1):
        print(
            f"{rank:>3}. {m.candidate_id:<24} score={m.score:.3f} skills={m.skill_match:.2f} "
            f"exp={m.experience_match:.2f} edu={m.education_match:.2f} "
            f"desc={m.description_match:.3f} conf={m.confidence:.2f}"
        )
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Rank candidates for a job posting.")
    parser.add_argument("job", help="Path to a job JSON file")
    parser.add_argument("candidates", help="Path to a JSON-lines candidate file")
    parser.add_argument("--threshold", type=float, default=None)
    parser.add_argument("--max-results", type=int, default=None)
    parser.add_argument("--timeout", type=float, default=None, help="Deadline for the whole batch, seconds")
    parser.add_argument("--provider", default=None, help="openai | http | sentence_transformers")
    parser.add_argument("--refresh", action="store_true", help="Bypass the result cache")
    return asyncio.run(_run(parser.parse_args()))


if __name__ == "__main__":
    sys.exit(main())
