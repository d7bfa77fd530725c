from datetime import date

import pytest

from talent_match.ranking.structured_scorer import (
    education_match_score,
    experience_match_score,
    skill_match_score,
)
from talent_match.schemas.candidate import Education, WorkExperience

NOW = date(2024, 1, 1)


class TestSkillMatch:
    def test_full_match(self):
        assert skill_match_score(["React", "TypeScript"], ["React", "TypeScript", "Node.js"]) == 1.0

    def test_partial_match(self):
        assert skill_match_score(["React", "TypeScript", "GraphQL", "CSS"], ["react", "css"]) == 0.5

    def test_case_and_whitespace_insensitive(self):
        assert skill_match_score(["  Python "], ["PYTHON"]) == 1.0

    def test_empty_requirements_trivially_satisfied(self):
        assert skill_match_score([], ["Cobol"]) == 1.0
        assert skill_match_score([], []) == 1.0

    def test_no_overlap(self):
        assert skill_match_score(["Go"], ["Rust"]) == 0.0

    def test_duplicate_candidate_skills_do_not_exceed_one(self):
        assert skill_match_score(["Go"], ["Go", "go", "GO"]) == 1.0


class TestExperienceMatch:
    def test_ratio_of_years(self):
        exp = [WorkExperience(start_date=date(2021, 1, 1), end_date=date(2022, 1, 1))]
        assert experience_match_score(4, exp, now=NOW) == pytest.approx(0.25)

    def test_capped_at_one(self):
        exp = [WorkExperience(start_date=date(2010, 1, 1), end_date=None)]
        assert experience_match_score(3, exp, now=NOW) == 1.0

    def test_open_ended_role_runs_until_now(self):
        exp = [WorkExperience(start_date=date(2022, 1, 1), end_date=None)]
        assert experience_match_score(4, exp, now=NOW) == pytest.approx(730 / 365 / 4)

    def test_sums_entries(self):
        exp = [
            WorkExperience(start_date=date(2018, 1, 1), end_date=date(2019, 1, 1)),
            WorkExperience(start_date=date(2020, 1, 1), end_date=date(2021, 1, 1)),
        ]
        assert experience_match_score(4, exp, now=NOW) == pytest.approx((365 + 366) / 365 / 4)

    def test_zero_required_years(self):
        assert experience_match_score(0, [], now=NOW) == 1.0

    def test_no_experience(self):
        assert experience_match_score(2, [], now=NOW) == 0.0

    def test_inverted_dates_count_as_zero(self):
        exp = [WorkExperience(start_date=date(2023, 1, 1), end_date=date(2020, 1, 1))]
        assert experience_match_score(2, exp, now=NOW) == 0.0


class TestEducationMatch:
    def test_match(self):
        edu = [Education(degree="BSc Computer Science"), Education(degree="MBA")]
        assert education_match_score(["bsc computer science"], edu) == 1.0

    def test_half(self):
        assert education_match_score(["PhD", "MSc"], [Education(degree="MSc")]) == 0.5

    def test_empty_requirements(self):
        assert education_match_score([], []) == 1.0
