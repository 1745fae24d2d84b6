"""Pytest configuration and fixtures"""

from datetime import date
from typing import Any, Callable

import pytest

from peermatch.config import Settings
from peermatch.schemas.enums import (
    AvailabilityType,
    ExpertiseArea,
    Language,
    LanguageProficiency,
    ProficiencyLevel,
)
from peermatch.schemas.matching import (
    AvailabilityScoreResult,
    AvailabilityStatus,
    COIStatus,
    ExperienceScoreResult,
    ExpertiseScoreResult,
    LanguageScoreResult,
    MatchingCriteria,
    MatchResult,
    ScoreBreakdown,
)
from peermatch.schemas.reviewers import (
    AvailabilityPeriod,
    ExpertiseRecord,
    HomeOrganization,
    LanguageRecord,
    ReviewerCandidate,
    ReviewerUser,
)

REVIEW_START = date(2026, 3, 2)
REVIEW_END = date(2026, 3, 6)


@pytest.fixture
def config() -> Settings:
    """Default programme settings, independent of the environment"""
    return Settings(_env_file=None)


@pytest.fixture
def criteria_factory() -> Callable[..., MatchingCriteria]:
    """Build matching criteria with sensible defaults"""

    def _make(**overrides: Any) -> MatchingCriteria:
        data = {
            "target_organization_id": "org_target",
            "required_expertise": [ExpertiseArea.ATS],
            "required_languages": [Language.EN],
            "review_start_date": REVIEW_START,
            "review_end_date": REVIEW_END,
            "team_size": 3,
        }
        data.update(overrides)
        return MatchingCriteria(**data)

    return _make


@pytest.fixture
def criteria(criteria_factory) -> MatchingCriteria:
    return criteria_factory()


@pytest.fixture
def candidate_factory() -> Callable[..., ReviewerCandidate]:
    """Build a reviewer who fully satisfies the default criteria"""

    def _make(profile_id: str = "rp_1", **overrides: Any) -> ReviewerCandidate:
        data = {
            "id": profile_id,
            "user_id": f"user_{profile_id}",
            "user": ReviewerUser(first_name="Amina", last_name="Diallo"),
            "home_organization_id": "org_home",
            "home_organization": HomeOrganization(name_en="ASECNA", organization_code="ASC"),
            "years_experience": 15,
            "reviews_completed": 10,
            "is_lead_qualified": False,
            "expertise_records": [
                ExpertiseRecord(area=ExpertiseArea.ATS, proficiency_level=ProficiencyLevel.PROFICIENT),
            ],
            "languages": [
                LanguageRecord(
                    language=Language.EN,
                    proficiency=LanguageProficiency.NATIVE,
                    can_conduct_interviews=True,
                ),
            ],
            "availability_periods": [
                AvailabilityPeriod(
                    start_date=REVIEW_START,
                    end_date=REVIEW_END,
                    availability_type=AvailabilityType.AVAILABLE,
                ),
            ],
            "conflicts_of_interest": [],
        }
        data.update(overrides)
        return ReviewerCandidate(**data)

    return _make


@pytest.fixture
def match_factory() -> Callable[..., MatchResult]:
    """Build match results directly, for exercising team assembly in isolation"""

    def _make(
        profile_id: str,
        score: float,
        expertise: list[ExpertiseArea] = (),
        languages: list[Language] = (),
        is_lead_qualified: bool = False,
        is_eligible: bool = True,
        preferred: list[ExpertiseArea] = (),
    ) -> MatchResult:
        return MatchResult(
            reviewer_id=f"user_{profile_id}",
            reviewer_profile_id=profile_id,
            full_name=f"Reviewer {profile_id}",
            organization="Org",
            organization_id=f"org_{profile_id}",
            score=score,
            max_score=100,
            percentage=round(score),
            breakdown=ScoreBreakdown(
                expertise_score=0, language_score=0, availability_score=0, experience_score=0,
            ),
            expertise_details=ExpertiseScoreResult(
                score=0,
                max_score=40,
                matched_required=list(expertise),
                matched_preferred=list(preferred),
            ),
            language_details=LanguageScoreResult(
                score=0,
                max_score=25,
                matched_languages=list(languages),
                can_conduct_review=True,
            ),
            availability_details=AvailabilityScoreResult(
                score=25, max_score=25, available_days=5, total_days=5, coverage=1.0,
            ),
            experience_details=ExperienceScoreResult(
                score=0, max_score=10, years_bonus=0, reviews_bonus=0,
            ),
            coi_status=COIStatus(has_conflict=False),
            availability_status=AvailabilityStatus(
                is_available=True, available_days=5, total_days=5, coverage=1.0,
            ),
            is_eligible=is_eligible,
            ineligibility_reason=None if is_eligible else "Insufficient expertise match",
            is_lead_qualified=is_lead_qualified,
            reviews_completed=3,
        )

    return _make
