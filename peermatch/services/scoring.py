"""Dimension scoring for reviewer matching

Four independent scorers (expertise, language, availability, experience)
whose maxima sum to 100 under the default programme settings.
"""

import logging
from datetime import date, timedelta
from typing import Sequence

from peermatch.config import Settings, settings
from peermatch.schemas.enums import (
    AvailabilityType,
    ExpertiseArea,
    Language,
    LanguageProficiency,
    ProficiencyLevel,
)
from peermatch.schemas.matching import (
    AvailabilityScoreResult,
    ExperienceScoreResult,
    ExpertiseScoreResult,
    LanguageScoreResult,
    TotalScoreBreakdown,
)
from peermatch.schemas.reviewers import AvailabilityPeriod, ExpertiseRecord, LanguageRecord

logger = logging.getLogger(__name__)

PROFICIENCY_MULTIPLIERS: dict[ProficiencyLevel, float] = {
    ProficiencyLevel.BASIC: 0.6,
    ProficiencyLevel.COMPETENT: 0.8,
    ProficiencyLevel.PROFICIENT: 1.0,
    ProficiencyLevel.EXPERT: 1.2,
}

LANGUAGE_PROFICIENCY_BONUS: dict[LanguageProficiency, float] = {
    LanguageProficiency.BASIC: 0.25,
    LanguageProficiency.INTERMEDIATE: 0.5,
    LanguageProficiency.ADVANCED: 0.8,
    LanguageProficiency.NATIVE: 1.0,
}

# Minimum proficiency to lead interviews in a language
REVIEW_CAPABLE_PROFICIENCIES = frozenset({
    LanguageProficiency.INTERMEDIATE,
    LanguageProficiency.ADVANCED,
    LanguageProficiency.NATIVE,
})

# Share of a language's points: base, proficiency, interviews
LANGUAGE_BASE_SHARE = 0.6
LANGUAGE_PROFICIENCY_SHARE = 0.25
LANGUAGE_INTERVIEW_SHARE = 0.15

DAY_WEIGHTS: dict[AvailabilityType, float] = {
    AvailabilityType.AVAILABLE: 1.0,
    AvailabilityType.TENTATIVE: 0.5,
    AvailabilityType.UNAVAILABLE: 0.0,
    AvailabilityType.ON_ASSIGNMENT: 0.0,
}


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(value, upper))


def score_expertise(
    reviewer_expertise: Sequence[ExpertiseRecord],
    required: Sequence[ExpertiseArea],
    preferred: Sequence[ExpertiseArea] = (),
    config: Settings | None = None,
) -> ExpertiseScoreResult:
    """
    Score reviewer expertise against required and preferred areas.

    Required areas share the required pool evenly and preferred areas (not
    already required) share the preferred pool; each matched area earns its
    share times the proficiency multiplier. Both pools and the total are capped.
    """
    config = config or settings
    max_score = config.expertise_max_score

    if not required:
        return ExpertiseScoreResult(score=max_score, max_score=max_score)

    levels = {record.area: record.proficiency_level for record in reviewer_expertise}

    matched_required: list[ExpertiseArea] = []
    missing_required: list[ExpertiseArea] = []
    required_score = 0.0
    points_per_required = config.expertise_required_points / len(required)

    for area in required:
        level = levels.get(area)
        if level is None:
            missing_required.append(area)
            continue
        matched_required.append(area)
        required_score += points_per_required * PROFICIENCY_MULTIPLIERS[level]

    required_score = min(required_score, config.expertise_required_points)

    matched_preferred: list[ExpertiseArea] = []
    preferred_score = 0.0
    extra_areas = [area for area in preferred if area not in required]

    if extra_areas:
        points_per_preferred = config.expertise_preferred_points / len(extra_areas)
        for area in extra_areas:
            level = levels.get(area)
            if level is None:
                continue
            matched_preferred.append(area)
            preferred_score += points_per_preferred * PROFICIENCY_MULTIPLIERS[level]

    preferred_score = min(preferred_score, config.expertise_preferred_points)
    total = _clamp(required_score + preferred_score, max_score)

    return ExpertiseScoreResult(
        score=round(total, 1),
        max_score=max_score,
        matched_required=matched_required,
        matched_preferred=matched_preferred,
        missing_required=missing_required,
    )


def score_language(
    reviewer_languages: Sequence[LanguageRecord],
    required: Sequence[Language],
    config: Settings | None = None,
) -> LanguageScoreResult:
    """
    Score reviewer language proficiency against required languages.

    Each required language is worth an even share: 60% for speaking it,
    25% scaled by proficiency and 15% if the reviewer conducts interviews in it.
    """
    config = config or settings
    max_score = config.language_max_score

    if not required:
        return LanguageScoreResult(score=max_score, max_score=max_score, can_conduct_review=True)

    spoken = {record.language: record for record in reviewer_languages}
    points_per_language = max_score / len(required)

    matched: list[Language] = []
    missing: list[Language] = []
    total = 0.0
    can_conduct_review = True

    for language in required:
        record = spoken.get(language)
        if record is None:
            missing.append(language)
            can_conduct_review = False
            continue

        matched.append(language)
        points = points_per_language * LANGUAGE_BASE_SHARE
        points += (
            points_per_language * LANGUAGE_PROFICIENCY_SHARE
            * LANGUAGE_PROFICIENCY_BONUS[record.proficiency]
        )
        if record.can_conduct_interviews:
            points += points_per_language * LANGUAGE_INTERVIEW_SHARE
        total += points

        if record.proficiency not in REVIEW_CAPABLE_PROFICIENCIES:
            can_conduct_review = False

    return LanguageScoreResult(
        score=round(_clamp(total, max_score), 1),
        max_score=max_score,
        matched_languages=matched,
        missing_languages=missing,
        can_conduct_review=can_conduct_review,
    )


def _iter_days(start: date, end: date):
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def score_availability(
    availability_periods: Sequence[AvailabilityPeriod],
    start_date: date,
    end_date: date,
    config: Settings | None = None,
) -> AvailabilityScoreResult:
    """
    Score reviewer availability over the inclusive review window.

    Days default to unavailable; periods are overlaid in input order, so a
    later period overwrites earlier ones on shared days.
    """
    config = config or settings
    max_score = config.availability_max_score

    total_days = (end_date - start_date).days + 1
    if total_days <= 0:
        logger.debug(f"Invalid review window {start_date} - {end_date}")
        return AvailabilityScoreResult(
            score=0,
            max_score=max_score,
            available_days=0,
            total_days=0,
            coverage=0,
            conflicts=["Invalid date range"],
        )

    day_status = {day: AvailabilityType.UNAVAILABLE for day in _iter_days(start_date, end_date)}
    conflicts: list[str] = []

    for period in availability_periods:
        if period.end_date < start_date or period.start_date > end_date:
            continue

        overlap_start = max(period.start_date, start_date)
        overlap_end = min(period.end_date, end_date)
        for day in _iter_days(overlap_start, overlap_end):
            day_status[day] = period.availability_type

        if period.availability_type == AvailabilityType.ON_ASSIGNMENT and period.notes:
            conflicts.append(period.notes)

    weighted_days = sum(DAY_WEIGHTS[status] for status in day_status.values())
    coverage = weighted_days / total_days

    return AvailabilityScoreResult(
        score=round(_clamp(coverage * max_score, max_score), 1),
        max_score=max_score,
        available_days=round(weighted_days, 1),
        total_days=total_days,
        coverage=round(coverage, 2),
        conflicts=list(dict.fromkeys(conflicts)),
    )


def _ramp(value: float, low: float, high: float, low_points: float, high_points: float) -> float:
    """Linear interpolation of points between two thresholds"""
    return low_points + (value - low) / (high - low) * (high_points - low_points)


def score_experience(
    years_in_aviation: float,
    reviews_completed: int,
    config: Settings | None = None,
) -> ExperienceScoreResult:
    """
    Score reviewer experience.

    Years: nothing below the programme minimum, 1 -> 3 points up to ten years,
    3 -> 5 points up to fifteen. Reviews: half a point each below the lead
    threshold, 1 -> 3 points up to five reviews, 3 -> 5 points up to ten.
    """
    config = config or settings
    max_score = config.experience_max_score
    min_years = config.min_years_experience
    min_reviews = config.min_reviews_for_lead

    if years_in_aviation >= 15:
        years_bonus = 5.0
    elif years_in_aviation >= 10:
        years_bonus = _ramp(years_in_aviation, 10, 15, 3, 5)
    elif years_in_aviation >= min_years:
        years_bonus = _ramp(years_in_aviation, min_years, 10, 1, 3)
    else:
        years_bonus = 0.0

    if reviews_completed >= 10:
        reviews_bonus = 5.0
    elif reviews_completed >= 5:
        reviews_bonus = _ramp(reviews_completed, 5, 10, 3, 5)
    elif reviews_completed >= min_reviews:
        reviews_bonus = _ramp(reviews_completed, min_reviews, 5, 1, 3)
    else:
        reviews_bonus = reviews_completed * 0.5

    years_bonus = _clamp(years_bonus, 5)
    reviews_bonus = _clamp(reviews_bonus, 5)

    return ExperienceScoreResult(
        score=round(_clamp(years_bonus + reviews_bonus, max_score), 1),
        max_score=max_score,
        years_bonus=round(years_bonus, 1),
        reviews_bonus=round(reviews_bonus, 1),
    )


def calculate_total_score(
    expertise: ExpertiseScoreResult,
    language: LanguageScoreResult,
    availability: AvailabilityScoreResult,
    experience: ExperienceScoreResult,
    config: Settings | None = None,
) -> TotalScoreBreakdown:
    """Sum the pre-weighted dimension scores into the 0-100 scale"""
    config = config or settings
    max_possible = config.max_total_score
    total = expertise.score + language.score + availability.score + experience.score

    return TotalScoreBreakdown(
        expertise_score=expertise.score,
        language_score=language.score,
        availability_score=availability.score,
        experience_score=experience.score,
        total_score=round(total, 1),
        max_possible_score=max_possible,
        percentage=round(total / max_possible * 100) if max_possible else 0,
    )
