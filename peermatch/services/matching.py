"""Reviewer matching: per-candidate scoring, eligibility and ranking"""

import logging
import time
from typing import Sequence

from peermatch.config import Settings, settings
from peermatch.schemas.enums import COIType, ConflictSeverity
from peermatch.schemas.matching import (
    AssignmentCheck,
    AvailabilityStatus,
    COIStatus,
    EligibilityResult,
    ExpertiseScoreResult,
    LanguageScoreResult,
    MatchingCriteria,
    MatchResult,
    ScoreBreakdown,
)
from peermatch.schemas.reviewers import ReviewerCandidate
from peermatch.services.coi import check_coi
from peermatch.services.scoring import (
    calculate_total_score,
    score_availability,
    score_expertise,
    score_experience,
    score_language,
)

logger = logging.getLogger(__name__)

HARD_COI_REASONS: dict[COIType, tuple[str, str]] = {
    COIType.HOME_ORGANIZATION: (
        "Works at target organization",
        "Travaille pour l'organisation cible",
    ),
    COIType.FAMILY_RELATIONSHIP: (
        "Has family member at target organization",
        "A un membre de la famille dans l'organisation cible",
    ),
    COIType.FORMER_EMPLOYEE: (
        "Former employee of target organization",
        "Ancien employé de l'organisation cible",
    ),
    COIType.RECENT_REVIEW: (
        "Recently reviewed this organization",
        "A récemment évalué cette organisation",
    ),
}
GENERIC_COI_REASON = (
    "Conflict of interest with target organization",
    "Conflit d'intérêts avec l'organisation cible",
)


def expertise_coverage(expertise: ExpertiseScoreResult) -> float:
    """Share of required areas matched; no requirements counts as full coverage"""
    total = len(expertise.matched_required) + len(expertise.missing_required)
    return len(expertise.matched_required) / total if total else 1.0


def determine_eligibility(
    coi_status: COIStatus,
    expertise: ExpertiseScoreResult,
    language: LanguageScoreResult,
    availability: AvailabilityStatus,
    config: Settings | None = None,
) -> EligibilityResult:
    """
    Determine if a reviewer is eligible for assignment.

    Rules apply in order and the first failure is reported. Soft conflicts
    never block eligibility.
    """
    config = config or settings

    if coi_status.has_conflict and coi_status.severity == ConflictSeverity.HARD:
        reason, reason_fr = HARD_COI_REASONS.get(coi_status.type, GENERIC_COI_REASON)
        return EligibilityResult(is_eligible=False, reason=reason, reason_fr=reason_fr)

    if expertise_coverage(expertise) < config.min_expertise_coverage:
        return EligibilityResult(
            is_eligible=False,
            reason="Insufficient expertise match",
            reason_fr="Expertise insuffisante",
        )

    if not language.can_conduct_review and language.missing_languages:
        return EligibilityResult(
            is_eligible=False,
            reason="Cannot conduct review in required languages",
            reason_fr="Ne peut pas effectuer la revue dans les langues requises",
        )

    if availability.coverage < config.min_availability_coverage:
        return EligibilityResult(
            is_eligible=False,
            reason="Unavailable during review period",
            reason_fr="Indisponible pendant la période de revue",
        )

    return EligibilityResult(is_eligible=True)


def _join(values) -> str:
    return ", ".join(value.value for value in values)


def calculate_match_score(
    candidate: ReviewerCandidate,
    criteria: MatchingCriteria,
    config: Settings | None = None,
) -> MatchResult:
    """Calculate the full match result for a single reviewer"""
    config = config or settings

    expertise = score_expertise(
        candidate.expertise_records,
        criteria.required_expertise,
        criteria.preferred_expertise,
        config=config,
    )
    language = score_language(candidate.languages, criteria.required_languages, config=config)
    availability = score_availability(
        candidate.availability_periods,
        criteria.review_start_date,
        criteria.review_end_date,
        config=config,
    )
    experience = score_experience(
        candidate.years_experience,
        candidate.reviews_completed,
        config=config,
    )
    total = calculate_total_score(expertise, language, availability, experience, config=config)

    coi_status = check_coi(
        candidate.conflicts_of_interest,
        criteria.target_organization_id,
        candidate.home_organization_id,
    )

    availability_status = AvailabilityStatus(
        is_available=availability.coverage >= config.low_availability_warning,
        available_days=availability.available_days,
        total_days=availability.total_days,
        coverage=availability.coverage,
        conflicts=availability.conflicts,
    )

    warnings: list[str] = []
    if coi_status.has_conflict:
        if coi_status.severity == ConflictSeverity.HARD:
            warnings.append(f"Hard COI: {coi_status.reason}")
        else:
            warnings.append(f"Soft COI: {coi_status.reason}")

    if expertise.missing_required:
        warnings.append(f"Missing expertise: {_join(expertise.missing_required)}")

    if language.missing_languages:
        warnings.append(f"Missing languages: {_join(language.missing_languages)}")

    if not availability_status.is_available:
        warnings.append(f"Low availability: {round(availability_status.coverage * 100)}%")

    if not language.can_conduct_review:
        warnings.append("Cannot conduct review in required languages")

    eligibility = determine_eligibility(coi_status, expertise, language, availability_status, config=config)

    logger.debug(
        f"Reviewer {candidate.id}: score={total.total_score}, "
        f"eligible={eligibility.is_eligible}"
    )

    return MatchResult(
        reviewer_id=candidate.user_id,
        reviewer_profile_id=candidate.id,
        full_name=candidate.full_name,
        organization=candidate.organization_label,
        organization_id=candidate.home_organization_id,
        score=total.total_score,
        max_score=total.max_possible_score,
        percentage=total.percentage,
        breakdown=ScoreBreakdown(
            expertise_score=total.expertise_score,
            language_score=total.language_score,
            availability_score=total.availability_score,
            experience_score=total.experience_score,
        ),
        expertise_details=expertise,
        language_details=language,
        availability_details=availability,
        experience_details=experience,
        coi_status=coi_status,
        availability_status=availability_status,
        warnings=warnings,
        is_eligible=eligibility.is_eligible,
        ineligibility_reason=eligibility.reason,
        ineligibility_reason_fr=eligibility.reason_fr,
        is_lead_qualified=candidate.is_lead_qualified,
        reviews_completed=candidate.reviews_completed,
    )


def find_matching_reviewers(
    criteria: MatchingCriteria,
    candidates: Sequence[ReviewerCandidate],
    config: Settings | None = None,
) -> list[MatchResult]:
    """
    Find and rank all matching reviewers for the given criteria.

    Excluded reviewers and reviewers from the target organization are dropped
    before scoring. Eligible reviewers come first, then by descending score.
    """
    start_time = time.time()
    excluded = set(criteria.exclude_reviewer_ids)

    results: list[MatchResult] = []
    for candidate in candidates:
        if candidate.id in excluded:
            continue
        if candidate.home_organization_id == criteria.target_organization_id:
            continue
        results.append(calculate_match_score(candidate, criteria, config=config))

    ranked = sorted(results, key=lambda r: (not r.is_eligible, -r.score))

    processing_time_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Matched {len(ranked)} of {len(candidates)} reviewers for "
        f"{criteria.target_organization_id} in {processing_time_ms:.2f}ms, "
        f"{sum(1 for r in ranked if r.is_eligible)} eligible"
    )
    return ranked


def filter_by_min_score(candidates: Sequence[MatchResult], min_score: float) -> list[MatchResult]:
    return [c for c in candidates if c.score >= min_score]


def filter_eligible_only(candidates: Sequence[MatchResult]) -> list[MatchResult]:
    return [c for c in candidates if c.is_eligible]


def get_top_candidates(candidates: Sequence[MatchResult], limit: int) -> list[MatchResult]:
    return list(candidates[:max(limit, 0)])


def can_assign_reviewer(
    candidate: ReviewerCandidate,
    criteria: MatchingCriteria,
    config: Settings | None = None,
) -> AssignmentCheck:
    """Check if a specific reviewer can be assigned to a review"""
    result = calculate_match_score(candidate, criteria, config=config)
    return AssignmentCheck(can_assign=result.is_eligible, reasons=result.warnings)
