"""Conflict-of-interest classification for reviewer assignment"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from peermatch.schemas.enums import COISeverity, COIType, ConflictSeverity, ReviewerCOIState
from peermatch.schemas.matching import (
    COIOverride,
    COIStatus,
    ReviewerCOICheck,
    TeamCOICheckResult,
    TeamCOISummary,
)
from peermatch.schemas.reviewers import ConflictOfInterest, ReviewerCandidate
from peermatch.utils.labels import get_coi_reason

logger = logging.getLogger(__name__)

RECENT_REVIEW_COOLDOWN_YEARS = 2
FORMER_EMPLOYEE_COOLDOWN_YEARS = 3


@dataclass(frozen=True)
class COITypeConfig:
    description_en: str
    description_fr: str
    default_severity: COISeverity
    is_auto_detectable: bool


COI_TYPE_CONFIG: dict[COIType, COITypeConfig] = {
    COIType.HOME_ORGANIZATION: COITypeConfig(
        "Reviewer's current employer - cannot review their own organization",
        "Employeur actuel de l'évaluateur - ne peut pas évaluer sa propre organisation",
        COISeverity.HARD_BLOCK,
        True,
    ),
    COIType.FAMILY_RELATIONSHIP: COITypeConfig(
        "Immediate family member works at the organization",
        "Un membre de la famille immédiate travaille dans l'organisation",
        COISeverity.HARD_BLOCK,
        False,
    ),
    COIType.FORMER_EMPLOYEE: COITypeConfig(
        f"Worked at the organization within the last {FORMER_EMPLOYEE_COOLDOWN_YEARS} years",
        f"A travaillé dans l'organisation au cours des {FORMER_EMPLOYEE_COOLDOWN_YEARS} dernières années",
        COISeverity.SOFT_WARNING,
        False,
    ),
    COIType.BUSINESS_INTEREST: COITypeConfig(
        "Financial or consulting ties with the organization",
        "Liens financiers ou de conseil avec l'organisation",
        COISeverity.SOFT_WARNING,
        False,
    ),
    COIType.RECENT_REVIEW: COITypeConfig(
        f"Reviewed this organization within the {RECENT_REVIEW_COOLDOWN_YEARS}-year cooldown period",
        f"A évalué cette organisation au cours des {RECENT_REVIEW_COOLDOWN_YEARS} dernières années",
        COISeverity.SOFT_WARNING,
        True,
    ),
    COIType.OTHER: COITypeConfig(
        "Other declared conflict of interest",
        "Autre conflit d'intérêts déclaré",
        COISeverity.SOFT_WARNING,
        False,
    ),
    # Legacy types
    COIType.EMPLOYMENT: COITypeConfig(
        "Employment relationship with the organization",
        "Relation d'emploi avec l'organisation",
        COISeverity.SOFT_WARNING,
        False,
    ),
    COIType.FINANCIAL: COITypeConfig(
        "Financial interest in the organization",
        "Intérêt financier dans l'organisation",
        COISeverity.SOFT_WARNING,
        False,
    ),
    COIType.CONTRACTUAL: COITypeConfig(
        "Contractual relationship with the organization",
        "Relation contractuelle avec l'organisation",
        COISeverity.SOFT_WARNING,
        False,
    ),
    COIType.PERSONAL: COITypeConfig(
        "Personal relationship with organization staff",
        "Relation personnelle avec le personnel de l'organisation",
        COISeverity.SOFT_WARNING,
        False,
    ),
    COIType.PREVIOUS_REVIEW: COITypeConfig(
        "Previously reviewed the organization",
        "A déjà évalué l'organisation",
        COISeverity.SOFT_WARNING,
        False,
    ),
}

HARD_CONFLICT_TYPES = frozenset({COIType.HOME_ORGANIZATION, COIType.FAMILY_RELATIONSHIP})


def is_hard_conflict(coi_type: COIType) -> bool:
    return coi_type in HARD_CONFLICT_TYPES


def get_default_severity(coi_type: COIType) -> COISeverity:
    return COI_TYPE_CONFIG[coi_type].default_severity


def is_auto_detectable(coi_type: COIType) -> bool:
    return COI_TYPE_CONFIG[coi_type].is_auto_detectable


def can_override(severity: COISeverity) -> bool:
    """Only soft warnings may be waived"""
    return severity == COISeverity.SOFT_WARNING


def get_manual_coi_types() -> list[COIType]:
    """COI types a reviewer declares by hand"""
    return [coi_type for coi_type, config in COI_TYPE_CONFIG.items() if not config.is_auto_detectable]


def _conflict_status(coi_type: COIType) -> COIStatus:
    hard = is_hard_conflict(coi_type)
    return COIStatus(
        has_conflict=True,
        severity=ConflictSeverity.HARD if hard else ConflictSeverity.SOFT,
        type=coi_type,
        reason=get_coi_reason(coi_type, "en"),
        reason_fr=get_coi_reason(coi_type, "fr"),
        is_waivable=not hard,
    )


def check_coi(
    conflicts: Sequence[ConflictOfInterest] | Any,
    target_organization_id: str,
    home_organization_id: str,
) -> COIStatus:
    """
    Classify a reviewer's conflict against the target organization.

    The home organization is checked first and is always a hard, non-waivable
    conflict. Otherwise declared conflicts are scanned in order.
    """
    if home_organization_id == target_organization_id:
        return _conflict_status(COIType.HOME_ORGANIZATION)

    if not isinstance(conflicts, (list, tuple)):
        return COIStatus(has_conflict=False)

    # OPEN QUESTION for product owners: the first declared conflict against the
    # organization wins, not the most severe one. [FORMER_EMPLOYEE,
    # HOME_ORGANIZATION] therefore classifies as a soft conflict.
    for coi in conflicts:
        if coi.organization_id == target_organization_id:
            return _conflict_status(coi.coi_type)

    return COIStatus(has_conflict=False)


def _now_like(reference: datetime) -> datetime:
    now = datetime.now(timezone.utc)
    return now if reference.tzinfo is not None else now.replace(tzinfo=None)


def is_override_valid(override: COIOverride, now: datetime | None = None) -> bool:
    """Check if an override is valid (not expired, not revoked)"""
    if override.is_revoked:
        return False
    if override.expires_at is not None:
        current = now or _now_like(override.expires_at)
        if override.expires_at < current:
            return False
    return True


def find_active_override(
    overrides: Iterable[COIOverride],
    reviewer_profile_id: str,
    organization_id: str,
    now: datetime | None = None,
) -> COIOverride | None:
    """Most recently approved valid override for a reviewer and organization"""
    matching = [
        override for override in overrides
        if override.reviewer_profile_id == reviewer_profile_id
        and override.organization_id == organization_id
        and is_override_valid(override, now)
    ]
    if not matching:
        return None
    return max(matching, key=lambda override: override.approved_at)


def check_team_coi(
    candidates: Sequence[ReviewerCandidate],
    target_organization_id: str,
    overrides: Iterable[COIOverride] = (),
    now: datetime | None = None,
) -> TeamCOICheckResult:
    """Check COI for a proposed team against an organization"""
    overrides = list(overrides)
    reviewers: list[ReviewerCOICheck] = []
    blocked_ids: list[str] = []
    warning_ids: list[str] = []

    for candidate in candidates:
        status = check_coi(
            candidate.conflicts_of_interest,
            target_organization_id,
            candidate.home_organization_id,
        )
        active_override = None

        if not status.has_conflict:
            state = ReviewerCOIState.ELIGIBLE
        elif status.severity == ConflictSeverity.HARD:
            state = ReviewerCOIState.BLOCKED
            blocked_ids.append(candidate.id)
        else:
            active_override = find_active_override(overrides, candidate.id, target_organization_id, now)
            if active_override is not None:
                state = ReviewerCOIState.OVERRIDE_ACTIVE
            else:
                state = ReviewerCOIState.WARNING
                warning_ids.append(candidate.id)

        reviewers.append(ReviewerCOICheck(
            reviewer_profile_id=candidate.id,
            reviewer_name=candidate.full_name,
            status=state,
            coi_status=status,
            active_override=active_override,
        ))

    summary = TeamCOISummary(
        total=len(reviewers),
        eligible=sum(1 for r in reviewers if r.status == ReviewerCOIState.ELIGIBLE),
        blocked=len(blocked_ids),
        warning=len(warning_ids),
        override_active=sum(1 for r in reviewers if r.status == ReviewerCOIState.OVERRIDE_ACTIVE),
    )

    logger.info(
        f"Team COI check against {target_organization_id}: "
        f"{summary.blocked} blocked, {summary.warning} warnings of {summary.total}"
    )

    return TeamCOICheckResult(
        organization_id=target_organization_id,
        reviewers=reviewers,
        summary=summary,
        can_proceed=summary.blocked == 0,
        blocked_reviewer_ids=blocked_ids,
        warning_reviewer_ids=warning_ids,
    )
