"""Greedy review-team assembly from ranked match results"""

import logging
from typing import Sequence

from peermatch.config import Settings, settings
from peermatch.schemas.enums import ExpertiseArea, Language, TeamBalance
from peermatch.schemas.matching import CoverageReport, MatchingCriteria, MatchResult, TeamBuildResult

logger = logging.getLogger(__name__)


def _team_coverage(team: Sequence[MatchResult]) -> tuple[set[ExpertiseArea], set[Language], bool]:
    expertise: set[ExpertiseArea] = set()
    languages: set[Language] = set()
    for member in team:
        expertise.update(member.expertise_details.matched_required)
        languages.update(member.language_details.matched_languages)
    return expertise, languages, any(member.is_lead_qualified for member in team)


def incremental_value(
    candidate: MatchResult,
    team: Sequence[MatchResult],
    config: Settings | None = None,
) -> float:
    """Value a candidate adds to the current team's coverage"""
    config = config or settings
    covered_expertise, covered_languages, has_lead = _team_coverage(team)

    value = 0.0
    for area in candidate.expertise_details.matched_required:
        if area not in covered_expertise:
            value += config.new_expertise_value
    for language in candidate.language_details.matched_languages:
        if language not in covered_languages:
            value += config.new_language_value
    if not has_lead and candidate.is_lead_qualified:
        value += config.lead_qualified_value
    return value


def select_next_team_member(
    team: Sequence[MatchResult],
    pool: Sequence[MatchResult],
    config: Settings | None = None,
) -> tuple[MatchResult, float] | None:
    """Pick the pool candidate with the best combined score; ties keep pool order"""
    config = config or settings
    best: MatchResult | None = None
    best_score = float("-inf")

    for candidate in pool:
        combined = (
            config.team_base_score_weight * candidate.score
            + config.team_coverage_weight * incremental_value(candidate, team, config)
        )
        if combined > best_score:
            best, best_score = candidate, combined

    if best is None:
        return None
    return best, best_score


def generate_coverage_report(
    team: Sequence[MatchResult],
    required_expertise: Sequence[ExpertiseArea],
    required_languages: Sequence[Language],
) -> CoverageReport:
    covered_expertise: list[ExpertiseArea] = []
    covered_languages: list[Language] = []
    for member in team:
        for area in [*member.expertise_details.matched_required, *member.expertise_details.matched_preferred]:
            if area not in covered_expertise:
                covered_expertise.append(area)
        for language in member.language_details.matched_languages:
            if language not in covered_languages:
                covered_languages.append(language)
    has_lead = any(member.is_lead_qualified for member in team)

    expertise_missing = [area for area in required_expertise if area not in covered_expertise]
    languages_missing = [lang for lang in required_languages if lang not in covered_languages]

    expertise_ratio = (
        (len(required_expertise) - len(expertise_missing)) / len(required_expertise)
        if required_expertise else 1.0
    )
    language_ratio = (
        (len(required_languages) - len(languages_missing)) / len(required_languages)
        if required_languages else 1.0
    )

    balance = TeamBalance.GOOD
    if expertise_ratio < 0.8 or language_ratio < 1 or not has_lead:
        balance = TeamBalance.FAIR
    if expertise_ratio < 0.5 or language_ratio < 0.5:
        balance = TeamBalance.POOR

    return CoverageReport(
        expertise_covered=covered_expertise,
        expertise_missing=expertise_missing,
        expertise_coverage=round(expertise_ratio, 2),
        languages_covered=covered_languages,
        languages_missing=languages_missing,
        language_coverage=round(language_ratio, 2),
        has_lead_qualified=has_lead,
        team_balance=balance,
    )


def check_team_viability(
    team: Sequence[MatchResult],
    coverage: CoverageReport,
    required_size: int,
    config: Settings | None = None,
) -> bool:
    config = config or settings
    if len(team) < config.min_team_size:
        return False
    if len(team) < required_size * config.min_team_size_ratio:
        return False
    if coverage.expertise_coverage < 0.5:
        return False
    return coverage.language_coverage >= 0.5


def build_optimal_team(
    criteria: MatchingCriteria,
    candidates: Sequence[MatchResult],
    config: Settings | None = None,
) -> TeamBuildResult:
    """
    Build a review team from ranked candidates.

    Must-include reviewers are seeded first regardless of eligibility. The
    rest of the team is filled greedily from eligible candidates by
    ``0.7 * score + 0.3 * incremental coverage value``. This is a local
    heuristic without backtracking.
    """
    config = config or settings
    team_size = config.clamp_team_size(criteria.team_size)
    warnings: list[str] = []
    team: list[MatchResult] = []

    by_profile_id = {c.reviewer_profile_id: c for c in candidates}
    for reviewer_id in criteria.must_include_reviewer_ids:
        member = by_profile_id.get(reviewer_id)
        if member is None:
            warnings.append(f"Required reviewer {reviewer_id} is not among the candidates")
            continue
        if any(m.reviewer_profile_id == reviewer_id for m in team):
            continue
        team.append(member)
        if not member.is_eligible:
            warnings.append(f"Required reviewer {member.full_name} has eligibility issues")

    seeded = {m.reviewer_profile_id for m in team}
    pool = [c for c in candidates if c.is_eligible and c.reviewer_profile_id not in seeded]

    while len(team) < team_size and pool:
        selection = select_next_team_member(team, pool, config)
        if selection is None:
            break
        member, combined = selection
        team.append(member)
        pool = [c for c in pool if c is not member]
        logger.debug(
            f"Round {len(team)}: selected {member.reviewer_profile_id} (combined: {combined:.2f})"
        )

    coverage = generate_coverage_report(team, criteria.required_expertise, criteria.required_languages)
    is_viable = check_team_viability(team, coverage, team_size, config)

    if len(team) < team_size:
        warnings.append(f"Could only find {len(team)} of {team_size} required team members")
    if not coverage.has_lead_qualified:
        warnings.append("Team has no lead-qualified reviewer")
    if coverage.expertise_missing:
        warnings.append(
            f"Missing expertise coverage: {', '.join(a.value for a in coverage.expertise_missing)}"
        )
    if coverage.languages_missing:
        warnings.append(
            f"Missing language coverage: {', '.join(l.value for l in coverage.languages_missing)}"
        )

    total_score = sum(member.score for member in team)
    average_score = total_score / len(team) if team else 0.0

    logger.info(
        f"Built team of {len(team)}/{team_size} for {criteria.target_organization_id}: "
        f"viable={is_viable}, balance={coverage.team_balance.value}"
    )

    return TeamBuildResult(
        team=team,
        coverage_report=coverage,
        total_score=round(total_score, 1),
        average_score=round(average_score, 1),
        warnings=warnings,
        is_viable=is_viable,
    )
