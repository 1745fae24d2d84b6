"""Tests for conflict-of-interest classification"""

from datetime import datetime, timedelta

import pytest

from peermatch.schemas.enums import COISeverity, COIType, ConflictSeverity, ReviewerCOIState
from peermatch.schemas.matching import COIOverride
from peermatch.schemas.reviewers import ConflictOfInterest
from peermatch.services.coi import (
    can_override,
    check_coi,
    check_team_coi,
    find_active_override,
    get_default_severity,
    get_manual_coi_types,
    is_override_valid,
)
from peermatch.utils.labels import get_coi_reason, get_label

JUSTIFICATION = "Former secondment ended four years ago; no ongoing relationship with the organization."


def conflict(coi_type, org="org_target"):
    return ConflictOfInterest(organization_id=org, coi_type=coi_type)


def override(reviewer="rp_1", org="org_target", **kwargs):
    data = {
        "reviewer_profile_id": reviewer,
        "organization_id": org,
        "justification": JUSTIFICATION,
        "approved_by_id": "user_admin",
        "approved_at": datetime(2026, 1, 10, 9, 0),
    }
    data.update(kwargs)
    return COIOverride(**data)


class TestCheckCOI:
    """Test COI classification rules"""

    def test_home_organization_is_hard(self):
        status = check_coi([], "org_target", "org_target")
        assert status.has_conflict is True
        assert status.severity == ConflictSeverity.HARD
        assert status.type == COIType.HOME_ORGANIZATION
        assert status.reason == "Current employer"
        assert status.reason_fr == "Employeur actuel"
        assert status.is_waivable is False

    def test_home_organization_checked_before_declared(self):
        status = check_coi([conflict(COIType.BUSINESS_INTEREST)], "org_target", "org_target")
        assert status.type == COIType.HOME_ORGANIZATION

    def test_declared_home_organization_is_hard(self):
        status = check_coi([conflict(COIType.HOME_ORGANIZATION)], "org_target", "org_home")
        assert status.severity == ConflictSeverity.HARD
        assert status.is_waivable is False

    def test_family_relationship_is_hard(self):
        status = check_coi([conflict(COIType.FAMILY_RELATIONSHIP)], "org_target", "org_home")
        assert status.severity == ConflictSeverity.HARD

    @pytest.mark.parametrize("coi_type", [
        COIType.BUSINESS_INTEREST,
        COIType.FORMER_EMPLOYEE,
        COIType.RECENT_REVIEW,
        COIType.OTHER,
        COIType.EMPLOYMENT,
        COIType.FINANCIAL,
        COIType.CONTRACTUAL,
        COIType.PERSONAL,
        COIType.PREVIOUS_REVIEW,
    ])
    def test_other_types_are_soft_and_waivable(self, coi_type):
        status = check_coi([conflict(coi_type)], "org_target", "org_home")
        assert status.severity == ConflictSeverity.SOFT
        assert status.is_waivable is True
        assert status.reason == get_coi_reason(coi_type)

    def test_first_declared_conflict_wins(self):
        status = check_coi(
            [conflict(COIType.FORMER_EMPLOYEE), conflict(COIType.HOME_ORGANIZATION)],
            "org_target",
            "org_home",
        )
        assert status.type == COIType.FORMER_EMPLOYEE
        assert status.severity == ConflictSeverity.SOFT

    def test_conflicts_against_other_organizations_ignored(self):
        status = check_coi([conflict(COIType.FAMILY_RELATIONSHIP, org="org_other")], "org_target", "org_home")
        assert status.has_conflict is False
        assert status.severity is None
        assert status.is_waivable is False

    @pytest.mark.parametrize("conflicts", [None, "not-a-list", {}])
    def test_malformed_conflicts_mean_no_conflict(self, conflicts):
        status = check_coi(conflicts, "org_target", "org_home")
        assert status.has_conflict is False


class TestCOIPolicy:
    """Test COI type configuration helpers"""

    def test_default_severities(self):
        assert get_default_severity(COIType.HOME_ORGANIZATION) == COISeverity.HARD_BLOCK
        assert get_default_severity(COIType.RECENT_REVIEW) == COISeverity.SOFT_WARNING

    def test_only_soft_warnings_can_be_overridden(self):
        assert can_override(COISeverity.SOFT_WARNING) is True
        assert can_override(COISeverity.HARD_BLOCK) is False

    def test_manual_types_exclude_auto_detected(self):
        manual = get_manual_coi_types()
        assert COIType.FAMILY_RELATIONSHIP in manual
        assert COIType.HOME_ORGANIZATION not in manual
        assert COIType.RECENT_REVIEW not in manual

    def test_labels(self):
        assert get_label(COIType.BUSINESS_INTEREST) == "Business Interest"
        assert get_label(COIType.BUSINESS_INTEREST, "fr") == "Intérêt commercial"
        assert get_label(COISeverity.HARD_BLOCK, "de") == "Hard Block"


class TestOverrides:
    """Test COI override validity"""

    def test_valid_without_expiry(self):
        assert is_override_valid(override()) is True

    def test_revoked_is_invalid(self):
        assert is_override_valid(override(is_revoked=True)) is False

    def test_expiry(self):
        expires = datetime(2026, 6, 1)
        item = override(expires_at=expires)
        assert is_override_valid(item, now=expires - timedelta(days=1)) is True
        assert is_override_valid(item, now=expires + timedelta(days=1)) is False

    def test_short_justification_rejected(self):
        with pytest.raises(ValueError):
            override(justification="too short")

    def test_most_recent_valid_override_selected(self):
        older = override(approved_at=datetime(2025, 5, 1))
        newer = override(approved_at=datetime(2026, 2, 1))
        revoked = override(approved_at=datetime(2026, 3, 1), is_revoked=True)
        assert find_active_override([older, revoked, newer], "rp_1", "org_target") is newer
        assert find_active_override([older], "rp_2", "org_target") is None


class TestTeamCOI:
    """Test team-level COI checks"""

    def test_team_statuses(self, candidate_factory):
        team = [
            candidate_factory("rp_clear"),
            candidate_factory("rp_home", home_organization_id="org_target"),
            candidate_factory("rp_soft", conflicts_of_interest=[conflict(COIType.RECENT_REVIEW)]),
            candidate_factory("rp_waived", conflicts_of_interest=[conflict(COIType.BUSINESS_INTEREST)]),
        ]
        result = check_team_coi(team, "org_target", overrides=[override(reviewer="rp_waived")])

        states = {r.reviewer_profile_id: r.status for r in result.reviewers}
        assert states == {
            "rp_clear": ReviewerCOIState.ELIGIBLE,
            "rp_home": ReviewerCOIState.BLOCKED,
            "rp_soft": ReviewerCOIState.WARNING,
            "rp_waived": ReviewerCOIState.OVERRIDE_ACTIVE,
        }
        assert result.summary.total == 4
        assert result.summary.blocked == 1
        assert result.summary.override_active == 1
        assert result.can_proceed is False
        assert result.blocked_reviewer_ids == ["rp_home"]
        assert result.warning_reviewer_ids == ["rp_soft"]

    def test_override_never_clears_hard_conflict(self, candidate_factory):
        team = [candidate_factory("rp_1", conflicts_of_interest=[conflict(COIType.FAMILY_RELATIONSHIP)])]
        result = check_team_coi(team, "org_target", overrides=[override()])
        assert result.reviewers[0].status == ReviewerCOIState.BLOCKED
        assert result.reviewers[0].active_override is None

    def test_clean_team_can_proceed(self, candidate_factory):
        result = check_team_coi([candidate_factory("rp_1"), candidate_factory("rp_2")], "org_target")
        assert result.can_proceed is True
        assert result.summary.eligible == 2
