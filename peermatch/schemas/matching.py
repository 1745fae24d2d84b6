"""Schemas for reviewer matching and team composition"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from peermatch.schemas.enums import (
    COIType,
    ConflictSeverity,
    ExpertiseArea,
    Language,
    ReviewerCOIState,
    TeamBalance,
)

MIN_OVERRIDE_JUSTIFICATION_LENGTH = 50


class MatchingCriteria(BaseModel):
    """Assignment request for a peer review"""
    target_organization_id: str = Field(..., min_length=1)
    required_expertise: list[ExpertiseArea] = Field(default_factory=list)
    preferred_expertise: list[ExpertiseArea] = Field(default_factory=list)
    required_languages: list[Language] = Field(default_factory=list)
    review_start_date: date
    review_end_date: date
    team_size: int
    must_include_reviewer_ids: list[str] = Field(default_factory=list)
    exclude_reviewer_ids: list[str] = Field(default_factory=list)

    @field_validator("required_expertise", "preferred_expertise", "required_languages")
    @classmethod
    def drop_duplicates(cls, v: list) -> list:
        return list(dict.fromkeys(v))


class ExpertiseScoreResult(BaseModel):
    score: float = Field(ge=0.0)
    max_score: float
    matched_required: list[ExpertiseArea] = Field(default_factory=list)
    matched_preferred: list[ExpertiseArea] = Field(default_factory=list)
    missing_required: list[ExpertiseArea] = Field(default_factory=list)


class LanguageScoreResult(BaseModel):
    score: float = Field(ge=0.0)
    max_score: float
    matched_languages: list[Language] = Field(default_factory=list)
    missing_languages: list[Language] = Field(default_factory=list)
    can_conduct_review: bool


class AvailabilityScoreResult(BaseModel):
    score: float = Field(ge=0.0)
    max_score: float
    available_days: float = Field(ge=0.0)
    total_days: int = Field(ge=0)
    coverage: float = Field(ge=0.0, le=1.0)
    conflicts: list[str] = Field(default_factory=list)


class ExperienceScoreResult(BaseModel):
    score: float = Field(ge=0.0)
    max_score: float
    years_bonus: float = Field(ge=0.0)
    reviews_bonus: float = Field(ge=0.0)


class TotalScoreBreakdown(BaseModel):
    expertise_score: float
    language_score: float
    availability_score: float
    experience_score: float
    total_score: float
    max_possible_score: float
    percentage: int


class ScoreBreakdown(BaseModel):
    """Per-dimension scores of a match"""
    expertise_score: float
    language_score: float
    availability_score: float
    experience_score: float


class COIStatus(BaseModel):
    """Conflict status of a reviewer against the target organization"""
    has_conflict: bool
    severity: ConflictSeverity | None = None
    type: COIType | None = None
    reason: str | None = None
    reason_fr: str | None = None
    is_waivable: bool = False


class AvailabilityStatus(BaseModel):
    is_available: bool
    available_days: float
    total_days: int
    coverage: float
    conflicts: list[str] = Field(default_factory=list)


class EligibilityResult(BaseModel):
    is_eligible: bool
    reason: str | None = None
    reason_fr: str | None = None


class MatchResult(BaseModel):
    """Match result for a single reviewer with scoring details"""
    reviewer_id: str
    reviewer_profile_id: str
    full_name: str
    organization: str
    organization_id: str
    score: float
    max_score: float
    percentage: int
    breakdown: ScoreBreakdown
    expertise_details: ExpertiseScoreResult
    language_details: LanguageScoreResult
    availability_details: AvailabilityScoreResult
    experience_details: ExperienceScoreResult
    coi_status: COIStatus
    availability_status: AvailabilityStatus
    warnings: list[str] = Field(default_factory=list)
    is_eligible: bool
    ineligibility_reason: str | None = None
    ineligibility_reason_fr: str | None = None
    is_lead_qualified: bool
    reviews_completed: int


class CoverageReport(BaseModel):
    expertise_covered: list[ExpertiseArea] = Field(default_factory=list)
    expertise_missing: list[ExpertiseArea] = Field(default_factory=list)
    expertise_coverage: float = Field(ge=0.0, le=1.0)
    languages_covered: list[Language] = Field(default_factory=list)
    languages_missing: list[Language] = Field(default_factory=list)
    language_coverage: float = Field(ge=0.0, le=1.0)
    has_lead_qualified: bool
    team_balance: TeamBalance


class TeamBuildResult(BaseModel):
    """Proposed team with coverage report"""
    team: list[MatchResult] = Field(default_factory=list)
    coverage_report: CoverageReport
    total_score: float
    average_score: float
    warnings: list[str] = Field(default_factory=list)
    is_viable: bool


class AssignmentCheck(BaseModel):
    can_assign: bool
    reasons: list[str] = Field(default_factory=list)


class COIOverride(BaseModel):
    """Approved waiver of a soft conflict for one reviewer and organization"""
    reviewer_profile_id: str = Field(..., min_length=1)
    organization_id: str = Field(..., min_length=1)
    justification: str = Field(..., min_length=MIN_OVERRIDE_JUSTIFICATION_LENGTH)
    approved_by_id: str = Field(..., min_length=1)
    approved_at: datetime
    expires_at: datetime | None = None
    is_revoked: bool = False


class ReviewerCOICheck(BaseModel):
    reviewer_profile_id: str
    reviewer_name: str
    status: ReviewerCOIState
    coi_status: COIStatus
    active_override: COIOverride | None = None


class TeamCOISummary(BaseModel):
    total: int = 0
    eligible: int = 0
    blocked: int = 0
    warning: int = 0
    override_active: int = 0


class TeamCOICheckResult(BaseModel):
    organization_id: str
    reviewers: list[ReviewerCOICheck] = Field(default_factory=list)
    summary: TeamCOISummary
    can_proceed: bool
    blocked_reviewer_ids: list[str] = Field(default_factory=list)
    warning_reviewer_ids: list[str] = Field(default_factory=list)
