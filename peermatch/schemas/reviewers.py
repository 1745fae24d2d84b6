"""Schemas describing a reviewer profile as seen by the matching engine"""

from datetime import date

from pydantic import BaseModel, Field

from peermatch.schemas.enums import (
    AvailabilityType,
    COIType,
    ExpertiseArea,
    Language,
    LanguageProficiency,
    ProficiencyLevel,
)


class ExpertiseRecord(BaseModel):
    area: ExpertiseArea
    proficiency_level: ProficiencyLevel
    years_experience: float = Field(default=0, ge=0)

    model_config = {"from_attributes": True}


class LanguageRecord(BaseModel):
    language: Language
    proficiency: LanguageProficiency
    can_conduct_interviews: bool = False

    model_config = {"from_attributes": True}


class AvailabilityPeriod(BaseModel):
    start_date: date
    end_date: date
    availability_type: AvailabilityType
    notes: str | None = None

    model_config = {"from_attributes": True}


class ConflictOfInterest(BaseModel):
    """A declared conflict against one organization"""
    organization_id: str = Field(..., min_length=1)
    coi_type: COIType

    model_config = {"from_attributes": True}


class ReviewerUser(BaseModel):
    first_name: str
    last_name: str

    model_config = {"from_attributes": True}


class HomeOrganization(BaseModel):
    name_en: str
    name_fr: str | None = None
    organization_code: str | None = None

    model_config = {"from_attributes": True}


class ReviewerCandidate(BaseModel):
    """Full reviewer profile consumed read-only by the engine"""
    id: str = Field(..., min_length=1, description="Reviewer profile id")
    user_id: str = Field(..., min_length=1)
    user: ReviewerUser
    home_organization_id: str = Field(..., min_length=1)
    home_organization: HomeOrganization
    years_experience: float = Field(default=0, ge=0)
    reviews_completed: int = Field(default=0, ge=0)
    is_lead_qualified: bool = False
    expertise_records: list[ExpertiseRecord] = Field(default_factory=list)
    languages: list[LanguageRecord] = Field(default_factory=list)
    availability_periods: list[AvailabilityPeriod] = Field(default_factory=list)
    conflicts_of_interest: list[ConflictOfInterest] | None = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @property
    def full_name(self) -> str:
        return f"{self.user.first_name} {self.user.last_name}"

    @property
    def organization_label(self) -> str:
        org = self.home_organization
        if org.organization_code:
            return f"{org.name_en} ({org.organization_code})"
        return org.name_en
