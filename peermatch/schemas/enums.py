"""Closed enumerations shared by the matching engine"""

import enum


class ExpertiseArea(str, enum.Enum):
    """Air navigation services review domains"""
    ATS = "ATS"
    AIM_AIS = "AIM_AIS"
    FPD = "FPD"
    MAP = "MAP"
    MET = "MET"
    CNS = "CNS"
    PANS_OPS = "PANS_OPS"
    SAR = "SAR"
    SMS_POLICY = "SMS_POLICY"
    SMS_RISK = "SMS_RISK"
    SMS_ASSURANCE = "SMS_ASSURANCE"
    SMS_PROMOTION = "SMS_PROMOTION"
    AERODROME = "AERODROME"
    RFF = "RFF"
    ENGINEERING = "ENGINEERING"
    QMS = "QMS"
    TRAINING = "TRAINING"
    HUMAN_FACTORS = "HUMAN_FACTORS"


class Language(str, enum.Enum):
    """Working languages of the programme"""
    EN = "EN"
    FR = "FR"
    AR = "AR"
    PT = "PT"
    ES = "ES"


class ProficiencyLevel(str, enum.Enum):
    """Expertise proficiency"""
    BASIC = "BASIC"
    COMPETENT = "COMPETENT"
    PROFICIENT = "PROFICIENT"
    EXPERT = "EXPERT"


class LanguageProficiency(str, enum.Enum):
    """Language proficiency"""
    BASIC = "BASIC"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    NATIVE = "NATIVE"


class AvailabilityType(str, enum.Enum):
    """Availability period types"""
    AVAILABLE = "AVAILABLE"
    TENTATIVE = "TENTATIVE"
    UNAVAILABLE = "UNAVAILABLE"
    ON_ASSIGNMENT = "ON_ASSIGNMENT"


class COIType(str, enum.Enum):
    """Declared conflict-of-interest types"""
    # Legacy types
    EMPLOYMENT = "EMPLOYMENT"
    FINANCIAL = "FINANCIAL"
    CONTRACTUAL = "CONTRACTUAL"
    PERSONAL = "PERSONAL"
    PREVIOUS_REVIEW = "PREVIOUS_REVIEW"
    # Current types
    HOME_ORGANIZATION = "HOME_ORGANIZATION"
    FAMILY_RELATIONSHIP = "FAMILY_RELATIONSHIP"
    FORMER_EMPLOYEE = "FORMER_EMPLOYEE"
    BUSINESS_INTEREST = "BUSINESS_INTEREST"
    RECENT_REVIEW = "RECENT_REVIEW"
    OTHER = "OTHER"


class COISeverity(str, enum.Enum):
    """Default severity attached to a COI type in the programme policy"""
    HARD_BLOCK = "HARD_BLOCK"
    SOFT_WARNING = "SOFT_WARNING"


class ConflictSeverity(str, enum.Enum):
    """Severity of a classified conflict against a target organization"""
    HARD = "HARD"
    SOFT = "SOFT"


class TeamBalance(str, enum.Enum):
    """Qualitative team balance rating"""
    GOOD = "GOOD"
    FAIR = "FAIR"
    POOR = "POOR"


class ReviewerCOIState(str, enum.Enum):
    """Per-reviewer outcome of a team COI check"""
    ELIGIBLE = "eligible"
    BLOCKED = "blocked"
    WARNING = "warning"
    OVERRIDE_ACTIVE = "override_active"
