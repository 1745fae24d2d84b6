"""Bilingual (EN/FR) display labels for matching enums"""

import enum

from peermatch.schemas.enums import COISeverity, COIType, ExpertiseArea, Language

SUPPORTED_LOCALES = ("en", "fr")

EXPERTISE_AREA_LABELS: dict[ExpertiseArea, dict[str, str]] = {
    ExpertiseArea.ATS: {"en": "Air Traffic Services", "fr": "Services de la circulation aérienne"},
    ExpertiseArea.AIM_AIS: {
        "en": "Aeronautical Information Management",
        "fr": "Gestion de l'information aéronautique",
    },
    ExpertiseArea.FPD: {"en": "Flight Procedures Design", "fr": "Conception des procédures de vol"},
    ExpertiseArea.MAP: {"en": "Aeronautical Charts", "fr": "Cartes aéronautiques"},
    ExpertiseArea.MET: {"en": "Meteorology", "fr": "Météorologie"},
    ExpertiseArea.CNS: {
        "en": "Communications, Navigation, Surveillance",
        "fr": "Communications, Navigation, Surveillance",
    },
    ExpertiseArea.PANS_OPS: {
        "en": "Procedures for Air Navigation Services",
        "fr": "Procédures pour les services de navigation aérienne",
    },
    ExpertiseArea.SAR: {"en": "Search and Rescue", "fr": "Recherche et sauvetage"},
    ExpertiseArea.SMS_POLICY: {"en": "SMS Policy & Objectives", "fr": "Politique et objectifs SMS"},
    ExpertiseArea.SMS_RISK: {"en": "SMS Risk Management", "fr": "Gestion des risques SMS"},
    ExpertiseArea.SMS_ASSURANCE: {"en": "SMS Safety Assurance", "fr": "Assurance sécurité SMS"},
    ExpertiseArea.SMS_PROMOTION: {"en": "SMS Safety Promotion", "fr": "Promotion de la sécurité SMS"},
    ExpertiseArea.AERODROME: {"en": "Aerodrome Operations", "fr": "Opérations d'aérodrome"},
    ExpertiseArea.RFF: {"en": "Rescue and Firefighting", "fr": "Sauvetage et lutte contre l'incendie"},
    ExpertiseArea.ENGINEERING: {"en": "Engineering", "fr": "Ingénierie"},
    ExpertiseArea.QMS: {"en": "Quality Management", "fr": "Gestion de la qualité"},
    ExpertiseArea.TRAINING: {"en": "Training", "fr": "Formation"},
    ExpertiseArea.HUMAN_FACTORS: {"en": "Human Factors", "fr": "Facteurs humains"},
}

LANGUAGE_LABELS: dict[Language, dict[str, str]] = {
    Language.EN: {"en": "English", "fr": "Anglais"},
    Language.FR: {"en": "French", "fr": "Français"},
    Language.AR: {"en": "Arabic", "fr": "Arabe"},
    Language.PT: {"en": "Portuguese", "fr": "Portugais"},
    Language.ES: {"en": "Spanish", "fr": "Espagnol"},
}

# Short reason shown with a detected conflict
COI_REASONS: dict[COIType, dict[str, str]] = {
    COIType.EMPLOYMENT: {"en": "Employment relationship", "fr": "Relation d'emploi"},
    COIType.FINANCIAL: {"en": "Financial interest", "fr": "Intérêt financier"},
    COIType.CONTRACTUAL: {"en": "Contractual relationship", "fr": "Relation contractuelle"},
    COIType.PERSONAL: {"en": "Personal relationship", "fr": "Relation personnelle"},
    COIType.PREVIOUS_REVIEW: {"en": "Previously reviewed", "fr": "Déjà évalué"},
    COIType.HOME_ORGANIZATION: {"en": "Current employer", "fr": "Employeur actuel"},
    COIType.FAMILY_RELATIONSHIP: {"en": "Family relationship", "fr": "Lien familial"},
    COIType.FORMER_EMPLOYEE: {"en": "Former employee", "fr": "Ancien employé"},
    COIType.BUSINESS_INTEREST: {"en": "Business interest", "fr": "Intérêt commercial"},
    COIType.RECENT_REVIEW: {
        "en": "Recently reviewed this organization",
        "fr": "A récemment évalué cette organisation",
    },
    COIType.OTHER: {"en": "Other declared conflict", "fr": "Autre conflit déclaré"},
}

COI_TYPE_LABELS: dict[COIType, dict[str, str]] = {
    COIType.EMPLOYMENT: {"en": "Employment", "fr": "Emploi"},
    COIType.FINANCIAL: {"en": "Financial", "fr": "Financier"},
    COIType.CONTRACTUAL: {"en": "Contractual", "fr": "Contractuel"},
    COIType.PERSONAL: {"en": "Personal", "fr": "Personnel"},
    COIType.PREVIOUS_REVIEW: {"en": "Previous Review", "fr": "Revue antérieure"},
    COIType.HOME_ORGANIZATION: {"en": "Home Organization", "fr": "Organisation d'appartenance"},
    COIType.FAMILY_RELATIONSHIP: {"en": "Family Relationship", "fr": "Lien familial"},
    COIType.FORMER_EMPLOYEE: {"en": "Former Employee", "fr": "Ancien employé"},
    COIType.BUSINESS_INTEREST: {"en": "Business Interest", "fr": "Intérêt commercial"},
    COIType.RECENT_REVIEW: {"en": "Recent Review", "fr": "Revue récente"},
    COIType.OTHER: {"en": "Other Conflict", "fr": "Autre conflit"},
}

COI_SEVERITY_LABELS: dict[COISeverity, dict[str, str]] = {
    COISeverity.HARD_BLOCK: {"en": "Hard Block", "fr": "Blocage strict"},
    COISeverity.SOFT_WARNING: {"en": "Soft Warning", "fr": "Avertissement"},
}

_LABEL_TABLES: dict[type, dict] = {
    ExpertiseArea: EXPERTISE_AREA_LABELS,
    Language: LANGUAGE_LABELS,
    COIType: COI_TYPE_LABELS,
    COISeverity: COI_SEVERITY_LABELS,
}


def _pick(entry: dict[str, str], locale: str) -> str:
    locale = locale.lower()
    return entry[locale] if locale in SUPPORTED_LOCALES else entry["en"]


def get_label(value: enum.Enum, locale: str = "en") -> str:
    """Display label for an enum value; unknown locales fall back to English"""
    table = _LABEL_TABLES.get(type(value))
    if table is None or value not in table:
        return str(value.value)
    return _pick(table[value], locale)


def get_coi_reason(coi_type: COIType, locale: str = "en") -> str:
    """Short human-readable reason for a detected conflict"""
    return _pick(COI_REASONS[coi_type], locale)
