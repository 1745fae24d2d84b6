"""Programme configuration for reviewer matching using Pydantic Settings"""


from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PEERMATCH_",
        case_sensitive=False,
        extra="ignore",
    )

    # Dimension maxima (sum to 100)
    expertise_max_score: float = Field(default=40)
    expertise_required_points: float = Field(default=30)
    expertise_preferred_points: float = Field(default=10)
    language_max_score: float = Field(default=25)
    availability_max_score: float = Field(default=25)
    experience_max_score: float = Field(default=10)

    # Programme constants
    min_team_size: int = Field(default=2)
    max_team_size: int = Field(default=5)
    min_years_experience: float = Field(default=5)
    min_reviews_for_lead: int = Field(default=2)

    # Eligibility thresholds
    min_expertise_coverage: float = Field(default=0.5)
    min_availability_coverage: float = Field(default=0.5)
    low_availability_warning: float = Field(default=0.8)

    # Team building
    team_base_score_weight: float = Field(default=0.7)
    team_coverage_weight: float = Field(default=0.3)
    new_expertise_value: float = Field(default=10)
    new_language_value: float = Field(default=8)
    lead_qualified_value: float = Field(default=15)
    min_team_size_ratio: float = Field(default=0.8)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Normalise and validate the log level name"""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f'Unknown log level: {v}')
        return level

    @property
    def max_total_score(self) -> float:
        return (
            self.expertise_max_score +
            self.language_max_score +
            self.availability_max_score +
            self.experience_max_score
        )

    def clamp_team_size(self, requested: int) -> int:
        """Clamp a requested team size to the programme bounds"""
        return min(max(requested, self.min_team_size), self.max_team_size)

    def validate_configuration(self) -> dict[str, list[str]]:
        """Validate configuration and return any issues"""
        issues = {"errors": [], "warnings": []}

        # Team size bounds
        if self.min_team_size < 1:
            issues["errors"].append("min_team_size must be at least 1")
        if self.min_team_size > self.max_team_size:
            issues["errors"].append(
                f"min_team_size ({self.min_team_size}) exceeds max_team_size ({self.max_team_size})"
            )

        # Expertise sub-pools
        pools = self.expertise_required_points + self.expertise_preferred_points
        if pools > self.expertise_max_score:
            issues["errors"].append(
                f"Expertise pools ({pools}) exceed expertise_max_score ({self.expertise_max_score})"
            )

        # Dimension maxima
        if abs(self.max_total_score - 100) > 0.01:
            issues["warnings"].append(
                f"Dimension maxima should sum to 100, got {self.max_total_score}"
            )

        # Team-building weights
        total_weight = self.team_base_score_weight + self.team_coverage_weight
        if abs(total_weight - 1.0) > 0.01:
            issues["warnings"].append(f"Team-building weights should sum to 1.0, got {total_weight}")

        return issues


settings = Settings()
