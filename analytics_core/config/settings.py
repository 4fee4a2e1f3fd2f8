from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ADHERENCE_GREEN_THRESHOLD = 85.0
DEFAULT_ADHERENCE_YELLOW_THRESHOLD = 60.0
DEFAULT_RISK_YELLOW_THRESHOLD = 5.0
DEFAULT_RISK_RED_THRESHOLD = 7.0
DEFAULT_ADHERENCE_POLICY = "exclude_moved"
# Must match the keys of analytics_core.analysis.adherence.ADHERENCE_POLICIES
ADHERENCE_POLICY_NAMES = ("exclude_moved", "all_sessions")


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="ANALYTICS_LOG_LEVEL")
    adherence_green_threshold: float = Field(
        default=DEFAULT_ADHERENCE_GREEN_THRESHOLD,
        validation_alias="ANALYTICS_ADHERENCE_GREEN_THRESHOLD",
        description="Minimum adherence percentage classified as green",
    )
    adherence_yellow_threshold: float = Field(
        default=DEFAULT_ADHERENCE_YELLOW_THRESHOLD,
        validation_alias="ANALYTICS_ADHERENCE_YELLOW_THRESHOLD",
        description="Minimum adherence percentage classified as yellow",
    )
    adherence_policy: str = Field(
        default=DEFAULT_ADHERENCE_POLICY,
        validation_alias="ANALYTICS_ADHERENCE_POLICY",
        description="Name of the adherence denominator policy",
    )
    risk_yellow_threshold: float = Field(
        default=DEFAULT_RISK_YELLOW_THRESHOLD,
        validation_alias="ANALYTICS_RISK_YELLOW_THRESHOLD",
        description="Minimum gated risk score classified as yellow (0-10 scale)",
    )
    risk_red_threshold: float = Field(
        default=DEFAULT_RISK_RED_THRESHOLD,
        validation_alias="ANALYTICS_RISK_RED_THRESHOLD",
        description="Minimum gated risk score classified as red (0-10 scale)",
    )
    high_overlap_threshold: float = Field(
        default=0.55,
        validation_alias="ANALYTICS_HIGH_OVERLAP_THRESHOLD",
        description="Share of mapped muscle load that flags a microcycle as overlapping",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid ANALYTICS_LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("adherence_policy")
    @classmethod
    def validate_adherence_policy(cls, value: str) -> str:
        """Validate the policy name against the registered adherence policies."""
        normalized = value.strip().lower()
        if normalized not in ADHERENCE_POLICY_NAMES:
            logger.warning(
                f"Invalid ANALYTICS_ADHERENCE_POLICY '{value}'. Valid policies are: {', '.join(ADHERENCE_POLICY_NAMES)}. "
                f"Defaulting to {DEFAULT_ADHERENCE_POLICY}."
            )
            return DEFAULT_ADHERENCE_POLICY
        return normalized

    @field_validator("high_overlap_threshold")
    @classmethod
    def validate_high_overlap_threshold(cls, value: float) -> float:
        """Validate overlap threshold is a share between 0 and 1."""
        if not 0.0 < value <= 1.0:
            logger.warning(f"ANALYTICS_HIGH_OVERLAP_THRESHOLD must be in (0, 1], got {value}. Defaulting to 0.55.")
            return 0.55
        return value

    @model_validator(mode="after")
    def validate_threshold_order(self) -> "Settings":
        """Fall back to defaults when a threshold pair is out of order.

        Zone classification checks the upper threshold first, so an inverted
        pair would make the middle zone unreachable.
        """
        if self.adherence_yellow_threshold > self.adherence_green_threshold:
            logger.warning(
                f"Adherence thresholds out of order (yellow={self.adherence_yellow_threshold}, "
                f"green={self.adherence_green_threshold}). Using defaults."
            )
            self.adherence_green_threshold = DEFAULT_ADHERENCE_GREEN_THRESHOLD
            self.adherence_yellow_threshold = DEFAULT_ADHERENCE_YELLOW_THRESHOLD
        if self.risk_yellow_threshold > self.risk_red_threshold:
            logger.warning(
                f"Risk thresholds out of order (yellow={self.risk_yellow_threshold}, "
                f"red={self.risk_red_threshold}). Using defaults."
            )
            self.risk_yellow_threshold = DEFAULT_RISK_YELLOW_THRESHOLD
            self.risk_red_threshold = DEFAULT_RISK_RED_THRESHOLD
        return self


settings = Settings()
