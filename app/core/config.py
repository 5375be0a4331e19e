"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (.env file).
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from app.equilibrium.accumulator import StrainConfig
from app.equilibrium.classifier import DEFAULT_TREND_DELTA


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Project Info
    PROJECT_NAME: str = "Balance Equilibrium: temporal strain engine."
    VERSION: str = "0.1.0"
    AUTHORS: List[str] = []
    PROJECT_URL: str = ""

    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Strain accumulator (defaults mirror DEFAULT_STRAIN_CONFIG)
    STRAIN_BAND: float = 0.12
    STRAIN_MIN_ACTIVATION_MS: float = 5 * 60 * 1000
    STRAIN_MIN_RECOVERY_MS: float = 10 * 60 * 1000
    STRAIN_ACCUMULATE_PER_MS: float = 1 / (12 * 60 * 60 * 1000)
    STRAIN_DECAY_PER_MS: float = 1 / (24 * 60 * 60 * 1000)
    STRAIN_MAX: float = 1.0
    STRAIN_MIN_DOMINANCE_MS: float = 3 * 60 * 1000

    # Instantaneous classifier trend noise floor
    CLASSIFIER_DELTA: float = DEFAULT_TREND_DELTA

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def strain_config(self) -> StrainConfig:
        """Build the shared :class:`StrainConfig`.

        Raises :class:`ValueError` if the decay rate is not lower than the
        accumulation rate.
        """
        return StrainConfig(band=self.STRAIN_BAND, min_activation_ms=self.STRAIN_MIN_ACTIVATION_MS,
                            min_recovery_ms=self.STRAIN_MIN_RECOVERY_MS,
                            accumulate_per_ms=self.STRAIN_ACCUMULATE_PER_MS, decay_per_ms=self.STRAIN_DECAY_PER_MS,
                            max_strain=self.STRAIN_MAX, min_dominance_ms=self.STRAIN_MIN_DOMINANCE_MS, )


# Global settings instance
settings = Settings()
