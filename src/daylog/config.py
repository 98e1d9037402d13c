"""Application configuration."""

import os
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from daylog.domain.calorie_burn import BodyComposition, CalorieBurnSettings

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    similarity_threshold: float = Field(default=0.6, ge=0, le=1)
    repeat_min_matches: int = Field(default=2, ge=1)
    chart_label_density: Literal["half", "full", "exercise"] = "half"
    calorie_burn_enabled: bool = True
    body_weight_lbs: float | None = Field(default=None, gt=0)
    height_inches: float | None = Field(default=None, gt=0)
    age: int | None = Field(default=None, gt=0)
    body_composition: BodyComposition | None = None
    default_intensity: float | None = Field(default=None, ge=1, le=10)
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def calorie_burn_settings(self) -> CalorieBurnSettings:
        """Return the configured biometrics as estimator settings."""
        return CalorieBurnSettings(
            calorie_burn_enabled=self.calorie_burn_enabled,
            body_weight_lbs=self.body_weight_lbs,
            height_inches=self.height_inches,
            age=self.age,
            body_composition=self.body_composition,
            default_intensity=self.default_intensity,
        )
