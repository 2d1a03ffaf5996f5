"""Application configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    database_path: str = Field(default="defenceguessr.db", alias="DATABASE_PATH")
    catalog_path: str = Field(default="", alias="CATALOG_PATH")
    boundaries_path: str = Field(default="", alias="BOUNDARIES_PATH")
    daily_storage_key: str = Field(default="defenceGuesserDaily", alias="DAILY_STORAGE_KEY")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Game settings
    rounds_per_game: int = Field(default=5, alias="ROUNDS_PER_GAME")
    bonus_choice_count: int = Field(default=4, alias="BONUS_CHOICE_COUNT")

    # Country lookup
    country_lookup_radius_km: float = Field(default=250, alias="COUNTRY_LOOKUP_RADIUS_KM")

    # Scoring
    location_max_score: int = Field(default=5000, alias="LOCATION_MAX_SCORE")
    max_scoring_distance_km: float = Field(default=4000, alias="MAX_SCORING_DISTANCE_KM")
    score_decay_km: float = Field(default=2000, alias="SCORE_DECAY_KM")
    bonus_score: int = Field(default=2500, alias="BONUS_SCORE")

    # Daily challenge
    leaderboard_size: int = Field(default=5, alias="LEADERBOARD_SIZE")
    leaderboard_retention_days: int = Field(default=7, alias="LEADERBOARD_RETENTION_DAYS")


# Global settings instance
settings = Settings()


class Config:
    """Uppercase config interface used throughout the game."""

    DATABASE_PATH = settings.database_path
    CATALOG_PATH = settings.catalog_path
    BOUNDARIES_PATH = settings.boundaries_path
    DAILY_STORAGE_KEY = settings.daily_storage_key
    LOG_LEVEL = settings.log_level.upper()
    ROUNDS_PER_GAME = settings.rounds_per_game
    BONUS_CHOICE_COUNT = settings.bonus_choice_count
    COUNTRY_LOOKUP_RADIUS_KM = settings.country_lookup_radius_km
    LOCATION_MAX_SCORE = settings.location_max_score
    MAX_SCORING_DISTANCE_KM = settings.max_scoring_distance_km
    SCORE_DECAY_KM = settings.score_decay_km
    BONUS_SCORE = settings.bonus_score
    LEADERBOARD_SIZE = settings.leaderboard_size
    LEADERBOARD_RETENTION_DAYS = settings.leaderboard_retention_days
