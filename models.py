"""Pydantic models for game data structures."""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coordinates(BaseModel):
    """A point on the globe in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class EquipmentSpecs(BaseModel):
    """Display-only performance figures shown during a round."""

    model_config = ConfigDict(frozen=True)

    speed: str = ""
    armament: str = ""
    range: str = ""


class EquipmentRecord(BaseModel):
    """A catalog entry for one piece of equipment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    origin: str
    category: str = Field(alias="type")
    coords: Coordinates
    specs: EquipmentSpecs = EquipmentSpecs()
    image: str = ""
    in_service: Optional[str] = Field(default=None, alias="inService")
    status: str = ""
    users: list[str] = Field(default_factory=list)

    @field_validator("coords", mode="before")
    @classmethod
    def _coords_from_pair(cls, value):
        # Catalog files store coordinates as [lat, lng]
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("coords must be a [lat, lng] pair")
            return {"lat": value[0], "lng": value[1]}
        return value

    @field_validator("in_service", mode="before")
    @classmethod
    def _in_service_as_text(cls, value):
        if value is None:
            return None
        return str(value)


class GuessInput(BaseModel):
    """A player's map selection for a round."""

    location: Optional[Coordinates] = None
    country_label: Optional[str] = None


class LocationScore(BaseModel):
    """Outcome of scoring a location guess."""

    points: int
    distance_km: float
    country_correct: bool
    selected_country: Optional[str] = None


class RoundResult(BaseModel):
    """The final record of a single round."""

    model_config = ConfigDict(frozen=True)

    round_number: int
    equipment: str
    origin: str
    category: str
    location_correct: bool
    location_points: int
    bonus_correct: bool
    bonus_points: int
    total_points: int


class RatingTier(IntEnum):
    """Qualitative end-of-game rating, ordered worst to best."""

    LOWEST = 0
    FOURTH = 1
    THIRD = 2
    SECOND = 3
    TOP = 4


class SessionState(BaseModel):
    """Mutable state of one play-through."""

    current_round: int = 1
    round_count: int
    score: int = 0
    results: list[RoundResult] = Field(default_factory=list)
    equipment: list[EquipmentRecord] = Field(default_factory=list)
    is_daily: bool = False
    player_name: Optional[str] = None
    date_key: Optional[str] = None
    finished: bool = False


class SessionSummary(BaseModel):
    """End-of-game statistics."""

    score: int
    round_count: int
    correct_locations: int
    correct_bonus: int
    accuracy: int
    rating: RatingTier
    results: list[RoundResult] = Field(default_factory=list)
    is_daily: bool = False
    player_name: Optional[str] = None
    placement: Optional[int] = None


class LeaderboardEntry(BaseModel):
    """A daily challenge score submission."""

    name: str
    score: int
    timestamp: int


class DailyData(BaseModel):
    """Persisted daily challenge state, keyed by date-key strings."""

    leaderboards: dict[str, list[LeaderboardEntry]] = Field(default_factory=dict)
    played: dict[str, bool] = Field(default_factory=dict)


class PracticeState(BaseModel):
    """Selection state of the practice browser."""

    category: str = "all"
    selected: Optional[EquipmentRecord] = None
