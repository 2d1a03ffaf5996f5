"""State machine for a single round."""

import logging
import random
from collections.abc import Sequence
from enum import Enum
from typing import Optional

from game.services.scoring_service import (
    build_bonus_choices,
    score_bonus,
    score_location,
)
from models import EquipmentRecord, GuessInput, LocationScore, RoundResult
from utils.countries import CountryMatcher
from utils.exceptions import MissingLocationError, RoundStateError

logger = logging.getLogger(__name__)


class RoundPhase(str, Enum):
    AWAITING_GUESS = "awaiting_guess"
    LOCATION_SCORED = "location_scored"
    AWAITING_BONUS = "awaiting_bonus"
    BONUS_RESOLVED = "bonus_resolved"


class RoundEngine:
    """Drives one round from location guess through bonus identification."""

    def __init__(
        self,
        round_number: int,
        equipment: EquipmentRecord,
        matcher: Optional[CountryMatcher] = None,
    ):
        self.round_number = round_number
        self.equipment = equipment
        self.matcher = matcher
        self.phase = RoundPhase.AWAITING_GUESS
        self.location: Optional[LocationScore] = None
        self.choices: list[str] = []
        self.result: Optional[RoundResult] = None

    @property
    def is_resolved(self) -> bool:
        return self.phase == RoundPhase.BONUS_RESOLVED

    def _require(self, action: str, *phases: RoundPhase) -> None:
        if self.phase not in phases:
            raise RoundStateError(action, self.phase.value)

    def score_location(self, guess: GuessInput) -> LocationScore:
        """Score the player's map selection.

        Raises MissingLocationError without changing state if no location
        was selected.
        """
        self._require("submit a location guess", RoundPhase.AWAITING_GUESS)
        if guess.location is None:
            raise MissingLocationError()

        self.location = score_location(self.equipment, guess, self.matcher)
        self.phase = RoundPhase.LOCATION_SCORED

        if self.location.country_correct:
            logger.info(f"Round {self.round_number}: country verified ({guess.country_label}), max points")
        else:
            logger.info(
                f"Round {self.round_number}: selected {guess.country_label or 'no country'}, "
                f"target {self.equipment.origin}, {self.location.distance_km:.0f} km off, "
                f"{self.location.points} points"
            )
        return self.location

    def present_bonus_choices(
        self,
        catalog: Sequence[EquipmentRecord],
        rng: Optional[random.Random] = None,
    ) -> list[str]:
        """Build the identification options and wait for the player's pick."""
        self._require("show identification choices", RoundPhase.LOCATION_SCORED)
        self.choices = build_bonus_choices(self.equipment, catalog, rng=rng)
        self.phase = RoundPhase.AWAITING_BONUS
        return self.choices

    def score_bonus(self, selected_name: str) -> RoundResult:
        """Score the identification answer and finalize the round."""
        self._require("answer the identification bonus", RoundPhase.AWAITING_BONUS)
        bonus_points = score_bonus(selected_name, self.equipment.name)
        logger.info(f"Round {self.round_number}: identified '{selected_name}', {bonus_points} bonus points")
        return self._resolve(bonus_points)

    def skip_bonus(self) -> RoundResult:
        """Finalize the round without an identification answer."""
        self._require("skip the identification bonus", RoundPhase.LOCATION_SCORED, RoundPhase.AWAITING_BONUS)
        logger.info(f"Round {self.round_number}: identification skipped")
        return self._resolve(0)

    def _resolve(self, bonus_points: int) -> RoundResult:
        if self.location is None:
            raise RoundStateError("resolve the round", self.phase.value)
        self.result = RoundResult(
            round_number=self.round_number,
            equipment=self.equipment.name,
            origin=self.equipment.origin,
            category=self.equipment.category,
            location_correct=self.location.country_correct,
            location_points=self.location.points,
            bonus_correct=bonus_points > 0,
            bonus_points=bonus_points,
            total_points=self.location.points + bonus_points,
        )
        self.phase = RoundPhase.BONUS_RESOLVED
        return self.result
