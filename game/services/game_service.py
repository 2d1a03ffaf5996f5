"""Game service for managing play sessions."""

import logging
import random
from collections.abc import Sequence
from datetime import date
from typing import Optional

from config import Config
from game.services.daily_service import DailyChallengeRegistry
from game.services.round_engine import RoundEngine
from game.services.scoring_service import calculate_accuracy, calculate_rating
from models import (
    Coordinates,
    EquipmentRecord,
    GuessInput,
    LocationScore,
    RoundResult,
    SessionState,
    SessionSummary,
)
from utils.countries import CountryMatcher
from utils.country_lookup import CountryLookup, build_country_lookup
from utils.exceptions import (
    CatalogUnavailableError,
    DailyChallengeError,
    DefenceguessrError,
    RoundStateError,
)
from utils.formatting import (
    format_bonus_result,
    format_game_over,
    format_location_result,
    format_round_intro,
)
from utils.shuffle import date_key, daily_seed, seeded_shuffle, unseeded_shuffle

logger = logging.getLogger(__name__)


def select_equipment(
    catalog: Sequence[EquipmentRecord],
    round_count: int,
    is_daily: bool = False,
    day: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> list[EquipmentRecord]:
    """Pick the equipment sequence for a session.

    Daily sessions use the date-seeded shuffle so every player gets the same
    items on the same day; other sessions are shuffled freely.
    """
    if is_daily:
        day = day or date.today()
        shuffled = seeded_shuffle(catalog, daily_seed(day))
    else:
        shuffled = unseeded_shuffle(catalog, rng)
    return shuffled[:round_count]


class GameSession:
    """One play-through of a fixed number of rounds."""

    def __init__(
        self,
        state: SessionState,
        catalog: Sequence[EquipmentRecord],
        matcher: Optional[CountryMatcher] = None,
        rng: Optional[random.Random] = None,
    ):
        self.state = state
        self.catalog = list(catalog)
        self.matcher = matcher
        self.rng = rng
        self.round = self._new_round()

    @classmethod
    def start(
        cls,
        catalog: Sequence[EquipmentRecord],
        is_daily: bool = False,
        round_count: Optional[int] = None,
        player_name: Optional[str] = None,
        day: Optional[date] = None,
        matcher: Optional[CountryMatcher] = None,
        rng: Optional[random.Random] = None,
    ) -> "GameSession":
        """Start a fresh session.

        A catalog smaller than the round count shortens the session.
        """
        if not catalog:
            raise CatalogUnavailableError("no equipment to play with")

        round_count = round_count if round_count is not None else Config.ROUNDS_PER_GAME
        day = day or date.today()

        if is_daily:
            player_name = (player_name or "").strip()
            if not player_name:
                raise DailyChallengeError("Daily challenge started without a name", "Please enter a callsign!")

        equipment = select_equipment(catalog, round_count, is_daily=is_daily, day=day, rng=rng)
        state = SessionState(
            round_count=len(equipment),
            equipment=equipment,
            is_daily=is_daily,
            player_name=player_name or None,
            date_key=date_key(day) if is_daily else None,
        )
        logger.info(f"Starting {'daily' if is_daily else 'practice'} session with {state.round_count} rounds")
        return cls(state, catalog, matcher=matcher, rng=rng)

    def _new_round(self) -> RoundEngine:
        equipment = self.state.equipment[self.state.current_round - 1]
        return RoundEngine(self.state.current_round, equipment, matcher=self.matcher)

    @property
    def current_equipment(self) -> EquipmentRecord:
        return self.round.equipment

    @property
    def is_last_round(self) -> bool:
        return self.state.current_round >= self.state.round_count

    def _require_active(self, action: str) -> None:
        if self.state.finished:
            raise RoundStateError(action, "finished")

    def submit_location_guess(self, guess: GuessInput) -> LocationScore:
        """Score the map selection and add its points to the running score."""
        self._require_active("submit a location guess")
        location = self.round.score_location(guess)
        self.state.score += location.points
        return location

    def present_bonus_choices(self) -> list[str]:
        self._require_active("show identification choices")
        return self.round.present_bonus_choices(self.catalog, rng=self.rng)

    def submit_bonus_choice(self, selected_name: str) -> RoundResult:
        """Score the identification answer and record the round."""
        self._require_active("answer the identification bonus")
        return self._record(self.round.score_bonus(selected_name))

    def skip_bonus(self) -> RoundResult:
        self._require_active("skip the identification bonus")
        return self._record(self.round.skip_bonus())

    def _record(self, result: RoundResult) -> RoundResult:
        self.state.score += result.bonus_points
        self.state.results.append(result)
        return result

    def advance_round(self) -> Optional[EquipmentRecord]:
        """Move to the next round, or finish after the last one.

        Returns the next round's equipment, or None when the session is over.
        """
        self._require_active("move to the next round")
        if not self.round.is_resolved:
            raise RoundStateError("move to the next round", self.round.phase.value)

        if self.is_last_round:
            self.state.finished = True
            logger.info(f"Session finished with {self.state.score} points")
            return None

        self.state.current_round += 1
        self.round = self._new_round()
        return self.round.equipment

    def finish(self) -> SessionSummary:
        """Compute end-of-game statistics."""
        if not self.state.finished:
            if not (self.is_last_round and self.round.is_resolved):
                raise RoundStateError("finish the game", self.round.phase.value)
            self.state.finished = True

        results = self.state.results
        correct_locations = sum(1 for r in results if r.location_correct)
        correct_bonus = sum(1 for r in results if r.bonus_correct)

        return SessionSummary(
            score=self.state.score,
            round_count=self.state.round_count,
            correct_locations=correct_locations,
            correct_bonus=correct_bonus,
            accuracy=calculate_accuracy(correct_locations, correct_bonus, self.state.round_count),
            rating=calculate_rating(self.state.score, self.state.round_count),
            results=list(results),
            is_daily=self.state.is_daily,
            player_name=self.state.player_name,
        )


class GameService:
    """Command facade between the user interface and the game session.

    Each command returns a ``(success, message)`` tuple with the text to show
    the player.
    """

    def __init__(
        self,
        catalog: Sequence[EquipmentRecord],
        registry: DailyChallengeRegistry,
        round_count: Optional[int] = None,
        rng: Optional[random.Random] = None,
        lookup: Optional[CountryLookup] = None,
    ):
        self.catalog = list(catalog)
        self.registry = registry
        self.lookup = lookup if lookup is not None else build_country_lookup()
        self.round_count = round_count
        self.rng = rng
        self.session: Optional[GameSession] = None

    async def start_game(self) -> tuple[bool, str]:
        """Start a practice session with randomly ordered equipment."""
        try:
            self.session = GameSession.start(self.catalog, round_count=self.round_count, rng=self.rng)
        except DefenceguessrError as e:
            return (False, e.user_message)
        return (True, format_round_intro(self.session))

    async def start_daily(self, player_name: str) -> tuple[bool, str]:
        """Start today's daily challenge for a named player."""
        try:
            if await self.registry.has_played_today():
                raise DailyChallengeError(
                    f"Daily challenge {self.registry.today_key()} already played",
                    "You have already completed today's Daily Challenge! Come back tomorrow for a new challenge.",
                )
            session = GameSession.start(
                self.catalog,
                is_daily=True,
                round_count=self.round_count,
                player_name=player_name,
                day=self.registry.today(),
                rng=self.rng,
            )
        except DefenceguessrError as e:
            return (False, e.user_message)

        await self.registry.record_attempt(session.state.date_key)
        self.session = session
        return (True, format_round_intro(session))

    def submit_location_guess(self, lat: Optional[float], lng: Optional[float]) -> tuple[bool, str]:
        """Submit the map selection for the current round.

        The country claim is whatever country lies under the selected point.
        """
        if not self.session:
            return (False, "No game in progress! Start one with `/start` or `/daily`")

        location = None
        if lat is not None and lng is not None:
            if not (-90 <= lat <= 90 and -180 <= lng <= 180):
                return (False, "That location isn't on the map. Latitude is -90..90 and longitude -180..180.")
            location = Coordinates(lat=lat, lng=lng)

        country_label = self.lookup.country_at(location) if location else None
        guess = GuessInput(location=location, country_label=country_label)
        try:
            result = self.session.submit_location_guess(guess)
            choices = self.session.present_bonus_choices()
        except DefenceguessrError as e:
            return (False, e.user_message)

        return (
            True,
            format_location_result(self.session.current_equipment, result, choices, self.session.state.score),
        )

    def submit_bonus_choice(self, choice: str) -> tuple[bool, str]:
        """Answer the identification bonus by option number or name."""
        if not self.session:
            return (False, "No game in progress! Start one with `/start` or `/daily`")

        selected = self._resolve_choice(choice)
        if selected is None:
            return (False, "Pick one of the listed options by number or name.")

        try:
            result = self.session.submit_bonus_choice(selected)
        except DefenceguessrError as e:
            return (False, e.user_message)

        return (True, format_bonus_result(self.session.current_equipment, result, self.session.state.score))

    def _resolve_choice(self, choice: str) -> Optional[str]:
        choices = self.session.round.choices if self.session else []
        choice = choice.strip()
        if choice.isdigit():
            index = int(choice) - 1
            return choices[index] if 0 <= index < len(choices) else None
        for name in choices:
            if name.lower() == choice.lower():
                return name
        return None

    def skip_bonus(self) -> tuple[bool, str]:
        if not self.session:
            return (False, "No game in progress! Start one with `/start` or `/daily`")

        try:
            result = self.session.skip_bonus()
        except DefenceguessrError as e:
            return (False, e.user_message)

        return (True, format_bonus_result(self.session.current_equipment, result, self.session.state.score))

    async def advance_round(self) -> tuple[bool, str]:
        """Go to the next round, or show the game summary after the last."""
        if not self.session:
            return (False, "No game in progress! Start one with `/start` or `/daily`")

        try:
            next_equipment = self.session.advance_round()
        except DefenceguessrError as e:
            return (False, e.user_message)

        if next_equipment is not None:
            return (True, format_round_intro(self.session))

        return (True, await self._end_game())

    async def _end_game(self) -> str:
        session = self.session
        summary = session.finish()
        leaderboard = None

        if session.state.is_daily and session.state.player_name:
            key = session.state.date_key or self.registry.today_key()
            await self.registry.submit_score(key, session.state.player_name, summary.score)
            leaderboard = await self.registry.leaderboard(key)
            summary.placement = await self.registry.placement(key, session.state.player_name, summary.score)

        self.session = None
        return format_game_over(summary, leaderboard)
