"""Scoring service for calculating game scores."""

import math
import random
from collections.abc import Sequence
from typing import Optional

from config import Config
from models import EquipmentRecord, GuessInput, LocationScore, RatingTier
from utils.countries import CountryMatcher, default_matcher
from utils.geo import distance_km
from utils.shuffle import unseeded_shuffle

# Minimum percentage of the maximum possible score for each rating tier
RATING_THRESHOLDS: list[tuple[int, RatingTier]] = [
    (80, RatingTier.TOP),
    (60, RatingTier.SECOND),
    (40, RatingTier.THIRD),
    (20, RatingTier.FOURTH),
]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)


def score_from_distance(distance: float) -> int:
    """Convert a distance error in kilometers into location points.

    Scores decay exponentially from 5000 at 0 km. Anything at or past the
    4000 km cutoff scores 0.
    """
    if distance >= Config.MAX_SCORING_DISTANCE_KM:
        return 0
    return round_half_up(Config.LOCATION_MAX_SCORE * math.exp(-distance / Config.SCORE_DECAY_KM))


def score_location(
    equipment: EquipmentRecord,
    guess: GuessInput,
    matcher: Optional[CountryMatcher] = None,
) -> LocationScore:
    """Score a location guess against an equipment record.

    A selected country that matches the equipment's origin always earns the
    maximum location score; otherwise points decay with distance. The raw
    distance is returned either way.
    """
    matcher = matcher or default_matcher
    distance = distance_km(guess.location, equipment.coords)
    country_correct = matcher.is_match(guess.country_label, equipment.origin)

    if country_correct:
        points = Config.LOCATION_MAX_SCORE
    else:
        points = score_from_distance(distance)

    return LocationScore(
        points=points,
        distance_km=distance,
        country_correct=country_correct,
        selected_country=guess.country_label or None,
    )


def build_bonus_choices(
    equipment: EquipmentRecord,
    catalog: Sequence[EquipmentRecord],
    choice_count: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> list[str]:
    """Build the multiple-choice identification options for a round.

    Distractors come from the same category first, topped up from other
    categories. Small catalogs yield fewer choices rather than duplicates.
    """
    choice_count = choice_count if choice_count is not None else Config.BONUS_CHOICE_COUNT
    correct_name = equipment.name
    distractor_count = max(choice_count - 1, 0)

    same_category: list[str] = []
    other_category: list[str] = []
    for item in catalog:
        if item.name == correct_name or item.name in same_category or item.name in other_category:
            continue
        if item.category == equipment.category:
            same_category.append(item.name)
        else:
            other_category.append(item.name)

    distractors = unseeded_shuffle(same_category, rng)[:distractor_count]
    if len(distractors) < distractor_count:
        distractors += unseeded_shuffle(other_category, rng)[: distractor_count - len(distractors)]

    return unseeded_shuffle([correct_name, *distractors], rng)


def score_bonus(selected_name: str, correct_name: str) -> int:
    """Return the identification bonus for a multiple-choice answer."""
    return Config.BONUS_SCORE if selected_name == correct_name else 0


def calculate_accuracy(correct_locations: int, correct_bonus: int, round_count: int) -> int:
    """Percentage of location and identification answers that were correct."""
    if round_count <= 0:
        return 0
    return round_half_up((correct_locations + correct_bonus) / (round_count * 2) * 100)


def max_possible_score(round_count: int) -> int:
    return round_count * (Config.LOCATION_MAX_SCORE + Config.BONUS_SCORE)


def calculate_rating(score: int, round_count: int) -> RatingTier:
    """Rate a final score by its share of the maximum possible score."""
    maximum = max_possible_score(round_count)
    percentage = score * 100 / maximum if maximum > 0 else 0

    for threshold, tier in RATING_THRESHOLDS:
        if percentage >= threshold:
            return tier
    return RatingTier.LOWEST
