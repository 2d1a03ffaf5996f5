"""Text formatting for the game display."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

from models import (
    EquipmentRecord,
    LeaderboardEntry,
    LocationScore,
    RatingTier,
    RoundResult,
    SessionSummary,
)

if TYPE_CHECKING:
    from game.services.game_service import GameSession

RATING_NAMES = {
    RatingTier.TOP: "TURBO NINJA",
    RatingTier.SECOND: "THRUSTER",
    RatingTier.THIRD: "GREY MAN",
    RatingTier.FOURTH: "BOTTOM THIRD",
    RatingTier.LOWEST: "CERTIFIED LIZARD",
}

MEDALS = ["🥇", "🥈", "🥉"]

UNKNOWN_TERRITORY = "Unknown Territory"


def ordinal(position: int) -> str:
    """Format a leaderboard position as 1st, 2nd, 3rd, 4th..."""
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(position, "th")
    return f"{position}{suffix}"


def rating_name(rating: RatingTier) -> str:
    return RATING_NAMES[rating]


def format_specs(equipment: EquipmentRecord) -> list[str]:
    return [
        f"**Speed:** {equipment.specs.speed or '?'}",
        f"**Armament:** {equipment.specs.armament or '?'}",
        f"**Range:** {equipment.specs.range or '?'}",
    ]


def format_round_intro(session: "GameSession") -> str:
    """Show the equipment for the current round without giving away its identity."""
    state = session.state
    equipment = session.current_equipment

    mode = "DAILY CHALLENGE" if state.is_daily else "DEFENCEGUESSR"
    lines = [
        f"# {mode} — Round {state.current_round}/{state.round_count}",
        f"**Score:** {state.score}",
        "",
    ]
    if equipment.image:
        lines.append(f"🖼️ {equipment.image}")
    lines.extend(format_specs(equipment))
    lines.extend(
        [
            "",
            "---",
            "**Where was this built?** Use `/guess <lat> <lng>`",
        ]
    )
    return "\n".join(lines)


def format_location_result(
    equipment: EquipmentRecord,
    location: LocationScore,
    choices: Sequence[str],
    total_score: int,
) -> str:
    """Format the outcome of a location guess and the identification options."""
    if location.country_correct:
        lines = [
            "# TARGET NEUTRALIZED",
            f"📍 **Origin:** {equipment.origin}",
            "**Distance:** TARGET VERIFIED (Country Match)",
        ]
    else:
        selected = location.selected_country or UNKNOWN_TERRITORY
        lines = [
            "# TARGET MISSED",
            f"📍 **Origin:** {equipment.origin}",
            f"**Distance:** {round(location.distance_km)} km off (Selected: {selected})",
        ]

    lines.extend(
        [
            f"**Points:** +{location.points}",
            f"**Score:** {total_score}",
            "",
            "**Bonus: identify the equipment** Use `/identify <number>` or `/skip`",
        ]
    )
    for i, name in enumerate(choices, 1):
        lines.append(f"{i}. {name}")
    return "\n".join(lines)


def format_equipment_summary(equipment: EquipmentRecord) -> list[str]:
    return [
        f"**In service:** {equipment.in_service or 'Unknown'}",
        f"**Status:** {equipment.status or 'Unknown'}",
        f"**Users:** {', '.join(equipment.users) if equipment.users else 'Unknown'}",
    ]


def format_bonus_result(equipment: EquipmentRecord, result: RoundResult, total_score: int) -> str:
    """Format the identification outcome and reveal the equipment summary."""
    if result.bonus_correct:
        lines = [f"✅ CORRECT! +{result.bonus_points} bonus points!"]
    else:
        lines = [f"❌ INCORRECT! It was: {equipment.name}"]

    lines.extend(
        [
            f"**Round total:** +{result.total_points}",
            f"**Score:** {total_score}",
            "",
            f"## {equipment.name}",
        ]
    )
    lines.extend(format_equipment_summary(equipment))
    lines.extend(["", "Use `/next` to continue"])
    return "\n".join(lines)


def format_round_line(result: RoundResult) -> str:
    location = "✓" if result.location_correct else "✗"
    identified = "✓" if result.bonus_correct else "✗"
    return (
        f"{result.round_number}. {result.equipment} ({result.origin} • {result.category}) "
        f"{location} Location {identified} ID +{result.total_points}"
    )


def format_placement(placement: Optional[int]) -> list[str]:
    if placement is not None:
        return [
            f"🎉 **YOU PLACED {ordinal(placement).upper()}!**",
            "You made it onto today's leaderboard!",
        ]
    return [
        "**Not on the leaderboard**",
        "Try again tomorrow for another chance!",
    ]


def format_game_over(
    summary: SessionSummary,
    leaderboard: Optional[Sequence[LeaderboardEntry]] = None,
) -> str:
    """Format the end-of-game summary, with the daily leaderboard if given."""
    lines = [
        "# GAME OVER",
        f"**Final Score:** {summary.score:,}",
        f"**Rating:** {rating_name(summary.rating)}",
        "",
        f"**Correct Locations:** {summary.correct_locations}/{summary.round_count}",
        f"**Correct IDs:** {summary.correct_bonus}/{summary.round_count}",
        f"**Accuracy:** {summary.accuracy}%",
        "",
        "**Rounds:**",
    ]
    lines.extend(format_round_line(result) for result in summary.results)

    if leaderboard is not None:
        lines.append("")
        lines.extend(format_placement(summary.placement))
        lines.append("")
        lines.append(
            format_leaderboard(
                leaderboard,
                title="Today's Leaderboard",
                highlight=(summary.player_name, summary.score),
            )
        )

    return "\n".join(lines)


def format_leaderboard(
    entries: Sequence[LeaderboardEntry],
    title: str = "Today's Leaderboard",
    highlight: Optional[tuple[Optional[str], int]] = None,
    empty_message: str = "No scores yet",
) -> str:
    """Format a daily leaderboard.

    Args:
        entries: Ranked entries, best first.
        title: The title to show at the top.
        highlight: A (name, score) pair to mark as the current player.
        empty_message: Text shown when nobody has submitted yet.
    """
    lines = [
        f"# 🏆 {title}",
        "",
    ]

    if not entries:
        lines.append(f"*{empty_message}*")
        return "\n".join(lines)

    for i, entry in enumerate(entries):
        medal = MEDALS[i] if i < 3 else f"{i + 1}."
        marker = " ⬅️" if highlight and (entry.name, entry.score) == highlight else ""
        lines.append(f"{medal} {entry.name} - **{entry.score:,}** pts{marker}")

    return "\n".join(lines)


def format_equipment_grid(items: Sequence[EquipmentRecord], category: str) -> str:
    """Format the practice hub listing."""
    lines = [f"# PRACTICE HUB — {category.upper()}", ""]
    if not items:
        lines.append("*No equipment in this category*")
        return "\n".join(lines)

    for item in items:
        lines.append(f"- **{item.name}** ({item.origin} • {item.category})")
    lines.extend(["", "Use `/view <name>` for details"])
    return "\n".join(lines)


def format_equipment_details(equipment: EquipmentRecord) -> str:
    """Format everything known about a catalog item."""
    lines = [
        f"## {equipment.name}",
        f"**Origin:** {equipment.origin}",
        f"**Type:** {equipment.category}",
    ]
    if equipment.image:
        lines.append(f"🖼️ {equipment.image}")
    lines.extend(format_specs(equipment))
    lines.extend(format_equipment_summary(equipment))
    return "\n".join(lines)
