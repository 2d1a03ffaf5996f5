"""Terminal commands for Defenceguessr."""

import logging
import shlex
from collections.abc import Awaitable, Callable

from config import Config
from game.services.game_service import GameService
from game.services.practice_service import PracticeBrowser
from utils.formatting import (
    format_equipment_details,
    format_equipment_grid,
    format_leaderboard,
)

logger = logging.getLogger(__name__)

HELP_TEXT = f"""
**Defenceguessr**

Guess where a piece of military equipment was built, then identify it!

**How to Play:**
1. Use `/start` for a practice game or `/daily <callsign>` for today's challenge
2. Read the specs and use `/guess <lat> <lng>` to place your pin
3. Pick the equipment's name from the options with `/identify <number>`
4. Use `/next` to continue until all {Config.ROUNDS_PER_GAME} rounds are done

**Scoring:**
- **Location:** {Config.LOCATION_MAX_SCORE} points for a pin inside the right country, otherwise fewer the further off you are
- **Identification:** {Config.BONUS_SCORE} bonus points if correct

**Commands:**
- `/start` - Start a practice game
- `/daily <callsign>` - Play today's daily challenge (once per day)
- `/guess <lat> <lng>` - Submit your location guess
- `/identify <number or name>` - Answer the identification bonus
- `/skip` - Skip the identification bonus
- `/next` - Go to the next round
- `/leaderboard` - Show today's leaderboard
- `/practice [category]` - Browse the equipment catalog
- `/view <name>` - Show details for a catalog item
- `/quit` - Exit
"""


class CommandLoop:
    """Parses player input and dispatches it to the game service."""

    def __init__(self, game_service: GameService, practice: PracticeBrowser):
        self.game_service = game_service
        self.practice = practice
        self.running = True
        self._commands: dict[str, Callable[[list[str]], Awaitable[str]]] = {
            "/start": self.start,
            "/daily": self.daily,
            "/guess": self.guess,
            "/identify": self.identify,
            "/skip": self.skip,
            "/next": self.next,
            "/leaderboard": self.leaderboard,
            "/practice": self.practice_hub,
            "/view": self.view,
            "/help": self.help,
            "/quit": self.quit,
        }

    async def handle(self, line: str) -> str:
        """Run one line of input and return the text to display."""
        try:
            parts = shlex.split(line)
        except ValueError:
            return "Couldn't read that command. Check your quotes."
        if not parts:
            return ""

        name, args = parts[0].lower(), parts[1:]
        command = self._commands.get(name)
        if command is None:
            return f"Unknown command `{name}`. Type `/help` for a list of commands."

        logger.debug(f"Command {name} invoked with {args}")
        return await command(args)

    async def start(self, args: list[str]) -> str:
        _, message = await self.game_service.start_game()
        return message

    async def daily(self, args: list[str]) -> str:
        _, message = await self.game_service.start_daily(" ".join(args))
        return message

    async def guess(self, args: list[str]) -> str:
        if len(args) < 2:
            return "Select a location on the map first! Usage: `/guess <lat> <lng>`"
        if len(args) > 2:
            return "Usage: `/guess <lat> <lng>`. The country is taken from where you place the pin."
        try:
            lat, lng = float(args[0]), float(args[1])
        except ValueError:
            return "Latitude and longitude must be numbers, e.g. `/guess 48.85 2.35`"

        _, message = self.game_service.submit_location_guess(lat, lng)
        return message

    async def identify(self, args: list[str]) -> str:
        if not args:
            return "Usage: `/identify <number or name>`"
        _, message = self.game_service.submit_bonus_choice(" ".join(args))
        return message

    async def skip(self, args: list[str]) -> str:
        _, message = self.game_service.skip_bonus()
        return message

    async def next(self, args: list[str]) -> str:
        _, message = await self.game_service.advance_round()
        return message

    async def leaderboard(self, args: list[str]) -> str:
        entries = await self.game_service.registry.leaderboard()
        return format_leaderboard(entries, empty_message="No scores yet today. Be the first!")

    async def practice_hub(self, args: list[str]) -> str:
        if args:
            category = " ".join(args)
            if category not in self.practice.categories:
                return f"Unknown category. Choose from: {', '.join(self.practice.categories)}"
            items = self.practice.set_category(category)
        else:
            items = self.practice.open()
        return format_equipment_grid(items, self.practice.state.category)

    async def view(self, args: list[str]) -> str:
        if not args:
            self.practice.clear_selection()
            return "Selection cleared."
        equipment = self.practice.select(" ".join(args))
        if equipment is None:
            return "No equipment with that name. Use `/practice` to browse the catalog."
        return format_equipment_details(equipment)

    async def help(self, args: list[str]) -> str:
        return HELP_TEXT.strip()

    async def quit(self, args: list[str]) -> str:
        self.running = False
        return "Signing off."
