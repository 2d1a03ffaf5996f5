"""Main entry point for Defenceguessr."""

import asyncio
import logging
import sys
from pathlib import Path

import aiosqlite

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Config
from db.catalog import load_catalog
from db.database import Database
from game.cli import CommandLoop
from game.services.daily_service import DailyChallengeRegistry
from game.services.game_service import GameService
from game.services.practice_service import PracticeBrowser
from utils.country_lookup import build_country_lookup
from utils.exceptions import DefenceguessrError

# Configure logging
logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def read_line(prompt: str) -> str | None:
    """Read a line of input without blocking the event loop. None on EOF."""
    try:
        return await asyncio.to_thread(input, prompt)
    except EOFError:
        return None


async def connect_database(db_path: str) -> Database:
    """Open the score database, or an in-memory one if it can't be opened.

    Without the file the game is still playable; daily history just isn't kept.
    """
    db = Database(db_path)
    try:
        await db.connect()
    except aiosqlite.Error as e:
        logger.warning(f"Can't open database {db_path} ({e}); daily scores won't be saved")
        await db.close()
        db = Database(":memory:")
        await db.connect()
        return db

    logger.info(f"Connected to database: {db_path}")
    return db


async def main() -> int:
    """Main entry point."""
    try:
        catalog = load_catalog(Config.CATALOG_PATH)
        lookup = build_country_lookup(Config.BOUNDARIES_PATH)
    except DefenceguessrError as e:
        logger.error(str(e))
        print(e.user_message)
        return 1

    db = await connect_database(Config.DATABASE_PATH)

    try:
        registry = DailyChallengeRegistry(db)
        await registry.prune()

        loop = CommandLoop(GameService(catalog, registry, lookup=lookup), PracticeBrowser(catalog))
        print(await loop.handle("/help"))

        while loop.running:
            line = await read_line("\n> ")
            if line is None:
                break
            output = await loop.handle(line)
            if output:
                print(output)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        await db.close()

    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
