"""Daily challenge bookkeeping: played days and per-day leaderboards."""

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Optional

import aiosqlite
from pydantic import ValidationError

from config import Config
from db.database import Database
from models import DailyData, LeaderboardEntry
from utils.shuffle import date_key

logger = logging.getLogger(__name__)


class DailyChallengeRegistry:
    """Tracks daily challenge attempts and keeps a short leaderboard per day.

    All state lives under a single key in the key-value store as JSON:
    ``{"leaderboards": {date_key: [entry, ...]}, "played": {date_key: true}}``.
    Unreadable state is treated as empty and failed writes are logged, so the
    game stays playable without history.
    """

    def __init__(
        self,
        db: Database,
        storage_key: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.storage_key = storage_key or Config.DAILY_STORAGE_KEY
        self.clock = clock

    def today(self) -> date:
        return self.clock().date()

    def today_key(self) -> str:
        return date_key(self.today())

    async def load(self) -> DailyData:
        """Read the stored daily state, falling back to empty state."""
        try:
            raw = await self.db.get_value(self.storage_key)
        except aiosqlite.Error as e:
            logger.warning(f"Failed to read daily challenge data: {e}")
            return DailyData()

        if raw is None:
            return DailyData()

        try:
            return DailyData.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable daily challenge data: {e}")
            return DailyData()

    async def save(self, data: DailyData) -> bool:
        """Persist daily state. Returns False if the write failed."""
        try:
            await self.db.set_value(self.storage_key, data.model_dump_json())
            return True
        except aiosqlite.Error as e:
            logger.error(f"Failed to save daily challenge data: {e}")
            return False

    async def has_played(self, key: str) -> bool:
        data = await self.load()
        return data.played.get(key) is True

    async def has_played_today(self) -> bool:
        return await self.has_played(self.today_key())

    async def record_attempt(self, key: Optional[str] = None) -> None:
        """Mark a date-key as played."""
        key = key or self.today_key()
        data = await self.load()
        if data.played.get(key) is True:
            return
        data.played[key] = True
        await self.save(data)
        logger.info(f"Recorded daily challenge attempt for {key}")

    async def submit_score(self, key: str, name: str, score: int) -> None:
        """Add a score to a day's leaderboard and mark the day as played.

        The board is ordered by score (highest first), then by submission
        time (earliest first), and only the top entries are kept.
        """
        data = await self.load()
        entries = data.leaderboards.get(key, [])
        entries.append(
            LeaderboardEntry(
                name=name,
                score=score,
                timestamp=int(self.clock().timestamp() * 1000),
            )
        )
        entries.sort(key=lambda e: (-e.score, e.timestamp))
        data.leaderboards[key] = entries[: Config.LEADERBOARD_SIZE]
        data.played[key] = True

        await self.save(data)
        logger.info(f"Submitted daily score {score} for '{name}' on {key}")

    async def leaderboard(self, key: Optional[str] = None) -> list[LeaderboardEntry]:
        data = await self.load()
        return data.leaderboards.get(key or self.today_key(), [])

    async def placement(self, key: str, name: str, score: int) -> Optional[int]:
        """1-based leaderboard position of a name/score pair, if it made the board."""
        for position, entry in enumerate(await self.leaderboard(key), 1):
            if entry.name == name and entry.score == score:
                return position
        return None

    async def prune(self, retention_days: Optional[int] = None) -> int:
        """Drop leaderboards and played marks older than the retention window.

        The cutoff is ``today_key - retention_days`` on the integer date-key,
        which is not calendar-exact across month boundaries: on 20240302 the
        cutoff is 20240295, so every February key is dropped, even the day
        before yesterday. Keys that are not integers are dropped as well.

        Returns the number of entries removed.
        """
        retention_days = retention_days if retention_days is not None else Config.LEADERBOARD_RETENTION_DAYS
        cutoff = int(self.today_key()) - retention_days
        data = await self.load()

        removed = 0
        for collection in (data.leaderboards, data.played):
            for key in list(collection):
                if not _is_current(key, cutoff):
                    del collection[key]
                    removed += 1

        if removed:
            await self.save(data)
            logger.info(f"Pruned {removed} daily challenge entries older than {cutoff}")
        return removed


def _is_current(key: str, cutoff: int) -> bool:
    try:
        return int(key) >= cutoff
    except ValueError:
        return False
