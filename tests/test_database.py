"""Tests for database operations."""

import pytest

from db.database import Database


class TestDatabaseConnection:
    @pytest.mark.asyncio
    async def test_connect_and_close(self):
        db = Database(":memory:")
        await db.connect()
        assert db._connection is not None
        await db.close()
        assert db._connection is None

    @pytest.mark.asyncio
    async def test_migrations_recorded_once(self, db):
        await db._run_migrations()

        count = await db.fetch_value("SELECT COUNT(*) FROM _migrations WHERE name = ?", ("001_kv_store.sql",))
        assert count == 1

    @pytest.mark.asyncio
    async def test_persists_to_file(self, tmp_path):
        path = str(tmp_path / "game.db")

        db = Database(path)
        await db.connect()
        await db.set_value("key", "value")
        await db.close()

        db = Database(path)
        await db.connect()
        assert await db.get_value("key") == "value"
        await db.close()


class TestKeyValueStore:
    @pytest.mark.asyncio
    async def test_missing_key(self, db):
        assert await db.get_value("nothing") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, db):
        await db.set_value("defenceGuesserDaily", '{"leaderboards": {}, "played": {}}')
        assert await db.get_value("defenceGuesserDaily") == '{"leaderboards": {}, "played": {}}'

    @pytest.mark.asyncio
    async def test_overwrite(self, db):
        await db.set_value("key", "first")
        await db.set_value("key", "second")

        assert await db.get_value("key") == "second"
        assert await db.fetch_value("SELECT COUNT(*) FROM kv_store") == 1

    @pytest.mark.asyncio
    async def test_keys_are_independent(self, db):
        await db.set_value("a", "1")
        await db.set_value("b", "2")

        assert await db.get_value("a") == "1"
        assert await db.get_value("b") == "2"
