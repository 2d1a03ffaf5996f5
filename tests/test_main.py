"""Tests for startup wiring."""

import pytest

import game.main as game_main
from config import Config


async def end_of_input(prompt: str) -> None:
    return None


class TestConnectDatabase:
    @pytest.mark.asyncio
    async def test_opens_file(self, tmp_path):
        path = tmp_path / "scores.db"

        db = await game_main.connect_database(str(path))
        try:
            await db.set_value("key", "value")
            assert await db.get_value("key") == "value"
        finally:
            await db.close()

        assert path.exists()

    @pytest.mark.asyncio
    async def test_unopenable_path_falls_back_to_memory(self, tmp_path):
        db = await game_main.connect_database(str(tmp_path / "missing" / "dir" / "scores.db"))
        try:
            assert db.db_path == ":memory:"
            await db.set_value("key", "value")
            assert await db.get_value("key") == "value"
        finally:
            await db.close()


class TestMain:
    @pytest.fixture(autouse=True)
    def no_input(self, monkeypatch):
        monkeypatch.setattr(game_main, "read_line", end_of_input)
        monkeypatch.setattr(Config, "CATALOG_PATH", "")
        monkeypatch.setattr(Config, "BOUNDARIES_PATH", "")

    @pytest.mark.asyncio
    async def test_runs_without_database_file(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(Config, "DATABASE_PATH", str(tmp_path / "missing" / "scores.db"))

        assert await game_main.main() == 0
        assert "**Defenceguessr**" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_missing_catalog(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(Config, "DATABASE_PATH", str(tmp_path / "scores.db"))
        monkeypatch.setattr(Config, "CATALOG_PATH", str(tmp_path / "missing.json"))

        assert await game_main.main() == 1
        assert "Equipment data is unavailable" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_unreadable_boundaries(self, tmp_path, monkeypatch, capsys):
        boundaries = tmp_path / "countries.geo.json"
        boundaries.write_text("not json")
        monkeypatch.setattr(Config, "DATABASE_PATH", str(tmp_path / "scores.db"))
        monkeypatch.setattr(Config, "BOUNDARIES_PATH", str(boundaries))

        assert await game_main.main() == 1
        assert "Map data is unavailable" in capsys.readouterr().out
