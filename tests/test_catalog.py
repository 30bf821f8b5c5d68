"""Tests for the command catalog snapshot and its persistence."""

import asyncio
import json

import pytest

from registrar.db import BATCH, DEBOUNCED, CommandCatalog
from registrar.exceptions import CatalogWriteError


def _raw(name, category="general"):
    return {"name": name, "aliases": [], "category": category}


class TestBuckets:
    """Tests for category and prefix bucketing."""

    def test_add_category_creates_empty_commands(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        catalog.add_category("general")
        assert catalog.to_dict() == {"general": {"commands": []}}

    def test_add_category_is_idempotent(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        catalog.add_category("general")
        assert len(catalog) == 1

    def test_top_level_commands(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        catalog.append("general", "", _raw("help"))
        data = catalog.to_dict()
        assert [c["name"] for c in data["general"]["commands"]] == ["ping", "help"]
        assert "children" not in data["general"]

    def test_nested_commands_go_to_children(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        catalog.append("music", "", _raw("play", "music"))
        catalog.append("music", "playlist ", _raw("add", "music"))
        catalog.append("music", "playlist ", _raw("remove", "music"))
        data = catalog.to_dict()
        assert [c["name"] for c in data["music"]["commands"]] == ["play"]
        assert [c["name"] for c in data["music"]["children"]["playlist"]] == ["add", "remove"]
        assert len(catalog) == 3

    def test_to_dict_is_a_copy(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        catalog.to_dict()["general"]["commands"].clear()
        assert len(catalog) == 1

    def test_clear(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        catalog.clear()
        assert catalog.to_dict() == {}

    def test_invalid_mode(self, tmp_path):
        with pytest.raises(ValueError):
            CommandCatalog(tmp_path / "commands.json", mode="sometimes")


class TestWrite:
    """Tests for the atomic whole-file write."""

    def test_write_creates_file(self, tmp_path, test_logger):
        path = tmp_path / "out" / "commands.json"
        catalog = CommandCatalog(path, logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        assert catalog.write() == path
        assert json.loads(path.read_text(encoding="utf-8")) == catalog.to_dict()
        assert catalog.write_count == 1

    def test_write_uses_four_space_indent(self, tmp_path, test_logger):
        path = tmp_path / "commands.json"
        catalog = CommandCatalog(path, logger=test_logger)
        catalog.add_category("general")
        catalog.write()
        assert path.read_text(encoding="utf-8").splitlines()[1].startswith('    "general"')

    def test_write_replaces_previous_content(self, tmp_path, test_logger):
        path = tmp_path / "commands.json"
        path.write_text('{"stale": true}', encoding="utf-8")
        catalog = CommandCatalog(path, logger=test_logger)
        catalog.add_category("general")
        catalog.write()
        assert json.loads(path.read_text(encoding="utf-8")) == {"general": {"commands": []}}

    def test_write_leaves_no_temp_files(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        catalog.write()
        catalog.write()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["commands.json"]

    def test_write_logs(self, tmp_path, test_logger, caplog):
        catalog = CommandCatalog(tmp_path / "commands.json", logger=test_logger)
        with caplog.at_level("INFO", logger=test_logger.name):
            catalog.write()
        assert 'Generated new "commands.json"' in caplog.text

    def test_unserializable_entry_raises(self, tmp_path, test_logger):
        path = tmp_path / "commands.json"
        path.write_text("{}", encoding="utf-8")
        catalog = CommandCatalog(path, logger=test_logger)
        catalog.append("general", "", {"name": "ping", "handler": object()})
        with pytest.raises(CatalogWriteError) as info:
            catalog.write()
        assert isinstance(info.value.__cause__, TypeError)
        assert path.read_text(encoding="utf-8") == "{}"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["commands.json"]

    def test_write_failure_raises(self, tmp_path, test_logger):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        catalog = CommandCatalog(blocker / "commands.json", logger=test_logger)
        with pytest.raises(CatalogWriteError) as info:
            catalog.write()
        assert isinstance(info.value.__cause__, OSError)
        assert catalog.write_count == 0


class TestDebouncedMode:
    """Tests for coalesced writes."""

    async def test_batch_mode_never_schedules(self, tmp_path, test_logger):
        catalog = CommandCatalog(tmp_path / "commands.json", mode=BATCH, logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        assert not catalog.pending
        await catalog.flush()
        assert catalog.write_count == 0

    async def test_burst_produces_one_write(self, tmp_path, test_logger):
        path = tmp_path / "commands.json"
        catalog = CommandCatalog(path, mode=DEBOUNCED, delay=0.05, logger=test_logger)
        for name in ("ping", "help", "about"):
            catalog.append("general", "", _raw(name))
        assert catalog.pending
        await asyncio.sleep(0.2)
        assert catalog.write_count == 1
        assert not catalog.pending
        assert len(json.loads(path.read_text(encoding="utf-8"))["general"]["commands"]) == 3

    async def test_flush_writes_immediately(self, tmp_path, test_logger):
        catalog = CommandCatalog(
            tmp_path / "commands.json", mode=DEBOUNCED, delay=10, logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        await catalog.flush()
        assert catalog.write_count == 1
        assert not catalog.pending

    async def test_clear_cancels_pending_write(self, tmp_path, test_logger):
        catalog = CommandCatalog(
            tmp_path / "commands.json", mode=DEBOUNCED, delay=0.05, logger=test_logger)
        catalog.append("general", "", _raw("ping"))
        catalog.clear()
        await asyncio.sleep(0.15)
        assert catalog.write_count == 0
        assert not (tmp_path / "commands.json").exists()
