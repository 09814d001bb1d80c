"""Tests for the persistent message archive."""

import pytest
from chattext.chat.archive import MessageArchive
from chattext.text.component import TextComponent


@pytest.fixture
async def archive(tmp_path):
    a = MessageArchive(tmp_path / "data" / "messages.db")
    await a.start()
    yield a
    await a.stop()


class TestMessageArchive:
    async def test_save_and_load(self, archive):
        component = TextComponent("§lHello §r§cWorld", dispatch_id=12)
        row_id = await archive.save(component)
        assert row_id >= 1

        loaded = await archive.load(12)
        assert loaded is not None
        assert loaded.parts == component.parts
        assert loaded.dispatch_id == 12

    async def test_load_missing(self, archive):
        assert await archive.load(999) is None

    async def test_load_latest(self, archive):
        await archive.save(TextComponent("v1", dispatch_id=4))
        await archive.save(TextComponent("v2", dispatch_id=4))
        loaded = await archive.load(4)
        assert loaded.unformatted_text == "v2"

    async def test_recent_newest_first(self, archive):
        for text in ("one", "two", "three"):
            await archive.save(TextComponent(text))
        recent = await archive.recent(limit=2)
        assert [c.unformatted_text for c in recent] == ["three", "two"]

    async def test_recent_by_channel(self, archive):
        await archive.save(TextComponent("chat line"), "chat")
        await archive.save(TextComponent("bar"), "action_bar")
        recent = await archive.recent(channel="action_bar")
        assert [c.unformatted_text for c in recent] == ["bar"]

    async def test_delete(self, archive):
        await archive.save(TextComponent("a", dispatch_id=8))
        await archive.save(TextComponent("b", dispatch_id=8))
        assert await archive.delete(8) == 2
        assert await archive.load(8) is None

    async def test_recursive_flag_survives(self, archive):
        await archive.save(TextComponent("echo", dispatch_id=1, recursive=True))
        loaded = await archive.load(1)
        assert loaded.recursive is True

    async def test_reopen(self, tmp_path):
        path = tmp_path / "messages.db"
        first = MessageArchive(path)
        await first.start()
        await first.save(TextComponent("persisted", dispatch_id=2))
        await first.stop()

        second = MessageArchive(path)
        await second.start()
        loaded = await second.load(2)
        await second.stop()
        assert loaded.unformatted_text == "persisted"
