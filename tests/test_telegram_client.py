"""Unit tests for the Telegram adapters."""

import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from telegram.error import BadRequest, NetworkError

from tg2x.domain.errors import FetchError, NotifyError
from tg2x.telegram_client import (
    TelegramFetcher,
    TelegramNotifier,
    message_to_inbound,
)


def _tg_message(**kwargs):
    defaults = {
        "chat": SimpleNamespace(id=-1001234567890),
        "text": None,
        "caption": None,
        "photo": (),
        "video": None,
        "document": None,
    }
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


def _tg_file(data=b"", error=None, path="https://api.telegram.org/file/bot123:abc/photos/file_0.jpg"):
    f = MagicMock()
    f.file_path = path
    if error:
        f.download_as_bytearray = AsyncMock(side_effect=error)
    else:
        f.download_as_bytearray = AsyncMock(return_value=bytearray(data))
    return f


class TestMessageToInbound:
    def test_text_message(self):
        inbound = message_to_inbound(_tg_message(text="hello"))
        assert inbound.channel_id == "-1001234567890"
        assert inbound.text == "hello"
        assert inbound.photos == []
        assert inbound.video is None

    def test_photo_sizes_keep_order(self):
        photo = (
            SimpleNamespace(file_id="s", width=90, height=60),
            SimpleNamespace(file_id="l", width=1280, height=853),
        )
        inbound = message_to_inbound(_tg_message(caption="cap", photo=photo))
        assert [p.file_id for p in inbound.photos] == ["s", "l"]
        assert inbound.photos[-1].width == 1280
        assert inbound.caption == "cap"

    def test_video_and_document(self):
        msg = _tg_message(
            video=SimpleNamespace(file_id="v", mime_type="video/mp4"),
            document=SimpleNamespace(file_id="d", mime_type="application/pdf"),
        )
        inbound = message_to_inbound(msg)
        assert inbound.video.file_id == "v"
        assert inbound.video.mime_type == "video/mp4"
        assert inbound.document.mime_type == "application/pdf"


class TestTelegramFetcher:
    @pytest.fixture
    def bot(self):
        b = MagicMock()
        b.token = "123:abc"
        b.get_file = AsyncMock(return_value=_tg_file(b"jpeg"))
        return b

    @pytest.mark.asyncio
    async def test_fetch_success(self, bot):
        data = await TelegramFetcher(bot).fetch_attachment("file_1")
        assert data == b"jpeg"
        assert isinstance(data, bytes)
        bot.get_file.assert_awaited_once_with("file_1")

    @pytest.mark.asyncio
    async def test_get_file_error(self, bot):
        bot.get_file = AsyncMock(side_effect=BadRequest("File is too big"))
        with pytest.raises(FetchError, match="File is too big"):
            await TelegramFetcher(bot).fetch_attachment("file_1")

    @pytest.mark.asyncio
    async def test_missing_file_path(self, bot):
        bot.get_file = AsyncMock(return_value=_tg_file(path=None))
        with pytest.raises(FetchError):
            await TelegramFetcher(bot).fetch_attachment("file_1")

    @pytest.mark.asyncio
    async def test_download_error(self, bot):
        bot.get_file = AsyncMock(return_value=_tg_file(error=NetworkError("Not Found")))
        with pytest.raises(FetchError, match="Not Found"):
            await TelegramFetcher(bot).fetch_attachment("file_1")

    @pytest.mark.asyncio
    async def test_download_error_hides_bot_token(self, bot):
        error = NetworkError(
            "404 for https://api.telegram.org/file/bot123:abc/photos/file_0.jpg"
        )
        bot.get_file = AsyncMock(return_value=_tg_file(error=error))
        with pytest.raises(FetchError) as excinfo:
            await TelegramFetcher(bot).fetch_attachment("file_1")
        assert "123:abc" not in str(excinfo.value)
        assert "<token>" in str(excinfo.value)


class TestTelegramNotifier:
    @pytest.mark.asyncio
    async def test_send(self):
        bot = MagicMock()
        bot.send_message = AsyncMock()
        await TelegramNotifier(bot).send("42", "oops")
        bot.send_message.assert_awaited_once_with(chat_id="42", text="oops")

    @pytest.mark.asyncio
    async def test_send_failure_raises_notify_error(self):
        bot = MagicMock()
        bot.send_message = AsyncMock(side_effect=BadRequest("Chat not found"))
        with pytest.raises(NotifyError, match="Chat not found"):
            await TelegramNotifier(bot).send("42", "oops")
