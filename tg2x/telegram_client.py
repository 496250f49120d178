"""Telegram adapters using python-telegram-bot."""

from telegram import Bot, Message
from telegram.error import TelegramError

from tg2x.domain.errors import FetchError, NotifyError
from tg2x.ports.inbound import DocumentRef, InboundMessage, PhotoSize, VideoRef


def message_to_inbound(message: Message) -> InboundMessage:
    """Convert a telegram.Message (chat message or channel post)."""
    photos = [
        PhotoSize(file_id=p.file_id, width=p.width, height=p.height)
        for p in (message.photo or ())
    ]
    video = None
    if message.video:
        video = VideoRef(file_id=message.video.file_id, mime_type=message.video.mime_type)
    document = None
    if message.document:
        document = DocumentRef(
            file_id=message.document.file_id, mime_type=message.document.mime_type
        )
    return InboundMessage(
        channel_id=str(message.chat.id),
        text=message.text,
        caption=message.caption,
        photos=photos,
        video=video,
        document=document,
    )


class TelegramFetcher:
    """AttachmentPort implementation: Bot API getFile + library download."""

    def __init__(self, bot: Bot):
        self._bot = bot

    def _redact(self, text: str) -> str:
        # file URLs embed the bot token
        token = getattr(self._bot, "token", None)
        if token:
            return text.replace(token, "<token>")
        return text

    async def fetch_attachment(self, file_id: str) -> bytes:
        try:
            tg_file = await self._bot.get_file(file_id)
        except TelegramError as e:
            raise FetchError(self._redact(f"getFile failed for {file_id}: {e}")) from e
        if not tg_file.file_path:
            raise FetchError(f"No download path for {file_id}")

        try:
            data = await tg_file.download_as_bytearray()
        except TelegramError as e:
            raise FetchError(self._redact(f"Download failed for {file_id}: {e}")) from e
        return bytes(data)


class TelegramNotifier:
    """NotificationPort implementation using Bot.send_message."""

    def __init__(self, bot: Bot):
        self._bot = bot

    async def send(self, chat_id: str, text: str) -> None:
        try:
            await self._bot.send_message(chat_id=chat_id, text=text)
        except TelegramError as e:
            raise NotifyError(str(e)) from e

