"""Relay engine: decides whether and how a channel message becomes an X post."""

import asyncio
import math
import sys
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from tg2x.domain.errors import SubmitError
from tg2x.domain.models import OutboundPost, RelayOutcome, RelayState, RelayStatus
from tg2x.ports.inbound import InboundMessage
from tg2x.ports.outbound import AttachmentPort, NotificationPort

MAX_POST_LENGTH = 280
ELLIPSIS = "..."
FALLBACK_TEXT = "New post from Telegram channel"
PHOTO_MIME_TYPE = "image/jpeg"
VIDEO_MIME_TYPE = "video/mp4"


def _log(msg: str):
    print(msg, file=sys.stderr)


def truncate_text(text: str, limit: int = MAX_POST_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def extract_text(message: InboundMessage) -> str:
    """Plain text wins over caption; the two are never concatenated."""
    if message.text:
        return message.text
    if message.caption:
        return message.caption
    return ""


class RelayEngine:
    """Rate-limited, media-aware relay from monitored channels to X.

    ``publisher`` must provide ``upload_media`` and ``post`` (see
    MediaPort/PostPort). ``notifier`` is optional; without it, or without a
    ``notify_chat_id``, submission failures are only logged.

    relay() never raises. Calls are serialized by an internal lock so the
    read-then-write of ``state.last_post_at`` happens as one step.
    """

    def __init__(
        self,
        publisher,
        fetcher: AttachmentPort,
        state: RelayState,
        monitored_channels: Iterable[str],
        min_interval: timedelta = timedelta(minutes=5),
        posting_disabled: bool = False,
        notifier: Optional[NotificationPort] = None,
        notify_chat_id: str = "",
    ):
        self._publisher = publisher
        self._fetcher = fetcher
        self.state = state
        self.monitored_channels = frozenset(
            ch.strip() for ch in monitored_channels if ch and ch.strip()
        )
        self.min_interval = min_interval
        self.posting_disabled = posting_disabled
        self._notifier = notifier
        self._notify_chat_id = notify_chat_id.strip() if notify_chat_id else ""
        self._lock = asyncio.Lock()

    # ── gates ────────────────────────────────────────────────

    def is_monitored(self, channel_id: str) -> bool:
        return channel_id.strip() in self.monitored_channels

    def remaining_cooldown(self, now: datetime) -> timedelta:
        """Time left until the next post is allowed (zero when allowed)."""
        elapsed = now - self.state.last_post_at
        if elapsed >= self.min_interval:
            return timedelta(0)
        return self.min_interval - elapsed

    def next_allowed_at(self) -> datetime:
        return self.state.last_post_at + self.min_interval

    # ── entry point ──────────────────────────────────────────

    async def relay(
        self, message: InboundMessage, now: Optional[datetime] = None
    ) -> RelayOutcome:
        """Relay one message. ``now`` pins the clock (naive means UTC).

        Without ``now`` the post time recorded is read after X accepts the
        post, so slow uploads do not shorten the next window.
        """
        if now is not None and now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        async with self._lock:
            return await self._relay(message, now)

    async def _relay(
        self, message: InboundMessage, pinned_now: Optional[datetime]
    ) -> RelayOutcome:
        now = pinned_now or datetime.now(timezone.utc)
        if self.posting_disabled:
            _log("X posting is disabled")
            return RelayOutcome(status=RelayStatus.DISABLED)

        if not self.is_monitored(message.channel_id):
            _log(f"Message from unmonitored channel: {message.channel_id}")
            return RelayOutcome(status=RelayStatus.UNMONITORED)

        remaining = self.remaining_cooldown(now)
        if remaining > timedelta(0):
            minutes = math.ceil(remaining.total_seconds() / 60)
            _log(f"Rate limit: skipping message. Next post allowed in {minutes} minutes")
            return RelayOutcome(
                status=RelayStatus.RATE_LIMITED,
                retry_after_seconds=remaining.total_seconds(),
            )

        text = extract_text(message)
        media_ids = await self._attach_media(message)
        text = truncate_text(text)

        if not text and not media_ids:
            _log("No content to post")
            return RelayOutcome(status=RelayStatus.NO_CONTENT)

        post = OutboundPost(text=text or FALLBACK_TEXT, media_ids=media_ids)
        try:
            post_id = await self._submit(post)
        except Exception as e:
            _log(f"Error posting to X: {e}")
            await self._notify_failure(e)
            return RelayOutcome(
                status=RelayStatus.FAILED, error=str(e), media_ids=media_ids
            )

        self.state.record_post(pinned_now or datetime.now(timezone.utc))
        _log(f"Post published successfully: {post_id}")
        _log(f"Next post allowed at {self.next_allowed_at().isoformat()}")
        return RelayOutcome(status=RelayStatus.POSTED, post_id=post_id, media_ids=media_ids)

    # ── steps ────────────────────────────────────────────────

    async def _attach_media(self, message: InboundMessage) -> List[str]:
        media_ids: List[str] = []

        if message.photos:
            largest = message.photos[-1]
            media_id = await self._upload_one(largest.file_id, PHOTO_MIME_TYPE, "photo")
            if media_id:
                media_ids.append(media_id)

        if message.video:
            mime_type = message.video.mime_type or VIDEO_MIME_TYPE
            media_id = await self._upload_one(message.video.file_id, mime_type, "video")
            if media_id:
                media_ids.append(media_id)

        if message.document:
            _log(f"Document received, type: {message.document.mime_type}")

        return media_ids

    async def _upload_one(self, file_id: str, mime_type: str, kind: str) -> Optional[str]:
        try:
            data = await self._fetcher.fetch_attachment(file_id)
            return await self._publisher.upload_media(data, mime_type)
        except Exception as e:
            _log(f"Failed to process {kind}, continuing without it: {e}")
            return None

    async def _submit(self, post: OutboundPost) -> str:
        result = await self._publisher.post(post.text, media_ids=post.media_ids or None)
        if not result.success:
            raise SubmitError(result.error or "unknown error")
        return result.post_id

    async def _notify_failure(self, error: Exception):
        if not self._notifier or not self._notify_chat_id:
            return
        try:
            await self._notifier.send(self._notify_chat_id, f"Error posting to X: {error}")
        except Exception as e:
            _log(f"Failed to send error notification: {e}")
