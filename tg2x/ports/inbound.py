"""Inbound port — platform-agnostic channel message representation."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PhotoSize:
    """One resolution variant of a photo."""

    file_id: str
    width: int = 0
    height: int = 0


@dataclass
class VideoRef:
    file_id: str
    mime_type: Optional[str] = None


@dataclass
class DocumentRef:
    file_id: str
    mime_type: Optional[str] = None


@dataclass
class InboundMessage:
    """Telegram-agnostic view of a channel post or chat message.

    ``photos`` is ordered by ascending resolution, so the last entry is the
    largest variant.
    """

    channel_id: str
    text: Optional[str] = None
    caption: Optional[str] = None
    photos: List[PhotoSize] = field(default_factory=list)
    video: Optional[VideoRef] = None
    document: Optional[DocumentRef] = None
