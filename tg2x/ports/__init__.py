"""Port interfaces (Hexagonal Architecture)."""

from tg2x.ports.inbound import DocumentRef, InboundMessage, PhotoSize, VideoRef
from tg2x.ports.outbound import (
    AttachmentPort,
    MediaPort,
    NotificationPort,
    PostPort,
    PostResult,
)

__all__ = [
    "DocumentRef",
    "InboundMessage",
    "PhotoSize",
    "VideoRef",
    "AttachmentPort",
    "MediaPort",
    "NotificationPort",
    "PostPort",
    "PostResult",
]
