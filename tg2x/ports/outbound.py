"""Outbound ports — interfaces for external system adapters."""

from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable


@dataclass
class PostResult:
    """Result of a post submission."""

    success: bool
    post_id: Optional[str] = None
    text: Optional[str] = None
    error: Optional[str] = None


@runtime_checkable
class AttachmentPort(Protocol):
    """Fetches raw bytes for a channel attachment. Raises FetchError."""

    async def fetch_attachment(self, file_id: str) -> bytes: ...


@runtime_checkable
class MediaPort(Protocol):
    """Uploads media to the target platform. Raises UploadError.

    Returns the media handle, or None when the platform returned nothing.
    """

    async def upload_media(self, data: bytes, mime_type: str) -> Optional[str]: ...


@runtime_checkable
class PostPort(Protocol):
    """Submits a post to the target platform."""

    async def post(self, text: str, media_ids: Optional[List[str]] = None) -> PostResult: ...


@runtime_checkable
class NotificationPort(Protocol):
    """Sends a message to an operator chat. Raises NotifyError."""

    async def send(self, chat_id: str, text: str) -> None: ...
