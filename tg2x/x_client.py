"""X (Twitter) client using tweepy."""

import asyncio
import io
from dataclasses import dataclass
from typing import List, Optional

import tweepy

from tg2x.config import CONFIG
from tg2x.domain.errors import UploadError
from tg2x.domain.relay import MAX_POST_LENGTH, truncate_text

# filename hints so tweepy picks the right upload path
_MEDIA_FILENAMES = {
    "image/jpeg": ("photo.jpg", "tweet_image"),
    "image/png": ("photo.png", "tweet_image"),
    "image/gif": ("animation.gif", "tweet_gif"),
    "video/mp4": ("video.mp4", "tweet_video"),
    "video/quicktime": ("video.mov", "tweet_video"),
}


def _media_filename(mime_type: str):
    """Filename and media category for a content type; families fall back."""
    if mime_type in _MEDIA_FILENAMES:
        return _MEDIA_FILENAMES[mime_type]
    if mime_type.startswith("video/"):
        return ("video.mp4", "tweet_video")
    if mime_type.startswith("image/"):
        return ("photo.jpg", "tweet_image")
    return ("upload.bin", None)


@dataclass
class XPostResult:
    success: bool
    post_id: Optional[str] = None
    text: Optional[str] = None
    error: Optional[str] = None


class XClient:
    """Async wrapper around tweepy for X API v2 posts and v1.1 media upload."""

    def __init__(self):
        self._client: Optional[tweepy.Client] = None
        self._api: Optional[tweepy.API] = None

    @property
    def is_configured(self) -> bool:
        keys = [
            CONFIG["x_consumer_key"],
            CONFIG["x_consumer_secret"],
            CONFIG["x_access_token"],
            CONFIG["x_access_token_secret"],
        ]
        return all(k for k in keys)

    def _get_client(self) -> tweepy.Client:
        if self._client is None:
            self._client = tweepy.Client(
                consumer_key=CONFIG["x_consumer_key"],
                consumer_secret=CONFIG["x_consumer_secret"],
                access_token=CONFIG["x_access_token"],
                access_token_secret=CONFIG["x_access_token_secret"],
            )
        return self._client

    def _get_api(self) -> tweepy.API:
        # media upload is only available on the v1.1 API
        if self._api is None:
            auth = tweepy.OAuth1UserHandler(
                CONFIG["x_consumer_key"],
                CONFIG["x_consumer_secret"],
                CONFIG["x_access_token"],
                CONFIG["x_access_token_secret"],
            )
            self._api = tweepy.API(auth)
        return self._api

    @staticmethod
    def truncate_text(text: str, limit: int = MAX_POST_LENGTH) -> str:
        return truncate_text(text, limit)

    async def verify(self) -> str:
        """Return the authenticated username. Raises on bad credentials."""
        client = self._get_client()
        response = await asyncio.to_thread(client.get_me, user_auth=True)
        return response.data.username

    async def upload_media(self, data: bytes, mime_type: str) -> Optional[str]:
        filename, category = _media_filename(mime_type or "")
        chunked = category in ("tweet_video", "tweet_gif")
        try:
            api = self._get_api()
            media = await asyncio.to_thread(
                api.media_upload,
                filename,
                file=io.BytesIO(data),
                chunked=chunked,
                media_category=category,
            )
        except Exception as e:
            raise UploadError(f"{mime_type} upload failed: {e}") from e
        media_id = getattr(media, "media_id_string", None) or getattr(media, "media_id", None)
        return str(media_id) if media_id else None

    async def post(self, text: str, media_ids: Optional[List[str]] = None) -> XPostResult:
        text = self.truncate_text(text)
        try:
            client = self._get_client()
            if media_ids:
                response = await asyncio.to_thread(
                    client.create_tweet, text=text, media_ids=list(media_ids)
                )
            else:
                response = await asyncio.to_thread(client.create_tweet, text=text)
            tweet_id = str(response.data["id"])
            return XPostResult(success=True, post_id=tweet_id, text=text)
        except Exception as e:
            return XPostResult(success=False, text=text, error=str(e))
