"""Domain layer — pure Python, no framework dependencies."""

from tg2x.domain.errors import FetchError, NotifyError, RelayError, SubmitError, UploadError
from tg2x.domain.models import OutboundPost, RelayOutcome, RelayState, RelayStatus
from tg2x.domain.relay import FALLBACK_TEXT, RelayEngine, extract_text, truncate_text

__all__ = [
    "FetchError",
    "NotifyError",
    "RelayError",
    "SubmitError",
    "UploadError",
    "OutboundPost",
    "RelayOutcome",
    "RelayState",
    "RelayStatus",
    "FALLBACK_TEXT",
    "RelayEngine",
    "extract_text",
    "truncate_text",
]
