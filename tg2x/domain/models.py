"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


@dataclass
class RelayState:
    """Timestamp of the last successful post. Epoch means never posted."""

    last_post_at: datetime = EPOCH

    def record_post(self, when: datetime) -> None:
        # never move backwards
        if when > self.last_post_at:
            self.last_post_at = when


@dataclass
class OutboundPost:
    text: str
    media_ids: List[str] = field(default_factory=list)


class RelayStatus(str, Enum):
    DISABLED = "disabled"
    UNMONITORED = "unmonitored"
    RATE_LIMITED = "rate_limited"
    NO_CONTENT = "no_content"
    POSTED = "posted"
    FAILED = "failed"


@dataclass
class RelayOutcome:
    """What happened to one inbound message."""

    status: RelayStatus
    post_id: Optional[str] = None
    error: Optional[str] = None
    retry_after_seconds: Optional[float] = None
    media_ids: List[str] = field(default_factory=list)

    @property
    def posted(self) -> bool:
        return self.status is RelayStatus.POSTED
