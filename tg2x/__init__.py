"""Relays Telegram channel posts to X with a minimum post interval."""

from tg2x.config import CONFIG, ConfigError, RelayConfig, __version__
from tg2x.domain import RelayEngine, RelayOutcome, RelayState, RelayStatus
from tg2x.ports import InboundMessage, PostResult
from tg2x.x_client import XClient, XPostResult

__all__ = [
    "CONFIG",
    "ConfigError",
    "RelayConfig",
    "__version__",
    "RelayEngine",
    "RelayOutcome",
    "RelayState",
    "RelayStatus",
    "InboundMessage",
    "PostResult",
    "XClient",
    "XPostResult",
]
