"""Configuration loaded from the environment."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Tuple

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

REQUIRED_ENV_VARS = (
    "TELEGRAM_BOT_TOKEN",
    "TWITTER_API_KEY",
    "TWITTER_API_SECRET",
    "TWITTER_ACCESS_TOKEN",
    "TWITTER_ACCESS_TOKEN_SECRET",
    "TELEGRAM_CHANNEL_ID",
)

DEFAULT_RATE_LIMIT_MINUTES = 5.0


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed"""
    pass


def parse_channel_ids(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated channel list, dropping blanks."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _parse_minutes(raw: str) -> float:
    try:
        minutes = float(raw)
    except ValueError:
        _stderr_print(
            f"Invalid RATE_LIMIT_MINUTES={raw!r}, "
            f"falling back to {DEFAULT_RATE_LIMIT_MINUTES:g}"
        )
        return DEFAULT_RATE_LIMIT_MINUTES
    if minutes < 0:
        _stderr_print(f"Negative RATE_LIMIT_MINUTES={raw!r}, using 0")
        return 0.0
    return minutes


def missing_required_env() -> List[str]:
    """Return the names of required variables that are unset or empty."""
    return [name for name in REQUIRED_ENV_VARS if not os.getenv(name, "").strip()]


CONFIG = {
    "port": int(os.getenv("PORT", "3000")),
    # Telegram
    "telegram_bot_token": os.getenv("TELEGRAM_BOT_TOKEN", ""),
    "telegram_channel_ids": parse_channel_ids(os.getenv("TELEGRAM_CHANNEL_ID", "")),
    "error_chat_id": os.getenv("ERROR_CHAT_ID", "").strip(),
    # X (Twitter)
    "x_consumer_key": os.getenv("TWITTER_API_KEY", ""),
    "x_consumer_secret": os.getenv("TWITTER_API_SECRET", ""),
    "x_access_token": os.getenv("TWITTER_ACCESS_TOKEN", ""),
    "x_access_token_secret": os.getenv("TWITTER_ACCESS_TOKEN_SECRET", ""),
    # Relay policy
    "rate_limit_minutes": _parse_minutes(
        os.getenv("RATE_LIMIT_MINUTES", str(DEFAULT_RATE_LIMIT_MINUTES))
    ),
    "x_disabled": _parse_bool(os.getenv("TWITTER_DISABLED", "false")),
}


# ── Typed config ────────────────────────────────────────────


@dataclass
class XConfig:
    consumer_key: str = ""
    consumer_secret: str = ""
    access_token: str = ""
    access_token_secret: str = ""


@dataclass
class TelegramConfig:
    bot_token: str = ""
    channel_ids: Tuple[str, ...] = ()
    error_chat_id: str = ""


@dataclass
class RelayConfig:
    """Values the relay engine and its adapters consume."""

    port: int = 3000
    min_interval: timedelta = timedelta(minutes=DEFAULT_RATE_LIMIT_MINUTES)
    posting_disabled: bool = False
    telegram: TelegramConfig = field(default_factory=TelegramConfig)
    x: XConfig = field(default_factory=XConfig)

    @property
    def monitored_channels(self) -> Tuple[str, ...]:
        return self.telegram.channel_ids

    @property
    def notify_chat_id(self) -> str:
        return self.telegram.error_chat_id

    @classmethod
    def from_env(cls, require: bool = False) -> "RelayConfig":
        """Create RelayConfig from CONFIG.

        With ``require=True`` a missing required variable raises ConfigError.
        """
        if require:
            missing = missing_required_env()
            if missing:
                raise ConfigError(
                    "Missing required environment variables: " + ", ".join(missing)
                )
        return cls(
            port=CONFIG["port"],
            min_interval=timedelta(minutes=CONFIG["rate_limit_minutes"]),
            posting_disabled=CONFIG["x_disabled"],
            telegram=TelegramConfig(
                bot_token=CONFIG["telegram_bot_token"],
                channel_ids=tuple(CONFIG["telegram_channel_ids"]),
                error_chat_id=CONFIG["error_chat_id"],
            ),
            x=XConfig(
                consumer_key=CONFIG["x_consumer_key"],
                consumer_secret=CONFIG["x_consumer_secret"],
                access_token=CONFIG["x_access_token"],
                access_token_secret=CONFIG["x_access_token_secret"],
            ),
        )
