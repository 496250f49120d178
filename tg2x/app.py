"""FastAPI application, health routes, and Telegram bot startup."""

import sys
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI
from pydantic import BaseModel
from telegram import Bot, Update
from telegram.error import Conflict, TelegramError
from telegram.ext import Application, ApplicationBuilder, ContextTypes, MessageHandler, filters

from tg2x.config import RelayConfig
from tg2x.domain.models import RelayState
from tg2x.domain.relay import RelayEngine
from tg2x.telegram_client import TelegramFetcher, TelegramNotifier, message_to_inbound
from tg2x.x_client import XClient


def _log(msg: str):
    print(msg, file=sys.stderr)


app = FastAPI(title="Telegram to X Relay")

# Global instances, populated on startup
relay_engine: Optional[RelayEngine] = None
telegram_app: Optional[Application] = None


class RootResponse(BaseModel):
    status: str
    timestamp: str


class HealthResponse(BaseModel):
    status: str


class StatusResponse(BaseModel):
    running: bool
    postingDisabled: Optional[bool] = None
    monitoredChannels: List[str] = []
    minIntervalSeconds: Optional[float] = None
    lastPostAt: Optional[str] = None
    nextPostInSeconds: Optional[float] = None


def build_engine(config: RelayConfig, x_client: XClient, bot: Bot) -> RelayEngine:
    """Wire the relay engine to its X and Telegram collaborators."""
    notifier = TelegramNotifier(bot) if config.notify_chat_id else None
    return RelayEngine(
        publisher=x_client,
        fetcher=TelegramFetcher(bot),
        state=RelayState(),
        monitored_channels=config.monitored_channels,
        min_interval=config.min_interval,
        posting_disabled=config.posting_disabled,
        notifier=notifier,
        notify_chat_id=config.notify_chat_id,
    )


def make_update_handler(engine: RelayEngine):
    async def handle_update(update: Update, context: ContextTypes.DEFAULT_TYPE):
        message = update.effective_message
        if message is None:
            return
        await engine.relay(message_to_inbound(message))

    return handle_update


async def on_bot_error(update: object, context: ContextTypes.DEFAULT_TYPE):
    kind = type(update).__name__ if update is not None else "none"
    _log(f"Bot error: {context.error} (update: {kind})")


def on_polling_error(error: TelegramError):
    if isinstance(error, Conflict):
        _log("Conflict: another instance is polling this bot token")
    else:
        _log(f"Polling error: {error}")


# API endpoints
@app.get("/", response_model=RootResponse)
async def root():
    return RootResponse(
        status="Bot is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="healthy")


@app.get("/status", response_model=StatusResponse)
async def status():
    """Relay state for operators"""
    if relay_engine is None:
        return StatusResponse(running=False)

    now = datetime.now(timezone.utc)
    never_posted = relay_engine.state.last_post_at.timestamp() == 0
    return StatusResponse(
        running=True,
        postingDisabled=relay_engine.posting_disabled,
        monitoredChannels=sorted(relay_engine.monitored_channels),
        minIntervalSeconds=relay_engine.min_interval.total_seconds(),
        lastPostAt=None if never_posted else relay_engine.state.last_post_at.isoformat(),
        nextPostInSeconds=relay_engine.remaining_cooldown(now).total_seconds(),
    )


@app.on_event("startup")
async def startup_event():
    """Verify X credentials, then start Telegram long polling"""
    global relay_engine, telegram_app

    config = RelayConfig.from_env(require=True)

    x_client = XClient()
    username = await x_client.verify()
    _log(f"X connection successful. Authenticated as: {username}")

    telegram_app = ApplicationBuilder().token(config.telegram.bot_token).build()
    relay_engine = build_engine(config, x_client, telegram_app.bot)

    telegram_app.add_handler(
        MessageHandler(
            filters.UpdateType.MESSAGE | filters.UpdateType.CHANNEL_POST,
            make_update_handler(relay_engine),
        )
    )
    telegram_app.add_error_handler(on_bot_error)

    await telegram_app.initialize()
    try:
        await telegram_app.bot.delete_webhook()
        _log("Cleared existing webhooks")
    except TelegramError:
        _log("No existing webhooks to clear")

    await telegram_app.start()
    await telegram_app.updater.start_polling(
        drop_pending_updates=True,
        error_callback=on_polling_error,
    )
    _log(f"Monitoring channels: {', '.join(config.monitored_channels)}")
    _log(f"Minimum interval between posts: {config.min_interval}")
    _log("Relay is running and ready to forward messages from Telegram to X")


@app.on_event("shutdown")
async def shutdown_event():
    global telegram_app
    if telegram_app is None:
        return
    _log("Shutting down Telegram polling...")
    if telegram_app.updater and telegram_app.updater.running:
        await telegram_app.updater.stop()
    if telegram_app.running:
        await telegram_app.stop()
    await telegram_app.shutdown()
    telegram_app = None
