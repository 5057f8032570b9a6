"""python-telegram-bot wiring.

A single MessageHandler turns each incoming message into an Action with
`route` and hands it to `BotDispatcher`. The services are synchronous (MySQL),
so dispatch runs in a worker thread; photo downloads hop back onto the bot's
event loop.
"""

from __future__ import annotations

import asyncio
import logging

from telegram import Update
from telegram.error import NetworkError, TelegramError
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from ..attendance.service import AttendanceReconciler
from ..container import Container
from ..core.exceptions import DomainError, UpstreamTransportError
from ..linking.service import ChatLinkResolver
from .dispatcher import BotDispatcher
from .router import route

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.telegram.org"

INBOUND_MESSAGES = filters.UpdateType.MESSAGE & (filters.TEXT | filters.PHOTO | filters.LOCATION)


class TelegramFileSource:
    """Blocking `download_file` for the dispatcher thread."""

    def __init__(self, bot, loop: asyncio.AbstractEventLoop):
        self._bot = bot
        self._loop = loop

    def download_file(self, file_id: str) -> bytes:
        return asyncio.run_coroutine_threadsafe(self._download(file_id), self._loop).result()

    async def _download(self, file_id: str) -> bytes:
        try:
            tg_file = await self._bot.get_file(file_id)
            return bytes(await tg_file.download_as_bytearray())
        except TelegramError as e:
            raise UpstreamTransportError(f"photo download failed: {e}") from e


class MessageRelay:
    def __init__(self, resolver: ChatLinkResolver, reconciler: AttendanceReconciler):
        self._resolver = resolver
        self._reconciler = reconciler

    async def handle(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        chat = update.effective_chat
        if message is None or chat is None:
            return

        chat_id = str(chat.id)
        action = route(chat_id, message.to_dict())
        files = TelegramFileSource(context.bot, asyncio.get_running_loop())
        dispatcher = BotDispatcher(self._resolver, self._reconciler, files)
        try:
            reply = await asyncio.to_thread(dispatcher.dispatch, chat_id, action)
        except UpstreamTransportError as e:
            logger.warning("Transport error while handling chat %s: %s", chat_id, e)
            return
        except DomainError as e:
            logger.error("Could not handle message from chat %s: %s", chat_id, e)
            return

        if reply:
            try:
                await context.bot.send_message(chat_id=chat.id, text=reply)
            except TelegramError as e:
                logger.warning("Could not reply to chat %s: %s", chat_id, e)


async def log_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Application error handler; polling network errors land here too."""
    if isinstance(context.error, NetworkError):
        logger.warning("Telegram connection error: %s", context.error)
        return
    logger.error("Unhandled error while processing an update", exc_info=context.error)


def build_application(container: Container, *, token: str, api_base: str = DEFAULT_API_BASE) -> Application:
    if not token:
        raise ValueError("TELEGRAM_TOKEN is not configured")
    api_base = api_base.rstrip("/")

    relay = MessageRelay(container.link_resolver, container.reconciler)
    application = (
        Application.builder()
        .token(token)
        .base_url(f"{api_base}/bot")
        .base_file_url(f"{api_base}/file/bot")
        .build()
    )
    application.add_handler(MessageHandler(INBOUND_MESSAGES, relay.handle))
    application.add_error_handler(log_error)
    return application
