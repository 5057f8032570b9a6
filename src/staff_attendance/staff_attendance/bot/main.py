"""Entry point for the Telegram bot process (`staff-attendance-bot`)."""

from __future__ import annotations

import logging

from telegram import Update

from ..common.logging_setup import configure_logging
from ..container import build_container
from ..core.constants import DEFAULT_POLL_TIMEOUT_SECONDS
from ..main import load_settings
from .application import DEFAULT_API_BASE, build_application

logger = logging.getLogger(__name__)


def run_bot(settings_module: str | None = None) -> None:
    settings = load_settings(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(settings)
    application = build_application(
        container,
        token=getattr(settings, "TELEGRAM_TOKEN", ""),
        api_base=getattr(settings, "TELEGRAM_API_BASE", DEFAULT_API_BASE),
    )

    logger.info("Bot polling started")
    # Blocks until SIGINT/SIGTERM; getUpdates failures are retried by the library.
    application.run_polling(
        allowed_updates=[Update.MESSAGE],
        timeout=int(getattr(settings, "TELEGRAM_POLL_TIMEOUT", DEFAULT_POLL_TIMEOUT_SECONDS)),
    )
    logger.info("Bot polling stopped")


if __name__ == "__main__":
    run_bot()
