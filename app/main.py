# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 06:00
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Chat translation relay entry point
"""
import json
import signal
import sys

from loguru import logger
from telegram import Update, BotCommand
from telegram.ext import Application, MessageHandler

from health import start_health_server
from relaybot.handlers import MESSAGE_FILTER, handle_message
from relaybot.handlers.command_handler import (
    translate_on_command,
    translate_off_command,
    translate_toggle_command,
    translate_status_command,
    translate_languages_command,
)
from relaybot.handlers.command_handler._base import AckCommandHandler
from relaybot.services import relay_service
from relaybot.task_manager import get_active_tasks_count, wait_for_all_tasks
from settings import settings, LOG_DIR
from utils import init_log, log_error

init_log(
    runtime=LOG_DIR.joinpath("runtime.log"),
    error=LOG_DIR.joinpath("error.log"),
    serialize=LOG_DIR.joinpath("serialize.log"),
    debug=settings.DEBUG,
)

BOT_COMMANDS = [
    BotCommand("translate_on", "Enable translations in this channel"),
    BotCommand("translate_off", "Disable translations in this channel"),
    BotCommand("translate_toggle", "Toggle translations on/off in this channel"),
    BotCommand("translate_status", "Check if translations are enabled in this channel"),
    BotCommand("translate_languages", "Set languages for this channel, e.g. es,fr,de"),
]


async def setup_bot_commands(application: Application):
    """Register the command menu and start the liveness server"""
    try:
        await application.bot.set_my_commands(BOT_COMMANDS)
        logger.success(f"Bot command menu set: {[f'/{cmd.command}' for cmd in BOT_COMMANDS]}")
    except Exception as e:
        log_error("Failed to set bot command menu", e)

    application.bot_data["health_runner"] = await start_health_server(settings.PORT)


async def shutdown(application: Application):
    logger.info(f"Shutting down with {get_active_tasks_count()} background task(s) in flight")
    await wait_for_all_tasks(timeout=10)

    if runner := application.bot_data.pop("health_runner", None):
        await runner.cleanup()

    await relay_service.gemini_client.aclose()
    logger.info(f"Dropping preferences of {len(relay_service.preference_store.snapshot())} chats")


def main() -> None:
    """Start the bot."""
    if missing := settings.missing_credentials():
        logger.critical(f"Missing required settings: {', '.join(missing)}")
        sys.exit(1)

    sp = settings.model_dump(mode="json")
    s = json.dumps(sp, indent=2, ensure_ascii=False)
    logger.success(f"Loading settings: {s}")

    logger.info(f"Using Google Gemini model: {settings.MODEL_NAME}")
    logger.info(f"Supported languages: {', '.join(settings.supported_languages)}")
    if settings.DEBUG:
        logger.warning("Debug mode: ENABLED")

    application = settings.get_default_application()
    application.post_init = setup_bot_commands
    application.post_shutdown = shutdown

    application.add_handler(AckCommandHandler("translate_on", translate_on_command))
    application.add_handler(AckCommandHandler("translate_off", translate_off_command))
    application.add_handler(AckCommandHandler("translate_toggle", translate_toggle_command))
    application.add_handler(AckCommandHandler("translate_status", translate_status_command))
    application.add_handler(AckCommandHandler("translate_languages", translate_languages_command))

    application.add_handler(MessageHandler(MESSAGE_FILTER, handle_message))

    logger.info("Translation commands available:")
    for cmd in BOT_COMMANDS:
        logger.info(f"  /{cmd.command} - {cmd.description}")

    # Setting up a graceful shutdown
    def shutdown_handler(signum, frame):
        logger.info("Receiving a shutdown signal, stopping the bot...")
        sys.exit(0)

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
