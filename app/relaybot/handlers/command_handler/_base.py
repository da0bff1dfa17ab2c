# -*- coding: utf-8 -*-
"""
Base command handler that acknowledges before running
"""
from typing import Callable, Optional, Awaitable

from loguru import logger
from telegram import Update
from telegram.ext import CommandHandler, ContextTypes

from relaybot.common import acknowledge_command


class AckCommandHandler(CommandHandler):
    """
    Command handler wrapper that acknowledges receipt first

    The acknowledgement (a reaction on the command message) is sent before the
    original callback touches any state, so the sender gets feedback even when
    the command itself fails.
    """

    def __init__(
        self,
        command: str | list[str],
        callback: Callable[[Update, ContextTypes.DEFAULT_TYPE], Awaitable[None]],
        filters=None,
        block: bool = True,
        has_args: Optional[bool | int] = None,
    ):
        # Store original callback
        self._original_callback = callback

        super().__init__(
            command=command,
            callback=self._ack_callback,
            filters=filters,
            block=block,
            has_args=has_args,
        )

    async def _ack_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        message = update.effective_message
        command = message.text.split()[0] if message and message.text else "unknown"
        chat_id = update.effective_chat.id if update.effective_chat else "unknown"

        logger.debug(f"Received {command} in chat {chat_id}")

        await acknowledge_command(update, context)
        await self._original_callback(update, context)
