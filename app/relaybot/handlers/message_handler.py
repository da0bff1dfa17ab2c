# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 05:00
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Feeds chat messages into the translation relay
"""
from loguru import logger
from telegram import Update
from telegram.ext import ContextTypes, filters

from models import OutboundMessage
from relaybot.common import send_outbound_message, to_inbound_message
from relaybot.services import relay_service
from relaybot.task_manager import non_blocking_handler

# edits reuse the original message_id, so they are not translated again
MESSAGE_FILTER = (filters.TEXT | filters.CAPTION) & ~filters.COMMAND & ~filters.UpdateType.EDITED


@non_blocking_handler("handle_message")
async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Translate a chat message when the chat or the message opts in.
    """
    message = update.effective_message
    if not message:
        return

    inbound = to_inbound_message(message, bot_id=context.bot.id)

    async def send(outbound: OutboundMessage) -> None:
        await send_outbound_message(context, outbound)

    outcome = await relay_service.dispatcher.process_message(inbound, send)
    logger.trace(f"Message {inbound.channel_id}/{inbound.message_id}: {outcome.value}")
