# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 04:00
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Telegram helpers shared by the message and command handlers
"""
from loguru import logger
from telegram import LinkPreviewOptions, Message, ReactionTypeEmoji, Update, User
from telegram.constants import ParseMode
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from models import InboundMessage, OutboundMessage
from utils import log_error

# service accounts Telegram uses for anonymous admins and linked channel posts
ANONYMOUS_SENDERS = {"groupanonymousbot", "channel_bot"}

ACK_REACTION = [ReactionTypeEmoji(emoji="👌")]

NO_LINK_PREVIEW = LinkPreviewOptions(is_disabled=True)


def is_real_bot(user: User | None) -> bool:
    """
    Whether the sender is an actual bot account

    Telegram also marks anonymous group admins (GroupAnonymousBot) and
    channel posts as ``is_bot``; those carry human text and are not skipped.
    """
    if not user or not user.is_bot:
        return False

    if user.username and user.username.lower().endswith("bot"):
        return user.username.lower() not in ANONYMOUS_SENDERS

    # no username: negative ids and admin-like names are anonymous senders
    if not user.username:
        if user.id < 0:
            return False
        if user.first_name and any(
            keyword in user.first_name.lower()
            for keyword in ["anonymous", "admin", "group", "channel"]
        ):
            return False
        return True

    return False


def to_inbound_message(message: Message, bot_id: int | None = None) -> InboundMessage:
    sender = message.from_user
    is_self = bool(sender and bot_id is not None and sender.id == bot_id)
    is_from_bot = is_self or is_real_bot(sender)

    from_user = None
    if sender:
        from_user = f"{sender.username or sender.first_name}({sender.id})"

    return InboundMessage(
        channel_id=str(message.chat_id),
        message_id=str(message.message_id),
        text=message.text or message.caption,
        thread_id=message.message_thread_id if message.is_topic_message else None,
        is_from_bot=is_from_bot,
        from_user=from_user,
    )


async def send_outbound_message(context: ContextTypes.DEFAULT_TYPE, outbound: OutboundMessage):
    """Post with Markdown, falling back to plain text when Telegram rejects the entities"""
    kwargs = {
        "chat_id": outbound.channel_id,
        "text": outbound.text,
        "message_thread_id": outbound.thread_id,
        "link_preview_options": NO_LINK_PREVIEW,
    }
    try:
        await context.bot.send_message(parse_mode=ParseMode.MARKDOWN, **kwargs)
    except BadRequest as err:
        logger.warning(f"Markdown rejected ({err}), sending plain text to {outbound.channel_id}")
        await context.bot.send_message(**kwargs)


async def acknowledge_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """React to the command message so the sender sees it was received"""
    message = update.effective_message
    if not message:
        return
    try:
        await context.bot.set_message_reaction(
            chat_id=message.chat_id, message_id=message.message_id, reaction=ACK_REACTION
        )
    except Exception as reaction_error:
        logger.warning(f"Unable to acknowledge command: {reaction_error}")


async def reply_markdown_safe(update: Update, text: str) -> None:
    message = update.effective_message
    if not message:
        return
    try:
        await message.reply_text(text, parse_mode=ParseMode.MARKDOWN)
        return
    except BadRequest as err:
        logger.warning(f"Markdown rejected ({err}), replying with plain text")
    except Exception as err:
        log_error("Error replying to command", err)
        return

    try:
        await message.reply_text(text)
    except Exception as err:
        log_error("Error replying to command", err)
