# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 04:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : /translate_* command handlers (forwarding layer)
"""

from telegram import Update
from telegram.ext import ContextTypes

from relaybot.common import reply_markdown_safe
from relaybot.services import relay_service
from settings import settings
from triggers.auto_translation import (
    enable_translation,
    disable_translation,
    toggle_translation,
    get_translation_status,
    set_translation_languages,
)


def _channel_id(update: Update) -> str:
    return str(update.effective_chat.id)


async def translate_on_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Enable translations in this chat"""
    result = await enable_translation(relay_service.preference_store, _channel_id(update))
    await reply_markdown_safe(update, result.message)


async def translate_off_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Disable translations in this chat"""
    result = await disable_translation(relay_service.preference_store, _channel_id(update))
    await reply_markdown_safe(update, result.message)


async def translate_toggle_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Toggle translations in this chat"""
    result = await toggle_translation(relay_service.preference_store, _channel_id(update))
    await reply_markdown_safe(update, result.message)


async def translate_status_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Show whether translations are on and which languages are used"""
    result = await get_translation_status(
        relay_service.preference_store, _channel_id(update), settings.supported_languages
    )
    await reply_markdown_safe(update, result.message)


async def translate_languages_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Set the chat's target languages, e.g. ``/translate_languages es,fr,de``"""
    # "es, fr de" arrives as ["es,", "fr", "de"]; blanks are dropped when parsing
    argument_text = ",".join(context.args or [])
    result = await set_translation_languages(
        relay_service.preference_store, _channel_id(update), argument_text
    )
    await reply_markdown_safe(update, result.message)
