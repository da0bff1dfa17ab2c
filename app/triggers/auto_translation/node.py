# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 03:10
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Chat-level translation switches behind the /translate_* commands
"""

from typing import Optional, Dict, Any, Sequence

from loguru import logger

from triggers.auto_translation.languages import format_language_list
from triggers.auto_translation.preferences import (
    ChannelPreferenceStore,
    InvalidLanguageListError,
)
from utils import log_error, parse_comma_separated_list

ENABLED_MESSAGE = "✅ Translations have been *enabled* for this channel."
DISABLED_MESSAGE = "🚫 Translations have been *disabled* for this channel."
LANGUAGES_USAGE_MESSAGE = (
    "❌ Please specify at least one language code. Example: `/translate_languages es,fr,de`"
)


class CommandResult:
    """Outcome of a translation command"""

    def __init__(self, success: bool, message: str, data: Optional[Dict[str, Any]] = None):
        self.success = success
        self.message = message
        self.data = data or {}


async def enable_translation(store: ChannelPreferenceStore, channel_id: str) -> CommandResult:
    try:
        await store.set_enabled(channel_id, True)
    except Exception as e:
        log_error("Error enabling translations", e)
        return CommandResult(success=False, message=f"❌ Error enabling translations: {e}")

    logger.info(f"Translations enabled in chat {channel_id}")
    return CommandResult(success=True, message=ENABLED_MESSAGE, data={"enabled": True})


async def disable_translation(store: ChannelPreferenceStore, channel_id: str) -> CommandResult:
    try:
        await store.set_enabled(channel_id, False)
    except Exception as e:
        log_error("Error disabling translations", e)
        return CommandResult(success=False, message=f"❌ Error disabling translations: {e}")

    logger.info(f"Translations disabled in chat {channel_id}")
    return CommandResult(success=True, message=DISABLED_MESSAGE, data={"enabled": False})


async def toggle_translation(store: ChannelPreferenceStore, channel_id: str) -> CommandResult:
    try:
        new_status = await store.toggle(channel_id)
    except Exception as e:
        log_error("Error toggling translations", e)
        return CommandResult(success=False, message=f"❌ Error toggling translations: {e}")

    logger.info(f"Translations toggled in chat {channel_id}: enabled={new_status}")
    message = ENABLED_MESSAGE if new_status else DISABLED_MESSAGE
    return CommandResult(success=True, message=message, data={"enabled": new_status})


async def get_translation_status(
    store: ChannelPreferenceStore, channel_id: str, default_languages: Sequence[str]
) -> CommandResult:
    """Current switch plus the languages messages would be translated into"""
    try:
        enabled = store.is_enabled(channel_id)
        override = store.get_languages(channel_id)
    except Exception as e:
        log_error("Error checking translation status", e)
        return CommandResult(success=False, message=f"❌ Error checking translation status: {e}")

    languages = override or list(default_languages)
    status_line = (
        "✅ Translations are currently *enabled* for this channel."
        if enabled
        else "🚫 Translations are currently *disabled* for this channel."
    )
    source = "channel setting" if override else "default"
    message = f"{status_line}\nLanguages ({source}): {format_language_list(languages)}"

    return CommandResult(
        success=True,
        message=message,
        data={"enabled": enabled, "languages": languages, "override": override is not None},
    )


async def set_translation_languages(
    store: ChannelPreferenceStore, channel_id: str, argument_text: str
) -> CommandResult:
    """
    Parse ``"es,fr,de"`` and store it as the chat's target languages

    An empty list is rejected with a usage message and the store is left as it was.
    """
    languages = parse_comma_separated_list(argument_text)

    try:
        stored = await store.set_languages(channel_id, languages)
    except InvalidLanguageListError:
        return CommandResult(success=False, message=LANGUAGES_USAGE_MESSAGE)
    except Exception as e:
        log_error("Error setting channel languages", e)
        return CommandResult(success=False, message=f"❌ Error setting channel languages: {e}")

    logger.info(f"Chat {channel_id} languages set to {stored}")
    return CommandResult(
        success=True,
        message=f"✅ Channel languages set to: {format_language_list(stored)}",
        data={"languages": stored},
    )
