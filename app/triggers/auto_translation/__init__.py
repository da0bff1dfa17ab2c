# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 00:10
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Translation relay: preferences, dedup, language service and dispatch policy
"""

from .dedup import MessageDedupGate
from .dispatcher import (
    MAX_MESSAGE_LENGTH,
    TranslationDispatcher,
    format_translations,
    split_for_delivery,
)
from .language_service import LanguageService
from .node import (
    CommandResult,
    enable_translation,
    disable_translation,
    toggle_translation,
    get_translation_status,
    set_translation_languages,
)
from .preferences import ChannelPreferenceStore, InvalidLanguageListError

__all__ = [
    "MessageDedupGate",
    "TranslationDispatcher",
    "format_translations",
    "split_for_delivery",
    "MAX_MESSAGE_LENGTH",
    "LanguageService",
    "CommandResult",
    "enable_translation",
    "disable_translation",
    "toggle_translation",
    "get_translation_status",
    "set_translation_languages",
    "ChannelPreferenceStore",
    "InvalidLanguageListError",
]
