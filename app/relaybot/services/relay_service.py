# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 04:20
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Process-wide relay instances built from settings
"""
from gemini import GeminiClient
from settings import settings
from triggers.auto_translation import (
    ChannelPreferenceStore,
    LanguageService,
    MessageDedupGate,
    TranslationDispatcher,
)

gemini_client = GeminiClient()

language_service = LanguageService(
    gemini_client,
    settings.supported_languages,
    fallback_language=settings.FALLBACK_LANGUAGE,
    restrict_detected_language=settings.RESTRICT_DETECTED_LANGUAGE,
)

preference_store = ChannelPreferenceStore(default_enabled=False)

dedup_gate = MessageDedupGate(window_seconds=settings.DEDUP_WINDOW_SECONDS)

dispatcher = TranslationDispatcher(
    preference_store,
    dedup_gate,
    language_service,
    settings.supported_languages,
    inline_flag=settings.INLINE_TRANSLATE_FLAG,
    include_original=settings.INCLUDE_ORIGINAL_TEXT,
)
