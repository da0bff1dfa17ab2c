# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 02:30
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Decides whether an inbound message is translated, and formats the result
"""
from typing import Awaitable, Callable, Iterable, List, Sequence

from loguru import logger

from models import DispatchOutcome, InboundMessage, OutboundMessage, TranslationResult
from triggers.auto_translation.dedup import MessageDedupGate
from triggers.auto_translation.language_service import LanguageService
from triggers.auto_translation.languages import get_language_display_name, normalize_language_list
from triggers.auto_translation.preferences import ChannelPreferenceStore
from utils import log_error

MessageSender = Callable[[OutboundMessage], Awaitable[None]]

# Telegram rejects messages over 4096 characters
MAX_MESSAGE_LENGTH = int(4096 * 0.9)


def format_translations(translations: TranslationResult, languages: Iterable[str]) -> str:
    """
    Render translations for a chat message

    Only codes present in ``languages`` are kept, in that order. A single
    translation is returned bare; several are labelled ``*Name*: text`` and
    separated by a blank line.
    """
    entries = [
        (lang, translations[lang])
        for lang in normalize_language_list(languages)
        if lang in translations
    ]

    if len(entries) == 1:
        return entries[0][1]

    return "\n\n".join(f"*{get_language_display_name(lang)}*: {text}" for lang, text in entries)


def strip_inline_flag(text: str, inline_flag: str) -> str:
    return text.replace(inline_flag, "", 1).strip()


def split_for_delivery(text: str, limit: int = MAX_MESSAGE_LENGTH) -> List[str]:
    """
    Cut formatted translations into chunks Telegram accepts

    Chunks break at blank lines, so labelled entries stay whole where they fit.
    A single paragraph longer than ``limit`` is cut hard.
    """
    chunks: List[str] = []
    current = ""
    for paragraph in text.split("\n\n"):
        pieces = [paragraph[i : i + limit] for i in range(0, len(paragraph), limit)] or [""]
        for piece in pieces:
            candidate = f"{current}\n\n{piece}" if current else piece
            if len(candidate) <= limit:
                current = candidate
                continue
            chunks.append(current)
            current = piece
    if current:
        chunks.append(current)
    return chunks


class TranslationDispatcher:
    def __init__(
        self,
        preference_store: ChannelPreferenceStore,
        dedup_gate: MessageDedupGate,
        language_service: LanguageService,
        default_languages: Sequence[str],
        *,
        inline_flag: str = "+t",
        include_original: bool = False,
    ):
        self.preference_store = preference_store
        self.dedup_gate = dedup_gate
        self.language_service = language_service
        self.default_languages = normalize_language_list(default_languages) or ["en"]
        self.inline_flag = inline_flag
        self.include_original = include_original

    def resolve_languages(self, channel_id: str) -> List[str]:
        return self.preference_store.get_languages(channel_id) or list(self.default_languages)

    async def process_message(
        self, message: InboundMessage, send: MessageSender
    ) -> DispatchOutcome:
        """
        Run one inbound message through the relay

        Translation and formatting errors are logged and swallowed, nothing is
        posted in that case. A failing ``send`` is logged and dropped.
        """
        if message.is_from_bot:
            logger.debug(f"[relay] skip: bot message in {message.channel_id}")
            return DispatchOutcome.BOT_ECHO

        if not self.dedup_gate.should_process(message.channel_id, message.message_id):
            logger.debug(f"[relay] skip: duplicate {message.channel_id}/{message.message_id}")
            return DispatchOutcome.DUPLICATE

        text = (message.text or "").strip()
        if not text:
            return DispatchOutcome.EMPTY

        try:
            flagged = self.inline_flag in text
            if not flagged and not self.preference_store.is_enabled(message.channel_id):
                logger.debug(
                    f"[relay] Translations disabled for chat {message.channel_id} "
                    f"and no {self.inline_flag} flag found"
                )
                return DispatchOutcome.NOT_ELIGIBLE

            if flagged:
                text = strip_inline_flag(text, self.inline_flag)
                if not text:
                    return DispatchOutcome.EMPTY

            logger.debug(f"[relay] Processing {message.message_id} from {message.from_user}")

            languages = self.resolve_languages(message.channel_id)
            translations = await self.language_service.translate_to_all_languages(
                text, languages, include_source=self.include_original
            )
            formatted = format_translations(translations, languages)
        except Exception as err:
            log_error("Error processing message", err)
            return DispatchOutcome.FAILED

        if not formatted:
            logger.debug(f"[relay] Nothing to post for {message.channel_id}, targets {languages}")
            return DispatchOutcome.NOTHING_TO_POST

        chunks = split_for_delivery(formatted)
        try:
            for chunk in chunks:
                await send(
                    OutboundMessage(
                        channel_id=message.channel_id, text=chunk, thread_id=message.thread_id
                    )
                )
        except Exception as err:
            log_error("Error posting translations", err)
            return DispatchOutcome.DELIVERY_FAILED

        logger.info(
            f"[relay] Posted {len(translations)} translation(s) in {len(chunks)} message(s) for "
            f"{message.channel_id}/{message.message_id}"
        )
        return DispatchOutcome.POSTED
