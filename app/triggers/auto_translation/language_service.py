# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 01:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Language detection and translation on top of a text-generation model
"""
import asyncio
from typing import Iterable, List, Optional, Protocol, Sequence

from loguru import logger

from models import TranslationResult
from triggers.auto_translation.languages import (
    get_language_display_name,
    normalize_language_code,
    normalize_language_list,
)
from triggers.auto_translation.prompts import (
    DETECT_LANGUAGE_PROMPT_TEMPLATE,
    TRANSLATION_PROMPT_TEMPLATE,
)
from utils import log_error


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str: ...


def translation_error(reason: object) -> str:
    return f"[Translation error: {reason}]"


class LanguageService:
    """
    Detects and translates through a single ``generate(prompt)`` call per step

    Every model call is attempted once. Detection falls back to
    ``fallback_language`` and translation to a sentinel string, so one failing
    language never aborts the others.
    """

    def __init__(
        self,
        generator: TextGenerator,
        supported_languages: Sequence[str] = ("en",),
        *,
        fallback_language: str = "en",
        restrict_detected_language: bool = True,
    ):
        self.generator = generator
        self.supported_languages = normalize_language_list(supported_languages)
        self.fallback_language = fallback_language
        self.restrict_detected_language = restrict_detected_language

    async def detect_language(
        self, text: str, allowed_languages: Optional[Iterable[str]] = None
    ) -> str:
        """
        Ask the model for the ISO 639-1 code of ``text``

        Args:
            text: text to classify
            allowed_languages: extra codes accepted on top of the supported languages

        Returns:
            The detected code, or the fallback code when the call fails, the reply
            is unusable, or (with restriction on) the code is not allowed

        """
        try:
            prompt = DETECT_LANGUAGE_PROMPT_TEMPLATE.format(text=text)
            reply = await self.generator.generate(prompt)
            language_code = normalize_language_code(reply)
        except Exception as err:
            log_error("Error detecting language", err)
            return self.fallback_language

        if not language_code:
            logger.debug(
                f"Empty language detection reply, defaulting to '{self.fallback_language}'"
            )
            return self.fallback_language

        if self.restrict_detected_language:
            allowed = set(self.supported_languages)
            allowed.update(normalize_language_list(allowed_languages or []))
            if language_code not in allowed:
                logger.debug(
                    f"Detected language {language_code} is not in {sorted(allowed)}, "
                    f"defaulting to '{self.fallback_language}'"
                )
                return self.fallback_language

        return language_code

    async def translate_text(self, text: str, target_language: str) -> str:
        """Translate into one language; failures come back as a sentinel string"""
        try:
            prompt = TRANSLATION_PROMPT_TEMPLATE.format(
                target_language=get_language_display_name(target_language), text=text
            )
            translated_text = (await self.generator.generate(prompt)).strip()
        except Exception as err:
            log_error(f"Translation error for {target_language}", err)
            return translation_error(err)

        logger.debug(f"Translated to {target_language}: {translated_text[:80]}")
        return translated_text

    async def translate_to_all_languages(
        self, text: str, target_languages: Iterable[str], *, include_source: bool = False
    ) -> TranslationResult:
        """
        Detect the source language, then translate into every other target concurrently

        Args:
            text: text to translate
            target_languages: ordered target codes
            include_source: also return ``text`` itself under the detected code

        Returns:
            Mapping from language code to translated text (or sentinel), in target order

        """
        targets = normalize_language_list(target_languages)

        detected_language = await self.detect_language(text, allowed_languages=targets)
        logger.debug(f"Detected language: {detected_language}")

        pending: List[str] = [lang for lang in targets if lang != detected_language]

        # wait for every call to settle, slow languages are not cancelled
        outputs = await asyncio.gather(
            *(self.translate_text(text, lang) for lang in pending), return_exceptions=True
        )

        results: TranslationResult = {}
        if include_source:
            results[detected_language] = text
        for lang, output in zip(pending, outputs):
            if isinstance(output, BaseException):
                output = translation_error(output)
            results[lang] = output

        return results
