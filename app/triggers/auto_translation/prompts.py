# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 00:20
@Author  : QIN2DIM
@Desc    : Prompt templates
"""

DETECT_LANGUAGE_PROMPT_TEMPLATE = """
Detect the language of the following text and respond with ONLY the ISO 639-1 language code (e.g., 'en' for English, 'es' for Spanish, etc.).

Text: "{text}"

Language code:
"""

TRANSLATION_PROMPT_TEMPLATE = """
Translate the following text to {target_language}.
Only return the translated text, no explanations or additional text:

"{text}"
"""
