# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 00:15
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Language codes and their display names
"""
import re
from typing import Iterable, List

LANGUAGE_MAPPING = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "ru": "Russian",
    "pt": "Portuguese",
    "ar": "Arabic",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "th": "Thai",
    "nl": "Dutch",
    "tr": "Turkish",
    "hi": "Hindi",
    "pl": "Polish",
}

# the model sometimes wraps the code in quotes, backticks or a trailing period
_CODE_NOISE = re.compile(r"^[\s'\"`*.:]+|[\s'\"`*.:]+$")


def get_language_display_name(lang_code: str) -> str:
    """Unknown codes are shown as-is"""
    return LANGUAGE_MAPPING.get(lang_code, lang_code)


def format_language_list(lang_codes: Iterable[str]) -> str:
    return ", ".join(get_language_display_name(code) for code in lang_codes)


def normalize_language_code(raw: str) -> str:
    """Reduce a model reply such as ``'"ZH-CN".'`` to ``zh``"""
    if not raw:
        return ""

    first_token = raw.strip().split()[0] if raw.strip() else ""
    code = _CODE_NOISE.sub("", first_token).lower()

    # zh-cn, pt_br -> zh, pt
    return re.split(r"[-_]", code, maxsplit=1)[0]


def normalize_language_list(lang_codes: Iterable[str]) -> List[str]:
    """Trim, lowercase, drop blanks and duplicates while keeping the original order"""
    normalized: List[str] = []
    for code in lang_codes:
        if not isinstance(code, str):
            continue
        code = code.strip().lower()
        if code and code not in normalized:
            normalized.append(code)
    return normalized
