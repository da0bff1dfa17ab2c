# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 04:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    :
"""
from .translation_commands import (
    translate_on_command,
    translate_off_command,
    translate_toggle_command,
    translate_status_command,
    translate_languages_command,
)

__all__ = [
    "translate_on_command",
    "translate_off_command",
    "translate_toggle_command",
    "translate_status_command",
    "translate_languages_command",
]
