# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/20 21:30
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Data passed between the transport layer and the translation relay
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

TranslationResult = Dict[str, str]


class ChannelPreference(BaseModel):
    enabled: bool = Field(
        default=False, description="Whether every message in the chat is translated"
    )
    languages: List[str] | None = Field(
        default=None,
        description="Per-chat target languages; None means the global SUPPORTED_LANGUAGES",
    )


class InboundMessage(BaseModel):
    channel_id: str = Field(description="Chat id, rendered as a string")
    message_id: str = Field(description="Per-chat event identifier used for deduplication")
    text: str | None = Field(default=None, description="Message text or media caption")
    thread_id: int | None = Field(default=None, description="Forum topic the message belongs to")
    is_from_bot: bool = False
    from_user: str | None = Field(default=None, description="Sender, formatted for logs only")


class OutboundMessage(BaseModel):
    channel_id: str
    text: str
    thread_id: int | None = None


class DispatchOutcome(str, Enum):
    BOT_ECHO = "bot_echo"
    """
    Sent by this bot or by another bot
    """

    DUPLICATE = "duplicate"
    """
    The same message was already handled inside the dedup window
    """

    EMPTY = "empty"
    """
    Nothing left to translate after trimming and removing the inline flag
    """

    NOT_ELIGIBLE = "not_eligible"
    """
    Chat is disabled and the message carries no inline flag
    """

    NOTHING_TO_POST = "nothing_to_post"
    """
    Every target language was the source language
    """

    FAILED = "failed"
    """
    Translation or formatting raised; logged, nothing posted
    """

    DELIVERY_FAILED = "delivery_failed"
    """
    Translations were ready but posting them to the chat failed
    """

    POSTED = "posted"
