# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 00:40
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Per-chat translation preferences, kept in memory for the life of the process
"""
import asyncio
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from loguru import logger

from models import ChannelPreference
from triggers.auto_translation.languages import normalize_language_list


class InvalidLanguageListError(ValueError):
    """No usable language code was left after normalization"""


class ChannelPreferenceStore:
    """
    In-memory chat preferences

    Reads are plain dict lookups. Every write takes the chat's own asyncio.Lock,
    so a toggle is a single read-modify-write even when several command handlers
    for the same chat are in flight. Nothing is persisted; a restart forgets
    every chat.
    """

    def __init__(self, default_enabled: bool = False):
        self.default_enabled = default_enabled
        self._preferences: Dict[str, ChannelPreference] = {}
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _get_or_create(self, channel_id: str) -> ChannelPreference:
        if channel_id not in self._preferences:
            self._preferences[channel_id] = ChannelPreference(enabled=self.default_enabled)
        return self._preferences[channel_id]

    def is_enabled(self, channel_id: str) -> bool:
        preference = self._preferences.get(channel_id)
        return preference.enabled if preference else self.default_enabled

    async def set_enabled(self, channel_id: str, enabled: bool) -> None:
        async with self._locks[channel_id]:
            self._get_or_create(channel_id).enabled = enabled
        logger.debug(f"Chat {channel_id} translation enabled={enabled}")

    async def toggle(self, channel_id: str) -> bool:
        """Flip the flag and return the new value"""
        async with self._locks[channel_id]:
            new_status = not self.is_enabled(channel_id)
            self._get_or_create(channel_id).enabled = new_status
        logger.debug(f"Chat {channel_id} translation toggled to {new_status}")
        return new_status

    async def set_languages(self, channel_id: str, languages: Iterable[str]) -> List[str]:
        """
        Replace the chat's target languages

        Returns:
            The normalized list that was stored

        Raises:
            InvalidLanguageListError: nothing left after normalization; state is untouched

        """
        normalized = normalize_language_list(languages)
        if not normalized:
            raise InvalidLanguageListError("at least one language code is required")

        async with self._locks[channel_id]:
            self._get_or_create(channel_id).languages = normalized
        logger.debug(f"Chat {channel_id} languages set to {normalized}")
        return list(normalized)

    def get_languages(self, channel_id: str) -> Optional[List[str]]:
        preference = self._preferences.get(channel_id)
        if not preference or not preference.languages:
            return None
        return list(preference.languages)

    def get_preference(self, channel_id: str) -> Optional[ChannelPreference]:
        preference = self._preferences.get(channel_id)
        return preference.model_copy(deep=True) if preference else None

    def snapshot(self) -> Dict[str, ChannelPreference]:
        return {
            channel_id: preference.model_copy(deep=True)
            for channel_id, preference in self._preferences.items()
        }
