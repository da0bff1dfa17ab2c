# -*- coding: utf-8 -*-
"""
Shared fixtures: a scripted text generator standing in for the Gemini client
"""
import asyncio
import re
from typing import Callable, Dict, List

import pytest

from triggers.auto_translation import (
    ChannelPreferenceStore,
    LanguageService,
    MessageDedupGate,
    TranslationDispatcher,
)

_TARGET_PATTERN = re.compile(r"Translate the following text to (.+?)\.\n")


class FakeGenerator:
    """
    Answers detection prompts with ``detected`` and translation prompts from ``replies``

    ``replies`` maps a display name ("Spanish") to a string, or to an exception
    instance that is raised instead.
    """

    def __init__(self, detected="en", replies: Dict[str, object] | None = None, delay=0.0):
        self.detected = detected
        self.replies = replies or {}
        self.delay = delay
        self.prompts: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)

            if "Detect the language" in prompt:
                reply = self.detected
            else:
                target = _TARGET_PATTERN.search(prompt).group(1)
                reply = self.replies.get(target, f"<{target}>")

            if isinstance(reply, BaseException):
                raise reply
            return reply
        finally:
            self.in_flight -= 1

    @property
    def translation_prompts(self) -> List[str]:
        return [p for p in self.prompts if "Detect the language" not in p]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_generator() -> Callable[..., FakeGenerator]:
    return FakeGenerator


@pytest.fixture
def store() -> ChannelPreferenceStore:
    return ChannelPreferenceStore()


@pytest.fixture
def make_dispatcher(store, fake_clock):
    def _make(generator, default_languages=("en",), **kwargs) -> TranslationDispatcher:
        service = LanguageService(generator, default_languages)
        gate = MessageDedupGate(window_seconds=3600, clock=fake_clock)
        return TranslationDispatcher(store, gate, service, default_languages, **kwargs)

    return _make
