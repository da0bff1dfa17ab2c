# -*- coding: utf-8 -*-
"""
Tests for the dispatch policy and output formatting
"""
from unittest.mock import AsyncMock

import pytest

from models import DispatchOutcome, InboundMessage, OutboundMessage
from triggers.auto_translation import MAX_MESSAGE_LENGTH, format_translations, split_for_delivery


def make_message(text="Hello", message_id="100.001", **kwargs) -> InboundMessage:
    channel_id = kwargs.pop("channel_id", "C1")
    return InboundMessage(channel_id=channel_id, message_id=message_id, text=text, **kwargs)


class TestFormatTranslations:

    def test_single_target_has_no_label(self):
        assert format_translations({"es": "Hola"}, ["es"]) == "Hola"

    def test_multiple_targets_are_labelled_in_target_order(self):
        translations = {"fr": "Bonjour", "es": "Hola"}

        assert format_translations(translations, ["es", "fr"]) == (
            "*Spanish*: Hola\n\n*French*: Bonjour"
        )

    def test_languages_outside_targets_are_dropped(self):
        translations = {"es": "Hola", "de": "Hallo"}
        assert format_translations(translations, ["es", "en"]) == "Hola"

    def test_unknown_code_is_its_own_label(self):
        translations = {"eo": "Saluton", "es": "Hola"}
        assert format_translations(translations, ["eo", "es"]) == "*eo*: Saluton\n\n*Spanish*: Hola"

    def test_nothing_to_format(self):
        assert format_translations({}, ["es", "fr"]) == ""


class TestSplitForDelivery:

    def test_short_text_is_one_chunk(self):
        assert split_for_delivery("*Spanish*: Hola\n\n*French*: Bonjour") == [
            "*Spanish*: Hola\n\n*French*: Bonjour"
        ]

    def test_breaks_between_languages(self):
        text = format_translations(
            {"es": "a" * 1500, "fr": "b" * 1500, "de": "c" * 1500}, ["es", "fr", "de"]
        )
        assert len(text) > 4096

        chunks = split_for_delivery(text)

        assert chunks == [
            "*Spanish*: " + "a" * 1500 + "\n\n*French*: " + "b" * 1500,
            "*German*: " + "c" * 1500,
        ]
        assert all(len(chunk) <= MAX_MESSAGE_LENGTH for chunk in chunks)

    def test_oversized_paragraph_is_cut_hard(self):
        chunks = split_for_delivery("x" * 10000, limit=4000)

        assert [len(chunk) for chunk in chunks] == [4000, 4000, 2000]
        assert "".join(chunks) == "x" * 10000


class TestTranslationDispatcher:

    @pytest.mark.asyncio
    async def test_inline_flag_in_disabled_channel(self, make_dispatcher, make_generator, store):
        generator = make_generator(detected="en", replies={"Spanish": "Hola"})
        dispatcher = make_dispatcher(generator, default_languages=["en", "es"])
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message("+t Hello"), send)

        assert outcome is DispatchOutcome.POSTED
        assert store.is_enabled("C1") is False
        send.assert_awaited_once_with(OutboundMessage(channel_id="C1", text="Hola", thread_id=None))
        # the marker never reaches the model
        assert '"Hello"' in generator.translation_prompts[0]
        assert "+t" not in generator.prompts[0]

    @pytest.mark.asyncio
    async def test_disabled_channel_without_flag_is_ignored(self, make_dispatcher, make_generator):
        generator = make_generator()
        dispatcher = make_dispatcher(generator, default_languages=["en", "es"])
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message("Hello"), send)

        assert outcome is DispatchOutcome.NOT_ELIGIBLE
        assert generator.prompts == []
        send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_enabled_channel_uses_override_languages(
        self, make_dispatcher, make_generator, store
    ):
        await store.set_enabled("C1", True)
        await store.set_languages("C1", ["fr", "es"])
        generator = make_generator(detected="en", replies={"Spanish": "Hola", "French": "Bonjour"})
        dispatcher = make_dispatcher(generator, default_languages=["en", "de"])
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message("Hello", thread_id=77), send)

        assert outcome is DispatchOutcome.POSTED
        outbound = send.await_args.args[0]
        assert outbound.text == "*French*: Bonjour\n\n*Spanish*: Hola"
        assert outbound.thread_id == 77

    @pytest.mark.asyncio
    async def test_bot_messages_are_discarded(self, make_dispatcher, make_generator, store):
        await store.set_enabled("C1", True)
        generator = make_generator()
        dispatcher = make_dispatcher(generator, default_languages=["en", "es"])
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message("Hola", is_from_bot=True), send)

        assert outcome is DispatchOutcome.BOT_ECHO
        assert generator.prompts == []
        send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_event_is_processed_once(self, make_dispatcher, make_generator, store):
        await store.set_enabled("C1", True)
        dispatcher = make_dispatcher(make_generator(detected="en"), default_languages=["en", "es"])
        send = AsyncMock()

        first = await dispatcher.process_message(make_message("Hello"), send)
        second = await dispatcher.process_message(make_message("Hello"), send)

        assert first is DispatchOutcome.POSTED
        assert second is DispatchOutcome.DUPLICATE
        assert send.await_count == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", [None, "", "   \n", "+t", "  +t  "])
    async def test_empty_text_is_discarded(self, make_dispatcher, make_generator, store, text):
        await store.set_enabled("C1", True)
        generator = make_generator()
        dispatcher = make_dispatcher(generator, default_languages=["en", "es"])
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message(text), send)

        assert outcome is DispatchOutcome.EMPTY
        assert generator.prompts == []

    @pytest.mark.asyncio
    async def test_only_source_language_posts_nothing(self, make_dispatcher, make_generator):
        dispatcher = make_dispatcher(make_generator(detected="en"), default_languages=["en"])
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message("+t Hello"), send)

        assert outcome is DispatchOutcome.NOTHING_TO_POST
        send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_translation_failure_is_swallowed(self, make_dispatcher, make_generator):
        dispatcher = make_dispatcher(make_generator(), default_languages=["en", "es"])
        dispatcher.language_service.translate_to_all_languages = AsyncMock(
            side_effect=RuntimeError("unexpected")
        )
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message("+t Hello"), send)

        assert outcome is DispatchOutcome.FAILED
        send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivery_failure_is_swallowed(self, make_dispatcher, make_generator):
        dispatcher = make_dispatcher(make_generator(detected="en"), default_languages=["en", "es"])
        send = AsyncMock(side_effect=ConnectionError("chat unreachable"))

        outcome = await dispatcher.process_message(make_message("+t Hello"), send)

        assert outcome is DispatchOutcome.DELIVERY_FAILED
        send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_per_language_errors_are_posted_as_sentinels(
        self, make_dispatcher, make_generator
    ):
        generator = make_generator(
            detected="en", replies={"Spanish": "Hola", "French": RuntimeError("boom")}
        )
        dispatcher = make_dispatcher(generator, default_languages=["en", "es", "fr"])
        send = AsyncMock()

        await dispatcher.process_message(make_message("+t Hello"), send)

        assert send.await_args.args[0].text == (
            "*Spanish*: Hola\n\n*French*: [Translation error: boom]"
        )

    @pytest.mark.asyncio
    async def test_include_original_echoes_source(self, make_dispatcher, make_generator):
        generator = make_generator(detected="en", replies={"Spanish": "Hola"})
        dispatcher = make_dispatcher(
            generator, default_languages=["en", "es"], include_original=True
        )
        send = AsyncMock()

        await dispatcher.process_message(make_message("+t Hello"), send)

        assert send.await_args.args[0].text == "*English*: Hello\n\n*Spanish*: Hola"

    @pytest.mark.asyncio
    async def test_custom_inline_flag(self, make_dispatcher, make_generator):
        generator = make_generator(detected="en", replies={"Spanish": "Hola"})
        dispatcher = make_dispatcher(
            generator, default_languages=["en", "es"], inline_flag="!tr"
        )
        send = AsyncMock()

        assert await dispatcher.process_message(make_message("+t Hello"), send) is (
            DispatchOutcome.NOT_ELIGIBLE
        )
        outcome = await dispatcher.process_message(make_message("Hello !tr", "100.002"), send)
        assert outcome is DispatchOutcome.POSTED

    @pytest.mark.asyncio
    async def test_long_output_is_posted_in_several_messages(
        self, make_dispatcher, make_generator
    ):
        generator = make_generator(
            detected="en",
            replies={"Spanish": "a" * 1500, "French": "b" * 1500, "German": "c" * 1500},
        )
        dispatcher = make_dispatcher(generator, default_languages=["en", "es", "fr", "de"])
        send = AsyncMock()

        outcome = await dispatcher.process_message(make_message("+t Hello", thread_id=7), send)

        assert outcome is DispatchOutcome.POSTED
        posted = [call.args[0] for call in send.await_args_list]
        assert len(posted) == 2
        assert all(len(outbound.text) <= MAX_MESSAGE_LENGTH for outbound in posted)
        assert all(outbound.thread_id == 7 for outbound in posted)
        assert posted[1].text == "*German*: " + "c" * 1500
