# -*- coding: utf-8 -*-
"""
Tests for the message dedup gate
"""
from triggers.auto_translation import MessageDedupGate


class TestMessageDedupGate:

    def test_repeat_is_skipped_until_window_expires(self, fake_clock):
        gate = MessageDedupGate(window_seconds=3600, clock=fake_clock)

        assert gate.should_process("C1", "100.001") is True
        assert gate.should_process("C1", "100.001") is False

        fake_clock.advance(3599)
        assert gate.should_process("C1", "100.001") is False

        fake_clock.advance(1)
        assert gate.should_process("C1", "100.001") is True

    def test_keys_are_scoped_per_channel(self, fake_clock):
        gate = MessageDedupGate(clock=fake_clock)

        assert gate.should_process("C1", "42") is True
        assert gate.should_process("C2", "42") is True
        assert gate.should_process("C1", "43") is True
        assert ("C1", "42") in gate

    def test_expired_entries_are_evicted(self, fake_clock):
        gate = MessageDedupGate(window_seconds=10, clock=fake_clock)
        for message_id in range(100):
            gate.should_process("C1", str(message_id))
        assert len(gate) == 100

        fake_clock.advance(5)
        gate.should_process("C1", "late")
        assert len(gate) == 101

        fake_clock.advance(5)
        gate.should_process("C1", "later")
        # only the two messages from inside the last window remain
        assert len(gate) == 2
        assert ("C1", "0") not in gate
        assert ("C1", "late") in gate
