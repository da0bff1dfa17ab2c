# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/21 01:10
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : At-most-once gate for inbound messages
"""
import time
from collections import OrderedDict
from typing import Callable, Tuple


class MessageDedupGate:
    """
    Remembers ``(channel_id, message_id)`` pairs for ``window_seconds``

    Expired keys are evicted lazily: every call pops deadlines that have passed
    from the front of an insertion-ordered dict. The window is the same for all
    keys, so insertion order is also deadline order and no per-key timer is
    needed.
    """

    def __init__(
        self, window_seconds: float = 3600.0, clock: Callable[[], float] = time.monotonic
    ):
        self.window_seconds = window_seconds
        self._clock = clock
        self._deadlines: "OrderedDict[Tuple[str, str], float]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._deadlines)

    def __contains__(self, key: Tuple[str, str]) -> bool:
        self._evict_expired(self._clock())
        return key in self._deadlines

    def _evict_expired(self, now: float) -> None:
        while self._deadlines:
            deadline = next(iter(self._deadlines.values()))
            if deadline > now:
                break
            self._deadlines.popitem(last=False)

    def should_process(self, channel_id: str, message_id: str) -> bool:
        """True the first time a message is seen inside the window"""
        now = self._clock()
        self._evict_expired(now)

        key = (str(channel_id), str(message_id))
        if key in self._deadlines:
            return False

        self._deadlines[key] = now + self.window_seconds
        return True
