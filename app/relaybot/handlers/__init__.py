# -*- coding: utf-8 -*-

from .message_handler import MESSAGE_FILTER, handle_message

__all__ = ["MESSAGE_FILTER", "handle_message"]
