"""LLM (Large Language Model) integration package.

This package provides utilities to work with hosted chat-completion
endpoints via OpenAI-compatible clients, and the chat assistant built on
top of them.
"""

from .client import (
    CONFIG_PATH,
    TransportError,
    get_picked_model,
    get_chat_client,
    chat_completion,
)
from .assistant import Assistant, FALLBACK_REPLY, GREETING

__all__ = [
    "CONFIG_PATH",
    "TransportError",
    "get_picked_model",
    "get_chat_client",
    "chat_completion",
    "Assistant",
    "FALLBACK_REPLY",
    "GREETING",
]
