from __future__ import annotations

import logging
from typing import Dict, List, Optional

from openai import OpenAI

from .client import TransportError, chat_completion

log = logging.getLogger(__name__)

GREETING = "你好！我是你的AI助理，有什么我可以帮你的吗？"
FALLBACK_REPLY = "抱歉，我遇到了一些问题。请稍后再试。"


class Assistant:
    """Chat session that forwards the whole history to the endpoint on each turn.

    Transport failures never reach the caller: the fixed apology is added to
    the history and returned instead. Requests are not retried.
    """

    def __init__(
        self,
        client: OpenAI,
        model: str,
        greeting: Optional[str] = GREETING,
        timeout: Optional[float] = 60.0,
    ) -> None:
        self.client = client
        self.model = model
        self.timeout = timeout
        self.messages: List[Dict[str, str]] = []
        if greeting:
            self.messages.append({"role": "assistant", "content": greeting})

    def send(self, text: str) -> Optional[str]:
        if not text or not text.strip():
            return None
        self.messages.append({"role": "user", "content": text})
        try:
            reply = chat_completion(self.client, self.model, list(self.messages), timeout=self.timeout)
        except TransportError as e:
            log.error("Assistant request failed: %s", e)
            reply = FALLBACK_REPLY
        self.messages.append({"role": "assistant", "content": reply})
        return reply
