"""Client utilities for OpenAI-compatible chat-completion endpoints.

This module contains configuration loading and convenience helpers to
create a client and perform simple chat completions.
"""

from __future__ import annotations

import json
import os
from typing import Dict, List, Optional, Tuple

from openai import OpenAI, OpenAIError

# Path to the JSON configuration file with models and keys
CONFIG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "config", "models.json")

DEFAULT_BASE_URL = "https://api.siliconflow.cn/v1"

# Sampling parameters used for every assistant request
COMPLETION_PARAMS = {
    "max_tokens": 512,
    "temperature": 0.7,
    "top_p": 0.7,
    "frequency_penalty": 0.5,
    "n": 1,
}


class TransportError(RuntimeError):
    """The chat endpoint was unreachable or returned no usable completion."""


def _load_config(path: str = CONFIG_PATH) -> Dict:
    """Load and return the JSON configuration.

    Doxygen:
    - @param path: Absolute path to the JSON configuration file.
    - @return: Parsed configuration dictionary.
    - @throws FileNotFoundError: If the file is missing.
    - @throws json.JSONDecodeError: If the file content is not valid JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_picked_model(path: str = CONFIG_PATH) -> Tuple[str, str, str]:
    """Return the selected model id, its API key and base URL.

    The configuration file must contain the following structure:
    - model_number_picked: integer index into the "models" array
    - models: list of items with fields:
      - provider: string (e.g., "siliconflow")
      - model: string (e.g., "Qwen/Qwen2-7B-Instruct")
      - api_key: string
      - base_url: optional string, defaults to the SiliconFlow endpoint

    Doxygen:
    - @param path: Absolute path to the JSON configuration file.
    - @return: (model, api_key, base_url) triple.
    - @throws ValueError: If index is invalid or fields are missing.
    """
    cfg = _load_config(path)
    models: List[Dict] = cfg.get("models", [])
    idx = cfg.get("model_number_picked")

    if not isinstance(idx, int) or isinstance(idx, bool):
        raise ValueError("Config must include integer 'model_number_picked'.")
    if idx < 0 or idx >= len(models):
        raise ValueError("'model_number_picked' is out of range for available models.")

    item = models[idx]
    model = item.get("model")
    api_key = item.get("api_key")
    if not model or not api_key:
        raise ValueError("Selected model entry must include both 'model' and 'api_key'.")
    return model, api_key, item.get("base_url") or DEFAULT_BASE_URL


def get_chat_client(api_key: str, base_url: str = DEFAULT_BASE_URL) -> OpenAI:
    """Create an OpenAI client bound to an OpenAI-compatible endpoint."""
    return OpenAI(base_url=base_url, api_key=api_key)


def chat_completion(
    client: OpenAI,
    model: str,
    messages: List[Dict[str, str]],
    timeout: Optional[float] = 60.0,
) -> str:
    """Send a chat completion request and return text content.

    Doxygen:
    - @param client: OpenAI instance created by `get_chat_client`.
    - @param model: Target model identifier.
    - @param messages: List of role/content dictionaries for the chat.
    - @param timeout: Request timeout in seconds; None disables timeout.
    - @return: Text content of the first completion choice.
    - @throws TransportError: On any API error or an empty response.
    """
    try:
        completion = client.chat.completions.create(
            model=model,
            messages=messages,
            timeout=timeout,
            **COMPLETION_PARAMS,
        )
    except OpenAIError as e:
        raise TransportError(f"Chat request failed: {e}") from e

    if not completion.choices:
        raise TransportError("No response from chat endpoint")
    content = completion.choices[0].message.content
    if content is None:
        raise TransportError("Chat endpoint returned an empty message")
    return content
