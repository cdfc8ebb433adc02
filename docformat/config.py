import json
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from docformat.docs.model import FormatProfile, ImageLayoutMode, IndentMode

log = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SETTINGS_PATH = os.path.join(PROJECT_ROOT, "config", "formatter.json")

_PROFILE_KEYS = {
    "font": "font",
    "fontSize": "font_size_half_points",
    "lineSpacing": "line_spacing_multiplier",
    "paragraphSpacing": "paragraph_spacing_points",
    "firstLineIndent": "first_line_indent_chars",
}


@dataclass
class Settings:
    profile: FormatProfile = field(default_factory=FormatProfile)
    indent_mode: IndentMode = IndentMode.FIXED
    image_layout: ImageLayoutMode = ImageLayoutMode.FIXED_BOX
    file_timeout: Optional[float] = 60.0


def _parse(raw: dict) -> Settings:
    if not isinstance(raw, dict):
        raise ValueError("settings must be a JSON object")
    profile_raw = raw.get("profile") or {}
    if not isinstance(profile_raw, dict):
        raise ValueError("'profile' must be a JSON object")
    kwargs = {_PROFILE_KEYS[k]: v for k, v in profile_raw.items() if k in _PROFILE_KEYS}
    unknown = sorted(set(profile_raw) - set(_PROFILE_KEYS))
    if unknown:
        log.warning("Ignoring unknown profile options: %s", ", ".join(unknown))

    timeout = raw.get("fileTimeout", 60.0)
    if timeout is not None and float(timeout) <= 0:
        timeout = None

    return Settings(
        profile=FormatProfile(**kwargs),
        indent_mode=IndentMode(raw.get("indentMode", IndentMode.FIXED.value)),
        image_layout=ImageLayoutMode(raw.get("imageLayout", ImageLayoutMode.FIXED_BOX.value)),
        file_timeout=None if timeout is None else float(timeout),
    )


def load_settings(path: str = SETTINGS_PATH) -> Settings:
    """Load formatter defaults from config/formatter.json.

    A missing or invalid file is reported and built-in defaults are used.
    """
    if not os.path.exists(path):
        log.warning("formatter.json not found at %s, using defaults", path)
        return Settings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f) or {}
        return _parse(raw)
    except (OSError, ValueError, TypeError) as exc:
        log.warning("Could not load settings from %s: %s", path, exc)
        return Settings()
