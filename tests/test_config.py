import json

from docformat.config import Settings, load_settings
from docformat.docs.model import FormatProfile, ImageLayoutMode, IndentMode


def test_load_settings_reads_profile(tmp_path):
    path = tmp_path / "formatter.json"
    path.write_text(
        json.dumps(
            {
                "profile": {"font": "宋体", "fontSize": 32, "lineSpacing": 1.5, "paragraphSpacing": 6, "firstLineIndent": 4},
                "indentMode": "configurable",
                "imageLayout": "keep_aspect",
                "fileTimeout": 0,
            },
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    settings = load_settings(str(path))
    assert settings.profile == FormatProfile(
        font="宋体",
        font_size_half_points=32,
        line_spacing_multiplier=1.5,
        paragraph_spacing_points=6,
        first_line_indent_chars=4,
    )
    assert settings.indent_mode is IndentMode.CONFIGURABLE
    assert settings.image_layout is ImageLayoutMode.KEEP_ASPECT
    assert settings.file_timeout is None


def test_missing_file_uses_defaults(tmp_path):
    assert load_settings(str(tmp_path / "nope.json")) == Settings()


def test_invalid_values_use_defaults(tmp_path):
    path = tmp_path / "formatter.json"
    path.write_text(json.dumps({"profile": {"fontSize": -1}}), encoding="utf-8")
    assert load_settings(str(path)) == Settings()


def test_non_object_json_uses_defaults(tmp_path):
    path = tmp_path / "formatter.json"
    path.write_text("[1]", encoding="utf-8")
    assert load_settings(str(path)) == Settings()


def test_non_object_profile_uses_defaults(tmp_path):
    path = tmp_path / "formatter.json"
    path.write_text(json.dumps({"profile": "big"}), encoding="utf-8")
    assert load_settings(str(path)) == Settings()
