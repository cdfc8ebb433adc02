import pytest

from conftest import data_uri, make_png, make_png_header
from docformat.docs.model import (
    FormatProfile,
    ImageElement,
    ImageLayoutMode,
    IndentMode,
    ParagraphElement,
)
from docformat.docs.style import ImageStyle, ParagraphStyle, apply_style


def _elements():
    return [
        ParagraphElement(text="Hello", original_position=0),
        ImageElement(source_data_uri=data_uri(make_png(200, 100)), original_position=0),
    ]


def test_paragraph_style_units():
    profile = FormatProfile(font="宋体", font_size_half_points=28, line_spacing_multiplier=2.2, paragraph_spacing_points=10)
    styled = apply_style(_elements(), profile, IndentMode.FIXED)
    style = styled[0].style
    assert isinstance(style, ParagraphStyle)
    assert style.font == "宋体"
    assert style.size_half_points == 28
    assert style.line_spacing_twips == 528
    assert style.space_before_twips == 200
    assert style.space_after_twips == 200
    assert style.alignment == "justify"


def test_fixed_indent_ignores_profile_indent():
    profile = FormatProfile(first_line_indent_chars=5)
    styled = apply_style(_elements(), profile, IndentMode.FIXED)
    assert styled[0].style.first_line_indent_twips == 480


def test_configurable_indent_uses_profile_indent():
    profile = FormatProfile(first_line_indent_chars=5)
    styled = apply_style(_elements(), profile, IndentMode.CONFIGURABLE)
    assert styled[0].style.first_line_indent_twips == 1200


def test_image_uses_fixed_box_by_default():
    styled = apply_style(_elements(), FormatProfile(), IndentMode.FIXED)
    assert styled[1].style == ImageStyle(width_px=400, height_px=300)
    assert styled[1].style.space_before_twips == 600
    assert styled[1].style.alignment == "center"


def test_keep_aspect_scales_height():
    styled = apply_style(_elements(), FormatProfile(), IndentMode.FIXED, ImageLayoutMode.KEEP_ASPECT)
    assert (styled[1].style.width_px, styled[1].style.height_px) == (400, 200)


def test_keep_aspect_falls_back_for_unreadable_image():
    bad = [ImageElement(source_data_uri="data:image/png;base64,AAAA", original_position=0)]
    styled = apply_style(bad, FormatProfile(), IndentMode.FIXED, ImageLayoutMode.KEEP_ASPECT)
    assert (styled[0].style.width_px, styled[0].style.height_px) == (400, 300)


def test_apply_style_is_idempotent():
    profile = FormatProfile()
    once = apply_style(_elements(), profile, IndentMode.CONFIGURABLE)
    assert apply_style(_elements(), profile, IndentMode.CONFIGURABLE) == once
    assert apply_style(once, profile, IndentMode.CONFIGURABLE) == once


def test_format_profile_validation():
    with pytest.raises(ValueError):
        FormatProfile(font="Comic Sans")
    with pytest.raises(ValueError):
        FormatProfile(font_size_half_points=0)
    with pytest.raises(ValueError):
        FormatProfile(line_spacing_multiplier=0)
    with pytest.raises(ValueError):
        FormatProfile(paragraph_spacing_points=-1)
    with pytest.raises(ValueError):
        FormatProfile(first_line_indent_chars=-1)


def test_keep_aspect_falls_back_for_oversized_image_header():
    huge = [ImageElement(source_data_uri=data_uri(make_png_header(20000, 20000)), original_position=0)]
    styled = apply_style(huge, FormatProfile(), IndentMode.FIXED, ImageLayoutMode.KEEP_ASPECT)
    assert (styled[0].style.width_px, styled[0].style.height_px) == (400, 300)
