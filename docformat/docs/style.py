from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from PIL import Image, UnidentifiedImageError

from .model import (
    ContentElement,
    FormatProfile,
    ImageElement,
    ImageLayoutMode,
    IndentMode,
    ParagraphElement,
)

log = logging.getLogger(__name__)

# Word measures line spacing in 240ths of a line and lengths in twips (1/20 pt)
LINE_UNITS = 240
TWIPS_PER_POINT = 20
# Width of one full-width (CJK) character at body size, in twips
CHAR_WIDTH_TWIPS = 240
FIXED_INDENT_CHARS = 2

IMAGE_BOX_WIDTH = 400
IMAGE_BOX_HEIGHT = 300
IMAGE_SPACING_TWIPS = 30 * TWIPS_PER_POINT


@dataclass(frozen=True)
class ParagraphStyle:
    font: str
    size_half_points: int
    line_spacing_twips: int
    space_before_twips: int
    space_after_twips: int
    first_line_indent_twips: int
    alignment: str = "justify"


@dataclass(frozen=True)
class ImageStyle:
    width_px: int
    height_px: int
    space_before_twips: int = IMAGE_SPACING_TWIPS
    space_after_twips: int = IMAGE_SPACING_TWIPS
    alignment: str = "center"


@dataclass(frozen=True)
class StyledElement:
    element: ContentElement
    style: Union[ParagraphStyle, ImageStyle]


def first_line_indent_twips(profile: FormatProfile, indent_mode: IndentMode) -> int:
    if IndentMode(indent_mode) is IndentMode.FIXED:
        return FIXED_INDENT_CHARS * CHAR_WIDTH_TWIPS
    return profile.first_line_indent_chars * CHAR_WIDTH_TWIPS


def paragraph_style(profile: FormatProfile, indent_mode: IndentMode) -> ParagraphStyle:
    spacing = int(round(profile.paragraph_spacing_points * TWIPS_PER_POINT))
    return ParagraphStyle(
        font=profile.font,
        size_half_points=profile.font_size_half_points,
        line_spacing_twips=int(round(profile.line_spacing_multiplier * LINE_UNITS)),
        space_before_twips=spacing,
        space_after_twips=spacing,
        first_line_indent_twips=first_line_indent_twips(profile, indent_mode),
    )


def _natural_size(element: ImageElement) -> Optional[tuple]:
    try:
        _, data = element.read_bytes()
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except (ValueError, OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        log.warning("Could not measure image at position %d: %s", element.original_position, e)
        return None


def image_style(element: ImageElement, image_layout: ImageLayoutMode) -> ImageStyle:
    if ImageLayoutMode(image_layout) is ImageLayoutMode.KEEP_ASPECT:
        size = _natural_size(element)
        if size and size[0] > 0 and size[1] > 0:
            height = max(1, int(round(IMAGE_BOX_WIDTH * size[1] / size[0])))
            return ImageStyle(width_px=IMAGE_BOX_WIDTH, height_px=height)
    return ImageStyle(width_px=IMAGE_BOX_WIDTH, height_px=IMAGE_BOX_HEIGHT)


def apply_style(
    elements: Iterable[Union[ContentElement, StyledElement]],
    profile: FormatProfile,
    indent_mode: IndentMode,
    image_layout: ImageLayoutMode = ImageLayoutMode.FIXED_BOX,
) -> List[StyledElement]:
    """Attach rendering attributes to each element.

    Already styled elements are re-styled from their underlying element, so the
    result only depends on the elements and the settings.
    """
    para = paragraph_style(profile, indent_mode)
    out: List[StyledElement] = []
    for item in elements:
        element = item.element if isinstance(item, StyledElement) else item
        if isinstance(element, ParagraphElement):
            out.append(StyledElement(element=element, style=para))
        elif isinstance(element, ImageElement):
            out.append(StyledElement(element=element, style=image_style(element, image_layout)))
        else:
            raise TypeError(f"Unsupported element type: {type(element).__name__}")
    return out
