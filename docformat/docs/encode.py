from __future__ import annotations

import io
import logging
from typing import Iterable

from docx import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Emu, Pt, Twips

from .errors import EncodeError
from .model import FormatProfile, IndentMode, PreviewSnapshot
from .style import LINE_UNITS, ImageStyle, ParagraphStyle, StyledElement, paragraph_style

log = logging.getLogger(__name__)

EMU_PER_PIXEL = 9525
PREVIEW_OUTPUT_NAME = "formatted_document.docx"

_ALIGNMENTS = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}


def _set_font(font, element, name: str, size_half_points: int) -> None:
    """Set latin and East Asian font names plus the size (in half-points)."""
    font.name = name
    font.size = Pt(size_half_points / 2)
    element.get_or_add_rPr().get_or_add_rFonts().set(qn("w:eastAsia"), name)


def _apply_paragraph_format(pf, style: ParagraphStyle) -> None:
    pf.alignment = _ALIGNMENTS[style.alignment]
    pf.line_spacing = style.line_spacing_twips / LINE_UNITS
    pf.space_before = Twips(style.space_before_twips)
    pf.space_after = Twips(style.space_after_twips)
    pf.first_line_indent = Twips(style.first_line_indent_twips)


def _add_text(d, text: str, style: ParagraphStyle) -> None:
    p = d.add_paragraph()
    run = p.add_run(text)
    _set_font(run.font, run._element, style.font, style.size_half_points)
    _apply_paragraph_format(p.paragraph_format, style)


def _add_image(d, data: bytes, style: ImageStyle) -> None:
    p = d.add_paragraph()
    run = p.add_run()
    run.add_picture(
        io.BytesIO(data),
        width=Emu(style.width_px * EMU_PER_PIXEL),
        height=Emu(style.height_px * EMU_PER_PIXEL),
    )
    pf = p.paragraph_format
    pf.alignment = _ALIGNMENTS[style.alignment]
    pf.space_before = Twips(style.space_before_twips)
    pf.space_after = Twips(style.space_after_twips)


def _to_bytes(d) -> bytes:
    buf = io.BytesIO()
    d.save(buf)
    return buf.getvalue()


def encode_document(styled: Iterable[StyledElement], filename: str = "") -> bytes:
    """Build a new .docx from styled elements, one paragraph per element.

    Doxygen:
    - @param styled: Output of `apply_style`.
    - @param filename: Source name used in errors.
    - @return: The generated document as bytes.
    - @throws EncodeError: If any element cannot be written (e.g. bad image data).
    """
    d = DocxDocument()
    count = 0
    for item in styled:
        try:
            if isinstance(item.style, ParagraphStyle):
                _add_text(d, item.element.text, item.style)
            else:
                _, data = item.element.read_bytes()
                _add_image(d, data, item.style)
        except Exception as e:
            raise EncodeError(
                filename, f"element at position {item.element.original_position}: {e}"
            ) from e
        count += 1
    try:
        out = _to_bytes(d)
    except Exception as e:
        raise EncodeError(filename, str(e)) from e
    log.debug("%s: encoded %d elements (%d bytes)", filename, count, len(out))
    return out


def export_preview(snapshot: PreviewSnapshot, profile: FormatProfile, indent_mode: IndentMode) -> bytes:
    """Export preview text as a single paragraph whose formatting lives in the Normal style."""
    style = paragraph_style(profile, indent_mode)
    d = DocxDocument()
    normal = d.styles["Normal"]
    _set_font(normal.font, normal.element, style.font, style.size_half_points)
    _apply_paragraph_format(normal.paragraph_format, style)

    p = d.add_paragraph()
    run = p.add_run(snapshot.text)
    _set_font(run.font, run._element, style.font, style.size_half_points)
    try:
        return _to_bytes(d)
    except Exception as e:
        raise EncodeError(snapshot.filename, str(e)) from e
