from __future__ import annotations

import base64
import io
import logging
from html.parser import HTMLParser
from typing import List, Optional

import mammoth

from .errors import DecodeError
from .model import Block, DecodedDocument

log = logging.getLogger(__name__)

PARAGRAPH_TAGS = {"p", "h1", "h2", "h3", "h4", "h5", "h6", "li"}


def _default_alignment(paragraph):
    # Paragraphs without explicit alignment are treated as left aligned
    if paragraph.alignment:
        return paragraph
    return paragraph.copy(alignment="left")


def _inline_image(image) -> dict:
    """Embed image bytes into the HTML as a base64 data URI."""
    with image.open() as stream:
        encoded = base64.b64encode(stream.read()).decode("ascii")
    content_type = image.content_type or "application/octet-stream"
    return {"src": f"data:{content_type};base64,{encoded}"}


class _BlockCollector(HTMLParser):
    """Split converter HTML into top-level blocks.

    Text and images are gathered per paragraph-like block. Tables are kept as
    a single opaque ``table`` block; nothing inside them is extracted.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.blocks: List[Block] = []
        self._open: List[Block] = []
        self._table_depth = 0

    @property
    def _current(self) -> Optional[Block]:
        return self._open[-1] if self._open else None

    def handle_starttag(self, tag: str, attrs) -> None:
        if tag == "table":
            self._table_depth += 1
            if self._table_depth == 1:
                self.blocks.append(Block(tag="table"))
            return
        if self._table_depth:
            return
        if tag in PARAGRAPH_TAGS:
            block = Block(tag=tag)
            self.blocks.append(block)
            self._open.append(block)
        elif tag == "img":
            src = dict(attrs).get("src") or ""
            if not src:
                return
            if self._current is None:
                self.blocks.append(Block(tag="p", images=[src]))
            else:
                self._current.images.append(src)

    def handle_endtag(self, tag: str) -> None:
        if tag == "table":
            self._table_depth = max(0, self._table_depth - 1)
            return
        if self._table_depth:
            return
        if self._current is not None and self._current.tag == tag:
            self._open.pop()

    def handle_data(self, data: str) -> None:
        if self._table_depth or self._current is None:
            return
        self._current.text += data


def parse_blocks(html: str) -> List[Block]:
    collector = _BlockCollector()
    collector.feed(html or "")
    collector.close()
    return collector.blocks


def decode_document(data: bytes, filename: str = "") -> DecodedDocument:
    """Convert a Word document into HTML and its list of top-level blocks.

    Doxygen:
    - @param data: Raw bytes of the uploaded document.
    - @param filename: Name used in errors and logs.
    - @return: DecodedDocument with the converter HTML and parsed blocks.
    - @throws DecodeError: If the bytes are not a readable .docx document.
    """
    if not data:
        raise DecodeError(filename, "empty input")
    try:
        result = mammoth.convert_to_html(
            io.BytesIO(data),
            convert_image=mammoth.images.img_element(_inline_image),
            transform_document=mammoth.transforms.paragraph(_default_alignment),
        )
    except Exception as e:
        raise DecodeError(filename, f"{type(e).__name__}: {e}") from e

    messages = [f"{m.type}: {m.message}" for m in result.messages]
    for msg in messages:
        log.debug("%s: converter %s", filename, msg)

    blocks = parse_blocks(result.value)
    log.debug("%s: decoded %d blocks", filename, len(blocks))
    return DecodedDocument(filename=filename, html=result.value, blocks=blocks, messages=messages)
