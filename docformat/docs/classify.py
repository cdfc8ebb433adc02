from __future__ import annotations

from typing import Iterable, List

from .decode import PARAGRAPH_TAGS
from .model import Block, ContentElement, DecodedDocument, ImageElement, ParagraphElement


def classify_blocks(blocks: Iterable[Block]) -> List[ContentElement]:
    """Flatten decoded blocks into an ordered list of paragraphs and images.

    A block's text becomes one paragraph element, followed by one image
    element per image it contained. Empty blocks and tables produce nothing.
    """
    out: List[ContentElement] = []
    for position, block in enumerate(blocks):
        if block.tag not in PARAGRAPH_TAGS:
            continue
        text = (block.text or "").strip()
        if text:
            out.append(ParagraphElement(text=text, original_position=position))
        for src in block.images:
            out.append(ImageElement(source_data_uri=src, original_position=position))
    return out


def classify_document(doc: DecodedDocument) -> List[ContentElement]:
    return classify_blocks(doc.blocks)
