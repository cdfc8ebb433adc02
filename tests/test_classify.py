from docformat.docs.classify import classify_blocks, classify_document
from docformat.docs.decode import decode_document
from docformat.docs.model import Block, ImageElement, ParagraphElement


def test_whitespace_only_paragraph_is_dropped():
    assert classify_blocks([Block(tag="p", text="   ")]) == []


def test_images_follow_their_paragraph_text():
    blocks = [
        Block(tag="p", text="Intro"),
        Block(tag="p", text="  Caption  ", images=["data:1", "data:2"]),
        Block(tag="table", text="ignored", images=["data:t"]),
        Block(tag="p", text="", images=["data:3"]),
        Block(tag="p", text=""),
    ]
    out = classify_blocks(blocks)
    assert out == [
        ParagraphElement(text="Intro", original_position=0),
        ParagraphElement(text="Caption", original_position=1),
        ImageElement(source_data_uri="data:1", original_position=1),
        ImageElement(source_data_uri="data:2", original_position=1),
        ImageElement(source_data_uri="data:3", original_position=3),
    ]


def test_positions_are_non_decreasing(sample_docx):
    elements = classify_document(decode_document(sample_docx, "sample.docx"))
    positions = [e.original_position for e in elements]
    assert positions == sorted(positions)


def test_counts_match_document_content(sample_docx):
    elements = classify_document(decode_document(sample_docx, "sample.docx"))
    paragraphs = [e for e in elements if isinstance(e, ParagraphElement)]
    images = [e for e in elements if isinstance(e, ImageElement)]
    assert [p.text for p in paragraphs] == ["First paragraph", "Figure below", "Last paragraph"]
    assert len(images) == 2
    # the inline image comes right after its paragraph
    idx = elements.index(paragraphs[1])
    assert isinstance(elements[idx + 1], ImageElement)
    assert elements[idx + 1].original_position == paragraphs[1].original_position
    # table cells are not extracted
    assert not any("cell" in p.text for p in paragraphs)
