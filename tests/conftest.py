"""Shared fixtures: in-memory PNG images and .docx builders."""

from __future__ import annotations

import base64
import io
import struct
import zlib

import pytest
from docx import Document as DocxDocument
from docx.shared import Inches
from PIL import Image


def make_png(width: int = 20, height: int = 10, color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def make_png_header(width: int, height: int) -> bytes:
    """A structurally valid PNG that only declares its size; pixel data is empty."""

    def chunk(kind: bytes, body: bytes) -> bytes:
        return struct.pack(">I", len(body)) + kind + body + struct.pack(">I", zlib.crc32(kind + body) & 0xFFFFFFFF)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IDAT", zlib.compress(b"")) + chunk(b"IEND", b"")


def data_uri(png: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


def build_docx(items) -> bytes:
    """Build a .docx from a list of items.

    - "text": a paragraph with that text
    - ("image", png): a paragraph holding only a picture
    - ("text+image", text, [png, ...]): text followed by inline pictures in one paragraph
    - ("table", [[cell, ...], ...]): a table of text cells
    """
    d = DocxDocument()
    for item in items:
        if isinstance(item, str):
            d.add_paragraph(item)
        elif item[0] == "image":
            d.add_paragraph().add_run().add_picture(io.BytesIO(item[1]), width=Inches(0.5))
        elif item[0] == "text+image":
            p = d.add_paragraph(item[1])
            for png in item[2]:
                p.add_run().add_picture(io.BytesIO(png), width=Inches(0.5))
        elif item[0] == "table":
            rows = item[1]
            table = d.add_table(rows=len(rows), cols=len(rows[0]))
            for r, row in enumerate(rows):
                for c, text in enumerate(row):
                    table.cell(r, c).text = text
    buf = io.BytesIO()
    d.save(buf)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def sample_docx(png_bytes) -> bytes:
    return build_docx(
        [
            "First paragraph",
            "   ",
            ("text+image", "Figure below", [png_bytes]),
            ("table", [["cell A", "cell B"]]),
            ("image", png_bytes),
            "Last paragraph",
        ]
    )
