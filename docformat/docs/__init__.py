"""Word document reformatting layer.

Exposes:
- Data model: FormatProfile, ParagraphElement, ImageElement, BatchJob, ...
- Decoder: mammoth DOCX → HTML → top-level blocks
- Classifier: blocks → ordered paragraph/image elements
- Style applicator and python-docx encoder
- Batch orchestrator (async, per-file isolation, zip bundling)
"""

from .errors import DecodeError, EncodeError, FormatterError
from .model import (
    FONT_CHOICES,
    BatchJob,
    BatchResult,
    Deliverable,
    FileOutcome,
    FormatProfile,
    ImageElement,
    ImageLayoutMode,
    IndentMode,
    InputFile,
    JobState,
    ParagraphElement,
    PreviewSnapshot,
)
from .decode import decode_document
from .classify import classify_blocks, classify_document
from .style import apply_style
from .encode import encode_document, export_preview
from .pipeline import format_document, run_batch

__all__ = [
    "DecodeError",
    "EncodeError",
    "FormatterError",
    "FONT_CHOICES",
    "BatchJob",
    "BatchResult",
    "Deliverable",
    "FileOutcome",
    "FormatProfile",
    "ImageElement",
    "ImageLayoutMode",
    "IndentMode",
    "InputFile",
    "JobState",
    "ParagraphElement",
    "PreviewSnapshot",
    "decode_document",
    "classify_blocks",
    "classify_document",
    "apply_style",
    "encode_document",
    "export_preview",
    "format_document",
    "run_batch",
]
