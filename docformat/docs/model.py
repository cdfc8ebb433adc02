from __future__ import annotations

import base64
import binascii
import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

FONT_CHOICES = ("微软雅黑", "宋体", "黑体")


class IndentMode(str, enum.Enum):
    """How the first-line indent of paragraphs is computed."""

    FIXED = "fixed"
    CONFIGURABLE = "configurable"


class ImageLayoutMode(str, enum.Enum):
    """How embedded images are sized in the output document."""

    FIXED_BOX = "fixed_box"
    KEEP_ASPECT = "keep_aspect"


class JobState(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class FormatProfile:
    """Typographic settings applied to every element of a batch run.

    Sizes follow Word's conventions: font size in half-points, line spacing as
    a multiple of a single line, paragraph spacing in points, indent in
    characters.
    """

    font: str = FONT_CHOICES[0]
    font_size_half_points: int = 24
    line_spacing_multiplier: float = 2.2
    paragraph_spacing_points: float = 10
    first_line_indent_chars: int = 2

    def __post_init__(self) -> None:
        if self.font not in FONT_CHOICES:
            raise ValueError(f"Unsupported font {self.font!r}; expected one of {', '.join(FONT_CHOICES)}")
        if self.font_size_half_points <= 0:
            raise ValueError("font_size_half_points must be positive")
        if self.line_spacing_multiplier <= 0:
            raise ValueError("line_spacing_multiplier must be positive")
        if self.paragraph_spacing_points < 0:
            raise ValueError("paragraph_spacing_points must not be negative")
        if self.first_line_indent_chars < 0:
            raise ValueError("first_line_indent_chars must not be negative")


@dataclass(frozen=True)
class ParagraphElement:
    text: str
    original_position: int


@dataclass(frozen=True)
class ImageElement:
    source_data_uri: str
    original_position: int

    def read_bytes(self) -> Tuple[str, bytes]:
        """Return (mime type, raw bytes) encoded in the data URI.

        Raises ValueError if the URI is not a base64 data URI.
        """
        src = self.source_data_uri or ""
        if not src.startswith("data:") or "," not in src:
            raise ValueError("image source is not a data URI")
        header, payload = src[5:].split(",", 1)
        parts = header.split(";")
        if "base64" not in parts[1:]:
            raise ValueError("image data URI is not base64 encoded")
        try:
            data = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"invalid base64 payload: {e}") from e
        if not data:
            raise ValueError("image data URI is empty")
        return parts[0] or "application/octet-stream", data


ContentElement = Union[ParagraphElement, ImageElement]


@dataclass
class Block:
    """A top-level block of the decoded HTML tree."""

    tag: str
    text: str = ""
    images: List[str] = field(default_factory=list)


@dataclass
class DecodedDocument:
    filename: str
    html: str
    blocks: List[Block] = field(default_factory=list)
    messages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PreviewSnapshot:
    filename: str
    text: str
    images: Tuple[str, ...] = ()

    @classmethod
    def from_elements(cls, filename: str, elements: List[ContentElement]) -> "PreviewSnapshot":
        texts = [e.text for e in elements if isinstance(e, ParagraphElement)]
        images = tuple(e.source_data_uri for e in elements if isinstance(e, ImageElement))
        return cls(filename=filename, text="\n\n".join(texts), images=images)

    def excerpt(self, limit: int = 500) -> str:
        if len(self.text) <= limit:
            return self.text
        return self.text[:limit] + "..."


@dataclass(frozen=True)
class InputFile:
    name: str
    data: bytes


@dataclass
class BatchJob:
    inputs: List[InputFile]
    profile: FormatProfile
    indent_mode: IndentMode
    image_layout: ImageLayoutMode = ImageLayoutMode.FIXED_BOX
    progress: float = 0.0
    state: JobState = JobState.IDLE
    preview: Optional[PreviewSnapshot] = None


@dataclass
class FileOutcome:
    name: str
    output_name: str
    data: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None and self.error is None


@dataclass(frozen=True)
class Deliverable:
    name: str
    data: bytes
    is_bundle: bool = False


@dataclass
class BatchResult:
    job: BatchJob
    outcomes: List[FileOutcome] = field(default_factory=list)
    deliverable: Optional[Deliverable] = None

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    def failures(self) -> List[Tuple[str, str]]:
        return [(o.name, o.error or "unknown error") for o in self.outcomes if not o.ok]
