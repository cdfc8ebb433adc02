from __future__ import annotations


class FormatterError(Exception):
    """Base error for a document that could not be reformatted."""

    stage = "format"

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"{self.stage} failed for {filename or '<memory>'}: {reason}")


class DecodeError(FormatterError):
    """Input bytes are not a readable Word document."""

    stage = "decode"


class EncodeError(FormatterError):
    """The output document could not be generated."""

    stage = "encode"
