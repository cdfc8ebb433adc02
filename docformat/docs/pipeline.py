"""Batch orchestration: decode → classify → style → encode, then deliver.

Files in a batch are processed one after another. Each file runs in a worker
thread under a timeout so the caller's event loop stays responsive and one
pathological input cannot stall the batch. A failing file is recorded and the
batch moves on.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import zipfile
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .classify import classify_document
from .decode import decode_document
from .encode import encode_document
from .errors import FormatterError
from .model import (
    BatchJob,
    BatchResult,
    Deliverable,
    FileOutcome,
    FormatProfile,
    ImageLayoutMode,
    IndentMode,
    JobState,
    PreviewSnapshot,
)
from .style import apply_style

log = logging.getLogger(__name__)

BUNDLE_NAME = "formatted_documents.zip"

ProgressCallback = Callable[[float], None]
PreviewCallback = Callable[[PreviewSnapshot], None]


def output_name(name: str) -> str:
    return f"formatted_{name}"


def _unique_name(name: str, used: Set[str]) -> str:
    """Output name for `name`, suffixed " (2)", " (3)", ... if already taken in this batch."""
    candidate = output_name(name)
    if candidate in used:
        stem, ext = os.path.splitext(candidate)
        n = 2
        while f"{stem} ({n}){ext}" in used:
            n += 1
        candidate = f"{stem} ({n}){ext}"
    used.add(candidate)
    return candidate


def format_document(
    data: bytes,
    filename: str,
    profile: FormatProfile,
    indent_mode: IndentMode,
    image_layout: ImageLayoutMode = ImageLayoutMode.FIXED_BOX,
) -> Tuple[bytes, PreviewSnapshot]:
    """Reformat one document.

    Doxygen:
    - @param data: Raw bytes of the input document.
    - @param filename: Original file name.
    - @param profile: Typographic settings for paragraphs.
    - @param indent_mode: Fixed two-character indent or the profile's indent.
    - @param image_layout: Fixed 400x300 box or aspect-preserving height.
    - @return: (output bytes, preview of the classified content).
    - @throws DecodeError, EncodeError
    """
    decoded = decode_document(data, filename)
    elements = classify_document(decoded)
    styled = apply_style(elements, profile, indent_mode, image_layout)
    out = encode_document(styled, filename)
    return out, PreviewSnapshot.from_elements(filename, elements)


def bundle_outputs(outcomes: Iterable[FileOutcome]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for o in outcomes:
            if o.ok:
                zf.writestr(o.output_name, o.data)
    return buf.getvalue()


def _notify(callback, value) -> None:
    if callback is not None:
        callback(value)


async def run_batch(
    job: BatchJob,
    *,
    on_progress: Optional[ProgressCallback] = None,
    on_preview: Optional[PreviewCallback] = None,
    cancel: Optional[asyncio.Event] = None,
    file_timeout: Optional[float] = 60.0,
) -> BatchResult:
    """Run a batch job to completion and build its deliverable.

    Every input is attempted exactly once unless the batch is cancelled.
    Decode/encode errors and timeouts are recorded per file; anything else
    propagates and marks the job failed.
    """
    if job.state is not JobState.IDLE:
        raise RuntimeError(f"Batch job already {job.state.value}")

    job.state = JobState.RUNNING
    result = BatchResult(job=job)
    total = len(job.inputs)
    used: Set[str] = set()
    log.info("Batch started: %d file(s)", total)

    try:
        for index, item in enumerate(job.inputs):
            if cancel is not None and cancel.is_set():
                log.info("Batch cancelled before %s", item.name)
                for rest in job.inputs[index:]:
                    result.outcomes.append(
                        FileOutcome(name=rest.name, output_name=_unique_name(rest.name, used), error="cancelled")
                    )
                job.state = JobState.CANCELLED
                break

            job.progress = index / total * 100
            _notify(on_progress, job.progress)

            outcome = FileOutcome(name=item.name, output_name=_unique_name(item.name, used))
            try:
                data, preview = await asyncio.wait_for(
                    asyncio.to_thread(
                        format_document,
                        item.data,
                        item.name,
                        job.profile,
                        job.indent_mode,
                        job.image_layout,
                    ),
                    timeout=file_timeout,
                )
            except FormatterError as e:
                log.warning("Skipping %s: %s", item.name, e)
                outcome.error = str(e)
            except asyncio.TimeoutError:
                log.warning("Skipping %s: timed out after %ss", item.name, file_timeout)
                outcome.error = f"timed out after {file_timeout}s"
            else:
                outcome.data = data
                job.preview = preview
                _notify(on_preview, preview)
                log.info("Formatted %s -> %s", item.name, outcome.output_name)
            result.outcomes.append(outcome)
    except Exception:
        job.state = JobState.FAILED
        raise

    if job.state is JobState.RUNNING:
        job.progress = 100.0
        _notify(on_progress, job.progress)
        job.state = JobState.COMPLETED if result.succeeded else JobState.FAILED

    result.deliverable = _deliver(total, result.outcomes)
    log.info("Batch %s: %d succeeded, %d failed", job.state.value, result.succeeded, result.failed)
    return result


def _deliver(total: int, outcomes: List[FileOutcome]) -> Optional[Deliverable]:
    succeeded = [o for o in outcomes if o.ok]
    if not succeeded:
        return None
    if total == 1:
        only = succeeded[0]
        return Deliverable(name=only.output_name, data=only.data)
    return Deliverable(name=BUNDLE_NAME, data=bundle_outputs(succeeded), is_bundle=True)
