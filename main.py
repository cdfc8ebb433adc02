"""
Entry point and compatibility facade for the document formatting toolkit.

This module exposes a stable API and a CLI.

Packages:
- docformat.docs: Word decode → classify → style → encode, batch orchestration
- docformat.names: Name-list comparison
- docformat.llm: Chat-completion client and the assistant session
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
from typing import List, Optional

# Document pipeline
from docformat.docs import (
    BatchJob,
    BatchResult,
    FormatProfile,
    ImageLayoutMode,
    IndentMode,
    InputFile,
    PreviewSnapshot,
    apply_style,
    classify_document,
    decode_document,
    encode_document,
    export_preview,
    format_document,
    run_batch,
)
from docformat.docs.model import FONT_CHOICES

# Name lists
from docformat.names import compare_lists

# Chat assistant
from docformat.llm import Assistant, get_chat_client, get_picked_model

log = logging.getLogger("docformat")

__all__ = [
    "FormatProfile",
    "IndentMode",
    "ImageLayoutMode",
    "BatchJob",
    "InputFile",
    "decode_document",
    "classify_document",
    "apply_style",
    "encode_document",
    "export_preview",
    "format_document",
    "run_batch",
    "compare_lists",
    "Assistant",
    "print_progress_bar",
]


def print_progress_bar(progress: float, done: int, total: int, width: int = 10) -> None:
    """Render a colored one-line progress bar (10 fixed segments).

    Doxygen:
    - @param progress: Batch progress in [0, 100].
    - @param done: Number of files already handled.
    - @param total: Total number of files.
    - @param width: Number of bar segments (default 10).
    """
    progress = max(0.0, min(progress, 100.0))
    segments = max(1, int(width))
    filled = int(progress / 100 * segments)
    pending = max(0, segments - filled)
    GREEN = "\x1b[32m"
    RED = "\x1b[31m"
    RESET = "\x1b[0m"
    bar = f"{GREEN}{'█'*filled}{RESET}{RED}{'█'*pending}{RESET} {progress:5.1f}% [{done}/{total}]"
    print(f"\r{bar}", end="", flush=True)


def _setup_logging(verbose: bool) -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    level = logging.DEBUG if verbose else logging.INFO
    root_logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", "%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def _read_inputs(paths: List[str]) -> List[InputFile]:
    inputs: List[InputFile] = []
    for path in paths:
        if not os.path.exists(path):
            raise FileNotFoundError(f"File not found: {path}")
        with open(path, "rb") as f:
            inputs.append(InputFile(name=os.path.basename(path), data=f.read()))
    return inputs


def _profile_from_args(args, defaults: FormatProfile) -> FormatProfile:
    return FormatProfile(
        font=args.font or defaults.font,
        font_size_half_points=args.font_size if args.font_size is not None else defaults.font_size_half_points,
        line_spacing_multiplier=args.line_spacing if args.line_spacing is not None else defaults.line_spacing_multiplier,
        paragraph_spacing_points=args.paragraph_spacing if args.paragraph_spacing is not None else defaults.paragraph_spacing_points,
        first_line_indent_chars=args.first_line_indent if args.first_line_indent is not None else defaults.first_line_indent_chars,
    )


def _run_format(args) -> int:
    from docformat.config import load_settings

    settings = load_settings(args.config) if args.config else load_settings()
    try:
        profile = _profile_from_args(args, settings.profile)
    except ValueError as e:
        print(str(e))
        return 2

    try:
        inputs = _read_inputs(args.files)
    except FileNotFoundError as e:
        print(str(e))
        return 2

    job = BatchJob(
        inputs=inputs,
        profile=profile,
        indent_mode=IndentMode(args.indent_mode or settings.indent_mode),
        image_layout=ImageLayoutMode(args.image_layout or settings.image_layout),
    )
    timeout = settings.file_timeout if args.timeout is None else args.timeout
    if timeout is not None and timeout <= 0:
        timeout = None

    total = len(job.inputs)

    def on_progress(value: float) -> None:
        print_progress_bar(value, int(round(value / 100 * total)), total)

    def on_preview(snapshot: PreviewSnapshot) -> None:
        log.debug("Preview of %s: %s", snapshot.filename, snapshot.excerpt(80))

    result: BatchResult = asyncio.run(
        run_batch(job, on_progress=on_progress, on_preview=on_preview, file_timeout=timeout)
    )
    print()

    for name, error in result.failures():
        print(f"failed: {name}: {error}")
    print(f"{result.succeeded} succeeded, {result.failed} failed")

    if result.deliverable is not None:
        os.makedirs(args.out, exist_ok=True)
        out_path = os.path.join(args.out, result.deliverable.name)
        with open(out_path, "wb") as f:
            f.write(result.deliverable.data)
        print(f"Saved: {out_path}")

    if args.preview_out and job.preview is not None:
        with open(args.preview_out, "wb") as f:
            f.write(export_preview(job.preview, job.profile, job.indent_mode))
        print(f"Saved preview: {args.preview_out}")

    return 0 if result.failed == 0 else 1


def _run_compare(args) -> int:
    try:
        with open(args.list1, "r", encoding="utf-8") as f1, open(args.list2, "r", encoding="utf-8") as f2:
            result = compare_lists(f1.read(), f2.read())
    except OSError as e:
        print(f"Could not read name list: {e}")
        return 2
    print("Only in list 1:")
    for name in result.only_in_list1:
        print(f"  {name}")
    print("Only in list 2:")
    for name in result.only_in_list2:
        print(f"  {name}")
    print("Repeated names:")
    for item in result.duplicates_in_both:
        print(f"  {item.name}: {item.count}")
    return 0


def _run_chat(args) -> int:
    try:
        model, api_key, base_url = get_picked_model(args.models) if args.models else get_picked_model()
    except (OSError, ValueError) as e:
        print(f"Could not load chat model config: {e}")
        return 2
    assistant = Assistant(get_chat_client(api_key, base_url), model, timeout=args.timeout)
    print(assistant.messages[0]["content"])
    while True:
        try:
            text = input("> ")
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if text.strip() in ("/quit", "/exit"):
            return 0
        reply = assistant.send(text)
        if reply is not None:
            print(reply)


def _cli(argv: Optional[List[str]] = None) -> int:
    """CLI for document formatting, name-list comparison and chat.

    format FILE...:
    --out / -o: Output directory (default: current directory)
    --font, --font-size, --line-spacing, --paragraph-spacing, --first-line-indent: profile overrides
    --indent-mode: fixed (two characters) | configurable (uses --first-line-indent)
    --image-layout: fixed_box (400x300) | keep_aspect
    --timeout: Per-file timeout in seconds (<=0 means no timeout)
    --preview-out: Also export the last preview text as a single-paragraph document
    --config: Path to formatter.json

    compare LIST1 LIST2: compare two newline-separated name lists

    chat: interactive assistant using config/models.json
    """
    import argparse

    parser = argparse.ArgumentParser(description="Reformat Word documents, compare name lists, chat with the assistant.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    fmt = sub.add_parser("format", help="Reformat one or more .docx files")
    fmt.add_argument("files", nargs="+", help="Input documents (.docx)")
    fmt.add_argument("--out", "-o", type=str, default=".", help="Output directory (default: .)")
    fmt.add_argument("--font", type=str, choices=list(FONT_CHOICES), help="Paragraph font")
    fmt.add_argument("--font-size", type=int, help="Font size in half-points (24 = 12pt)")
    fmt.add_argument("--line-spacing", type=float, help="Line spacing multiplier")
    fmt.add_argument("--paragraph-spacing", type=float, help="Spacing before/after paragraphs, in points")
    fmt.add_argument("--first-line-indent", type=int, help="First-line indent in characters (configurable mode)")
    fmt.add_argument("--indent-mode", type=str, choices=[m.value for m in IndentMode], help="First-line indent mode")
    fmt.add_argument("--image-layout", type=str, choices=[m.value for m in ImageLayoutMode], help="Image sizing mode")
    fmt.add_argument("--timeout", type=float, default=None, help="Per-file timeout in seconds (<=0 disables)")
    fmt.add_argument("--preview-out", type=str, help="Write the last document's preview text as a .docx")
    fmt.add_argument("--config", type=str, help="Path to formatter.json")

    cmp_ = sub.add_parser("compare", help="Compare two name lists (one name per line)")
    cmp_.add_argument("list1")
    cmp_.add_argument("list2")

    chat = sub.add_parser("chat", help="Chat with the assistant")
    chat.add_argument("--models", type=str, help="Path to models.json")
    chat.add_argument("--timeout", type=float, default=60.0, help="Request timeout in seconds")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "format":
        return _run_format(args)
    if args.command == "compare":
        return _run_compare(args)
    return _run_chat(args)


if __name__ == "__main__":
    sys.exit(_cli())
