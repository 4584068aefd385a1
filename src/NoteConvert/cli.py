from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from . import html_parser, markdown_parser, renderer_html, renderer_markdown, renderer_text, transport
from .model import Document
from .utils import configure_logging, read_text, resolve_output_path, write_text

logger = logging.getLogger(__name__)

SUFFIX_FORMATS = {
    ".html": "html",
    ".htm": "html",
    ".md": "md",
    ".markdown": "md",
    ".json": "json",
    ".txt": "txt",
}
FORMAT_SUFFIXES = {"html": ".html", "md": ".md", "json": ".json", "txt": ".txt"}
INPUT_FORMATS = ("html", "md", "json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="noteconvert",
        description="Convert notes between editor markup, Markdown and block-tree JSON.",
    )
    parser.add_argument("input", type=str, help="Path to the note file")
    parser.add_argument("-o", "--output", type=str, help="Output path")
    parser.add_argument("--from", dest="source", choices=INPUT_FORMATS, help="Input format (default: from suffix)")
    parser.add_argument("--to", dest="target", choices=tuple(FORMAT_SUFFIXES), help="Output format")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def detect_format(path: Path) -> str:
    fmt = SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise ValueError(f"Cannot infer a format from {path.name!r}; pass --from/--to.")
    return fmt


def load_document(text: str, fmt: str) -> Document:
    if fmt == "html":
        return html_parser.parse_html(text)
    if fmt == "md":
        return asyncio.run(markdown_parser.parse_markdown(text))
    if fmt == "json":
        return transport.loads(text)
    raise ValueError(f"Unsupported input format: {fmt}")


def dump_document(doc: Document, fmt: str) -> str:
    if fmt == "html":
        return renderer_html.render_html(doc)
    if fmt == "md":
        return renderer_markdown.render_markdown(doc)
    if fmt == "json":
        return transport.dumps(doc, indent=2)
    if fmt == "txt":
        return renderer_text.render_text(doc)
    raise ValueError(f"Unsupported output format: {fmt}")


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    input_path = Path(args.input).expanduser()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    source = args.source or detect_format(input_path)
    target = args.target
    if target is None and args.output and not Path(args.output).is_dir():
        target = detect_format(Path(args.output))
    if target is None:
        target = "html" if source == "md" else "md"
    output_path = resolve_output_path(input_path, args.output, FORMAT_SUFFIXES[target])
    if output_path.resolve() == input_path.resolve():
        raise ValueError(f"Output would overwrite the input file: {input_path}")

    logger.info("Reading %s as %s", input_path, source)
    text = read_text(input_path)
    logger.debug("Input length: %d chars", len(text))
    document = load_document(text, source)
    logger.debug("Parsed %d top-level blocks", len(document.blocks))

    logger.info("Writing %s to %s", target, output_path)
    write_text(output_path, dump_document(document, target))

    logger.info("Done. Saved to %s", output_path)


if __name__ == "__main__":
    main()
