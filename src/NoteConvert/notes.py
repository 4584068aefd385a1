from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .frontmatter import build_frontmatter, extract_title, split_frontmatter
from .markdown_parser import MarkdownConverter, parse_markdown
from .model import Document
from .renderer_markdown import render_markdown


@dataclass
class NoteFile:
    title: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    document: Document = field(default_factory=Document)


async def read_note_file(text: str, filename: str, converter: Optional[MarkdownConverter] = None) -> NoteFile:
    """Read one exported Markdown note: frontmatter, title line, body."""
    metadata, body = split_frontmatter(text)
    title, body = extract_title(body, filename)
    document = await parse_markdown(body, converter)
    return NoteFile(title=title, metadata=metadata, document=document)


def write_note_file(note: NoteFile) -> str:
    parts = []
    frontmatter = build_frontmatter(note.metadata)
    if frontmatter:
        parts.append(frontmatter.rstrip("\n"))
    parts.append(f"# {note.title}")
    body = render_markdown(note.document)
    if body:
        parts.append(body)
    return "\n\n".join(parts) + "\n"
