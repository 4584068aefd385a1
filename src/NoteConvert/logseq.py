"""Logseq pages: ``key:: value`` properties followed by ``- `` outline blocks.

Every top-level block of the note body becomes one outline block; child notes
are indented ``[[title]]`` links and attachments are image blocks pointing into
the graph's ``assets`` folder.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional
from urllib.parse import unquote

from .markdown_parser import MarkdownConverter, parse_markdown
from .model import Document
from .renderer_markdown import render_markdown

logger = logging.getLogger(__name__)

DEFAULT_CARD_TYPE = "note"
DEFAULT_VISIBILITY = "private"
RESERVED_PROPERTIES = ("type", "tags", "visibility")
ASSET_PREFIX = "../assets/"
OUTLINE_INDENT = "  "

_PROPERTY_RE = re.compile(r"^([a-zA-Z_-]+)::\s*(.+)$")
_TAG_RE = re.compile(r"#([a-zA-Z0-9_-]+)")
_OUTLINE_RE = re.compile(r"^(\s*)- (.+)$")
_CHILD_RE = re.compile(r"^\[\[(.+)\]\]$")
_ASSET_RE = re.compile(r"^!\[([^\]]*)\]\(" + re.escape(ASSET_PREFIX) + r"(.+)\)$")
_TITLE_HINT_RE = re.compile(r"^(Task|Idea|Person|Reference|Link|File):\s*", re.I)
_UNSAFE_FILENAME_RE = re.compile(r"[/\\:*?\"<>|]")


@dataclass
class LogseqAsset:
    path: str
    caption: str = ""


@dataclass
class LogseqPage:
    title: str
    card_type: str = DEFAULT_CARD_TYPE
    visibility: str = DEFAULT_VISIBILITY
    tags: List[str] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)
    document: Document = field(default_factory=Document)
    children: List[str] = field(default_factory=list)
    assets: List[LogseqAsset] = field(default_factory=list)


def write_logseq_page(page: LogseqPage) -> str:
    lines: List[str] = []
    if page.card_type and page.card_type != DEFAULT_CARD_TYPE:
        lines.append(f"type:: {page.card_type}")
    if page.tags:
        lines.append("tags:: " + ", ".join(f"#{tag}" for tag in page.tags))
    if page.visibility and page.visibility != DEFAULT_VISIBILITY:
        lines.append(f"visibility:: {page.visibility}")
    for key, value in page.properties.items():
        if value is not None and value != "" and key not in RESERVED_PROPERTIES:
            lines.append(f"{key}:: {value}")
    if lines:
        lines.append("")

    for block in page.document.blocks:
        body = render_markdown(Document(blocks=(block,)))
        if not body.strip():
            continue
        first, *rest = body.split("\n")
        lines.append(f"- {first}")
        lines.extend(OUTLINE_INDENT + line if line else "" for line in rest)

    lines.extend(f"{OUTLINE_INDENT}- [[{title}]]" for title in page.children)

    if page.assets:
        lines.append("")
        for asset in page.assets:
            caption = asset.caption or PurePosixPath(asset.path).name
            lines.append(f"- ![{caption}]({ASSET_PREFIX}{asset.path})")
    return "\n".join(lines)


async def read_logseq_page(
    filename: str, content: str, converter: Optional[MarkdownConverter] = None
) -> LogseqPage:
    """Read one Logseq page into note fields.

    Nested outline blocks are kept as continuation lines of the block above,
    dedented by one level, so Markdown lists written by
    :func:`write_logseq_page` come back unchanged.
    """
    title = title_from_filename(filename)
    page = LogseqPage(title=title)
    body: List[str] = []
    in_properties = True

    for line in content.split("\n"):
        prop = _PROPERTY_RE.match(line)
        if prop and in_properties:
            _read_property(page, prop.group(1), prop.group(2))
            continue
        if not line.strip():
            if not in_properties and body:
                body.append("")
            in_properties = False
            continue
        in_properties = False

        outline = _OUTLINE_RE.match(line)
        if outline:
            indent, text = len(outline.group(1)), outline.group(2)
            child = _CHILD_RE.match(text)
            if child and indent >= len(OUTLINE_INDENT):
                page.children.append(child.group(1))
                continue
            asset = _ASSET_RE.match(text)
            if asset:
                page.assets.append(LogseqAsset(path=asset.group(2), caption=asset.group(1)))
                continue
            if indent == 0:
                if body and body[-1] != "":
                    body.append("")
                body.append(text)
                continue
        body.append(re.sub(r"^\s{2}", "", line))

    hint = _TITLE_HINT_RE.match(title)
    if hint:
        page.card_type = hint.group(1).lower()

    markdown = "\n".join(body).strip("\n")
    logger.debug(
        "Logseq page %r: %d properties, %d child links, %d assets",
        title,
        len(page.properties),
        len(page.children),
        len(page.assets),
    )
    page.document = await parse_markdown(markdown, converter)
    return page


def _read_property(page: LogseqPage, key: str, value: str) -> None:
    if key == "type":
        page.card_type = value.strip()
    elif key == "tags":
        page.tags.extend(tag.lower() for tag in _TAG_RE.findall(value))
    elif key == "visibility":
        page.visibility = value.strip()
    else:
        page.properties[key] = value.strip()


def title_from_filename(filename: str) -> str:
    stem = re.sub(r"\.md$", "", PurePosixPath(filename).name, flags=re.I)
    return unquote(stem.replace("_", " "))


def sanitize_logseq_filename(title: str) -> str:
    """File name stem for a page title: path and shell metacharacters become ``_``."""
    return re.sub(r"\s+", "_", _UNSAFE_FILENAME_RE.sub("_", title))[:200]
