from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .formats import INLINE_MARK_TAGS, MAX_NESTING
from .html_lexer import Token, decode_entities, tokenize
from .model import Bold, Code, HardBreak, Inline, Italic, Link, Mark, Strike, Text


@dataclass(frozen=True)
class InlineImage:
    """Image found inside inline content, hoisted to a block by the block parser."""

    src: str
    alt: str


InlineNode = Union[Text, HardBreak, InlineImage]

_MARKS = {
    "bold": Bold,
    "italic": Italic,
    "strike": Strike,
    "code": Code,
}


def parse_inline(tokens: Sequence[Token]) -> List[InlineNode]:
    """Resolve inline tokens into styled text runs, breaks and image placeholders."""
    nodes, _ = _parse_inline(tokens, 0, ())
    return coalesce(nodes)


def parse_inline_html(markup: str) -> List[Inline]:
    """Resolve an inline markup fragment; images degrade to their alt text."""
    return coalesce(flatten_images(parse_inline(tokenize(markup))))


def _parse_inline(tokens: Sequence[Token], index: int, open_tags: Tuple[str, ...]) -> tuple[list, int]:
    nodes: List[InlineNode] = []
    i = index
    while i < len(tokens):
        tok = tokens[i]
        if tok.is_end() and tok.tag in open_tags:
            break
        if tok.kind in ("text", "raw"):
            nodes.append(Text(decode_entities(tok.text)))
        elif tok.is_start("br"):
            nodes.append(HardBreak())
        elif tok.is_start("img"):
            if "src" in tok.attrs:
                nodes.append(InlineImage(src=tok.attrs["src"], alt=tok.attrs.get("alt", "")))
        elif tok.is_start() and tok.tag in INLINE_MARK_TAGS and len(open_tags) < MAX_NESTING:
            inner, i = _parse_inline(tokens, i + 1, open_tags + (tok.tag,))
            if i < len(tokens) and tokens[i].is_end(tok.tag):
                i += 1
            mark = _mark_for(tok)
            nodes.extend(_with_mark(node, mark) for node in inner)
            continue
        # unknown tags, stray end tags, wrapping paragraphs and marks past the
        # nesting limit are transparent
        i += 1
    return nodes, i


def _mark_for(tok: Token) -> Optional[Mark]:
    kind = INLINE_MARK_TAGS[tok.tag]
    if kind == "link":
        return Link(href=tok.attrs.get("href", ""))
    if kind is None:
        return None
    return _MARKS[kind]()


def _with_mark(node: InlineNode, mark: Optional[Mark]) -> InlineNode:
    # nested identical marks collapse into one
    if mark is None or not isinstance(node, Text) or mark in node.marks:
        return node
    return Text(node.value, node.marks + (mark,))


def coalesce(nodes: Sequence[InlineNode]) -> List[InlineNode]:
    """Drop empty text and merge neighbouring runs that carry the same marks."""
    merged: List[InlineNode] = []
    for node in nodes:
        if isinstance(node, Text):
            if not node.value:
                continue
            prev = merged[-1] if merged else None
            if isinstance(prev, Text) and prev.marks == node.marks:
                merged[-1] = Text(prev.value + node.value, prev.marks)
                continue
        merged.append(node)
    return merged


def flatten_images(nodes: Sequence[InlineNode]) -> List[Inline]:
    return [Text(node.alt) if isinstance(node, InlineImage) else node for node in nodes]
