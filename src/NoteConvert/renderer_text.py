from __future__ import annotations

from typing import Iterable, List, Optional

from .model import CodeBlock, Document, HardBreak, Heading, Image, Paragraph, Text, children


def render_text(doc: Document) -> str:
    """Plain-text projection for search indexing: text content only, no markup."""
    parts = [_block_text(block) for block in doc.blocks]
    return "\n\n".join(part for part in parts if part)


def _block_text(block) -> str:
    lines: List[str] = []
    stack = [block]
    while stack:
        node = stack.pop()
        text = _leaf_text(node)
        if text is None:
            stack.extend(reversed(children(node)))
        elif text:
            lines.append(text)
    return "\n".join(lines)


def _leaf_text(block) -> Optional[str]:
    if isinstance(block, (Paragraph, Heading)):
        return _inline_text(block.inline)
    if isinstance(block, CodeBlock):
        return block.text.rstrip("\n")
    if isinstance(block, Image):
        return block.alt or ""
    return None


def _inline_text(nodes: Iterable) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.value)
        elif isinstance(node, HardBreak):
            parts.append("\n")
        else:
            parts.append(_inline_text(children(node)))
    return "".join(parts)
