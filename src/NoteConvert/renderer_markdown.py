from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from .formats import (
    MD_BULLET,
    MD_FENCE,
    MD_HARD_BREAK,
    MD_INDENT,
    MD_MARK_WRAPS,
    MD_QUOTE_PREFIX,
    MD_RULE,
)
from .model import (
    Blockquote,
    Bold,
    BulletList,
    Code,
    CodeBlock,
    Document,
    HardBreak,
    Heading,
    HorizontalRule,
    Image,
    InlineElement,
    Italic,
    Link,
    ListItem,
    Mark,
    OrderedList,
    Paragraph,
    Strike,
    TaskItem,
    TaskList,
    Text,
    children,
)

_MARK_KINDS = {
    Bold: "bold",
    Italic: "italic",
    Strike: "strike",
    Code: "code",
}


def render_markdown(doc: Document) -> str:
    """Render a Document as Markdown.

    Top-level blocks are separated by a blank line, nested blocks by a single
    newline. Ordered lists are numbered by position. Markdown metacharacters in
    text are written as-is.
    """
    parts = []
    for block in doc.blocks:
        lines = _block_lines(block)
        if lines:
            parts.append("\n".join(lines))
    return "\n\n".join(parts)


def _block_lines(root) -> List[str]:
    """Lines of one block, walked bottom-up with an explicit stack."""
    nested = _nested(root)
    result = _leaf_lines(root) if nested is None else []
    # (node, its children, lines of the children rendered so far)
    stack = [] if nested is None else [(root, nested, [])]
    while stack:
        node, kids, done = stack[-1]
        if len(done) < len(kids):
            child = kids[len(done)]
            grandkids = _nested(child)
            if grandkids is None:
                done.append(_leaf_lines(child))
            else:
                stack.append((child, grandkids, []))
            continue
        stack.pop()
        lines = _join(node, kids, done)
        if stack:
            stack[-1][2].append(lines)
        else:
            result = lines
    if isinstance(root, (ListItem, TaskItem)):
        return _item_lines(result, _marker(None, root, 1))
    return result


def _nested(node) -> Optional[Sequence]:
    """Child blocks to walk, or ``None`` when the node renders in one step."""
    if isinstance(node, (Paragraph, Heading, CodeBlock, HorizontalRule, Image, InlineElement)):
        return None
    kids = children(node)
    if kids and all(isinstance(kid, InlineElement) for kid in kids):
        return None
    return kids


def _leaf_lines(block) -> List[str]:
    if isinstance(block, Paragraph):
        return _render_inline(block.inline).split("\n")
    if isinstance(block, Heading):
        level = min(max(block.level, 1), 6)
        return ("#" * level + " " + _render_inline(block.inline)).split("\n")
    if isinstance(block, CodeBlock):
        fence = _fence_for(block.text)
        body = block.text if block.text.endswith("\n") else block.text + "\n"
        return (fence + str(block.language or "") + "\n" + body + fence).split("\n")
    if isinstance(block, HorizontalRule):
        return [MD_RULE]
    if isinstance(block, Image):
        return [f"![{block.alt or ''}]({block.src})"]
    if isinstance(block, InlineElement):
        return _render_inline((block,)).split("\n")
    return _render_inline(children(block)).split("\n")


def _join(node, kids: Sequence, rendered: List[List[str]]) -> List[str]:
    if isinstance(node, (BulletList, OrderedList, TaskList)):
        # numbering follows position only
        return [
            line
            for n, (item, lines) in enumerate(zip(kids, rendered), start=1)
            for line in _item_lines(lines, _marker(node, item, n))
        ]
    lines = []
    for kid, kid_lines in zip(kids, rendered):
        if isinstance(kid, (ListItem, TaskItem)):
            kid_lines = _item_lines(kid_lines, _marker(None, kid, 1))
        lines.extend(kid_lines)
    if isinstance(node, Blockquote):
        return [MD_QUOTE_PREFIX + line if line else MD_QUOTE_PREFIX.rstrip() for line in lines]
    return lines


def _marker(owner, item, position: int) -> str:
    if isinstance(owner, OrderedList):
        return f"{position}. "
    if isinstance(owner, TaskList) or (owner is None and isinstance(item, TaskItem)):
        return f"- [{'x' if getattr(item, 'checked', False) else ' '}] "
    return MD_BULLET


def _item_lines(lines: List[str], marker: str) -> List[str]:
    if not lines:
        return [marker.rstrip()]
    return [marker + lines[0]] + [MD_INDENT + line if line else "" for line in lines[1:]]


def _fence_for(text: str) -> str:
    """A backtick fence longer than any backtick run inside the code."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    return MD_FENCE if longest < len(MD_FENCE) else "`" * (longest + 1)


def _render_inline(nodes: Iterable) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(_apply_marks(node.value, node.marks))
        elif isinstance(node, HardBreak):
            parts.append(MD_HARD_BREAK)
        else:
            parts.append(_render_inline(children(node)))
    return "".join(parts)


def _apply_marks(text: str, marks: Iterable[Mark]) -> str:
    result = text
    for mark in marks:
        if isinstance(mark, Link):
            result = f"[{result}]({mark.href or ''})"
            continue
        kind = _MARK_KINDS.get(type(mark))
        if kind is not None:
            opening, closing = MD_MARK_WRAPS[kind]
            result = f"{opening}{result}{closing}"
    return result
