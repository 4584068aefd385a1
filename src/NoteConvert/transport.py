"""JSON transport form of the block tree.

Each node is ``{"type": ..., "content": [...], "attrs": {...}}`` using the
editor's node names; text nodes carry ``text`` and ``marks``. Node types this
module does not know are transparent when loading: their children are
spliced into the parent.
"""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Mapping

from .model import (
    Block,
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
    Inline,
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

_MARK_NAMES = {
    Bold: "bold",
    Italic: "italic",
    Strike: "strike",
    Code: "code",
}
_MARK_TYPES = {name: cls for cls, name in _MARK_NAMES.items()}
_INLINE_TYPES = {"text", "hardBreak"}


def to_dict(doc: Document) -> dict[str, Any]:
    return {"type": "doc", "content": _dump_nodes(doc.blocks)}


def from_dict(data: Mapping[str, Any]) -> Document:
    if not isinstance(data, Mapping):
        raise ValueError("Transport root must be a mapping with a 'content' list.")
    return Document(blocks=tuple(_load_blocks(data.get("content"))))


def dumps(doc: Document, **kwargs) -> str:
    return json.dumps(to_dict(doc), ensure_ascii=False, **kwargs)


def loads(text: str) -> Document:
    return from_dict(json.loads(text))


def _dump_nodes(nodes: Iterable) -> List[dict[str, Any]]:
    result: List[dict[str, Any]] = []
    for node in nodes:
        dumped = _dump_node(node)
        if dumped is None:
            result.extend(_dump_nodes(children(node)))
        else:
            result.append(dumped)
    return result


def _dump_node(node) -> dict[str, Any] | None:
    if isinstance(node, Text):
        dumped: dict[str, Any] = {"type": "text", "text": node.value}
        marks = [m for m in (_dump_mark(mark) for mark in node.marks) if m is not None]
        if marks:
            dumped["marks"] = marks
        return dumped
    if isinstance(node, HardBreak):
        return {"type": "hardBreak"}
    if isinstance(node, Paragraph):
        return {"type": "paragraph", "content": _dump_nodes(node.inline)}
    if isinstance(node, Heading):
        return {"type": "heading", "attrs": {"level": node.level}, "content": _dump_nodes(node.inline)}
    if isinstance(node, Blockquote):
        return {"type": "blockquote", "content": _dump_nodes(node.blocks)}
    if isinstance(node, CodeBlock):
        dumped = {"type": "codeBlock", "attrs": {"language": node.language}}
        if node.text:
            dumped["content"] = [{"type": "text", "text": node.text}]
        return dumped
    if isinstance(node, BulletList):
        return {"type": "bulletList", "content": _dump_nodes(node.items)}
    if isinstance(node, OrderedList):
        return {"type": "orderedList", "content": _dump_nodes(node.items)}
    if isinstance(node, TaskList):
        return {"type": "taskList", "content": _dump_nodes(node.items)}
    if isinstance(node, ListItem):
        return {"type": "listItem", "content": _dump_nodes(node.blocks)}
    if isinstance(node, TaskItem):
        return {"type": "taskItem", "attrs": {"checked": node.checked}, "content": _dump_nodes(node.blocks)}
    if isinstance(node, HorizontalRule):
        return {"type": "horizontalRule"}
    if isinstance(node, Image):
        return {"type": "image", "attrs": {"src": node.src, "alt": node.alt}}
    return None


def _dump_mark(mark: Mark) -> dict[str, Any] | None:
    if isinstance(mark, Link):
        return {"type": "link", "attrs": {"href": mark.href}}
    name = _MARK_NAMES.get(type(mark))
    return {"type": name} if name else None


def _nodes(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    return [node for node in value if isinstance(node, Mapping)]


def _attrs(node: Mapping[str, Any]) -> Mapping[str, Any]:
    attrs = node.get("attrs")
    return attrs if isinstance(attrs, Mapping) else {}


def _load_blocks(content: Any) -> List[Block]:
    blocks: List[Block] = []
    loose: List[Mapping[str, Any]] = []
    for node in _nodes(content):
        if node.get("type") in _INLINE_TYPES:
            loose.append(node)
            continue
        if loose:
            blocks.append(Paragraph(inline=tuple(_load_inline(loose))))
            loose = []
        blocks.extend(_load_block(node))
    if loose:
        blocks.append(Paragraph(inline=tuple(_load_inline(loose))))
    return blocks


def _load_block(node: Mapping[str, Any]) -> List[Block]:
    kind = node.get("type")
    attrs = _attrs(node)
    content = node.get("content")
    if kind == "paragraph":
        return [Paragraph(inline=tuple(_load_inline(content)))]
    if kind == "heading":
        return [Heading(level=_level(attrs.get("level")), inline=tuple(_load_inline(content)))]
    if kind == "blockquote":
        return [Blockquote(blocks=tuple(_load_blocks(content)))]
    if kind == "codeBlock":
        text = "".join(str(child.get("text", "")) for child in _nodes(content))
        return [CodeBlock(language=_optional_str(attrs.get("language")), text=text)]
    if kind in ("bulletList", "orderedList", "taskList"):
        return [_load_list(kind, content)]
    if kind == "horizontalRule":
        return [HorizontalRule()]
    if kind == "image":
        return [Image(src=str(attrs.get("src") or ""), alt=str(attrs.get("alt") or ""))]
    # list items outside a list and unknown wrappers
    return _load_blocks(content)


def _load_list(kind: str, content: Any) -> Block:
    entries = list(_list_entries(content))
    if kind == "taskList" or any(checked is not None for checked, _ in entries):
        return TaskList(items=tuple(TaskItem(checked=bool(c), blocks=tuple(b)) for c, b in entries))
    items = tuple(ListItem(blocks=tuple(b)) for _, b in entries)
    if kind == "orderedList":
        return OrderedList(items=items)
    return BulletList(items=items)


def _list_entries(content: Any):
    for node in _nodes(content):
        kind = node.get("type")
        if kind == "taskItem":
            yield _checked(_attrs(node).get("checked")), _load_blocks(node.get("content"))
        elif kind == "listItem":
            yield None, _load_blocks(node.get("content"))
        else:
            yield from _list_entries(node.get("content"))


def _load_inline(content: Any) -> List[Inline]:
    inline: List[Inline] = []
    for node in _nodes(content):
        kind = node.get("type")
        if kind == "text":
            inline.append(Text(value=str(node.get("text", "")), marks=tuple(_load_marks(node.get("marks")))))
        elif kind == "hardBreak":
            inline.append(HardBreak())
        else:
            inline.extend(_load_inline(node.get("content")))
    return inline


def _load_marks(value: Any) -> List[Mark]:
    marks: List[Mark] = []
    for mark in _nodes(value):
        kind = mark.get("type")
        if kind == "link":
            marks.append(Link(href=str(_attrs(mark).get("href") or "")))
        elif kind in _MARK_TYPES:
            marks.append(_MARK_TYPES[kind]())
    return marks


def _level(value: Any) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return 1
    return min(max(level, 1), 6)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _checked(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value.strip().lower() == "true")
