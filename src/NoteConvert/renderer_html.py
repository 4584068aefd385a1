from __future__ import annotations

from typing import List, Sequence, Tuple

from .formats import CODE_LANGUAGE_PREFIX, TASK_ITEM_TYPE, TASK_LIST_TYPE
from .html_lexer import escape
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

_MARK_TAGS = {
    Bold: "strong",
    Italic: "em",
    Strike: "s",
    Code: "code",
}


def render_html(doc: Document) -> str:
    """Render a Document as editor markup. Text and attribute values are escaped.

    The tree is walked with an explicit stack, so nesting depth is not bounded
    by the interpreter's recursion limit.
    """
    parts: List[str] = []
    stack: list = list(reversed(doc.blocks))
    while stack:
        item = stack.pop()
        if isinstance(item, _Emit):
            parts.append(item.html)
            continue
        opening, nested, closing = _shape(item)
        parts.append(opening)
        stack.append(_Emit(closing))
        stack.extend(reversed(nested))
    return "".join(parts)


class _Emit:
    __slots__ = ("html",)

    def __init__(self, html: str) -> None:
        self.html = html


def _shape(node) -> Tuple[str, Sequence, str]:
    """Opening markup, child nodes and closing markup of one node."""
    if isinstance(node, Text):
        return _render_text(node), (), ""
    if isinstance(node, HardBreak):
        return "<br />", (), ""
    if isinstance(node, Paragraph):
        return "<p>", node.inline, "</p>"
    if isinstance(node, Heading):
        level = min(max(node.level, 1), 6)
        return f"<h{level}>", node.inline, f"</h{level}>"
    if isinstance(node, Blockquote):
        return "<blockquote>", node.blocks, "</blockquote>"
    if isinstance(node, CodeBlock):
        cls = f' class="{escape(CODE_LANGUAGE_PREFIX + str(node.language))}"' if node.language else ""
        return f"<pre><code{cls}>{escape(node.text)}</code></pre>", (), ""
    if isinstance(node, BulletList):
        return "<ul>", node.items, "</ul>"
    if isinstance(node, OrderedList):
        return "<ol>", node.items, "</ol>"
    if isinstance(node, TaskList):
        return f'<ul data-type="{TASK_LIST_TYPE}">', node.items, "</ul>"
    if isinstance(node, ListItem):
        return "<li>", node.blocks, "</li>"
    if isinstance(node, TaskItem):
        checked = ' checked="checked"' if node.checked else ""
        return f'<li data-type="{TASK_ITEM_TYPE}"><input type="checkbox"{checked} />', node.blocks, "</li>"
    if isinstance(node, HorizontalRule):
        return "<hr />", (), ""
    if isinstance(node, Image):
        return f'<img src="{escape(node.src)}" alt="{escape(node.alt or "")}" />', (), ""
    return "", children(node), ""


def _render_text(node: Text) -> str:
    result = escape(node.value)
    for mark in node.marks:
        result = _wrap(result, mark)
    return result


def _wrap(html: str, mark: Mark) -> str:
    if isinstance(mark, Link):
        return f'<a href="{escape(mark.href or "")}">{html}</a>'
    tag = _MARK_TAGS.get(type(mark))
    if tag is None:
        return html
    return f"<{tag}>{html}</{tag}>"
