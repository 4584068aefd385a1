from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union


@dataclass(frozen=True)
class Block:
    """Base class for block-level nodes."""


@dataclass(frozen=True)
class Document:
    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class Paragraph(Block):
    inline: Tuple["Inline", ...] = ()


@dataclass(frozen=True)
class Heading(Block):
    level: int
    inline: Tuple["Inline", ...] = ()


@dataclass(frozen=True)
class Blockquote(Block):
    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class CodeBlock(Block):
    language: Optional[str]
    text: str


@dataclass(frozen=True)
class ListItem:
    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class TaskItem:
    checked: bool
    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class BulletList(Block):
    items: Tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class OrderedList(Block):
    items: Tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class TaskList(Block):
    items: Tuple[TaskItem, ...] = ()


@dataclass(frozen=True)
class HorizontalRule(Block):
    """Horizontal rule / thematic break."""


@dataclass(frozen=True)
class Image(Block):
    src: str
    alt: str = ""


@dataclass(frozen=True)
class Mark:
    """Base class for inline style annotations."""


@dataclass(frozen=True)
class Bold(Mark):
    pass


@dataclass(frozen=True)
class Italic(Mark):
    pass


@dataclass(frozen=True)
class Strike(Mark):
    pass


@dataclass(frozen=True)
class Code(Mark):
    pass


@dataclass(frozen=True)
class Link(Mark):
    href: str


@dataclass(frozen=True)
class InlineElement:
    """Base class for inline nodes."""


@dataclass(frozen=True)
class Text(InlineElement):
    value: str
    marks: Tuple[Mark, ...] = ()


@dataclass(frozen=True)
class HardBreak(InlineElement):
    """Explicit line break inside a block."""


Inline = Union[Text, HardBreak]


def children(node: Any) -> tuple:
    """Return the child sequence of a node, empty for leaves.

    Works for shapes outside the closed variant set as long as they expose
    ``blocks``, ``items`` or ``inline``; renderers use this to pass unknown
    wrappers through.
    """
    for name in ("blocks", "items", "inline"):
        value = getattr(node, name, None)
        if value is not None and not isinstance(value, (str, bytes)):
            return tuple(value)
    return ()
