from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from .formats import (
    BLOCK_TAGS,
    CHECKBOX_WRAPPERS,
    CODE_LANGUAGE_PREFIX,
    HEADING_TAGS,
    MAX_NESTING,
    TASK_ITEM_TYPE,
    TASK_LIST_TYPE,
)
from .html_lexer import Token, decode_entities, parse_attrs, tokenize
from .inline_parser import InlineImage, InlineNode, coalesce, flatten_images, parse_inline
from .model import (
    Block,
    Blockquote,
    BulletList,
    CodeBlock,
    Document,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    OrderedList,
    Paragraph,
    TaskItem,
    TaskList,
    Text,
)

logger = logging.getLogger(__name__)

_CODE_TAG_RE = re.compile(r"<code\b([^>]*)>|</code\s*>", re.I)
_CONTAINER_TAGS = frozenset({"blockquote", "ul", "ol", "li"})


def parse_html(markup: str) -> Document:
    """Parse editor markup into a Document.

    Never raises: unknown elements are transparent and text outside any block
    element becomes a paragraph. Markup without a single block element is
    wrapped whole into one paragraph. Containers nested deeper than
    ``MAX_NESTING`` collapse into a plain-text paragraph.
    """
    if not markup or not markup.strip():
        return Document()
    tokens = tokenize(markup)
    if not any(tok.kind in ("start", "raw") and tok.tag in BLOCK_TAGS for tok in tokens):
        logger.debug("No block elements in %d chars of markup, using a single paragraph", len(markup))
        return Document(blocks=tuple(_paragraph_blocks(parse_inline(tokens), implicit=False)))
    blocks, _ = _parse_blocks(tokens, 0, ())
    return Document(blocks=tuple(blocks))


def _parse_blocks(tokens: List[Token], index: int, stack: Tuple[str, ...]) -> tuple[list, int]:
    """Parse block content until an end tag of an open container.

    ``stack`` holds the open containers, innermost last. The matching end tag is
    left for the caller to consume.
    """
    blocks: List[Block] = []
    run: List[Token] = []
    i = index
    while i < len(tokens):
        tok = tokens[i]
        if tok.is_end() and tok.tag in stack:
            break
        if tok.is_start("li") and stack and stack[-1] == "li":
            break
        if tok.kind in ("start", "raw") and tok.tag in BLOCK_TAGS:
            blocks.extend(_paragraph_blocks(parse_inline(run), implicit=True))
            run = []
            parsed, i = _parse_block(tokens, i, stack)
            blocks.extend(parsed)
            continue
        if not (tok.is_end() and tok.tag in BLOCK_TAGS):
            run.append(tok)
        i += 1
    blocks.extend(_paragraph_blocks(parse_inline(run), implicit=True))
    return blocks, i


def _parse_block(tokens: List[Token], index: int, stack: Tuple[str, ...]) -> tuple[list, int]:
    tok = tokens[index]
    if tok.tag in _CONTAINER_TAGS and len(stack) >= MAX_NESTING:
        return _flatten(tokens, index, stack)
    if tok.tag == "pre":
        return [_code_block(tok)], index + 1
    if tok.tag in HEADING_TAGS or tok.tag == "p":
        return _parse_textblock(tokens, index, stack)
    if tok.tag == "blockquote":
        inner, i = _parse_blocks(tokens, index + 1, stack + ("blockquote",))
        return [Blockquote(blocks=tuple(inner))], _close(tokens, i, "blockquote")
    if tok.tag in ("ul", "ol"):
        return _parse_list(tokens, index, stack)
    if tok.tag == "hr":
        return [HorizontalRule()], index + 1
    # li outside of a list contributes its blocks
    inner, i = _parse_blocks(tokens, index + 1, stack + ("li",))
    return inner, _close(tokens, i, "li")


def _parse_textblock(tokens: List[Token], index: int, stack: Tuple[str, ...]) -> tuple[list, int]:
    tag = tokens[index].tag
    i = index + 1
    while i < len(tokens):
        tok = tokens[i]
        if tok.is_end(tag):
            break
        if tok.tag != "p":
            if tok.kind in ("start", "raw") and tok.tag in BLOCK_TAGS:
                break
            if tok.is_end() and (tok.tag in BLOCK_TAGS or tok.tag in stack):
                break
        i += 1
    inline = parse_inline(tokens[index + 1 : i])
    end = _close(tokens, i, tag)
    if tag in HEADING_TAGS:
        return [Heading(level=HEADING_TAGS[tag], inline=tuple(coalesce(flatten_images(inline))))], end
    return _paragraph_blocks(inline, implicit=False), end


def _parse_list(tokens: List[Token], index: int, stack: Tuple[str, ...]) -> tuple[list, int]:
    list_tok = tokens[index]
    tag = list_tok.tag
    item_stack = stack + (tag, "li")
    entries: List[tuple[Optional[bool], list]] = []
    i = index + 1
    while i < len(tokens):
        tok = tokens[i]
        if tok.is_end(tag):
            i += 1
            break
        if tok.is_end() and tok.tag in stack:
            break
        if tok.is_start("li"):
            checked = _take_checkbox(tokens, i)
            blocks, i = _parse_blocks(tokens, i + 1, item_stack)
            i = _close(tokens, i, "li")
            entries.append((checked, blocks))
        elif tok.is_end() or tok.is_blank():
            i += 1
        else:
            # content between items gets an item of its own
            blocks, i = _parse_blocks(tokens, i, item_stack)
            if blocks:
                entries.append((None, blocks))

    is_task = list_tok.attrs.get("data-type") == TASK_LIST_TYPE or any(c is not None for c, _ in entries)
    if is_task:
        return [TaskList(items=tuple(TaskItem(checked=bool(c), blocks=tuple(b)) for c, b in entries))], i
    items = tuple(ListItem(blocks=tuple(b)) for _, b in entries)
    if tag == "ol":
        return [OrderedList(items=items)], i
    return [BulletList(items=items)], i


def _take_checkbox(tokens: List[Token], index: int) -> Optional[bool]:
    """Return the task state of the list item opening at ``index``.

    ``None`` means a plain item. Whitespace right after a leading checkbox is
    dropped so the item text starts cleanly.
    """
    attrs = tokens[index].attrs
    i = index + 1
    while i < len(tokens) and (tokens[i].is_blank() or tokens[i].is_start(*CHECKBOX_WRAPPERS)):
        i += 1
    checkbox = None
    if i < len(tokens) and tokens[i].is_start("input") and tokens[i].attrs.get("type", "").lower() == "checkbox":
        checkbox = tokens[i]
        following = tokens[i + 1] if i + 1 < len(tokens) else None
        if following is not None and following.kind == "text":
            tokens[i + 1] = Token("text", text=following.text.lstrip())
    if "data-checked" in attrs:
        return attrs["data-checked"].lower() == "true"
    if checkbox is not None:
        return "checked" in checkbox.attrs
    if attrs.get("data-type") == TASK_ITEM_TYPE:
        return False
    return None


def _flatten(tokens: List[Token], index: int, stack: Tuple[str, ...]) -> tuple[list, int]:
    """Collapse a container opened past the nesting limit into one plain paragraph."""
    logger.debug("Nesting deeper than %d containers, flattening <%s> to text", MAX_NESTING, tokens[index].tag)
    open_tags = [tokens[index].tag]
    texts: List[str] = []
    i = index + 1
    while i < len(tokens) and open_tags:
        tok = tokens[i]
        if tok.kind == "text":
            texts.append(tok.text)
        elif tok.kind == "raw":
            texts.append(_CODE_TAG_RE.sub("", tok.text))
        elif tok.is_start() and tok.tag in _CONTAINER_TAGS:
            open_tags.append(tok.tag)
        elif tok.is_end() and tok.tag in open_tags:
            while open_tags.pop() != tok.tag:
                pass
        elif tok.is_end() and tok.tag in stack:
            break
        i += 1
    value = " ".join(decode_entities(" ".join(texts)).split())
    return ([Paragraph(inline=(Text(value),))] if value else []), i


def _code_block(tok: Token) -> CodeBlock:
    language = _language_from(tok.attrs)
    opening = _CODE_TAG_RE.search(tok.text)
    if language is None and opening and opening.group(1) is not None:
        language = _language_from(parse_attrs(opening.group(1)))
    text = decode_entities(_CODE_TAG_RE.sub("", tok.text))
    return CodeBlock(language=language, text=text)


def _language_from(attrs: dict) -> Optional[str]:
    for name in attrs.get("class", "").split():
        if name.startswith(CODE_LANGUAGE_PREFIX) and len(name) > len(CODE_LANGUAGE_PREFIX):
            return name[len(CODE_LANGUAGE_PREFIX) :]
    return None


def _paragraph_blocks(nodes: Sequence[InlineNode], implicit: bool) -> List[Block]:
    """Build paragraphs from inline nodes, hoisting images into blocks of their own."""
    if implicit:
        nodes = _trim(nodes)
        if not nodes:
            return []
    if not any(isinstance(node, InlineImage) for node in nodes):
        return [Paragraph(inline=tuple(nodes))]
    blocks: List[Block] = []
    segment: List[InlineNode] = []
    for node in list(nodes) + [None]:
        if node is None or isinstance(node, InlineImage):
            segment = _trim(segment)
            if segment:
                blocks.append(Paragraph(inline=tuple(segment)))
            if node is not None:
                blocks.append(Image(src=node.src, alt=node.alt))
            segment = []
        else:
            segment.append(node)
    return blocks


def _trim(nodes: Sequence[InlineNode]) -> List[InlineNode]:
    trimmed = list(nodes)
    while trimmed and isinstance(trimmed[0], Text) and not trimmed[0].value.strip():
        trimmed.pop(0)
    while trimmed and isinstance(trimmed[-1], Text) and not trimmed[-1].value.strip():
        trimmed.pop()
    if trimmed and isinstance(trimmed[0], Text):
        trimmed[0] = Text(trimmed[0].value.lstrip(), trimmed[0].marks)
    if trimmed and isinstance(trimmed[-1], Text):
        trimmed[-1] = Text(trimmed[-1].value.rstrip(), trimmed[-1].marks)
    return coalesce(trimmed)


def _close(tokens: List[Token], index: int, tag: str) -> int:
    if index < len(tokens) and tokens[index].is_end(tag):
        return index + 1
    return index
