from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List

from .formats import ENTITIES, HTML_ESCAPES, RAW_TAGS, VOID_TAGS

_ATTR_VALUE = r"(?:\"[^\"]*\"|'[^']*'|[^\s\"'=<>`]+)"
# an attribute follows whitespace or directly a quoted value
_TAG_PATTERN = (
    r"<(?P<close>/)?(?P<name>[A-Za-z][A-Za-z0-9-]*)"
    r"(?P<attrs>(?:(?:\s+|(?<=[\"']))[^\s\"'<>/=]+(?:\s*=\s*" + _ATTR_VALUE + r")?)*)"
    r"\s*(?P<selfclose>/)?>"
)
_MARKUP_RE = re.compile(
    r"(?P<comment><!--.*?(?:-->|\Z)|<![^>]*>|<\?[^>]*>)|" + _TAG_PATTERN,
    re.S,
)
_ATTR_RE = re.compile(r"([^\s\"'<>/=]+)(?:\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|([^\s\"'=<>`]+)))?")
_ENTITY_RE = re.compile("&(" + "|".join(re.escape(name) for name in ENTITIES) + ");")
_ESCAPE_RE = re.compile("[" + re.escape("".join(HTML_ESCAPES)) + "]")


@dataclass
class Token:
    kind: str  # "text", "start", "end" or "raw"
    tag: str = ""
    attrs: Dict[str, str] = field(default_factory=dict)
    text: str = ""

    def is_start(self, *tags: str) -> bool:
        return self.kind == "start" and (not tags or self.tag in tags)

    def is_end(self, *tags: str) -> bool:
        return self.kind == "end" and (not tags or self.tag in tags)

    def is_blank(self) -> bool:
        return self.kind == "text" and not self.text.strip()


def decode_entities(text: str) -> str:
    """Decode the five reserved entities and ``&nbsp;`` in a single pass."""
    return _ENTITY_RE.sub(lambda m: ENTITIES[m.group(1)], text)


def escape(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: HTML_ESCAPES[m.group(0)], text)


def tokenize(markup: str) -> List[Token]:
    """Split markup into text, tag and raw tokens.

    Anything that does not look like a tag stays text, so the tokenizer accepts
    every string. The body of a ``pre`` element is kept verbatim as one raw token.
    An unterminated quoted attribute value is scanned to the end of the input
    before the tag is given up as text, so markup with many of them tokenizes
    in quadratic time.
    """
    tokens: List[Token] = []
    pos = 0
    while pos < len(markup):
        match = _MARKUP_RE.search(markup, pos)
        if match is None:
            tokens.append(Token("text", text=markup[pos:]))
            break
        if match.start() > pos:
            tokens.append(Token("text", text=markup[pos : match.start()]))
        pos = match.end()
        if match.group("comment"):
            continue
        name = match.group("name").lower()
        if match.group("close"):
            tokens.append(Token("end", tag=name))
            continue
        attrs = parse_attrs(match.group("attrs") or "")
        if name in RAW_TAGS and not match.group("selfclose"):
            closing = re.compile(rf"</{name}\s*>", re.I).search(markup, pos)
            raw_end = closing.start() if closing else len(markup)
            tokens.append(Token("raw", tag=name, attrs=attrs, text=markup[pos:raw_end]))
            pos = closing.end() if closing else len(markup)
            continue
        tokens.append(Token("start", tag=name, attrs=attrs))
        if match.group("selfclose") and name not in VOID_TAGS:
            tokens.append(Token("end", tag=name))
    return tokens


def parse_attrs(text: str) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    for match in _ATTR_RE.finditer(text):
        name = match.group(1).lower()
        value = next((g for g in match.group(2, 3, 4) if g is not None), "")
        attrs.setdefault(name, decode_entities(value))
    return attrs
