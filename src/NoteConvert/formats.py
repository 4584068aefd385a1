from __future__ import annotations

# Markup side

HEADING_TAGS = {f"h{level}": level for level in range(1, 7)}
BLOCK_TAGS = frozenset({*HEADING_TAGS, "p", "blockquote", "pre", "ul", "ol", "li", "hr"})
VOID_TAGS = frozenset({"br", "hr", "img", "input", "wbr"})
RAW_TAGS = frozenset({"pre"})

# Tags recognized by the inline resolver. ``None`` marks a recognized tag with
# no counterpart in the mark set: its content is kept, the wrapper is dropped.
INLINE_MARK_TAGS = {
    "strong": "bold",
    "b": "bold",
    "em": "italic",
    "i": "italic",
    "s": "strike",
    "del": "strike",
    "strike": "strike",
    "code": "code",
    "a": "link",
    "mark": None,
    "u": None,
}

# Wrappers that may precede a task checkbox inside a list item.
CHECKBOX_WRAPPERS = frozenset({"p", "label", "div", "span"})

ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "#39": "'",
    "nbsp": " ",
}

HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
}

CODE_LANGUAGE_PREFIX = "language-"
TASK_LIST_TYPE = "taskList"
TASK_ITEM_TYPE = "taskItem"

# Markdown side

MD_INDENT = "  "
MD_QUOTE_PREFIX = "> "
MD_HARD_BREAK = "  \n"
MD_BULLET = "- "
MD_FENCE = "```"
MD_RULE = "---"
MD_MARK_WRAPS = {
    "bold": ("**", "**"),
    "italic": ("*", "*"),
    "strike": ("~~", "~~"),
    "code": ("`", "`"),
}

# markdown-it configuration for the default Markdown -> markup converter
MARKDOWN_PRESET = "commonmark"
MARKDOWN_RULES = ["strikethrough"]

# Containers and inline marks opened deeper than this are flattened to text
MAX_NESTING = 64
