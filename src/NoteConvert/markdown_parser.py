from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from .formats import MARKDOWN_PRESET, MARKDOWN_RULES
from .html_parser import parse_html
from .model import Document

logger = logging.getLogger(__name__)

MarkdownConverter = Callable[[str], Union[str, Awaitable[str]]]


def build_markdown() -> MarkdownIt:
    md = MarkdownIt(MARKDOWN_PRESET).enable(MARKDOWN_RULES).use(tasklists_plugin)
    md.add_render_rule("hardbreak", _render_hardbreak)
    return md


def render_markdown_html(text: str) -> str:
    """Default Markdown -> markup converter."""
    return build_markdown().render(text)


async def parse_markdown(text: str, converter: Optional[MarkdownConverter] = None) -> Document:
    """Import Markdown by converting it to markup and parsing that markup.

    ``converter`` may be a plain or an async callable. Whatever it raises
    reaches the caller unchanged.
    """
    convert = converter or render_markdown_html
    markup = convert(text)
    if inspect.isawaitable(markup):
        markup = await markup
    logger.debug("Converted %d chars of Markdown into %d chars of markup", len(text), len(markup))
    return parse_html(markup)


def _render_hardbreak(self, tokens, idx, options, env) -> str:
    # markdown-it follows the break with a newline; that would become text
    return "<br />"
