from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Any, Mapping

import yaml

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.S)
_TITLE_RE = re.compile(r"^\s*#[ \t]+(.+?)[ \t]*(?:\r?\n|\Z)")


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a leading YAML frontmatter block from a Markdown note."""
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    data = yaml.safe_load(match.group(1) or "") or {}
    if not isinstance(data, dict):
        raise ValueError("Frontmatter must be a YAML mapping with defined fields.")
    if "tags" in data:
        data["tags"] = [str(tag).strip().lower() for tag in _normalize_list(data["tags"]) if str(tag).strip()]
    return data, text[match.end() :]


def build_frontmatter(metadata: Mapping[str, Any]) -> str:
    data = {key: value for key, value in metadata.items() if not _is_empty(value)}
    if not data:
        return ""
    body = yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False)
    return f"---\n{body}---\n"


def extract_title(body: str, filename: str) -> tuple[str, str]:
    """Take the title from a leading ``# heading``, else from the file name."""
    match = _TITLE_RE.match(body)
    if match:
        return match.group(1).strip(), body[match.end() :].lstrip()
    stem = re.sub(r"\.md$", "", PurePosixPath(filename).name, flags=re.I)
    return re.sub(r"[_-]", " ", stem), body


def _normalize_list(value) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _is_empty(value: Any) -> bool:
    return value is None or value is False or (isinstance(value, (str, list, tuple, dict)) and not value)
