import asyncio
import textwrap

import pytest

from NoteConvert import frontmatter, note_types
from NoteConvert.model import Document, Paragraph, TaskList, Text
from NoteConvert.notes import NoteFile, read_note_file, write_note_file


def test_split_frontmatter_parses_yaml():
    text = textwrap.dedent(
        """\
        ---
        type: link
        url: https://example.com
        pinned: true
        tags:
          - Work
          - ideas
        ---
        # Reading list

        body
        """
    )
    metadata, body = frontmatter.split_frontmatter(text)
    assert metadata["type"] == "link"
    assert metadata["pinned"] is True
    assert metadata["tags"] == ["work", "ideas"]
    assert body.startswith("# Reading list")


def test_split_frontmatter_without_block():
    assert frontmatter.split_frontmatter("# Plain\n") == ({}, "# Plain\n")
    assert frontmatter.split_frontmatter("---\n---\nbody") == ({}, "body")


def test_split_frontmatter_rejects_non_mapping():
    with pytest.raises(ValueError):
        frontmatter.split_frontmatter("---\n- a\n- b\n---\nbody")


def test_build_frontmatter_skips_empty_values():
    text = frontmatter.build_frontmatter({"type": "note", "url": None, "pinned": False, "tags": ["a"], "language": ""})
    assert text == "---\ntype: note\ntags:\n- a\n---\n"
    assert frontmatter.build_frontmatter({"url": None}) == ""


def test_extract_title_from_heading_or_filename():
    assert frontmatter.extract_title("# Hello  \n\nrest", "x.md") == ("Hello", "rest")
    assert frontmatter.extract_title("no heading", "notes/my_first-note.MD") == ("my first note", "no heading")


def test_read_and_write_note_file():
    text = "---\ntype: note\ntags:\n- Home\n---\n\n# Chores\n\n- [ ] dishes\n- [x] laundry\n"
    note = asyncio.run(read_note_file(text, "chores.md"))
    assert note.title == "Chores"
    assert note.metadata == {"type": "note", "tags": ["home"]}
    assert isinstance(note.document.blocks[0], TaskList)

    written = write_note_file(note)
    assert written == "---\ntype: note\ntags:\n- home\n---\n\n# Chores\n\n- [ ] dishes\n- [x] laundry\n"


def test_write_note_file_without_metadata_or_body():
    assert write_note_file(NoteFile(title="Empty")) == "# Empty\n"
    note = NoteFile(title="T", document=Document(blocks=(Paragraph(inline=(Text("x"),)),)))
    assert write_note_file(note) == "# T\n\nx\n"


def test_note_type_mapping():
    assert note_types.card_type_for("BOOKMARK") == "link"
    assert note_types.card_type_for("AUDIO") == "file"
    assert note_types.card_type_for("UNKNOWN") == "note"
    assert note_types.note_type_for("reference") == "CLIP"
    assert note_types.note_type_for("idea") == "NOTE"
    assert note_types.note_type_for("???") == "NOTE"
