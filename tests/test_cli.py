import json
import logging
from pathlib import Path

import pytest

from NoteConvert import cli


def test_cli_converts_markup_to_markdown(tmp_path: Path):
    source = tmp_path / "note.html"
    source.write_text("<h1>Title</h1><ol><li>a</li><li>b</li></ol>", encoding="utf-8")
    cli.main([str(source)])
    output = tmp_path / "note.md"
    assert output.read_text(encoding="utf-8") == "# Title\n\n1. a\n2. b"


def test_cli_converts_markdown_to_json(tmp_path: Path):
    source = tmp_path / "note.md"
    source.write_text("Hello **world**\n", encoding="utf-8")
    output = tmp_path / "out" / "note.json"
    cli.main([str(source), "-o", str(output)])
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["content"][0]["content"][1] == {"type": "text", "text": "world", "marks": [{"type": "bold"}]}


def test_cli_plain_text_output(tmp_path: Path):
    source = tmp_path / "note.json"
    source.write_text(json.dumps({"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "x"}]}]}))
    cli.main([str(source), "--to", "txt"])
    assert (tmp_path / "note.txt").read_text(encoding="utf-8") == "x"


def test_cli_missing_input(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        cli.main([str(tmp_path / "absent.html")])


def test_cli_refuses_unknown_suffix_and_overwrite(tmp_path: Path):
    source = tmp_path / "note.rtf"
    source.write_text("x", encoding="utf-8")
    with pytest.raises(ValueError):
        cli.main([str(source)])
    same = tmp_path / "note.html"
    same.write_text("<p>x</p>", encoding="utf-8")
    with pytest.raises(ValueError):
        cli.main([str(same), "--to", "html"])


def test_cli_verbose_and_quiet_logging(tmp_path: Path, caplog):
    source = tmp_path / "note.html"
    source.write_text("plain <b>text</b>", encoding="utf-8")
    with caplog.at_level(logging.DEBUG):
        cli.main([str(source), "--verbose"])
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Reading") for message in messages)
    assert any(message.startswith("No block elements") for message in messages)
    assert {record.name for record in caplog.records} >= {"NoteConvert.cli", "NoteConvert.html_parser"}

    caplog.clear()
    with caplog.at_level(logging.DEBUG):
        cli.main([str(source), "--quiet"])
    assert not [record for record in caplog.records if record.name.startswith("NoteConvert")]
    assert (tmp_path / "note.md").read_text(encoding="utf-8") == "plain **text**"
