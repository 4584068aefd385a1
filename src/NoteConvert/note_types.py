from __future__ import annotations

NOTE_TYPE_TO_CARD_TYPE = {
    "NOTE": "note",
    "BOOKMARK": "link",
    "CLIP": "reference",
    "IMAGE": "file",
    "FILE": "file",
    "AUDIO": "file",
    "CODE": "note",
}

CARD_TYPE_TO_NOTE_TYPE = {
    "note": "NOTE",
    "link": "BOOKMARK",
    "reference": "CLIP",
    "file": "FILE",
    "task": "NOTE",
    "person": "NOTE",
    "idea": "NOTE",
}

DEFAULT_CARD_TYPE = "note"
DEFAULT_NOTE_TYPE = "NOTE"


def card_type_for(note_type: str) -> str:
    """Display category for a stored note kind."""
    return NOTE_TYPE_TO_CARD_TYPE.get(str(note_type), DEFAULT_CARD_TYPE)


def note_type_for(card_type: str) -> str:
    return CARD_TYPE_TO_NOTE_TYPE.get(str(card_type), DEFAULT_NOTE_TYPE)
