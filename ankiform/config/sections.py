"""
Form Sections Configuration
----------------------------

Defines the nine fixed content slots of the note form with their labels.
Their order is user state; their membership is not.
"""

from dataclasses import dataclass
from typing import Dict, List


TEXT = "text"
AUDIO = "audio"
IMAGE = "image"


@dataclass(frozen=True)
class FormSection:
    """Definition of a single form section."""

    id: str
    label: str
    kind: str = TEXT
    default_order: int = 0

    @property
    def is_attachment(self) -> bool:
        return self.kind != TEXT


# All form sections, keyed by id
FORM_SECTIONS: Dict[str, FormSection] = {
    "targetWord": FormSection("targetWord", "Word", TEXT, 0),
    "definition": FormSection("definition", "Definition", TEXT, 1),
    "sentence": FormSection("sentence", "Sentence", TEXT, 2),
    "sentenceTranslation": FormSection("sentenceTranslation", "Translation", TEXT, 3),
    "exampleSentences": FormSection("exampleSentences", "Examples", TEXT, 4),
    "notes": FormSection("notes", "Notes", TEXT, 5),
    "sentenceAudio": FormSection("sentenceAudio", "Sentence audio", AUDIO, 6),
    "wordAudio": FormSection("wordAudio", "Word audio", AUDIO, 7),
    "images": FormSection("images", "Images", IMAGE, 8),
}

TARGET_WORD = "targetWord"
SENTENCE_AUDIO = "sentenceAudio"
WORD_AUDIO = "wordAudio"
IMAGES = "images"

ATTACHMENT_SECTIONS = (SENTENCE_AUDIO, WORD_AUDIO, IMAGES)


def get_section_ids() -> List[str]:
    """Get list of all section IDs in default order."""
    return sorted(FORM_SECTIONS.keys(), key=lambda x: FORM_SECTIONS[x].default_order)


def get_default_order() -> List[str]:
    """Get default section order as list of IDs."""
    return get_section_ids()


def get_text_section_ids() -> List[str]:
    """Text sections in default order, target word included."""
    return [sid for sid in get_section_ids() if not FORM_SECTIONS[sid].is_attachment]


def is_section(section_id: object) -> bool:
    return isinstance(section_id, str) and section_id in FORM_SECTIONS


def validate_section_order(order: object) -> List[str]:
    """
    Normalize a stored section order into a permutation of all sections.

    Unknown and repeated entries are dropped, keeping the relative order of
    the valid ones. Missing sections are appended in default order.

    Args:
        order: Stored order, any type

    Returns:
        List of every section ID exactly once
    """
    valid_ids: List[str] = []
    if isinstance(order, (list, tuple)):
        for sid in order:
            if is_section(sid) and sid not in valid_ids:
                valid_ids.append(sid)
    missing = [sid for sid in get_section_ids() if sid not in valid_ids]
    return valid_ids + missing
