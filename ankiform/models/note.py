"""Data models for the note form pipeline."""

import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class MediaFile:
    """A selected attachment: a local path, or bytes already in memory."""

    name: str
    path: Optional[str] = None
    data: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: str) -> "MediaFile":
        return cls(name=os.path.basename(path), path=path)


@dataclass(frozen=True)
class EncodedMedia:
    """An attachment ready for storeMediaFile."""

    filename: str
    data: str  # base64


@dataclass(frozen=True)
class StoredMedia:
    """A file stored in Anki's media folder and where its marker went."""

    section: str
    filename: str
    field_name: Optional[str] = None


@dataclass
class FormState:
    """Current content of the note form. Transient, reset after each note."""

    target_word: str = ""
    definition: str = ""
    sentence: str = ""
    sentence_translation: str = ""
    example_sentences: str = ""
    notes: str = ""

    sentence_audio: Optional[MediaFile] = None
    word_audio: Optional[MediaFile] = None
    images: List[MediaFile] = field(default_factory=list)

    # Annotations only, they never change routing
    meme_mode: bool = False
    modify_syntax: bool = False

    def text_values(self) -> Dict[str, str]:
        """Raw text of every text section, keyed by section id."""
        return {
            "targetWord": self.target_word,
            "definition": self.definition,
            "sentence": self.sentence,
            "sentenceTranslation": self.sentence_translation,
            "exampleSentences": self.example_sentences,
            "notes": self.notes,
        }

    def add_images(self, files: List[MediaFile]) -> None:
        self.images.extend(files)


@dataclass(frozen=True)
class ComposedNote:
    """
    Output of the field composer.

    `fields` maps Anki field names to HTML. `placements` maps each attachment
    section to the field its markers go to, or None. `media` is filled in by
    the submission step.
    """

    front: str
    back: str
    fields: Dict[str, str]
    placements: Dict[str, Optional[str]]
    annotations: Tuple[str, ...] = ()
    media: Tuple[StoredMedia, ...] = ()


@dataclass(frozen=True)
class SubmissionOutcome:
    """The single result of one submission, as shown to the user."""

    success: bool
    message: str
    note_id: Optional[int] = None
    media: Tuple[StoredMedia, ...] = ()
    stale: bool = False
