"""
Submission Service - Stores media, then creates the note.

Steps run strictly in order: sentence audio, word audio, images, addNote.
Media markers can only reference files that AnkiConnect has already stored,
and attachments that share a field must land in a fixed order.
"""

from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import Config, NoteSettings
from ..config.sections import FORM_SECTIONS, IMAGES, SENTENCE_AUDIO, WORD_AUDIO
from ..errors import AnkiFormError, EncodingError, SubmissionError
from ..models import (
    ComposedNote,
    EncodedMedia,
    FormState,
    MediaFile,
    StoredMedia,
    SubmissionOutcome,
)
from ..utils.helpers import LINE_BREAK, image_marker, sound_marker
from ..utils.logger import setup_logger
from .anki_connect import AnkiConnectClient
from .composer import append_field, compose
from .media_service import MediaEncoder

logger = setup_logger(__name__)


class Attachments:
    """The files selected for one submission."""

    def __init__(
        self,
        sentence_audio: Optional[MediaFile] = None,
        word_audio: Optional[MediaFile] = None,
        images: Sequence[MediaFile] = (),
    ):
        self.sentence_audio = sentence_audio
        self.word_audio = word_audio
        self.images = list(images)

    @classmethod
    def from_form(cls, form: FormState) -> "Attachments":
        return cls(form.sentence_audio, form.word_audio, form.images)


class SubmissionService:
    """
    Orchestrates one note submission against AnkiConnect.

    Stored media is never rolled back: store calls overwrite by filename, so
    a retried submission simply stores the same files again.
    """

    def __init__(
        self,
        client: AnkiConnectClient,
        encoder: Optional[MediaEncoder] = None,
        media_prefix: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
    ):
        """
        Initialize the service.

        Args:
            client: AnkiConnect client (anything with store_media_file/add_note)
            encoder: Attachment encoder
            media_prefix: Prefix for stored filenames (defaults to Config.MEDIA_PREFIX)
            tags: Tags put on every note (defaults to Config.NOTE_TAGS)
        """
        self.client = client
        self.encoder = encoder or MediaEncoder()
        self.media_prefix = Config.MEDIA_PREFIX if media_prefix is None else media_prefix
        self.tags = list(Config.NOTE_TAGS if tags is None else tags)

    async def _store(self, section: str, encoded: EncodedMedia) -> str:
        filename = f"{self.media_prefix}{encoded.filename}"
        try:
            stored = await self.client.store_media_file(filename, encoded.data)
        except AnkiFormError as e:
            raise SubmissionError(f"Could not store {filename}: {e}", step=section) from e
        logger.info("Stored %s as %s", FORM_SECTIONS[section].label.lower(), stored)
        return stored

    async def _store_audio(
        self,
        section: str,
        media: Optional[MediaFile],
        field_name: Optional[str],
        fields: Dict[str, str],
    ) -> Optional[StoredMedia]:
        try:
            encoded = await self.encoder.encode(media)
        except EncodingError as e:
            raise SubmissionError(str(e), step=section) from e
        if encoded is None:
            return None

        stored = await self._store(section, encoded)
        if field_name:
            fields[field_name] = fields.get(field_name, "") + sound_marker(stored)
        return StoredMedia(section, stored, field_name)

    async def _store_images(
        self,
        images: Sequence[MediaFile],
        field_name: Optional[str],
        fields: Dict[str, str],
    ) -> List[StoredMedia]:
        encoded, errors = await self.encoder.encode_many(images)
        if errors:
            raise SubmissionError(str(errors[0]), step=IMAGES) from errors[0]

        stored = [await self._store(IMAGES, item) for item in encoded]
        if field_name and stored:
            markers = LINE_BREAK.join(image_marker(name) for name in stored)
            append_field(fields, field_name, markers, LINE_BREAK)
        return [StoredMedia(IMAGES, name, field_name) for name in stored]

    def build_note(self, fields: Dict[str, str], settings: NoteSettings) -> Dict[str, Any]:
        """Build the addNote payload."""
        return {
            "deckName": settings.deck_name,
            "modelName": settings.model_name,
            "fields": fields,
            "options": {"allowDuplicate": settings.allow_duplicate},
            "tags": list(self.tags),
        }

    async def submit(
        self,
        note: ComposedNote,
        attachments: Attachments,
        settings: NoteSettings,
    ) -> Tuple[int, ComposedNote]:
        """
        Store every attachment and create the note.

        Args:
            note: Composed fields and placements
            attachments: Selected files
            settings: Settings the note was composed with

        Returns:
            Tuple of (new note id, note with final fields and stored media)

        Raises:
            SubmissionError: On the first failing step
        """
        fields = dict(note.fields)
        media: List[StoredMedia] = []

        for section, file in (
            (SENTENCE_AUDIO, attachments.sentence_audio),
            (WORD_AUDIO, attachments.word_audio),
        ):
            stored = await self._store_audio(section, file, note.placements.get(section), fields)
            if stored:
                media.append(stored)

        media.extend(await self._store_images(attachments.images, note.placements.get(IMAGES), fields))

        payload = self.build_note(fields, settings)
        try:
            note_id = await self.client.add_note(payload)
        except AnkiFormError as e:
            raise SubmissionError(str(e), step="addNote") from e

        logger.info("Created note %s in deck '%s'", note_id, settings.deck_name)
        return note_id, replace(note, fields=fields, media=tuple(media))

    async def submit_form(self, form: FormState, settings: NoteSettings) -> SubmissionOutcome:
        """
        Compose and submit the form, reporting exactly one outcome.

        Never raises for pipeline failures; the first failure becomes the
        outcome message.
        """
        note = compose(form, settings)
        try:
            note_id, final = await self.submit(note, Attachments.from_form(form), settings)
        except SubmissionError as e:
            logger.warning("Submission failed at %s: %s", e.step, e)
            return SubmissionOutcome(success=False, message=f"Error: {e}")
        return SubmissionOutcome(
            success=True,
            message="Note added successfully!",
            note_id=note_id,
            media=final.media,
        )
