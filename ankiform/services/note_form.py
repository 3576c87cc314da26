"""
Note Form Service - State holder behind the form view.

Owns the transient FormState and the current settings, and guards
submissions: one at a time, and results that arrive after dispose() are
dropped instead of being applied.
"""

from typing import Dict, List, Optional, Sequence

from ..config import NoteSettings, SettingsManager
from ..models import FormState, MediaFile, SubmissionOutcome
from ..utils.logger import setup_logger
from .anki_connect import AnkiConnectClient
from .submission import SubmissionService

logger = setup_logger(__name__)


class NoteFormService:
    """Form state, settings and submission for one form view."""

    def __init__(
        self,
        client: AnkiConnectClient,
        settings_manager: Optional[SettingsManager] = None,
        submission: Optional[SubmissionService] = None,
    ):
        """
        Initialize the service.

        Args:
            client: AnkiConnect client
            settings_manager: Settings store (defaults to SettingsManager())
            submission: Submission service (defaults to one built on `client`)
        """
        self.client = client
        self.settings_manager = settings_manager or SettingsManager()
        self.submission = submission or SubmissionService(client)

        self.settings: NoteSettings = self.settings_manager.load()
        self.form = FormState()

        self._in_flight = False
        self._disposed = False

    @property
    def is_submitting(self) -> bool:
        return self._in_flight

    @property
    def disposed(self) -> bool:
        return self._disposed

    def add_images(self, files: Sequence[MediaFile]) -> int:
        """Append images to the selection. Returns the new image count."""
        self.form.add_images(list(files))
        return len(self.form.images)

    def clear(self) -> SubmissionOutcome:
        """Reset every field, attachment and toggle."""
        self.form = FormState()
        return SubmissionOutcome(success=True, message="Form cleared")

    def update_settings(self, settings: NoteSettings) -> NoteSettings:
        """Normalize, persist and adopt new settings."""
        self.settings = self.settings_manager.save(settings)
        return self.settings

    async def load_remote_options(self, model_name: Optional[str] = None) -> Dict[str, List[str]]:
        """
        Fetch the choices for the settings editor.

        Returns:
            Dict with "decks", "models" and "fields" (fields of `model_name`)
        """
        model_name = model_name or self.settings.model_name
        decks = await self.client.deck_names()
        models = await self.client.model_names()
        fields = await self.client.model_field_names(model_name) if model_name else []
        return {"decks": decks, "models": models, "fields": fields}

    async def submit(self) -> SubmissionOutcome:
        """
        Submit the current form.

        Refused while another submission is in flight. On success the form is
        reset. If dispose() was called meanwhile, the outcome is marked stale
        and the form is left alone.
        """
        if self._in_flight:
            return SubmissionOutcome(success=False, message="A note is already being sent")
        if self._disposed:
            return SubmissionOutcome(success=False, message="Form is closed", stale=True)

        self._in_flight = True
        form = self.form
        try:
            outcome = await self.submission.submit_form(form, self.settings)
        finally:
            self._in_flight = False

        if self._disposed:
            logger.debug("Dropping submission result after dispose: %s", outcome.message)
            return SubmissionOutcome(
                success=outcome.success,
                message=outcome.message,
                note_id=outcome.note_id,
                media=outcome.media,
                stale=True,
            )

        if outcome.success and self.form is form:
            self.form = FormState()
        return outcome

    def dispose(self) -> None:
        self._disposed = True
