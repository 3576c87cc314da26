"""
Form View - Note entry form
----------------------------

Text inputs for the six text sections, pickers for the two audio clips and
the images, the annotation toggles, and the Add / Clear actions. All state
lives in NoteFormService; this view only mirrors it.
"""

from typing import Dict, List, Optional

import flet as ft

from ..config import FORM_SECTIONS, get_text_section_ids
from ..models import FormState, MediaFile
from ..services import NoteFormService
from .connection_status import ConnectionBanner


# section id -> (FormState attribute, placeholder, lines)
TEXT_INPUTS: Dict[str, tuple] = {
    "targetWord": ("target_word", "The word you want to learn", 1),
    "sentence": ("sentence", "Sentence the target word is in", 3),
    "sentenceTranslation": ("sentence_translation", "You can enter a translation here", 3),
    "definition": ("definition", "The meaning(s) of the target word", 3),
    "exampleSentences": ("example_sentences", "Supplementary examples", 3),
    "notes": ("notes", "Any tips for remembering this? Enter them here", 3),
}


class FormView:
    """The note form."""

    def __init__(self, page: ft.Page, service: NoteFormService, banner: ConnectionBanner) -> None:
        """
        Initialize the form view.

        Args:
            page: Flet page instance
            service: Form state and submission
            banner: Connection banner shown above the form
        """
        self.page = page
        self.service = service
        self.banner = banner

        self._fields: Dict[str, ft.TextField] = {}
        self._audio_labels: Dict[str, ft.Text] = {}
        self._images_label: Optional[ft.Text] = None
        self._meme_switch: Optional[ft.Switch] = None
        self._syntax_switch: Optional[ft.Switch] = None
        self._submit_button: Optional[ft.ElevatedButton] = None
        self._progress: Optional[ft.ProgressRing] = None

        self._picker = ft.FilePicker()
        self.page.services.append(self._picker)

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        return self._container

    def _build_view(self) -> ft.Container:
        text_controls: List[ft.Control] = []
        for section_id in get_text_section_ids():
            attr, hint, lines = TEXT_INPUTS[section_id]
            field = ft.TextField(
                label=FORM_SECTIONS[section_id].label if section_id != "targetWord" else "Target word",
                hint_text=hint,
                multiline=lines > 1,
                min_lines=lines,
                max_lines=lines + 3 if lines > 1 else 1,
                on_change=lambda e, a=attr: setattr(self.service.form, a, e.control.value),
            )
            self._fields[attr] = field
            text_controls.append(field)

        audio_controls = [
            self._build_audio_picker("sentence_audio", FORM_SECTIONS["sentenceAudio"].label),
            self._build_audio_picker("word_audio", FORM_SECTIONS["wordAudio"].label),
        ]

        self._images_label = ft.Text("", size=12, color=ft.Colors.WHITE54)
        images_row = ft.Row(
            controls=[
                ft.Icon(ft.Icons.IMAGE_OUTLINED, size=18),
                ft.Text(FORM_SECTIONS["images"].label),
                ft.TextButton("ADD", icon=ft.Icons.ADD, on_click=self._on_add_images),
                self._images_label,
            ],
            spacing=10,
        )

        self._meme_switch = ft.Switch(
            label="Meme mode",
            value=False,
            on_change=lambda e: setattr(self.service.form, "meme_mode", bool(e.control.value)),
        )
        self._syntax_switch = ft.Switch(
            label="Modify syntax",
            value=False,
            on_change=lambda e: setattr(self.service.form, "modify_syntax", bool(e.control.value)),
        )

        self._progress = ft.ProgressRing(width=18, height=18, stroke_width=2, visible=False)
        self._submit_button = ft.ElevatedButton(
            "Add note",
            icon=ft.Icons.SEND_ROUNDED,
            on_click=self._on_submit_click,
        )
        actions = ft.Row(
            controls=[
                ft.TextButton("Clear", icon=ft.Icons.CLEAR_ALL, on_click=self._on_clear_click),
                ft.Container(expand=True),
                self._progress,
                self._submit_button,
            ],
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    self.banner.container,
                    *text_controls,
                    *audio_controls,
                    images_row,
                    ft.Row(controls=[self._meme_switch, self._syntax_switch], spacing=20),
                    ft.Divider(height=1, color=ft.Colors.WHITE10),
                    actions,
                ],
                spacing=12,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
            expand=True,
            padding=10,
        )

    def _build_audio_picker(self, attr: str, label: str) -> ft.Row:
        selected = ft.Text("", size=12, color=ft.Colors.WHITE54)
        self._audio_labels[attr] = selected
        return ft.Row(
            controls=[
                ft.Icon(ft.Icons.MIC_OUTLINED, size=18),
                ft.Text(label),
                ft.TextButton(
                    "ADD",
                    icon=ft.Icons.ADD,
                    on_click=lambda e, a=attr: self.page.run_task(self._pick_audio, a),
                ),
                selected,
            ],
            spacing=10,
        )

    async def _pick_audio(self, attr: str) -> None:
        files = await self._picker.pick_files(
            allow_multiple=False,
            file_type=ft.FilePickerFileType.AUDIO,
        )
        if not files or not files[0].path:
            return
        media = MediaFile.from_path(files[0].path)
        setattr(self.service.form, attr, media)
        self._audio_labels[attr].value = f"Selected: {media.name}"
        self.page.update()

    def _on_add_images(self, e: ft.ControlEvent) -> None:
        self.page.run_task(self._pick_images)

    async def _pick_images(self) -> None:
        files = await self._picker.pick_files(
            allow_multiple=True,
            file_type=ft.FilePickerFileType.IMAGE,
        )
        selected = [MediaFile.from_path(f.path) for f in files or [] if f.path]
        if not selected:
            return
        count = self.service.add_images(selected)
        self._images_label.value = f"{count} image{'s' if count > 1 else ''} selected"
        self.page.update()

    def _on_submit_click(self, e: ft.ControlEvent) -> None:
        # Prevent double-clicks
        if self.service.is_submitting:
            return
        self.page.run_task(self._submit)

    async def _submit(self) -> None:
        self._set_busy(True)
        self._show_snackbar("Sending...", kind="info")
        try:
            outcome = await self.service.submit()
        finally:
            if not self.service.disposed:
                self._set_busy(False)

        if outcome.stale:
            return
        if outcome.success:
            self._sync_from_state(self.service.form)
        self._show_snackbar(outcome.message, kind="success" if outcome.success else "error")

    def _on_clear_click(self, e: ft.ControlEvent) -> None:
        outcome = self.service.clear()
        self._sync_from_state(self.service.form)
        self._show_snackbar(outcome.message, kind="info")

    def _sync_from_state(self, form: FormState) -> None:
        """Mirror the form state back into the controls."""
        for attr, field in self._fields.items():
            field.value = getattr(form, attr)
        for attr, label in self._audio_labels.items():
            media = getattr(form, attr)
            label.value = f"Selected: {media.name}" if media else ""
        count = len(form.images)
        self._images_label.value = f"{count} image{'s' if count > 1 else ''} selected" if count else ""
        self._meme_switch.value = form.meme_mode
        self._syntax_switch.value = form.modify_syntax
        self.page.update()

    def _set_busy(self, busy: bool) -> None:
        self._submit_button.disabled = busy
        self._progress.visible = busy
        self.page.update()

    def _show_snackbar(self, message: str, kind: str = "info") -> None:
        """Show a snackbar notification."""
        colors = {
            "info": ft.Colors.BLUE_GREY_700,
            "success": ft.Colors.GREEN_700,
            "error": ft.Colors.RED_700,
        }
        snackbar = ft.SnackBar(
            content=ft.Text(message, color=ft.Colors.WHITE),
            bgcolor=colors.get(kind, colors["info"]),
            duration=5000,
        )
        # Clean up old snackbars and add new one
        for ctrl in list(self.page.overlay):
            if isinstance(ctrl, ft.SnackBar):
                self.page.overlay.remove(ctrl)
        self.page.overlay.append(snackbar)
        snackbar.open = True
        self.page.update()
