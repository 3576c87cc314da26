"""
Settings View - Note layout configuration
------------------------------------------

Edits NoteSettings: deck and note type, front/back fields, section order,
section-to-field mapping, attachment placement and duplicate handling.
Saved explicitly through NoteFormService.
"""

from typing import Callable, Dict, List, Optional

import flet as ft

from ..config import DEFAULT_SETTINGS, FORM_SECTIONS, AttachmentTarget, NoteSettings
from ..config.note_settings import FIELD, TARGET_MODES
from ..errors import AnkiFormError
from ..services import NoteFormService


TARGET_LABELS: Dict[str, str] = {
    "audio1_target": "Sentence audio goes to",
    "audio2_target": "Word audio goes to",
    "images_target": "Images go to",
}


class SettingsView:
    """Settings editor bound to a NoteFormService."""

    def __init__(
        self,
        page: ft.Page,
        service: NoteFormService,
        on_save: Optional[Callable[[NoteSettings], None]] = None,
    ) -> None:
        """
        Initialize the Settings view.

        Args:
            page: Flet page instance for updates
            service: Owner of the current settings
            on_save: Called with the saved settings
        """
        self.page = page
        self.service = service
        self._on_save = on_save

        self._order: List[str] = list(service.settings.section_order)

        # UI References
        self._deck_dropdown: Optional[ft.Dropdown] = None
        self._model_dropdown: Optional[ft.Dropdown] = None
        self._front_field: Optional[ft.TextField] = None
        self._back_field: Optional[ft.TextField] = None
        self._section_list: Optional[ft.Column] = None
        self._mapping_fields: Dict[str, ft.TextField] = {}
        self._target_modes: Dict[str, ft.Dropdown] = {}
        self._target_fields: Dict[str, ft.TextField] = {}
        self._duplicate_switch: Optional[ft.Switch] = None
        self._error_text: Optional[ft.Text] = None

        self._container = self._build_view()
        self._load_values(service.settings)

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        self._deck_dropdown = ft.Dropdown(label="Deck", width=260, options=[])
        self._model_dropdown = ft.Dropdown(label="Note type", width=260, options=[])
        self._front_field = ft.TextField(label="Front field", width=200)
        self._back_field = ft.TextField(label="Back field", width=200)
        self._error_text = ft.Text("", size=12, color=ft.Colors.RED_300, visible=False)

        note_type_section = self._build_section_card(
            "Note type",
            ft.Icons.STYLE_ROUNDED,
            [
                ft.Row(
                    controls=[
                        self._deck_dropdown,
                        self._model_dropdown,
                        ft.IconButton(
                            icon=ft.Icons.REFRESH,
                            tooltip="Load decks and note types from Anki",
                            on_click=lambda e: self.page.run_task(self._load_remote_options),
                        ),
                    ],
                    wrap=True,
                ),
                self._error_text,
                ft.Row(controls=[self._front_field, self._back_field], spacing=15),
            ],
        )

        self._section_list = ft.Column(spacing=4)
        layout_section = self._build_section_card(
            "Sections",
            ft.Icons.VIEW_AGENDA_ROUNDED,
            [
                ft.Text(
                    "Use arrows to reorder. Leave the field empty to use the default placement.",
                    size=11,
                    color=ft.Colors.AMBER_200,
                ),
                self._section_list,
            ],
        )

        target_rows = []
        for attr, label in TARGET_LABELS.items():
            mode = ft.Dropdown(
                label=label,
                width=220,
                options=[ft.dropdown.Option(key=m, text=m) for m in TARGET_MODES],
            )
            field = ft.TextField(label="Field name", width=200)
            self._target_modes[attr] = mode
            self._target_fields[attr] = field
            target_rows.append(ft.Row(controls=[mode, field], spacing=15))

        self._duplicate_switch = ft.Switch(label="Allow duplicate notes", value=False)
        media_section = self._build_section_card(
            "Media placement",
            ft.Icons.PERM_MEDIA_ROUNDED,
            [*target_rows, self._duplicate_switch],
        )

        actions = ft.Row(
            controls=[
                ft.TextButton("Reset to Defaults", on_click=self._on_reset_click),
                ft.Container(expand=True),
                ft.ElevatedButton("Save Settings", icon=ft.Icons.SAVE_ROUNDED, on_click=self._on_save_click),
            ],
        )

        return ft.Container(
            content=ft.Column(
                controls=[
                    note_type_section,
                    layout_section,
                    media_section,
                    actions,
                ],
                spacing=20,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
            expand=True,
            padding=10,
        )

    def _build_section_card(self, title: str, icon: str, controls: list) -> ft.Container:
        """Build a styled section card."""
        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            ft.Icon(icon, size=20, color=ft.Colors.INDIGO_200),
                            ft.Text(title, size=16, weight=ft.FontWeight.BOLD),
                        ],
                        spacing=10,
                    ),
                    ft.Divider(height=1, color=ft.Colors.WHITE10),
                    *controls,
                ],
                spacing=10,
            ),
            padding=20,
            border_radius=12,
            bgcolor="#1A1A1A",
        )

    def _build_section_items(self) -> List[ft.Control]:
        items: List[ft.Control] = []
        last = len(self._order) - 1
        for idx, section_id in enumerate(self._order):
            mapping = self._mapping_fields.get(section_id)
            if mapping is None:
                mapping = ft.TextField(hint_text="Default", width=180, dense=True)
                self._mapping_fields[section_id] = mapping
            # The target word always goes to the front field
            mapping.disabled = section_id == "targetWord"
            items.append(
                ft.Row(
                    controls=[
                        ft.IconButton(
                            icon=ft.Icons.KEYBOARD_ARROW_UP,
                            disabled=idx == 0,
                            on_click=lambda e, sid=section_id: self._on_move_section(sid, -1),
                        ),
                        ft.IconButton(
                            icon=ft.Icons.KEYBOARD_ARROW_DOWN,
                            disabled=idx == last,
                            on_click=lambda e, sid=section_id: self._on_move_section(sid, 1),
                        ),
                        ft.Text(FORM_SECTIONS[section_id].label, width=140),
                        mapping,
                    ],
                    spacing=4,
                )
            )
        return items

    def _refresh_list(self) -> None:
        self._section_list.controls = self._build_section_items()
        self.page.update()

    def _on_move_section(self, section_id: str, direction: int) -> None:
        """
        Move a section up (-1) or down (+1).
        """
        current_idx = self._order.index(section_id)
        new_idx = current_idx + direction
        if 0 <= new_idx < len(self._order):
            self._order[current_idx], self._order[new_idx] = self._order[new_idx], self._order[current_idx]
            self._refresh_list()

    def _load_values(self, settings: NoteSettings) -> None:
        """Copy settings into the controls."""
        self._set_options(self._deck_dropdown, [settings.deck_name], settings.deck_name)
        self._set_options(self._model_dropdown, [settings.model_name], settings.model_name)
        self._front_field.value = settings.front_field_name
        self._back_field.value = settings.back_field_name

        self._order = list(settings.section_order)
        self._mapping_fields = {}
        self._section_list.controls = self._build_section_items()
        for section_id, field in self._mapping_fields.items():
            field.value = settings.section_to_field.get(section_id, "")

        for attr in TARGET_LABELS:
            target: AttachmentTarget = getattr(settings, attr)
            self._target_modes[attr].value = target.mode
            self._target_fields[attr].value = target.field_name or ""

        self._duplicate_switch.value = settings.allow_duplicate

    @staticmethod
    def _set_options(dropdown: ft.Dropdown, names: List[str], value: str) -> None:
        if value and value not in names:
            names = [value, *names]
        dropdown.options = [ft.dropdown.Option(key=n, text=n) for n in names]
        dropdown.value = value

    async def _load_remote_options(self) -> None:
        """Fill the dropdowns from Anki."""
        try:
            options = await self.service.load_remote_options(self._model_dropdown.value)
        except AnkiFormError as ex:
            self._error_text.value = f"Failed to load decks/models: {ex}"
            self._error_text.visible = True
            self.page.update()
            return

        self._error_text.visible = False
        self._set_options(self._deck_dropdown, options["decks"], self._deck_dropdown.value)
        self._set_options(self._model_dropdown, options["models"], self._model_dropdown.value)
        if options["fields"]:
            hint = ", ".join(options["fields"])
            for field in self._mapping_fields.values():
                field.tooltip = hint
        self.page.update()

    def _collect(self) -> NoteSettings:
        """Build NoteSettings from the controls."""
        section_to_field = {
            sid: field.value.strip()
            for sid, field in self._mapping_fields.items()
            if field.value and field.value.strip() and sid != "targetWord"
        }
        targets = {}
        for attr in TARGET_LABELS:
            mode = self._target_modes[attr].value or getattr(DEFAULT_SETTINGS, attr).mode
            field_name = (self._target_fields[attr].value or "").strip()
            targets[attr] = AttachmentTarget(mode, field_name if mode == FIELD else None)

        return self.service.settings.with_changes(
            deck_name=self._deck_dropdown.value or DEFAULT_SETTINGS.deck_name,
            model_name=self._model_dropdown.value or DEFAULT_SETTINGS.model_name,
            front_field_name=(self._front_field.value or "").strip() or DEFAULT_SETTINGS.front_field_name,
            back_field_name=(self._back_field.value or "").strip() or DEFAULT_SETTINGS.back_field_name,
            section_order=list(self._order),
            section_to_field=section_to_field,
            allow_duplicate=bool(self._duplicate_switch.value),
            **targets,
        )

    def _on_save_click(self, e: ft.ControlEvent) -> None:
        """Handle save button click."""
        try:
            saved = self.service.update_settings(self._collect())
        except OSError as ex:
            self._show_snackbar(f"Error saving settings: {ex}", success=False)
            return
        self._load_values(saved)
        self._show_snackbar("Settings saved successfully!", success=True)
        if self._on_save:
            self._on_save(saved)

    def _on_reset_click(self, e: ft.ControlEvent) -> None:
        """Handle reset button click."""
        self._load_values(DEFAULT_SETTINGS)
        self.page.update()
        self._show_snackbar("Defaults loaded, save to keep them", success=True)

    def _show_snackbar(self, message: str, success: bool = True) -> None:
        """Show a snackbar notification."""
        snackbar = ft.SnackBar(
            content=ft.Row(
                controls=[
                    ft.Icon(
                        ft.Icons.CHECK_CIRCLE if success else ft.Icons.ERROR,
                        color=ft.Colors.WHITE,
                        size=18,
                    ),
                    ft.Text(message, color=ft.Colors.WHITE),
                ],
                spacing=10,
            ),
            bgcolor=ft.Colors.GREEN_700 if success else ft.Colors.RED_700,
            duration=3000,
        )
        for ctrl in list(self.page.overlay):
            if isinstance(ctrl, ft.SnackBar):
                self.page.overlay.remove(ctrl)
        self.page.overlay.append(snackbar)
        snackbar.open = True
        self.page.update()
