"""
Anki Form Creator: Desktop GUI
------------------------------

A Flet form that composes a note and sends it to Anki through AnkiConnect.
"""

from typing import Dict

import flet as ft

from ankiform.services import AnkiConnectClient, ConnectionMonitor, NoteFormService
from ankiform.ui import ConnectionBanner, FormView, SettingsView
from ankiform.utils import setup_logger

logger = setup_logger("ankiform.app")


class AnkiFormApp:
    """Main application controller."""

    def __init__(self, page: ft.Page) -> None:
        """
        Initialize the application.

        Args:
            page: Flet page instance
        """
        self.page = page
        self.client = AnkiConnectClient()
        self.service = NoteFormService(self.client)
        self._setup_page()
        self._init_views()
        self._build_ui()

    def _setup_page(self) -> None:
        """Configure page settings and theme."""
        self.page.title = "Anki Form Creator"
        self.page.theme_mode = ft.ThemeMode.DARK
        self.page.bgcolor = "#121212"
        self.page.theme = ft.Theme(color_scheme_seed="#7C4DFF")
        self.page.padding = 0
        self.page.window.min_width = 720
        self.page.window.min_height = 650
        self.page.on_disconnect = self._on_disconnect

    def _init_views(self) -> None:
        """Initialize all view containers."""
        self.banner = ConnectionBanner(self.page, ConnectionMonitor(self.client))
        self.form = FormView(self.page, self.service, self.banner)
        self.settings = SettingsView(self.page, self.service)

        self.views: Dict[int, ft.Container] = {
            0: self.form.container,
            1: self.settings.container,
        }
        self.current_view_index: int = 0

    def _build_ui(self) -> None:
        """Build the main UI layout."""
        self.content_area = ft.Container(content=self.views[0], expand=True, padding=24)

        self.nav_rail = ft.NavigationRail(
            selected_index=0,
            label_type=ft.NavigationRailLabelType.ALL,
            min_width=100,
            destinations=[
                ft.NavigationRailDestination(
                    icon=ft.Icons.EDIT_NOTE_OUTLINED,
                    selected_icon=ft.Icons.EDIT_NOTE_ROUNDED,
                    label="New note",
                ),
                ft.NavigationRailDestination(
                    icon=ft.Icons.SETTINGS_OUTLINED,
                    selected_icon=ft.Icons.SETTINGS_ROUNDED,
                    label="Settings",
                ),
            ],
            on_change=lambda e: self._on_nav_change(e.control.selected_index),
            bgcolor="transparent",
        )

        self.page.add(
            ft.Row(
                controls=[
                    self.nav_rail,
                    ft.VerticalDivider(width=1, color=ft.Colors.WHITE10),
                    self.content_area,
                ],
                spacing=0,
                expand=True,
            )
        )
        self.page.run_task(self.banner.start)

    def _on_nav_change(self, index: int) -> None:
        if index == self.current_view_index:
            return
        self.current_view_index = index
        self.content_area.content = self.views[index]
        self.page.update()

    def _on_disconnect(self, e) -> None:
        """Tear down: stop probing and drop late submission results."""
        self.banner.stop()
        self.service.dispose()
        self.page.run_task(self.client.close)


def main(page: ft.Page) -> None:
    """
    Main entry point for Flet application.

    Args:
        page: Flet page instance
    """
    AnkiFormApp(page)


if __name__ == "__main__":
    ft.run(main)
