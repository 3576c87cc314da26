"""
Connection Banner
-----------------

Passive banner showing whether AnkiConnect is reachable. Never blocks the
form.
"""

from typing import Optional

import flet as ft

from ..services import ConnectionMonitor, ProbeHandle


class ConnectionBanner:
    """Banner driven by a ConnectionMonitor."""

    def __init__(self, page: ft.Page, monitor: ConnectionMonitor) -> None:
        self.page = page
        self.monitor = monitor
        self._handle: Optional[ProbeHandle] = None

        self._icon = ft.Icon(ft.Icons.SYNC, size=18, color=ft.Colors.WHITE)
        self._text = ft.Text("Checking Anki connection...", color=ft.Colors.WHITE)
        self._container = ft.Container(
            content=ft.Row(controls=[self._icon, self._text], spacing=10),
            padding=ft.Padding.symmetric(horizontal=16, vertical=10),
            border_radius=8,
            bgcolor=ft.Colors.BLUE_GREY_700,
        )

    @property
    def container(self) -> ft.Container:
        return self._container

    async def start(self) -> None:
        """Start probing. Must run on the page's event loop."""
        if self._handle is None:
            self._handle = self.monitor.start(self._on_status)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_status(self, connected: bool) -> None:
        if connected:
            self._icon.name = ft.Icons.CHECK_CIRCLE
            self._text.value = "Connected to Anki"
            self._container.bgcolor = ft.Colors.GREEN_700
        else:
            self._icon.name = ft.Icons.ERROR_OUTLINE
            self._text.value = "You are not connected to Anki"
            self._container.bgcolor = ft.Colors.AMBER_800
        self.page.update()
