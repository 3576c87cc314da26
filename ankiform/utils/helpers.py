"""Utility functions."""

from typing import Iterable, Optional

SECTION_SEPARATOR = "<br><br>"
LINE_BREAK = "<br>"


def join_nonempty(parts: Iterable[Optional[str]], separator: str) -> str:
    """Join the non-empty parts with `separator`."""
    return separator.join(p for p in parts if p)


def section_html(label: str, text: str) -> str:
    """Render a labelled section fragment."""
    return f"<strong>{label}</strong>{LINE_BREAK}{text}"


def sound_marker(filename: str) -> str:
    return f"[sound:{filename}]"


def image_marker(filename: str) -> str:
    return f'<img src="{filename}" />'
