"""Utils module."""

from .helpers import (
    image_marker,
    join_nonempty,
    section_html,
    sound_marker,
)
from .logger import setup_logger

__all__ = [
    'image_marker',
    'join_nonempty',
    'section_html',
    'sound_marker',
    'setup_logger',
]
