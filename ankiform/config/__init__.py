"""Configuration module for ankiform."""

from .settings import Config
from .sections import (
    ATTACHMENT_SECTIONS,
    FORM_SECTIONS,
    FormSection,
    get_default_order,
    get_section_ids,
    get_text_section_ids,
    validate_section_order,
)
from .note_settings import (
    DEFAULT_SETTINGS,
    AttachmentTarget,
    NoteSettings,
    normalize,
)
from .config_manager import SettingsManager

__all__ = [
    'Config',
    'ATTACHMENT_SECTIONS',
    'FORM_SECTIONS',
    'FormSection',
    'get_default_order',
    'get_section_ids',
    'get_text_section_ids',
    'validate_section_order',
    'DEFAULT_SETTINGS',
    'AttachmentTarget',
    'NoteSettings',
    'normalize',
    'SettingsManager',
]
