"""ankiform - Compose flashcards in a form and send them to Anki"""

__version__ = "1.0.0"

from .config import Config, NoteSettings, SettingsManager, normalize
from .models import ComposedNote, FormState, MediaFile
from .services import AnkiConnectClient, NoteFormService, SubmissionService, compose

__all__ = [
    'Config',
    'NoteSettings',
    'SettingsManager',
    'normalize',
    'ComposedNote',
    'FormState',
    'MediaFile',
    'AnkiConnectClient',
    'NoteFormService',
    'SubmissionService',
    'compose',
]
