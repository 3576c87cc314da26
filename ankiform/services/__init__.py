"""Services layer for the note form pipeline."""

from .anki_connect import AnkiConnectClient, parse_response
from .composer import compose
from .connectivity import ConnectionMonitor, ProbeHandle
from .media_service import MediaEncoder
from .note_form import NoteFormService
from .submission import Attachments, SubmissionService

__all__ = [
    "AnkiConnectClient",
    "parse_response",
    "compose",
    "ConnectionMonitor",
    "ProbeHandle",
    "MediaEncoder",
    "NoteFormService",
    "Attachments",
    "SubmissionService",
]
