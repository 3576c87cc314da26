"""Data models for ankiform."""

from .note import (
    ComposedNote,
    EncodedMedia,
    FormState,
    MediaFile,
    StoredMedia,
    SubmissionOutcome,
)

__all__ = [
    'ComposedNote',
    'EncodedMedia',
    'FormState',
    'MediaFile',
    'StoredMedia',
    'SubmissionOutcome',
]
