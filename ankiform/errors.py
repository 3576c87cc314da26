"""Exception hierarchy for the note form pipeline."""

from typing import Any, Optional


class AnkiFormError(Exception):
    """Base class for all errors raised by ankiform."""


class ConfigLoadError(AnkiFormError):
    """Persisted settings are missing or unreadable. Recovered with defaults."""


class ConnectivityError(AnkiFormError):
    """AnkiConnect could not be reached."""


class AnkiConnectionError(ConnectivityError):
    """A request failed at the transport level."""

    def __init__(self, action: str, reason: str) -> None:
        self.action = action
        self.reason = reason
        super().__init__(f"Failed to issue request '{action}': {reason}")


class ProtocolViolationError(AnkiFormError):
    """AnkiConnect replied with something other than {result, error}."""


class RemoteApplicationError(AnkiFormError):
    """AnkiConnect replied with a non-null `error` value."""

    def __init__(self, action: str, error: Any) -> None:
        self.action = action
        self.error = error
        super().__init__(str(error))


class RemoteTimeoutError(AnkiFormError, TimeoutError):
    """A request exceeded its timeout. Safe to retry."""

    def __init__(self, action: str, timeout: float) -> None:
        self.action = action
        self.timeout = timeout
        super().__init__(f"AnkiConnect request '{action}' timed out after {timeout:g}s.")


class EncodingError(AnkiFormError):
    """An attachment's bytes could not be read or exceed the size limit."""

    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        self.reason = reason
        super().__init__(f"Could not encode '{filename}': {reason}")


class SubmissionError(AnkiFormError):
    """A submission failed. `step` names the step that failed first."""

    def __init__(self, message: str, step: Optional[str] = None) -> None:
        self.step = step
        super().__init__(message)
