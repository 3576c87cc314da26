"""UI module for the Flet application."""

from .connection_status import ConnectionBanner
from .form_view import FormView
from .settings import SettingsView

__all__ = [
    'ConnectionBanner',
    'FormView',
    'SettingsView',
]
