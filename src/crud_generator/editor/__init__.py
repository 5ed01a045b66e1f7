"""Editor integration: surfaces, notifiers and the generate command."""
from __future__ import annotations

from .surface import (
    EditorSurface,
    Notifier,
    InMemorySurface,
    FileSurface,
    LoggingNotifier,
    RecordingNotifier,
    open_file_surface,
)
from .command import (
    GeneratedCrud,
    build_crud_text,
    expand_selection,
    generate_crud,
)

__all__ = [
    "EditorSurface",
    "Notifier",
    "InMemorySurface",
    "FileSurface",
    "LoggingNotifier",
    "RecordingNotifier",
    "open_file_surface",
    "GeneratedCrud",
    "build_crud_text",
    "expand_selection",
    "generate_crud",
]
