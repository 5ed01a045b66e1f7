"""Editing surfaces and notifiers used by the generate command.

A surface exposes the selected text, the full document text and a single
whole-document replace. A notifier shows error and info messages.
"""
from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# A line with its terminator (\r\n, \r or \n), or a final unterminated line
_LINE_PATTERN = re.compile(r'[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+\Z')


def _strip_line_ending(text: str) -> str:
    if text.endswith('\r\n'):
        return text[:-2]
    if text.endswith(('\n', '\r')):
        return text[:-1]
    return text


@runtime_checkable
class EditorSurface(Protocol):
    """Text buffer with a selection."""

    def get_selection(self) -> str:
        ...

    def get_full_text(self) -> str:
        ...

    def replace_all(self, text: str) -> bool:
        """Replace the whole document; return True if the edit was applied."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """User notification channel."""

    def show_error(self, message: str) -> None:
        ...

    def show_info(self, message: str) -> None:
        ...


class InMemorySurface:
    """Surface over an in-memory buffer.

    The selection is given as character offsets into the buffer; by
    default it covers the whole buffer.
    """

    def __init__(self, full_text: str, selection_start: int = 0, selection_end: int | None = None) -> None:
        self.text = full_text
        self.selection_start = selection_start
        self.selection_end = len(full_text) if selection_end is None else selection_end
        self.replace_count = 0

    @classmethod
    def selecting(cls, full_text: str, selected: str) -> InMemorySurface:
        """Build a surface whose selection is the first occurrence of selected."""
        start = full_text.find(selected)
        if start == -1:
            raise ValueError("selected text is not part of the buffer")
        return cls(full_text, start, start + len(selected))

    def get_selection(self) -> str:
        return self.text[self.selection_start:self.selection_end]

    def get_full_text(self) -> str:
        return self.text

    def replace_all(self, text: str) -> bool:
        self.text = text
        self.replace_count += 1
        return True


class FileSurface:
    """Surface backed by a text file.

    The selection is a 1-based inclusive line range; without one the
    whole file is selected.
    """

    def __init__(self, path: str | Path, start_line: int | None = None, end_line: int | None = None) -> None:
        self.path = Path(path)
        self.start_line = start_line
        self.end_line = end_line

    def get_full_text(self) -> str:
        # newline="" keeps CRLF/CR endings intact outside the selection
        with open(self.path, encoding="utf-8", newline="") as f:
            return f.read()

    def get_selection(self) -> str:
        text = self.get_full_text()
        if self.start_line is None and self.end_line is None:
            return text

        lines = _LINE_PATTERN.findall(text)
        start = max((self.start_line or 1) - 1, 0)
        end = self.end_line if self.end_line is not None else len(lines)
        selected = ''.join(lines[start:end])
        if self.end_line is not None:
            selected = _strip_line_ending(selected)
        return selected

    def replace_all(self, text: str) -> bool:
        """Write the new text to a sibling temp file, then swap it in."""
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                newline="",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(text)
            shutil.copymode(self.path, tmp_path)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            return False
        finally:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
        return True


def open_file_surface(
    path: str | Path,
    start_line: int | None = None,
    end_line: int | None = None
) -> FileSurface | None:
    """Open a file as a surface; None when there is no such file."""
    file_path = Path(path)
    if not file_path.is_file():
        logger.warning(f"No such file: {file_path}")
        return None
    return FileSurface(file_path, start_line, end_line)


class LoggingNotifier:
    """Notifier that writes messages to the log."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def show_error(self, message: str) -> None:
        self.log.error(message)

    def show_info(self, message: str) -> None:
        self.log.info(message)


class RecordingNotifier:
    """Notifier that keeps every message it is given."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.infos: list[str] = []

    def show_error(self, message: str) -> None:
        self.errors.append(message)

    def show_info(self, message: str) -> None:
        self.infos.append(message)

    @property
    def failed(self) -> bool:
        return bool(self.errors)
