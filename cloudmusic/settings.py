"""Persistent user settings stored in an INI file."""

from __future__ import annotations

import configparser
import os
from pathlib import Path

DEFAULT_SETTINGS_FILE = "BJUT_Cloud_Music.ini"
DEFAULT_BACKGROUND = ":/image/image/background/default.jpg"

_SECTION = "background"
_KEY = "image-url"
_IMAGE_SIGNATURES = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
    b"GIF87a",
    b"GIF89a",
    b"BM",
)


def _is_image(path: str) -> bool:
    if path == DEFAULT_BACKGROUND:
        return True
    try:
        with open(path, "rb") as handle:
            header = handle.read(8)
    except OSError:
        return False
    return any(header.startswith(signature) for signature in _IMAGE_SIGNATURES)


class Settings:
    """The background image setting, kept in an INI file."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_SETTINGS_FILE) -> None:
        self.path = Path(path)

    def _read(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(interpolation=None)
        parser.read(self.path, encoding="utf-8")
        return parser

    def _store(self, value: str) -> None:
        parser = self._read()
        if not parser.has_section(_SECTION):
            parser.add_section(_SECTION)
        parser.set(_SECTION, _KEY, value)
        with open(self.path, "w", encoding="utf-8") as handle:
            parser.write(handle)

    def background(self) -> str:
        """Return the stored background, falling back to (and storing) the default."""
        value = self._read().get(_SECTION, _KEY, fallback="")
        if value and _is_image(value):
            return value
        return self.reset_background()

    def set_background(self, path: str) -> bool:
        """Store ``path`` as background if it is a readable image; report whether it was."""
        if not path or not _is_image(path):
            return False
        self._store(path)
        return True

    def reset_background(self) -> str:
        """Store and return the default background."""
        self._store(DEFAULT_BACKGROUND)
        return DEFAULT_BACKGROUND

    def style_sheet(self) -> str:
        """Return the main window style sheet for the current background."""
        return (
            "QWidget#Widget{"
            "border-radius:10px;"
            f"border-image: url({self.background()});}}"
        )