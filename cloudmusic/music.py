"""Song records and their ordering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable
from urllib.parse import unquote, urlsplit

_INFO_GAP = " " * 19
_LYRIC_SUFFIXES = (".mp3", ".flac", ".mpga")


def format_time(milliseconds: int) -> str:
    """Format a duration in milliseconds as mm:ss."""
    sign = -1 if milliseconds < 0 else 1
    seconds = sign * (abs(milliseconds) // 1000)
    minutes = sign * (abs(seconds) // 60)
    seconds -= minutes * 60
    return f"{minutes:02d}:{seconds:02d}"


def _local_file(url: str) -> str:
    parts = urlsplit(url)
    if parts.scheme.lower() != "file":
        return ""
    path = unquote(parts.path)
    if len(path) >= 3 and path[0] == "/" and path[1].isalpha() and path[2] == ":":
        path = path[1:]
    if parts.netloc and parts.netloc.lower() != "localhost":
        path = f"//{parts.netloc}{path}"
    return path


class SortKey(Enum):
    """Attributes a song list can be ordered by."""

    DEFAULT = 0
    TITLE = 1
    AUTHOR = 2
    DURATION = 3
    EQUALITY = 4


@dataclass
class Music:
    """A song and its metadata; duration is in milliseconds."""

    url: str = ""
    author: str = ""
    title: str = ""
    duration: int = 0
    album_title: str = ""
    audio_bit_rate: int = 0

    def info(self) -> str:
        """Return the line shown for the song in a list."""
        return f"{self.title}{_INFO_GAP}{self.author}"

    def lyric_file(self) -> str:
        """Return the path of the .lrc file next to the song, or '' for non-file URLs."""
        path = _local_file(self.url)
        for suffix in _LYRIC_SUFFIXES:
            path = path.replace(suffix, ".lrc")
        return path

    def detail(self) -> str:
        """Return a multi-line description of the song."""
        return (
            f"歌曲名：{self.title}\n"
            f"艺术家：{self.author}\n"
            f"时长：{format_time(self.duration)}\n"
            f"唱片集：{self.album_title}\n"
            f"比特率：{self.audio_bit_rate}bps\n"
            f"文件路径：{self.url}"
        )


def sort_key(key: SortKey) -> Callable[[Music], Any]:
    """Return a key function for ``key``; for EQUALITY, the identity used to find duplicates."""
    if key is SortKey.TITLE:
        return lambda music: music.title
    if key is SortKey.AUTHOR:
        return lambda music: music.author
    if key is SortKey.DURATION:
        return lambda music: music.duration
    if key is SortKey.EQUALITY:
        return lambda music: music.url
    return lambda music: music.info()