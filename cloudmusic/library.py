"""Song lists and their SQLite storage."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Iterator
from urllib.parse import unquote, urlsplit

from cloudmusic.music import Music, SortKey, sort_key

DEFAULT_DATABASE = "Music.db"
AUDIO_SUFFIXES = frozenset({".mp3", ".mpga", ".flac"})

_CREATE_MUSIC_INFO = (
    "create table MusicInfo (name varchar(30), url varchar(200), author varchar(50), "
    "title varchar(50), duration bigint, albumTitle varchar(50), audioBitRate int)"
)
_CREATE_MUSIC_LISTS = "create table MusicLists (name varchar(30))"


class MusicDatabase:
    """The song and song-list tables, created when missing."""

    def __init__(self, path: str | os.PathLike[str] = DEFAULT_DATABASE) -> None:
        self.connection = sqlite3.connect(str(path))
        for table, create in (
            ("MusicInfo", _CREATE_MUSIC_INFO),
            ("MusicLists", _CREATE_MUSIC_LISTS),
        ):
            row = self.connection.execute(
                "select count(*) from sqlite_master where type='table' and name=?",
                (table,),
            ).fetchone()
            if row[0] == 0:
                self.connection.execute(create)
        self.connection.commit()

    def __enter__(self) -> "MusicDatabase":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the connection."""
        self.connection.close()

    def insert_music(self, list_name: str, music: Music) -> None:
        """Store ``music`` as a member of ``list_name``."""
        self.connection.execute(
            "insert into MusicInfo values (?, ?, ?, ?, ?, ?, ?)",
            (
                list_name,
                music.url,
                music.author,
                music.title,
                music.duration,
                music.album_title,
                music.audio_bit_rate,
            ),
        )
        self.connection.commit()

    def delete_list_music(self, list_name: str) -> None:
        """Remove every song stored for ``list_name``."""
        self.connection.execute("delete from MusicInfo where name = ?", (list_name,))
        self.connection.commit()

    def read_list(self, list_name: str) -> list[Music]:
        """Return the songs stored for ``list_name`` in insertion order."""
        rows = self.connection.execute(
            "select url, author, title, duration, albumTitle, audioBitRate "
            "from MusicInfo where name = ? order by rowid",
            (list_name,),
        )
        return [
            Music(
                url=url or "",
                author=author or "",
                title=title or "",
                duration=int(duration or 0),
                album_title=album or "",
                audio_bit_rate=int(bit_rate or 0),
            )
            for url, author, title, duration, album, bit_rate in rows
        ]

    def list_names(self) -> list[str]:
        """Return the names of the user's song lists."""
        rows = self.connection.execute("select name from MusicLists order by rowid")
        return [name for (name,) in rows]

    def save_list_names(self, names: Iterable[str]) -> None:
        """Replace the stored song-list names with ``names``."""
        self.connection.execute("delete from MusicLists")
        self.connection.executemany(
            "insert into MusicLists values (?)", [(name,) for name in names]
        )
        self.connection.commit()


def _as_url(path: str | os.PathLike[str]) -> str:
    text = os.fspath(path)
    if text.lower().startswith("file:"):
        return text
    return Path(text).absolute().as_uri()


def _is_audio(url: str) -> bool:
    return os.path.splitext(unquote(urlsplit(url).path))[1].lower() in AUDIO_SUFFIXES


@dataclass
class MusicList:
    """A named list of songs, mirrored to the database when persistent."""

    name: str = ""
    music: list[Music] = field(default_factory=list)
    database: MusicDatabase | None = None
    persistent: bool = True

    def __len__(self) -> int:
        return len(self.music)

    def __iter__(self) -> Iterator[Music]:
        return iter(self.music)

    @property
    def _stored(self) -> bool:
        return self.persistent and self.database is not None

    def _rewrite(self) -> None:
        if self._stored:
            self.database.delete_list_music(self.name)
            for music in self.music:
                self.database.insert_music(self.name, music)

    def add(self, music: Music) -> None:
        """Append a song."""
        self.music.append(music)
        if self._stored:
            self.database.insert_music(self.name, music)

    def add_files(
        self,
        paths: Iterable[str | os.PathLike[str]],
        reader: Callable[[str], Music],
    ) -> list[Music]:
        """Add the audio files among ``paths``, reading each with ``reader(url)``."""
        added = []
        for path in paths:
            url = _as_url(path)
            if not _is_audio(url):
                continue
            music = reader(url)
            self.add(music)
            added.append(music)
        return added

    def get(self, pos: int) -> Music:
        """Return the song at ``pos``."""
        if not 0 <= pos < len(self.music):
            raise IndexError(f"no song at position {pos}")
        return self.music[pos]

    def remove(self, pos: int) -> None:
        """Remove the song at ``pos``; a position out of range removes nothing."""
        if 0 <= pos < len(self.music):
            del self.music[pos]
        self._rewrite()

    def load(self) -> None:
        """Append the songs stored for this list."""
        if self.database is None:
            raise RuntimeError(f"song list {self.name!r} has no database")
        self.music.extend(self.database.read_list(self.name))

    def sort_by(self, key: SortKey) -> None:
        """Order the songs by ``key``."""
        self.music.sort(key=sort_key(key))
        self._rewrite()

    def neaten(self) -> None:
        """Sort by the default key and drop adjacent songs with the same URL."""
        self.music.sort(key=sort_key(SortKey.DEFAULT))
        identity = sort_key(SortKey.EQUALITY)
        unique: list[Music] = []
        for music in self.music:
            if not unique or identity(unique[-1]) != identity(music):
                unique.append(music)
        self.music = unique
        self._rewrite()

    def clear(self) -> None:
        """Remove every song."""
        self.music.clear()
        if self._stored:
            self.database.delete_list_music(self.name)

    def folder_of(self, pos: int) -> str:
        """Return the URL of the folder holding the song at ``pos``."""
        url = self.get(pos).url
        return url.replace(url.split("/")[-1], "")

    def labels(self) -> list[str]:
        """Return the display line of each song."""
        return [music.info() for music in self.music]

    def select(self, flags: Iterable[bool]) -> list[Music]:
        """Return the songs whose matching flag is true."""
        return [music for music, chosen in zip(self.music, flags) if chosen]