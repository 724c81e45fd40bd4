"""Song search, download, upload and praise requests."""

from __future__ import annotations

from dataclasses import dataclass

from cloudmusic.music import Music
from cloudmusic.packet import CLIENT_HOST, Packet, PacketType

INFO_SEPARATOR = "$"
RESULT_SEPARATOR = "|"
DOWNLOAD_FOLDER_URL = "file:///D:/bjutmusic/"
UPLOAD_SINGER_ID = "22"
UPLOAD_CATEGORY = "type"

SEARCH_RESULT_URL = "1"
SEARCH_RESULT_DURATION = 120
SEARCH_RESULT_ALBUM = "null"
SEARCH_RESULT_BIT_RATE = 32000

PRAISED_ICON = ":/image/image/image/dianzan1.png"
UNPRAISED_ICON = ":/image/image/image/dianzan.png"

_PLACEHOLDER = "0"


@dataclass(frozen=True)
class PraiseState:
    """Whether the user likes the current song and how many likes it has."""

    liked: bool
    count: str

    @property
    def icon(self) -> str:
        """Return the resource path of the praise button image."""
        return PRAISED_ICON if self.liked else UNPRAISED_ICON

    @property
    def style_sheet(self) -> str:
        """Return the praise button style sheet."""
        return (
            f"QPushButton{{image: url({self.icon});border:none;"
            "color:rgb(255, 255, 255);}"
        )


def _praise_packet(type_: PacketType, title: str, user_id: str) -> Packet:
    return Packet(
        type=type_,
        info=title,
        timer=_PLACEHOLDER,
        name=user_id,
        file_name=_PLACEHOLDER,
        want_send_to=_PLACEHOLDER,
        size=0,
        ip=_PLACEHOLDER,
    )


def search_request(text: str, user_id: str) -> Packet:
    """Return the packet searching the server for ``text``."""
    if not text:
        raise ValueError("search text is empty")
    return Packet(type=PacketType.SEARCH, info=text, name=user_id)


def download_request(text: str, user_id: str, file_name: str) -> Packet:
    """Return the packet asking the server to send ``file_name``."""
    return Packet(type=PacketType.DOWNLOAD, info=text, name=user_id, file_name=file_name)


def download_url(file_name: str) -> str:
    """Return the URL a downloaded song is stored at."""
    return f"{DOWNLOAD_FOLDER_URL}{file_name}.mp3"


def upload_request(
    music: Music, user_id: str, client_ip: str = CLIENT_HOST, file_name: str = ""
) -> Packet:
    """Return the packet announcing the upload of ``music``."""
    info = INFO_SEPARATOR.join(
        [
            music.title,
            music.author,
            "0",
            UPLOAD_CATEGORY,
            music.album_title.replace("#", ""),
            UPLOAD_SINGER_ID,
            music.url,
        ]
    )
    return Packet(
        type=PacketType.UPLOAD,
        info=info,
        name=user_id,
        file_name=file_name,
        ip=client_ip,
    )


def praise_query(title: str, user_id: str) -> Packet:
    """Return the packet asking for the praise state of ``title``."""
    if not title:
        raise ValueError("no song title to query")
    return _praise_packet(PacketType.PRAISE_QUERY, title, user_id)


def praise_toggle(title: str, user_id: str, liked: bool) -> Packet:
    """Return the packet that likes ``title``, or withdraws the like when ``liked``."""
    type_ = PacketType.UNPRAISE if liked else PacketType.PRAISE
    return _praise_packet(type_, title, user_id)


def parse_search_results(text: str) -> list[Music]:
    """Parse search results: '|'-separated entries of 'title$author'."""
    results = []
    for entry in text.split(RESULT_SEPARATOR):
        parts = entry.split(INFO_SEPARATOR)
        if len(parts) < 2:
            raise ValueError(f"search result needs a title and an author: {entry!r}")
        results.append(
            Music(
                url=SEARCH_RESULT_URL,
                title=parts[0],
                author=parts[1],
                duration=SEARCH_RESULT_DURATION,
                album_title=SEARCH_RESULT_ALBUM,
                audio_bit_rate=SEARCH_RESULT_BIT_RATE,
            )
        )
    return results


def parse_praise(text: str) -> PraiseState:
    """Parse a praise reply: 'liked$count', where liked is '1' when the user likes it."""
    parts = text.split(INFO_SEPARATOR)
    if len(parts) < 2:
        raise ValueError(f"praise reply needs two fields: {text!r}")
    return PraiseState(liked=parts[0] == "1", count=parts[1])