"""Wire packets exchanged with the music server."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

SERVER_HOST = "192.168.43.88"
CLIENT_HOST = "192.168.43.80"
SERVER_PORT = 8520
TRANSFER_PORT = 8888

FIELD_SEPARATOR = "#"
BUNDLE_SEPARATOR = "+*+"
TERMINATOR = b"\xff"
FIELD_COUNT = 8


class PacketType(IntEnum):
    """Packet type codes understood by the server."""

    ONLINE = 0
    UPLOAD = 2
    DOWNLOAD = 3
    FRIENDS = 9
    LOGIN_INFO = 10
    PROFILE = 11
    LOGIN = 15
    REGISTER = 16
    SEARCH = 17
    PRAISE_QUERY = 18
    COMMENT_LIST = 19
    PRAISE = 20
    COMMENT_POST = 21
    COMMENT_DELETE = 22
    UNPRAISE = 23
    FRIEND_SONGLISTS = 30
    FRIEND_SONGS = 31


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


@dataclass
class Packet:
    """One message: eight '#'-separated fields."""

    type: int = 0
    info: str = ""
    timer: str = ""
    name: str = ""
    file_name: str = ""
    want_send_to: str = ""
    size: int = 0
    ip: str = ""
    port: int = 0

    @classmethod
    def parse(cls, text: str) -> "Packet":
        """Build a packet from its text form; numeric fields that do not parse become 0."""
        fields = text.split(FIELD_SEPARATOR)
        if len(fields) < FIELD_COUNT:
            raise ValueError(
                f"packet needs {FIELD_COUNT} fields, got {len(fields)}: {text!r}"
            )
        type_, info, timer, name, file_name, want_send_to, size, ip = fields[:FIELD_COUNT]
        return cls(
            type=_to_int(type_),
            info=info,
            timer=timer,
            name=name,
            file_name=file_name,
            want_send_to=want_send_to,
            size=_to_int(size),
            ip=ip,
        )

    def encode(self) -> str:
        """Return the text form of the packet."""
        return FIELD_SEPARATOR.join(
            [
                str(int(self.type)),
                self.info,
                self.timer,
                self.name,
                self.file_name,
                self.want_send_to,
                str(self.size),
                self.ip,
            ]
        )

    def to_bytes(self) -> bytes:
        """Return the UTF-8 bytes sent on the socket, terminator included."""
        return self.encode().encode("utf-8") + TERMINATOR


def split_bundle(text: str) -> list[str]:
    """Split a received buffer into the packets it carries."""
    return text.split(BUNDLE_SEPARATOR)