"""Song comments: requests to the server and parsing of its replies."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from cloudmusic.packet import Packet, PacketType

INFO_SEPARATOR = "$"
COMMENT_SEPARATOR = "|"
NO_COMMENTS = "none"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_PLACEHOLDER = "0"
_COMMENT_FIELDS = 5


@dataclass(frozen=True)
class Comment:
    """One comment left on a song."""

    comment_id: str
    content: str
    time: str
    music_name: str
    user_id: str

    def label(self) -> str:
        """Return the text shown for the comment in the list."""
        return f"user:{self.user_id}   time:{self.time}\n{self.content}"


def parse_comments(text: str) -> list[Comment]:
    """Parse the comment list the server sends; 'none' means there are no comments."""
    if text == NO_COMMENTS:
        return []
    comments = []
    for entry in text.split(COMMENT_SEPARATOR):
        parts = entry.split(INFO_SEPARATOR)
        if len(parts) < _COMMENT_FIELDS:
            raise ValueError(f"comment needs {_COMMENT_FIELDS} fields: {entry!r}")
        comment_id, content, time, music_name, user_id = parts[:_COMMENT_FIELDS]
        comments.append(Comment(comment_id, content, time, music_name, user_id))
    return comments


def _query(type_: PacketType, info: str) -> Packet:
    return Packet(
        type=type_,
        info=info,
        timer=_PLACEHOLDER,
        name=_PLACEHOLDER,
        file_name=_PLACEHOLDER,
        want_send_to=_PLACEHOLDER,
        size=0,
        ip=_PLACEHOLDER,
    )


def comment_post(
    content: str, timestamp: datetime | str, music_name: str, user_id: str
) -> Packet:
    """Return the packet that posts ``content`` on ``music_name`` as ``user_id``."""
    if isinstance(timestamp, datetime):
        timestamp = timestamp.strftime(TIMESTAMP_FORMAT)
    info = INFO_SEPARATOR.join(["1", content, timestamp, music_name, user_id])
    return Packet(type=PacketType.COMMENT_POST, info=info)


def comment_list(music_name: str) -> Packet:
    """Return the packet asking for the comments on ``music_name``."""
    return _query(PacketType.COMMENT_LIST, music_name)


def comment_delete(comment_id: str) -> Packet:
    """Return the packet deleting the comment ``comment_id``."""
    return _query(PacketType.COMMENT_DELETE, comment_id)


@dataclass
class CommentBoard:
    """The comments shown for one song, seen by one user."""

    music_name: str = ""
    user_id: str = ""
    comments: list[Comment] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.comments)

    def __iter__(self):
        return iter(self.comments)

    def load(self, text: str) -> None:
        """Replace the shown comments with those in a server reply."""
        self.comments = parse_comments(text)

    def delete_request(self, index: int) -> Packet:
        """Remove the user's own comment at ``index`` and return the packet deleting it."""
        if not 0 <= index < len(self.comments):
            raise IndexError(f"no comment at position {index}")
        comment = self.comments[index]
        if comment.user_id != self.user_id:
            raise PermissionError("非本人发送的评论")
        del self.comments[index]
        return comment_delete(comment.comment_id)