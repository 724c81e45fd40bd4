"""The connection to the music server and the state it keeps up to date."""

from __future__ import annotations

import argparse
import socket
import sys
from dataclasses import dataclass, field
from typing import Callable

from cloudmusic.accounts import login_request, online_notice
from cloudmusic.comments import NO_COMMENTS, CommentBoard
from cloudmusic.friends import Friend, Profile, parse_friend_songs, parse_friends, parse_profile
from cloudmusic.music import Music
from cloudmusic.packet import (
    FIELD_SEPARATOR,
    SERVER_HOST,
    SERVER_PORT,
    TERMINATOR,
    Packet,
    PacketType,
    split_bundle,
)
from cloudmusic.songs import (
    PraiseState,
    parse_praise,
    parse_search_results,
    praise_query,
    search_request,
)

CONNECT_TIMEOUT = 30.0
_RECEIVE_SIZE = 4096


class NotLoggedInError(RuntimeError):
    """Raised when an action needs a logged-in user."""


def _to_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _field(fields: list[str], index: int) -> str:
    if index >= len(fields):
        raise ValueError(
            f"packet type {fields[0]!r} needs field {index}: {FIELD_SEPARATOR.join(fields)!r}"
        )
    return fields[index]


@dataclass
class Session:
    """What the client knows from the server's replies."""

    user_id: str = ""
    current_title: str = ""
    login_result: bool | None = None
    registered: bool = False
    transfer_requests: int = 0
    friends: list[Friend] = field(default_factory=list)
    profile: Profile | None = None
    search_results: list[Music] = field(default_factory=list)
    praise: PraiseState | None = None
    comments: CommentBoard = field(default_factory=CommentBoard)
    friend_songlists: str = ""
    friend_songs: list[Music] = field(default_factory=list)

    @property
    def logged_in(self) -> bool:
        """Whether the last login succeeded."""
        return self.login_result is True

    def require_login(self) -> None:
        """Raise NotLoggedInError unless the user is logged in."""
        if not self.logged_in:
            raise NotLoggedInError("请登录")

    def handle(self, text: str) -> list[Packet]:
        """Apply a received buffer and return the packets to send in reply."""
        replies: list[Packet] = []
        for chunk in split_bundle(text):
            replies.extend(self._dispatch(chunk.split(FIELD_SEPARATOR)))
        return replies

    def _dispatch(self, fields: list[str]) -> list[Packet]:
        kind = _to_int(fields[0])
        if kind == PacketType.DOWNLOAD:
            self.transfer_requests += 1
        elif kind == PacketType.LOGIN_INFO:
            self.friends = parse_friends(_field(fields, 1))
            self.profile = parse_profile(_field(fields, 4))
        elif kind == PacketType.PROFILE:
            self.profile = parse_profile(_field(fields, 1))
        elif kind == PacketType.LOGIN:
            return self._login_reply(_field(fields, 1))
        elif kind == PacketType.REGISTER:
            if _to_int(_field(fields, 1)) == 0:
                self.registered = True
        elif kind == PacketType.SEARCH:
            self.search_results = parse_search_results(_field(fields, 1))
        elif kind == PacketType.PRAISE_QUERY:
            self.praise = parse_praise(_field(fields, 1))
        elif kind == PacketType.COMMENT_LIST:
            text = _field(fields, 1)
            if text != NO_COMMENTS:
                self.comments.load(text)
                self.comments.user_id = self.user_id
        elif kind == PacketType.FRIEND_SONGLISTS:
            self.friend_songlists = _field(fields, 1)
        elif kind == PacketType.FRIEND_SONGS:
            self.friend_songs = parse_friend_songs(_field(fields, 1))
        return []

    def _login_reply(self, status: str) -> list[Packet]:
        if _to_int(status) != 0:
            self.login_result = False
            return []
        self.login_result = True
        replies = [online_notice(self.user_id)]
        if self.current_title:
            replies.append(praise_query(self.current_title, self.user_id))
        return replies


class Client:
    """A TCP connection to the server feeding a session."""

    def __init__(
        self,
        host: str = SERVER_HOST,
        port: int = SERVER_PORT,
        session: Session | None = None,
        timeout: float = CONNECT_TIMEOUT,
    ) -> None:
        self.host = host
        self.port = port
        self.session = session if session is not None else Session()
        self.timeout = timeout
        self._socket: socket.socket | None = None

    def __enter__(self) -> "Client":
        self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def connect(self) -> None:
        """Open the connection to the server."""
        self.close()
        self._socket = socket.create_connection((self.host, self.port), timeout=self.timeout)

    def close(self) -> None:
        """Close the connection if it is open."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def _connected(self) -> socket.socket:
        if self._socket is None:
            raise ConnectionError("not connected to the server")
        return self._socket

    def send(self, packet: Packet) -> None:
        """Send one packet."""
        self._connected().sendall(packet.to_bytes())

    def receive(self) -> list[Packet]:
        """Read what the server sent, apply it and send the replies it calls for."""
        data = self._connected().recv(_RECEIVE_SIZE)
        if not data:
            raise ConnectionError("the server closed the connection")
        text = data.replace(TERMINATOR, b"").decode("utf-8", errors="replace")
        replies = self.session.handle(text)
        for reply in replies:
            self.send(reply)
        return replies


def _wait(client: Client, done: Callable[[], bool]) -> None:
    while not done():
        client.receive()


def main(argv: list[str] | None = None) -> int:
    """Log in to the server and optionally search it for songs."""
    parser = argparse.ArgumentParser(prog="cloudmusic", description="Music server client.")
    parser.add_argument("user_id")
    parser.add_argument("password")
    parser.add_argument("search", nargs="*", help="text to search for")
    parser.add_argument("--host", default=SERVER_HOST)
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument("--timeout", type=float, default=CONNECT_TIMEOUT)
    args = parser.parse_args(argv)

    session = Session(user_id=args.user_id)
    try:
        with Client(args.host, args.port, session, args.timeout) as client:
            client.send(login_request(args.user_id, args.password))
            _wait(client, lambda: session.login_result is not None)
            if not session.logged_in:
                print("登录失败", file=sys.stderr)
                return 1
            print("登录成功")
            if args.search:
                before = session.search_results
                client.send(search_request(" ".join(args.search), args.user_id))
                _wait(client, lambda: session.search_results is not before)
                for music in session.search_results:
                    print(f"{music.title} - {music.author}")
    except OSError as error:
        print(f"connection error: {error}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())