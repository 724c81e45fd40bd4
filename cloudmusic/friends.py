"""Friends, user profiles and friends' song lists."""

from __future__ import annotations

from dataclasses import dataclass

from cloudmusic.music import Music
from cloudmusic.packet import Packet, PacketType

INFO_SEPARATOR = "$"
FRIEND_SEPARATOR = "|"

FRIEND_ALBUM = "Friend"
FRIEND_SONGLIST_ALBUM = "FriendSongList"
FRIEND_SONG_ALBUM = "FriendSong"
PLACEHOLDER_URL = "fake url"
PLACEHOLDER_BIT_RATE = 8888
FRIEND_SONG_AUTHOR = " "

_FRIEND_FIELDS = 3
_PROFILE_FIELDS = 6


@dataclass(frozen=True)
class Friend:
    """A friend of the user: id, display name and online status."""

    user_id: str
    name: str
    status: str

    def as_music(self) -> Music:
        """Return the list entry the friend is shown as."""
        return Music(
            url=self.status,
            title=self.name,
            author=self.user_id,
            duration=0,
            album_title=FRIEND_ALBUM,
            audio_bit_rate=PLACEHOLDER_BIT_RATE,
        )


@dataclass
class Profile:
    """The user details the server sends after login or a profile change."""

    name: str = ""
    user_id: str = ""
    gender: str = ""
    password: str = ""
    phone: str = ""
    email: str = ""


def parse_friends(text: str) -> list[Friend]:
    """Parse a friend list: '|'-separated 'id$name$status' entries.

    The last entry is the user's own and is left out.
    """
    entries = text.split(FRIEND_SEPARATOR)[:-1]
    friends = []
    for entry in entries:
        parts = entry.split(INFO_SEPARATOR)
        if len(parts) < _FRIEND_FIELDS:
            raise ValueError(f"friend needs {_FRIEND_FIELDS} fields: {entry!r}")
        friends.append(Friend(user_id=parts[0], name=parts[1], status=parts[2]))
    return friends


def parse_profile(text: str) -> Profile:
    """Parse 'name$id$gender$password$phone$email' into a profile."""
    parts = text.split(INFO_SEPARATOR)
    if len(parts) < _PROFILE_FIELDS:
        raise ValueError(f"profile needs {_PROFILE_FIELDS} fields: {text!r}")
    name, user_id, gender, secret_value, phone, email = parts[:_PROFILE_FIELDS]
    return Profile(
        name=name,
        user_id=user_id,
        gender=gender,
        password=secret_value,
        phone=phone,
        email=email,
    )


def parse_songlists(text: str, friend_id: str) -> list[Music]:
    """Parse the '$'-separated names of a friend's song lists into list entries."""
    return [
        Music(
            url=PLACEHOLDER_URL,
            title=name,
            author=friend_id,
            duration=0,
            album_title=FRIEND_SONGLIST_ALBUM,
            audio_bit_rate=PLACEHOLDER_BIT_RATE,
        )
        for name in text.split(INFO_SEPARATOR)
    ]


def parse_friend_songs(text: str) -> list[Music]:
    """Parse the '$'-separated song titles of a friend's song list into list entries."""
    return [
        Music(
            url=PLACEHOLDER_URL,
            title=title,
            author=FRIEND_SONG_AUTHOR,
            duration=0,
            album_title=FRIEND_SONG_ALBUM,
            audio_bit_rate=PLACEHOLDER_BIT_RATE,
        )
        for title in text.split(INFO_SEPARATOR)
    ]


def friend_songlists_request(friend_id: str, user_id: str) -> Packet:
    """Return the packet asking for the song lists of ``friend_id``."""
    return Packet(type=PacketType.FRIEND_SONGLISTS, info=friend_id, name=user_id)


def friend_songs_request(songlist: str, friend_id: str) -> Packet:
    """Return the packet asking for the songs in ``friend_id``'s list ``songlist``."""
    return Packet(type=PacketType.FRIEND_SONGS, info=songlist, name=friend_id)