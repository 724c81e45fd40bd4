# cloudmusic

A music library and playback-state package with a client for a shared music
server. It keeps song lists in an SQLite database, stores a background
setting in an INI file, tracks the play queue and play mode, and speaks the
server's `#`-separated packet protocol for logging in, registering,
searching, downloading, uploading, comments, likes and friends' song lists.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The command

```
cloudmusic USER_ID PASSWORD [SEARCH ...] [--host HOST] [--port PORT] [--timeout SECONDS]
```

`cloudmusic.client.main` connects to the server (by default
`192.168.43.88`, port `8520`), sends a login packet and waits for the reply.
On success it prints `登录成功`; any words given after the password are
joined and sent as a search, and each result is printed as
`title - author`. It exits with 1 when the login is refused and 2 on a
connection error.

## Using the library

### Packets (`cloudmusic.packet`)

Every message is a `Packet` of eight fields joined by `#`; on the wire it is
UTF-8 followed by a `0xff` byte. `PacketType` names the type codes.

```python
from cloudmusic.packet import Packet, split_bundle

packet = Packet.parse("0######0#")
packet.encode()     # "0######0#"
packet.to_bytes()   # b"0######0#\xff"

split_bundle("17#a$b#...+*+18#1$3#...")   # one packet's text per part
```

`Packet.parse` raises `ValueError` when fewer than eight fields are present.

### Songs (`cloudmusic.music`)

```python
from cloudmusic.music import Music, SortKey, format_time, sort_key

format_time(65000)  # "01:05"
```

`Music.info()` gives the line shown in a list, `Music.lyric_file()` the path
of the `.lrc` file beside a local audio file (`""` for non-file URLs), and
`Music.detail()` a multi-line description. `sort_key(SortKey.TITLE)` and
friends return key functions; `SortKey.EQUALITY` gives the URL used to spot
duplicates.

### Song lists (`cloudmusic.library`)

```python
from cloudmusic.library import MusicDatabase, MusicList

with MusicDatabase("Music.db") as db:
    favourites = MusicList("FavorMusic", database=db)
    favourites.load()
    favourites.add(Music(url="file:///music/a.mp3", title="A"))
    favourites.sort_by(SortKey.AUTHOR)
    favourites.neaten()
```

`MusicDatabase` creates the `MusicInfo` and `MusicLists` tables when missing
and stores list names with `save_list_names` / `list_names`. A `MusicList`
writes each change back to the database unless `persistent` is false.
`add_files(paths, reader)` keeps only `.mp3`, `.mpga` and `.flac` files and
builds each song with the `reader` you supply; `remove`, `clear`,
`folder_of`, `labels` and `select(flags)` round it off.

### Settings (`cloudmusic.settings`)

`Settings(path)` keeps the background image in `BJUT_Cloud_Music.ini`.
`background()` falls back to, and stores, the default when the stored file
is not a PNG, JPEG, GIF or BMP image; `set_background(path)` reports whether
the image was accepted; `style_sheet()` returns the window style sheet.

### Play queue (`cloudmusic.player`)

`Playlist` holds the queued songs, the current index, a `PlayState` and a
`PlayMode`. `toggle()` plays or pauses, `next()` / `previous()` move as the
mode decides, `cycle_mode()` steps through loop, random and repeat-one, and
`remove(pos)` keeps the current song selected where it can.

### Server requests

- `cloudmusic.accounts`: `Registration` (raises `RegistrationError` for an
  incomplete form or mismatched passwords), `login_request`,
  `online_notice`, `profile_update`, `parse_assigned_id`.
- `cloudmusic.songs`: `search_request`, `download_request`, `download_url`,
  `upload_request`, `praise_query`, `praise_toggle`,
  `parse_search_results`, `parse_praise` and `PraiseState`.
- `cloudmusic.comments`: `comment_post`, `comment_list`, `comment_delete`,
  `parse_comments` and `CommentBoard`, whose `delete_request` raises
  `PermissionError` for another user's comment.
- `cloudmusic.friends`: `parse_friends`, `parse_profile`,
  `parse_songlists`, `parse_friend_songs`, `friend_songlists_request`,
  `friend_songs_request`, with `Friend` and `Profile`.

`cloudmusic.client.Session.handle(text)` applies a received bundle to the
session state and returns the packets to send back; `require_login()`
raises `NotLoggedInError` before login. `Client` wraps the TCP connection
with `connect`, `send`, `receive` and `close`, and works as a context
manager.

## What it does not do

There is no graphical interface and no audio output: `Playlist` only keeps
track of what would be playing. Lyric files are located (`Music.lyric_file`)
but not read or parsed. Song metadata is not read from audio files; the
caller supplies it through the `reader` given to `MusicList.add_files`. File
transfers that the server announces are counted in the session, not carried
out.