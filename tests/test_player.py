import random

import pytest

from cloudmusic.music import Music
from cloudmusic.player import PlayMode, Playlist, PlayState


@pytest.fixture
def songs():
    return [Music(url=f"file:///m/{name}.mp3", title=name) for name in "abcd"]


def test_mode_cycle_and_labels():
    assert PlayMode.LOOP.next_mode() is PlayMode.RANDOM
    assert PlayMode.RANDOM.next_mode() is PlayMode.CURRENT_ITEM_IN_LOOP
    assert PlayMode.CURRENT_ITEM_IN_LOOP.next_mode() is PlayMode.LOOP
    assert PlayMode.RANDOM.label == "随机播放"
    assert PlayMode.CURRENT_ITEM_IN_LOOP.label == "单曲循环"
    assert PlayMode.LOOP.label == "顺序播放"


def test_cycle_mode_returns_to_start():
    playlist = Playlist()
    seen = [playlist.cycle_mode() for _ in range(3)]
    assert seen == [PlayMode.RANDOM, PlayMode.CURRENT_ITEM_IN_LOOP, PlayMode.LOOP]
    assert playlist.mode is PlayMode.LOOP


def test_toggle_from_stopped_plays_first(songs):
    playlist = Playlist()
    for song in songs:
        playlist.add(song)
    assert playlist.toggle() is PlayState.PLAYING
    assert playlist.current() is songs[0]
    assert playlist.toggle() is PlayState.PAUSED
    assert playlist.toggle() is PlayState.PLAYING


def test_toggle_on_empty_queue_stays_stopped():
    playlist = Playlist()
    assert playlist.toggle() is PlayState.STOPPED
    assert playlist.current() is None


def test_loop_next_wraps_around(songs):
    playlist = Playlist()
    playlist.replace(songs, len(songs) - 1)
    assert playlist.next() is songs[0]
    assert playlist.previous() is songs[-1]


def test_previous_from_first_goes_to_last(songs):
    playlist = Playlist()
    playlist.replace(songs, 0)
    assert playlist.previous() is songs[-1]


def test_next_resets_position(songs):
    playlist = Playlist()
    playlist.replace(songs, 0)
    playlist.position = 5000
    playlist.next()
    assert playlist.position == 0
    assert playlist.current() is songs[1]


def test_current_item_in_loop_keeps_song(songs):
    playlist = Playlist(mode=PlayMode.CURRENT_ITEM_IN_LOOP)
    playlist.replace(songs, 2)
    assert playlist.next() is songs[2]
    assert playlist.previous() is songs[2]


def test_random_mode_picks_queued_song(songs):
    playlist = Playlist(mode=PlayMode.RANDOM, rng=random.Random(7))
    playlist.replace(songs, 0)
    picks = [playlist.next() for _ in range(20)]
    assert all(pick in songs for pick in picks)


def test_next_on_empty_queue_returns_none():
    assert Playlist().next() is None


def test_replace_plays_chosen_song(songs):
    playlist = Playlist()
    assert playlist.replace(songs, 1) is songs[1]
    assert playlist.state is PlayState.PLAYING
    assert list(playlist) == songs


def test_replace_rejects_bad_index(songs):
    with pytest.raises(IndexError):
        Playlist().replace(songs, len(songs))


def test_remove_before_current_keeps_song_and_position(songs):
    playlist = Playlist()
    playlist.replace(songs, 2)
    playlist.position = 1234
    playlist.remove(0)
    assert playlist.current() is songs[2]
    assert playlist.position == 1234
    assert playlist.state is PlayState.PLAYING
    assert len(playlist) == len(songs) - 1


def test_remove_after_current_keeps_song(songs):
    playlist = Playlist()
    playlist.replace(songs, 1)
    playlist.remove(3)
    assert playlist.current() is songs[1]


def test_remove_current_moves_to_following(songs):
    playlist = Playlist()
    playlist.replace(songs, 1)
    playlist.remove(1)
    assert playlist.current() is songs[2]


def test_remove_last_current_stops(songs):
    playlist = Playlist()
    playlist.replace(songs, len(songs) - 1)
    playlist.remove(len(songs) - 1)
    assert playlist.current() is None
    assert playlist.state is PlayState.STOPPED


def test_remove_out_of_range(songs):
    playlist = Playlist()
    playlist.replace(songs, 0)
    with pytest.raises(IndexError):
        playlist.remove(len(songs))


def test_clear_stops(songs):
    playlist = Playlist()
    playlist.replace(songs, 0)
    playlist.clear()
    assert len(playlist) == 0
    assert playlist.state is PlayState.STOPPED
    assert playlist.current() is None