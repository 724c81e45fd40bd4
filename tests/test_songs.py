import pytest

from cloudmusic.music import Music
from cloudmusic.packet import Packet, PacketType
from cloudmusic.songs import (
    download_request,
    download_url,
    parse_praise,
    parse_search_results,
    praise_query,
    praise_toggle,
    search_request,
    upload_request,
)


def test_search_request_round_trip():
    packet = Packet.parse(search_request("river", "u1").encode())
    assert packet.type == PacketType.SEARCH
    assert (packet.info, packet.name, packet.file_name) == ("river", "u1", "")


def test_search_request_empty_rejected():
    with pytest.raises(ValueError):
        search_request("", "u1")


def test_download_request_fields():
    packet = download_request("river", "u1", "Moon")
    assert packet.type == PacketType.DOWNLOAD
    assert (packet.info, packet.name, packet.file_name) == ("river", "u1", "Moon")


def test_download_url():
    assert download_url("Moon") == "file:///D:/bjutmusic/Moon.mp3"


def test_upload_request_strips_hash_from_album():
    music = Music(url="file:///a/b.mp3", author="Ann", title="Song", album_title="A#B")
    packet = upload_request(music, "u1", "10.0.0.1", "b.mp3")
    parts = packet.info.split("$")
    assert parts[0] == "Song" and parts[1] == "Ann"
    assert parts[4] == "AB"
    assert parts[-1] == "file:///a/b.mp3"
    assert Packet.parse(packet.encode()).ip == "10.0.0.1"


def test_praise_query_wire_form():
    assert praise_query("Song", "u1").encode() == "18#Song#0#u1#0#0#0#0"


def test_praise_query_needs_title():
    with pytest.raises(ValueError):
        praise_query("", "u1")


def test_praise_toggle_types():
    assert praise_toggle("Song", "u1", liked=False).type == PacketType.PRAISE
    assert praise_toggle("Song", "u1", liked=True).type == PacketType.UNPRAISE


def test_parse_search_results():
    results = parse_search_results("One$Ann|Two$Bob")
    assert [m.title for m in results] == ["One", "Two"]
    assert [m.author for m in results] == ["Ann", "Bob"]
    assert all(m.duration == 120 and m.audio_bit_rate == 32000 for m in results)


def test_parse_search_results_bad_entry():
    with pytest.raises(ValueError):
        parse_search_results("OnlyTitle")


def test_parse_praise():
    state = parse_praise("1$5")
    assert state.liked is True
    assert state.count == "5"
    assert "dianzan1.png" in state.style_sheet
    assert parse_praise("0$5").liked is False


def test_parse_praise_short_reply():
    with pytest.raises(ValueError):
        parse_praise("1")