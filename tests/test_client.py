import socket
import threading

import pytest

from cloudmusic.accounts import online_notice
from cloudmusic.client import Client, NotLoggedInError, Session, main
from cloudmusic.packet import Packet, PacketType
from cloudmusic.songs import praise_query


def test_login_success_sends_online_notice():
    session = Session(user_id="u1")
    replies = session.handle("15#0#######")
    assert session.logged_in
    assert replies == [online_notice("u1")]
    session.require_login()


def test_login_success_queries_praise_of_current_song():
    session = Session(user_id="u1", current_title="Song")
    replies = session.handle("15#0#######")
    assert replies == [online_notice("u1"), praise_query("Song", "u1")]


def test_login_failure():
    session = Session(user_id="u1")
    assert session.handle("15#1#######") == []
    assert session.login_result is False
    with pytest.raises(NotLoggedInError):
        session.require_login()


def test_require_login_before_any_reply():
    with pytest.raises(NotLoggedInError):
        Session().require_login()


def test_search_results():
    session = Session()
    session.handle("17#Song A$Singer A|Song B$Singer B#")
    assert [music.title for music in session.search_results] == ["Song A", "Song B"]
    assert [music.author for music in session.search_results] == ["Singer A", "Singer B"]


def test_praise_reply():
    session = Session()
    session.handle("18#1$5#")
    assert session.praise.liked is True
    assert session.praise.count == "5"


def test_comment_reply_and_none():
    session = Session(user_id="u1")
    session.handle("19#c1$hello$2020-01-01 10:00:00$Song$u1#")
    assert session.comments.user_id == "u1"
    assert [comment.content for comment in session.comments] == ["hello"]
    session.handle("19#none#")
    assert len(session.comments) == 1


def test_bundle_of_packets():
    session = Session()
    session.handle("16#0#+*+31#one$two#+*+30#list1$list2#")
    assert session.registered
    assert [music.title for music in session.friend_songs] == ["one", "two"]
    assert session.friend_songlists == "list1$list2"


def test_login_info_sets_friends_and_profile():
    session = Session()
    session.handle("10#f1$Ann$1|me$Me$1###Ann$u1$f$secret$phone$a@example.com")
    assert [friend.user_id for friend in session.friends] == ["f1"]
    assert session.profile.email == "a@example.com"
    assert session.profile.user_id == "u1"


def test_profile_reply():
    session = Session()
    session.handle("11#Bob$u2$m$secret$phone$b@example.com#")
    assert session.profile.name == "Bob"
    assert session.profile.phone == "phone"


def test_download_reply_counts_transfers():
    session = Session()
    session.handle("3#x#######")
    assert session.transfer_requests == 1


def test_unknown_and_empty_packets_are_ignored():
    session = Session()
    assert session.handle("99#x+*+") == []
    assert session.login_result is None


def test_missing_field_raises():
    with pytest.raises(ValueError):
        Session().handle("18")


def test_send_without_connection():
    with pytest.raises(ConnectionError):
        Client().send(Packet(type=PacketType.SEARCH, info="x"))


def test_send_and_receive_over_socket():
    with socket.create_server(("127.0.0.1", 0)) as server:
        port = server.getsockname()[1]
        session = Session(user_id="u1")
        with Client("127.0.0.1", port, session, timeout=5) as client:
            conn, _ = server.accept()
            with conn:
                conn.settimeout(5)
                packet = Packet(type=PacketType.SEARCH, info="abc", name="u1")
                client.send(packet)
                assert conn.recv(4096) == packet.to_bytes()
                conn.sendall(b"15#0#######\xff")
                replies = client.receive()
                assert replies == [online_notice("u1")]
                assert conn.recv(4096) == online_notice("u1").to_bytes()
                assert session.logged_in


def test_receive_after_server_closes():
    with socket.create_server(("127.0.0.1", 0)) as server:
        port = server.getsockname()[1]
        with Client("127.0.0.1", port, timeout=5) as client:
            conn, _ = server.accept()
            conn.close()
            with pytest.raises(ConnectionError):
                client.receive()


def _serve(server, replies, received):
    conn, _ = server.accept()
    with conn:
        conn.settimeout(5)
        buffer = b""
        pending = list(replies)
        while pending:
            chunk = conn.recv(4096)
            if not chunk:
                break
            buffer += chunk
            *packets, buffer = buffer.split(b"\xff")
            for packet in packets:
                received.append(packet.decode("utf-8"))
                if pending and packet.startswith(pending[0][0]):
                    conn.sendall(pending.pop(0)[1])


def _run_main(replies, argv_tail):
    received = []
    with socket.create_server(("127.0.0.1", 0)) as server:
        server.settimeout(5)
        port = server.getsockname()[1]
        thread = threading.Thread(target=_serve, args=(server, replies, received))
        thread.start()
        code = main(["--host", "127.0.0.1", "--port", str(port), "--timeout", "5", *argv_tail])
        thread.join(5)
    return code, received


def test_main_logs_in_and_searches(capsys):
    replies = [
        (b"15#", b"15#0#######\xff"),
        (b"17#", "17#Song A$Singer A|Song B$Singer B#".encode("utf-8") + b"\xff"),
    ]
    code, received = _run_main(replies, ["u1", "password", "Song"])
    out = capsys.readouterr().out
    assert code == 0
    assert received[0].startswith("15#")
    assert any(packet == online_notice("u1").encode() for packet in received)
    assert out.index("Song A") < out.index("Song B")
    assert "Singer B" in out


def test_main_login_failure(capsys):
    code, received = _run_main([(b"15#", b"15#1#######\xff")], ["u1", "password"])
    assert code == 1
    assert len(received) == 1
    assert "登录失败" in capsys.readouterr().err


def test_main_connection_error(capsys):
    with socket.create_server(("127.0.0.1", 0)) as server:
        port = server.getsockname()[1]
    code = main(["--host", "127.0.0.1", "--port", str(port), "--timeout", "2", "u1", "password"])
    assert code == 2
    assert "connection error" in capsys.readouterr().err