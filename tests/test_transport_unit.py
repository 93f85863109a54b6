# tests/test_transport_unit.py
import errno
import socket

import pytest

from pinger.codec.packet import ICMP_ECHO_REPLY, decode, encode_echo_request
from pinger.codec.ipv4 import read_ttl, strip_ip_header
from pinger.config import Settings
from pinger.errors import ConnectError, ResolutionError
from pinger.session.controller import ProbeSession
from pinger.transport import raw
from pinger.transport.base import unreach
from pinger.transport.fake import FakeTransport


class FakeSocket:
    """Stands in for socket.socket inside RawSocketTransport."""
    connect_error = None
    recv_result = b""

    def __init__(self, family, type_, proto):
        self.args = (family, type_, proto)
        self.timeouts = []
        self.sent = []
        self.closed = False

    def settimeout(self, value):
        self.timeouts.append(value)

    def connect(self, addr):
        if self.connect_error is not None:
            raise self.connect_error
        self.addr = addr

    def send(self, buffer):
        self.sent.append(buffer)
        return len(buffer)

    def recv(self, size):
        if isinstance(self.recv_result, BaseException):
            raise self.recv_result
        return self.recv_result

    def close(self):
        self.closed = True


@pytest.fixture
def fake_socket(monkeypatch):
    class Sock(FakeSocket):
        instances = []

        def __init__(self, *args):
            super().__init__(*args)
            Sock.instances.append(self)

    monkeypatch.setattr(raw.socket, "socket", Sock)
    return Sock


def test_fake_transport_script_then_timeout():
    t = FakeTransport(script=[b"\x01\x02", unreach()])
    assert t.receive(1000) == {"status": "data", "data": b"\x01\x02"}
    assert t.receive(1000)["status"] == "unreach"
    assert t.receive(1000)["status"] == "timeout"


def test_fake_transport_echo_answers_last_request():
    t = FakeTransport(echo=True, ttl=99)
    request = encode_echo_request(4, 2, b"hello")
    assert t.send(request)
    reception = t.receive(1000)
    assert reception["status"] == "data"
    assert read_ttl(reception["data"]) == 99
    reply = decode(strip_ip_header(reception["data"])).packet
    assert reply.type == ICMP_ECHO_REPLY
    assert (reply.identifier, reply.sequence, reply.payload) == (4, 2, b"hello")


def test_fake_transport_closes_on_exit():
    with FakeTransport() as t:
        assert not t.closed
    assert t.closed


def test_resolve_literal_address_skips_lookup(monkeypatch):
    def boom(*args, **kw):
        raise AssertionError("lookup not expected")
    monkeypatch.setattr(raw.socket, "getaddrinfo", boom)
    assert raw.resolve("192.0.2.7") == "192.0.2.7"


def test_resolve_hostname(monkeypatch):
    monkeypatch.setattr(raw.socket, "getaddrinfo",
                        lambda host, port, family: [(socket.AF_INET, socket.SOCK_RAW, 0, "", ("198.51.100.3", 0))])
    assert raw.resolve("example.test") == "198.51.100.3"


def test_resolve_failure_raises(monkeypatch):
    def fail(*args, **kw):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
    monkeypatch.setattr(raw.socket, "getaddrinfo", fail)
    with pytest.raises(ResolutionError) as exc:
        raw.resolve("no-such-host.invalid")
    assert exc.value.host == "no-such-host.invalid"


def test_raw_transport_connects_and_sends(fake_socket):
    with raw.RawSocketTransport("192.0.2.1", timeout_ms=500) as t:
        sock = fake_socket.instances[0]
        assert sock.args == (socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
        assert sock.addr == ("192.0.2.1", 0)
        assert sock.timeouts == [0.5]
        assert t.send(b"abc")
        assert sock.sent == [b"abc"]
    assert sock.closed


def test_raw_transport_receive_signals(fake_socket):
    t = raw.RawSocketTransport("192.0.2.1")
    sock = fake_socket.instances[0]

    sock.recv_result = b"\x45" * 28
    assert t.receive(200) == {"status": "data", "data": b"\x45" * 28}
    assert sock.timeouts[-1] == 0.2

    sock.recv_result = socket.timeout("timed out")
    assert t.receive(200)["status"] == "timeout"

    sock.recv_result = OSError(errno.EHOSTUNREACH, "No route to host")
    assert t.receive(200)["status"] == "unreach"

    # using a closed socket is a caller bug, not a network condition
    sock.recv_result = OSError(errno.EBADF, "Bad file descriptor")
    with pytest.raises(OSError):
        t.receive(200)


@pytest.mark.parametrize("code", [errno.ENETDOWN, errno.ECONNRESET, errno.EPROTO, errno.EMSGSIZE])
def test_raw_transport_other_network_errors_are_unreachable(fake_socket, code):
    """Any network-caused receive error becomes a reception, never an exception."""
    t = raw.RawSocketTransport("192.0.2.1")
    fake_socket.instances[0].recv_result = OSError(code, "network error")
    assert t.receive(200) == {"status": "unreach", "data": None}


def test_raw_transport_send_failure(fake_socket):
    t = raw.RawSocketTransport("192.0.2.1")

    def refuse(buffer):
        raise OSError(errno.ENETUNREACH, "Network is unreachable")
    fake_socket.instances[0].send = refuse
    assert t.send(b"abc") is False


def test_raw_transport_connect_failure_closes_socket(fake_socket):
    fake_socket.connect_error = OSError(errno.ENETUNREACH, "Network is unreachable")
    with pytest.raises(ConnectError):
        raw.RawSocketTransport("192.0.2.1")
    assert fake_socket.instances[0].closed


def test_raw_transport_needs_privileges(monkeypatch):
    def denied(*args):
        raise PermissionError(errno.EPERM, "Operation not permitted")
    monkeypatch.setattr(raw.socket, "socket", denied)
    with pytest.raises(ConnectError) as exc:
        raw.RawSocketTransport("192.0.2.1")
    assert "CAP_NET_RAW" in str(exc.value)


def test_session_survives_network_down(fake_socket):
    """A run over a socket whose network went down reports every probe and finishes."""
    t = raw.RawSocketTransport("192.0.2.1")
    fake_socket.instances[0].recv_result = OSError(errno.ENETDOWN, "Network is down")
    summary = ProbeSession(t, Settings(count=2, interval_s=0)).run()
    assert [o["status"] for o in summary["outcomes"]] == ["unreachable", "unreachable"]
