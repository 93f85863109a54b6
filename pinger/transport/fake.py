# pinger/transport/fake.py
import dataclasses
import ipaddress
import struct
from collections import deque

from pinger.codec.checksum import compute_checksum
from pinger.codec.packet import ICMP_ECHO_REPLY, decode, encode
from pinger.transport.base import Transport, data, timeout

IPV4_HEADER = struct.Struct("!BBHHHBBHII")
IPPROTO_ICMP = 1


def wrap_ipv4(icmp: bytes, src: str = "127.0.0.1", dst: str = "127.0.0.1", ttl: int = 64) -> bytes:
    """Prefix an ICMP message with a minimal 20-byte IPv4 header, as a raw socket would deliver it."""
    fields = [
        0x45, 0, IPV4_HEADER.size + len(icmp), 0, 0, ttl, IPPROTO_ICMP, 0,
        int(ipaddress.IPv4Address(src)), int(ipaddress.IPv4Address(dst)),
    ]
    fields[7] = compute_checksum(IPV4_HEADER.pack(*fields))
    return IPV4_HEADER.pack(*fields) + icmp


def echo_reply_for(request: bytes, src: str = "127.0.0.1", ttl: int = 64) -> bytes:
    """Raw reception a compliant responder would send back for request."""
    packet = decode(request).packet
    if packet is None:
        raise ValueError("request does not decode")
    return wrap_ipv4(encode(dataclasses.replace(packet, type=ICMP_ECHO_REPLY)), src=src, ttl=ttl)


class FakeTransport(Transport):
    """
    script: iterable of Reception dicts (or raw bytes, shorthand for a "data"
    reception) handed out one per receive() call. When the script runs dry
    the transport answers the last request if echo=True, else times out.
    """
    def __init__(self, script=None, echo: bool = False, address: str = "127.0.0.1",
                 ttl: int = 64, send_ok: bool = True):
        self.address = address
        self.echo = echo
        self.ttl = ttl
        self.send_ok = send_ok
        self.sent = []
        self.timeouts_seen = []
        self.closed = False
        self.script = deque()
        for item in script or ():
            self.script.append(data(item) if isinstance(item, (bytes, bytearray)) else item)

    def send(self, buffer: bytes) -> bool:
        self.sent.append(bytes(buffer))
        return self.send_ok

    def receive(self, timeout_ms: int):
        self.timeouts_seen.append(timeout_ms)
        if self.script:
            return self.script.popleft()
        if self.echo and self.sent:
            return data(echo_reply_for(self.sent[-1], src=self.address, ttl=self.ttl))
        return timeout()

    def close(self) -> None:
        self.closed = True
