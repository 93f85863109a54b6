# pinger/codec/ipv4.py
# Fixed-offset reads on a raw IPv4 reception. Assumes a 20-byte header
# (no IP options); option parsing is out of scope.
from typing import Optional

IP_HEADER_SIZE = 20
ICMP_HEADER_SIZE = 8
TTL_OFFSET = 8


def has_ip_header(raw: bytes) -> bool:
    return len(raw) >= IP_HEADER_SIZE


def read_ttl(raw: bytes) -> Optional[int]:
    if not has_ip_header(raw):
        return None
    return raw[TTL_OFFSET]


def strip_ip_header(raw: bytes) -> bytes:
    return raw[IP_HEADER_SIZE:]


def reply_payload_size(raw: bytes) -> int:
    """Echoed payload length as ping reports it: total minus both fixed headers."""
    return len(raw) - IP_HEADER_SIZE - ICMP_HEADER_SIZE
