# pinger/codec/packet.py
import struct
from dataclasses import dataclass
from typing import Literal, Optional

from pinger.codec.checksum import compute_checksum, is_valid_checksum

ICMP_ECHO_REPLY = 0
ICMP_DEST_UNREACHABLE = 3
ICMP_ECHO_REQUEST = 8

HEADER = struct.Struct("!BBHHH")   # type, code, checksum, identifier, sequence
CHECKSUM_OFFSET = 2

DecodeError = Literal["checksum_invalid", "truncated"]


@dataclass(frozen=True)
class EchoPacket:
    type: int
    code: int
    identifier: int
    sequence: int
    payload: bytes

    @property
    def is_reply(self) -> bool:
        return self.type == ICMP_ECHO_REPLY

    @property
    def is_unreachable(self) -> bool:
        return self.type == ICMP_DEST_UNREACHABLE


@dataclass(frozen=True)
class DecodeResult:
    packet: Optional[EchoPacket] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _check_u16(name: str, value: int) -> None:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} must fit in 16 bits, got {value}")


def create_echo_request(identifier: int, sequence: int, payload: bytes = b"") -> EchoPacket:
    """Build an Echo Request value. Bad ranges or payload types are caller bugs and raise."""
    _check_u16("identifier", identifier)
    _check_u16("sequence", sequence)
    if not isinstance(payload, (bytes, bytearray, memoryview)):
        raise TypeError(f"payload must be bytes-like, got {type(payload).__name__}")
    return EchoPacket(ICMP_ECHO_REQUEST, 0, identifier, sequence, bytes(payload))


def encode(packet: EchoPacket) -> bytes:
    """
    Serialize packet to its wire form. The checksum field is packed as zero,
    the checksum of the whole buffer is computed, then written into bytes 2-3.
    """
    buf = bytearray(HEADER.pack(packet.type, packet.code, 0, packet.identifier, packet.sequence))
    buf += packet.payload
    struct.pack_into("!H", buf, CHECKSUM_OFFSET, compute_checksum(buf))
    return bytes(buf)


def encode_echo_request(identifier: int, sequence: int, payload: bytes = b"") -> bytes:
    return encode(create_echo_request(identifier, sequence, payload))


def decode(data: bytes) -> DecodeResult:
    """
    Parse an ICMP message (IP header already stripped).

    The checksum over the whole buffer must be zero before any field is read.
    Type and code are not checked here; the caller decides what it accepts.
    """
    if not is_valid_checksum(data):
        return DecodeResult(error="checksum_invalid")
    if len(data) < HEADER.size:
        return DecodeResult(error="truncated")

    itype, code, _csum, identifier, sequence = HEADER.unpack_from(data)
    return DecodeResult(packet=EchoPacket(itype, code, identifier, sequence, bytes(data[HEADER.size:])))
