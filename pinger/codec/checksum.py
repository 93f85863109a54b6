# pinger/codec/checksum.py
"""Internet Checksum (RFC 1071)."""


def compute_checksum(data: bytes) -> int:
    """
    One's-complement of the one's-complement sum of all 16-bit words in data.
    Words are read two bytes at a time, high byte first; an odd trailing byte
    is the high byte of a zero-padded word.
    """
    total = 0
    end = len(data) - (len(data) % 2)
    for i in range(0, end, 2):
        total += (data[i] << 8) + data[i + 1]

    if end < len(data):
        total += data[-1] << 8

    # fold carries until nothing is left above bit 16
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)

    return ~total & 0xFFFF


def is_valid_checksum(data: bytes) -> bool:
    return compute_checksum(data) == 0
