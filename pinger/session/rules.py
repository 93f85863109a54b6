# pinger/session/rules.py
from pinger.codec.ipv4 import has_ip_header, read_ttl, reply_payload_size, strip_ip_header
from pinger.codec.packet import EchoPacket, decode
from pinger.schemas import ProbeOutcome, Reception


def matches(reply: EchoPacket, identifier: int, sequence: int) -> bool:
    return reply.identifier == identifier and reply.sequence == sequence


def classify(reception: Reception, identifier: int, sequence: int) -> ProbeOutcome:
    """
    Map one raw reception to an outcome for the request (identifier, sequence).
    Returns status plus ttl/size for matched replies; never raises on network data.
    """
    status = reception.get("status")
    if status == "timeout":
        return {"status": "no_reply", "detail": "request timed out"}
    if status == "unreach":
        return {"status": "unreachable", "detail": "destination unreachable"}

    raw = reception.get("data") or b""
    if not has_ip_header(raw):
        return {"status": "checksum_invalid", "detail": f"short reception ({len(raw)} bytes)"}

    result = decode(strip_ip_header(raw))
    if not result.ok:
        return {"status": "checksum_invalid", "detail": result.error}

    reply = result.packet
    # ICMP errors are not parsed further, they only mark the probe as undelivered
    if reply.is_unreachable:
        return {"status": "unreachable", "detail": f"icmp destination unreachable (code {reply.code})"}

    # e.g. our own Echo Request looped back on a raw socket
    if not reply.is_reply:
        return {"status": "sequence_mismatch", "detail": f"unexpected icmp type {reply.type}"}

    if not matches(reply, identifier, sequence):
        return {
            "status": "sequence_mismatch",
            "detail": f"got id={reply.identifier} seq={reply.sequence}, "
                      f"expected id={identifier} seq={sequence}",
        }

    return {"status": "matched", "ttl": read_ttl(raw), "size": reply_payload_size(raw)}
