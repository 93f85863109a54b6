from typing import Literal, TypedDict, Optional

OutcomeStatus = Literal["matched", "sequence_mismatch", "checksum_invalid", "unreachable", "no_reply"]
ReceptionStatus = Literal["data", "timeout", "unreach"]

class Reception(TypedDict):
    status: ReceptionStatus
    data: Optional[bytes]

class ProbeOutcome(TypedDict, total=False):
    target: str
    identifier: int
    sequence: int
    status: OutcomeStatus
    rtt_ms: Optional[float]
    ttl: Optional[int]
    size: Optional[int]
    timestamp: str
    detail: str  # short diagnostic for non-matched outcomes
