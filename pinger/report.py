# pinger/report.py
"""Console text for ping outcomes, one line per probe."""

from pinger.schemas import ProbeOutcome


def format_banner(host: str, address: str, size: int) -> str:
    shown = host if host == address else f"{host} [{address}]"
    return f"Pinging {shown} with {size} bytes of data:"


def format_outcome(outcome: ProbeOutcome, address: str) -> str:
    status = outcome.get("status")
    if status == "matched":
        return (f"Reply from {address}: bytes={outcome['size']} "
                f"time={outcome['rtt_ms']:.0f}ms TTL={outcome['ttl']}")
    if status == "sequence_mismatch":
        return f"Reply from {address}: wrong identifier or sequence number"
    if status == "checksum_invalid":
        return f"Reply from {address}: INCORRECT CHECKSUM"
    # unreachable and no_reply read the same on the console
    return f"Reply from {address}: Destination host unreachable."


def format_summary(summary: dict) -> str:
    lines = [
        f"Ping statistics for {summary['target']}:",
        f"    Packets: Sent = {summary['sent']}, Received = {summary['received']}, "
        f"Lost = {summary['lost']} ({summary['loss_percent']:.0f}% loss),",
    ]
    if summary.get("rtt_min_ms") is not None:
        lines.append("Approximate round trip times in milli-seconds:")
        lines.append(f"    Minimum = {summary['rtt_min_ms']:.0f}ms, "
                     f"Maximum = {summary['rtt_max_ms']:.0f}ms, "
                     f"Average = {summary['rtt_avg_ms']:.0f}ms")
    return "\n".join(lines)


def format_resolution_failure(host: str) -> str:
    return f"Ping request could not find host {host}. Please check the name and try again."


def format_connect_failure(host: str) -> str:
    return f"Ping could not connect to {host}."
