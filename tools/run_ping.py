# tools/run_ping.py
# Usage examples:
#   sudo python3 -m tools.run_ping 8.8.8.8
#   sudo python3 -m tools.run_ping example.com -n 10 -w 500 -l 64
#   python3 -m tools.run_ping fake --json

import argparse
import json
import logging
import sys

from pinger.config import Settings
from pinger.errors import ConnectError, ResolutionError
from pinger.report import (format_banner, format_connect_failure, format_outcome,
                           format_resolution_failure, format_summary)
from pinger.session.controller import ProbeSession

log = logging.getLogger(__name__)


def settings_from_args(args) -> Settings:
    return Settings(
        count=args.count,
        timeout_ms=args.timeout,
        payload_size=args.size,
        identifier=args.identifier,
        interval_s=args.interval,
    ).validate()

def open_transport(args, s: Settings):
    """Resolve the target and open a transport. Returns (transport, address)."""
    if args.target == "fake":
        from pinger.transport.fake import FakeTransport
        return FakeTransport(echo=True), "127.0.0.1"

    from pinger.transport.raw import RawSocketTransport, resolve
    address = resolve(args.target)
    return RawSocketTransport(address, timeout_ms=s.timeout_ms, recv_buffer=s.recv_buffer), address

def run(args, out=None) -> int:
    out = sys.stdout if out is None else out
    s = settings_from_args(args)
    try:
        transport, address = open_transport(args, s)
    except ResolutionError as e:
        log.debug("%s", e)
        print(format_resolution_failure(args.target), file=out)
        return 1
    except ConnectError as e:
        log.debug("%s", e)
        print(format_connect_failure(args.target), file=out)
        return 1

    with transport:
        if args.json:
            summary = ProbeSession(transport, s).run(address)
            print(json.dumps(summary, indent=2), file=out)
        else:
            print(format_banner(args.target, address, s.payload_size), file=out)

            def reporter(outcome):
                print(format_outcome(outcome, address), file=out, flush=True)

            summary = ProbeSession(transport, s, reporter=reporter).run(address)
            print(file=out)
            print(format_summary(summary), file=out)
    return 0 if summary["received"] else 1

def build_argparser():
    ap = argparse.ArgumentParser(description="ICMP echo (ping) client")
    ap.add_argument("target", help="Destination host/IPv4 address (or 'fake' for a local echo transport)")
    ap.add_argument("-n", "--count", type=int, default=4, help="Number of echo requests to send")
    ap.add_argument("-w", "--timeout", type=int, default=1000, help="Timeout to wait for each reply (milliseconds)")
    ap.add_argument("-l", "--size", type=int, default=32, help="Payload size in bytes")
    ap.add_argument("-i", "--interval", type=float, default=1.0, help="Seconds between probe starts")
    ap.add_argument("--identifier", type=int, default=1, help="ICMP identifier for this run (0-65535)")
    ap.add_argument("--json", action="store_true", help="Print the run summary as JSON instead of text")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    return ap

def main(argv=None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return run(args)
    except ValueError as e:
        ap.error(str(e))
    except KeyboardInterrupt:
        return 130

if __name__ == "__main__":
    sys.exit(main())
