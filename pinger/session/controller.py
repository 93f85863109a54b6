# pinger/session/controller.py

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Optional

from pinger.codec.packet import create_echo_request, encode
from pinger.schemas import ProbeOutcome
from pinger.session.rules import classify
from pinger.session.state import RunState

log = logging.getLogger(__name__)


class ProbeSession:
    """
    Stop-and-wait ping loop over one transport: at most one probe in flight,
    every per-probe failure becomes an outcome and the sequence moves on.
    """

    def __init__(self, transport, settings,
                 reporter: Optional[Callable[[ProbeOutcome], None]] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.transport = transport
        self.s = settings.validate()
        self.reporter = reporter
        self.clock = clock
        self.sleep = sleep
        self.payload = settings.payload()

    def run(self, target: Optional[str] = None) -> dict:
        target = target or self.transport.address
        run = RunState(target=target, identifier=self.s.identifier, count=self.s.count)

        while not run.done:
            started = self.clock()
            last = run.last

            outcome = self.probe_once(run.sequence, target)
            run.record(outcome)
            if self.reporter is not None:
                self.reporter(outcome)

            # keep roughly one probe per interval regardless of individual RTT
            elapsed = self.clock() - started
            if not last and elapsed < self.s.interval_s:
                self.sleep(self.s.interval_s - elapsed)

        return run.summary()

    def probe_once(self, sequence: int, target: Optional[str] = None) -> ProbeOutcome:
        request = create_echo_request(self.s.identifier, sequence, self.payload)
        buffer = encode(request)

        started = self.clock()
        if self.transport.send(buffer):
            log.debug("sent icmp_seq=%d id=%d (%d bytes)", sequence, request.identifier, len(buffer))
            reception = self.transport.receive(self.s.timeout_ms)
            rtt_ms = (self.clock() - started) * 1000.0
            verdict = classify(reception, request.identifier, request.sequence)
        else:
            rtt_ms = None
            verdict = {"status": "unreachable", "detail": "send failed"}

        outcome: ProbeOutcome = {
            "target": target or self.transport.address,
            "identifier": request.identifier,
            "sequence": sequence,
            "status": verdict["status"],
            "rtt_ms": None,
            "ttl": None,
            "size": None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        if verdict["status"] == "matched":
            outcome.update({"rtt_ms": round(rtt_ms, 3), "ttl": verdict.get("ttl"), "size": verdict.get("size")})
        else:
            outcome["detail"] = verdict.get("detail", "")
            log.info("icmp_seq=%d %s: %s", sequence, outcome["status"], outcome["detail"])
        return outcome
