# pinger/session/state.py
from dataclasses import dataclass, field

@dataclass
class RunState:
    target: str
    identifier: int
    count: int
    sequence: int = 0
    sent: int = 0
    outcomes: list = field(default_factory=list)

    def record(self, outcome) -> None:
        self.outcomes.append(outcome)
        self.sent += 1
        self.sequence += 1

    @property
    def done(self) -> bool:
        return self.sequence >= self.count

    @property
    def last(self) -> bool:
        """True while the probe in progress is the final one."""
        return self.sequence == self.count - 1

    def summary(self) -> dict:
        rtts = [o["rtt_ms"] for o in self.outcomes if o.get("status") == "matched"]
        received = len(rtts)
        lost = self.sent - received
        return {
            "target": self.target,
            "identifier": self.identifier,
            "sent": self.sent,
            "received": received,
            "lost": lost,
            "loss_percent": (100.0 * lost / self.sent) if self.sent else 0.0,
            "rtt_min_ms": min(rtts) if rtts else None,
            "rtt_avg_ms": (sum(rtts) / received) if rtts else None,
            "rtt_max_ms": max(rtts) if rtts else None,
            "outcomes": list(self.outcomes),
        }
