# pinger/transport/base.py
from abc import ABC, abstractmethod

from pinger.schemas import Reception


class Transport(ABC):
    """One ICMP association with a single resolved IPv4 address."""

    address: str = ""

    @abstractmethod
    def send(self, buffer: bytes) -> bool:
        """Send one ICMP message. Returns False if the network refused it."""
        raise NotImplementedError

    @abstractmethod
    def receive(self, timeout_ms: int) -> Reception:
        """Block up to timeout_ms for one raw reception (IP header included)."""
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def data(buffer: bytes) -> Reception:
    return {"status": "data", "data": buffer}


def timeout() -> Reception:
    return {"status": "timeout", "data": None}


def unreach() -> Reception:
    return {"status": "unreach", "data": None}
