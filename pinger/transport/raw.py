# pinger/transport/raw.py
import ipaddress
import logging
import socket

from pinger.errors import CONTRACT_ERRNOS, UNREACHABLE_ERRNOS, ConnectError, ResolutionError
from pinger.schemas import Reception
from pinger.transport.base import Transport, data, timeout, unreach

log = logging.getLogger(__name__)


def resolve(host: str) -> str:
    """Return one IPv4 address for host. Literal addresses pass through untouched."""
    try:
        return str(ipaddress.IPv4Address(host))
    except ipaddress.AddressValueError:
        pass

    log.info("Resolving %s...", host)
    try:
        infos = socket.getaddrinfo(host, None, socket.AF_INET)
    except (socket.gaierror, UnicodeError) as e:
        raise ResolutionError(host, str(e)) from e
    if not infos:
        raise ResolutionError(host, "no IPv4 address")
    address = infos[0][4][0]
    log.info("Resolved %s to %s", host, address)
    return address


class RawSocketTransport(Transport):
    """
    Raw ICMP socket connected to one address. Needs root or CAP_NET_RAW.
    Receptions include the IPv4 header, as the kernel delivers them.
    """

    def __init__(self, address: str, timeout_ms: int = 1000, recv_buffer: int = 1024):
        self.address = address
        self.recv_buffer = recv_buffer
        try:
            self.sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
        except PermissionError as e:
            raise ConnectError(address, "raw sockets need root or CAP_NET_RAW") from e
        except OSError as e:
            raise ConnectError(address, str(e)) from e

        self.sock.settimeout(timeout_ms / 1000.0)
        try:
            self.sock.connect((address, 0))
        except OSError as e:
            self.sock.close()
            raise ConnectError(address, str(e)) from e
        log.debug("raw ICMP socket connected to %s", address)

    def send(self, buffer: bytes) -> bool:
        try:
            self.sock.send(buffer)
        except OSError as e:
            log.debug("send to %s failed: %s", self.address, e)
            return False
        return True

    def receive(self, timeout_ms: int) -> Reception:
        self.sock.settimeout(timeout_ms / 1000.0)
        log.debug("waiting for reply (timeout=%dms)...", timeout_ms)
        try:
            return data(self.sock.recv(self.recv_buffer))
        except socket.timeout:
            return timeout()
        except OSError as e:
            if e.errno in CONTRACT_ERRNOS:
                raise
            if e.errno in UNREACHABLE_ERRNOS:
                log.debug("receive from %s: %s", self.address, e)
            else:
                log.warning("receive from %s failed (errno %s): %s", self.address, e.errno, e)
            return unreach()

    def close(self) -> None:
        self.sock.close()
