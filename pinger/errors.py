"""Fatal error types and errno classification for the ping transport.

Only resolution and connection problems are exceptions; per-probe
failures are outcomes, not errors.
"""

import errno

# Receive errors that mean the destination is known to be out of reach.
UNREACHABLE_ERRNOS = frozenset(
    (
        errno.ECONNREFUSED,
        errno.EHOSTUNREACH,
        errno.ENETUNREACH,
        errno.EHOSTDOWN,
    ),
)

# Errors that come from misusing the socket (e.g. after close), not from the network.
CONTRACT_ERRNOS = frozenset(
    (
        errno.EBADF,
        errno.ENOTSOCK,
    ),
)


class PingError(Exception):
    pass


class ResolutionError(PingError):
    def __init__(self, host: str, reason: str = ""):
        self.host = host
        super().__init__(f"could not resolve {host}" + (f": {reason}" if reason else ""))


class ConnectError(PingError):
    def __init__(self, address: str, reason: str = ""):
        self.address = address
        super().__init__(f"could not connect to {address}" + (f": {reason}" if reason else ""))
