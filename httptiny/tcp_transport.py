import logging
import socket

from .errors import (
    TransportError,
    DnsFailureError,
    SocketCreateError,
    SocketConnectError,
    SocketWriteError,
    SocketReadError,
)
from .transport import Transport


logger = logging.getLogger(__name__)


class TcpTransport(Transport):
    def __init__(self, timeout: float | None = None) -> None:
        self._sock: socket.socket | None = None
        self._timeout = timeout

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self, host: str, port: int) -> None:
        if self._sock is not None:
            raise TransportError("Transport is already connected.")

        try:
            addresses = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
        except (socket.gaierror, UnicodeError) as e:
            raise DnsFailureError(f"DNS Failure for host '{host}'") from e

        if not addresses:
            raise DnsFailureError(f"DNS Failure for host '{host}'")

        # Addresses are tried in resolver order, IPv4 and IPv6 alike.
        create_error: OSError | None = None
        connect_error: OSError | None = None
        for family, socktype, proto, _, sockaddr in addresses:
            try:
                sock = socket.socket(family, socktype, proto)
            except OSError as e:
                create_error = e
                continue

            try:
                sock.settimeout(self._timeout)
                logger.debug("Connecting to %s port %d (%s)", host, port, sockaddr[0])
                sock.connect(sockaddr)
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
            except OSError as e:
                sock.close()
                connect_error = e
                continue

            self._sock = sock
            return

        if connect_error is not None:
            raise SocketConnectError(f"Socket connection failed: {connect_error}") from connect_error
        raise SocketCreateError(f"Socket creation failed: {create_error}") from create_error

    def write(self, data: bytes | memoryview) -> int:
        if self._sock is None:
            raise TransportError("Cannot write on a disconnected transport.")

        try:
            self._sock.sendall(data)
        except OSError as e:
            raise SocketWriteError(f"Socket write failed: {e}") from e
        return len(data)

    def read_into(self, buffer: bytearray | memoryview) -> int:
        if self._sock is None:
            raise TransportError("Cannot read from a disconnected transport.")

        try:
            return self._sock.recv_into(buffer)
        except OSError as e:
            raise SocketReadError(f"Socket read failed: {e}") from e

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None
