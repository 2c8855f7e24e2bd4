import logging
import re
from typing import Iterable

from .errors import (
    BodyWriteError,
    HeaderWriteError,
    IncompleteReadError,
    InvalidRequestError,
    MalformedStatusLineError,
    RequestTooLargeError,
    ResponseHeaderReadError,
    SocketWriteError,
)
from .http_protocol import HttpMethod, QueryResult, ResponseHeaders
from .request import RequestDescriptor
from .stream import read_line
from .tcp_transport import TcpTransport
from .transport import Transport, TransportFactory

logger = logging.getLogger(__name__)

# Upper bounds for what goes into, and comes back in, a single header line or block.
MAX_HEADER_SIZE = 512
MAX_HOST_LENGTH = 128
MAX_PATH_LENGTH = 256


class Http10Protocol:
    """One HTTP/1.0 exchange per query: connect, send, read the status line.

    The response body is left on the stream. A query made with
    ``keep_open=True`` hands the connected transport back so the caller can
    read headers and body; every other outcome closes it.
    """

    _CRLF = b"\r\n"
    _STATUS_LINE = re.compile(rb"^HTTP/1\.\d+\s*(\d{3})")
    _CONTENT_LENGTH = re.compile(rb"^content-length:\s*([+-]?\d+)", re.IGNORECASE)
    _CONTENT_TYPE = re.compile(rb"^content-type:\s*(.*)$", re.IGNORECASE)
    _ENCODING = "iso-8859-1"

    def __init__(self, transport_factory: TransportFactory = TcpTransport):
        self._transport_factory = transport_factory

    def query(
        self,
        descriptor: RequestDescriptor,
        method: HttpMethod,
        extra_headers: Iterable[tuple[str, str]] = (),
        keep_open: bool = False,
        body: bytes | bytearray | memoryview | None = None,
    ) -> QueryResult:
        header = self._build_request(descriptor, method, extra_headers)
        host, port = descriptor.target

        transport = self._transport_factory()
        transport.connect(host, port)

        handed_over = False
        try:
            self._write_request(transport, header, body)
            status_code = self._read_status(transport)
            if keep_open:
                handed_over = True
                return QueryResult(status_code, transport)
            return QueryResult(status_code)
        finally:
            if not handed_over:
                transport.close()

    def _build_request(
        self,
        descriptor: RequestDescriptor,
        method: HttpMethod,
        extra_headers: Iterable[tuple[str, str]],
    ) -> bytes:
        if not descriptor.server:
            raise InvalidRequestError("Request descriptor has no server.")

        path = descriptor.pathname or ""
        if len(path) > MAX_PATH_LENGTH:
            raise RequestTooLargeError(f"Path is longer than {MAX_PATH_LENGTH} characters.")

        if descriptor.is_proxied:
            if len(descriptor.server) > MAX_HOST_LENGTH:
                raise RequestTooLargeError(f"Server name is longer than {MAX_HOST_LENGTH} characters.")
            target = f"http://{descriptor.server}:{descriptor.port}/{path}"
        else:
            target = f"/{path}"

        lines = [f"{method.value} {target} HTTP/1.0", f"User-Agent: {descriptor.user_agent}"]
        lines.extend(f"{key}: {value}" for key, value in extra_headers)

        buffer = bytearray()
        for line in lines:
            if "\r" in line or "\n" in line:
                raise InvalidRequestError(f"Line break in request header line {line!r}")
            try:
                buffer += line.encode(self._ENCODING)
            except UnicodeEncodeError as e:
                raise InvalidRequestError(f"Cannot encode request header line {line!r}") from e
            buffer += self._CRLF
        buffer += self._CRLF

        if len(buffer) > MAX_HEADER_SIZE:
            raise RequestTooLargeError(f"Request header is {len(buffer)} bytes, limit is {MAX_HEADER_SIZE}.")

        logger.debug("Request line: %s", lines[0])
        return bytes(buffer)

    def _write_request(
        self,
        transport: Transport,
        header: bytes,
        body: bytes | bytearray | memoryview | None,
    ) -> None:
        try:
            written = transport.write(header)
        except SocketWriteError as e:
            raise HeaderWriteError(f"Header write failed: {e}") from e
        if written != len(header):
            raise HeaderWriteError(f"Short header write: {written} of {len(header)} bytes.")

        if body is not None and len(body) > 0:
            try:
                written = transport.write(body)
            except SocketWriteError as e:
                raise BodyWriteError(f"Body write failed: {e}") from e
            if written != len(body):
                raise BodyWriteError(f"Short body write: {written} of {len(body)} bytes.")

    def _read_status(self, transport: Transport) -> int:
        try:
            line = read_line(transport, MAX_HEADER_SIZE - 1)
        except IncompleteReadError as e:
            raise ResponseHeaderReadError(f"No status line received: {e}") from e

        match = self._STATUS_LINE.match(line)
        if match is None:
            raise MalformedStatusLineError(f"Malformed status line: {line!r}")

        logger.debug("Status line: %s", line.decode(self._ENCODING))
        return int(match.group(1))

    def read_response_headers(self, transport: Transport) -> ResponseHeaders:
        """Consume header lines up to the blank line, picking out length and type.

        The stream is left positioned at the first body byte.
        """
        result = ResponseHeaders()

        while True:
            try:
                line = read_line(transport, MAX_HEADER_SIZE - 1)
            except IncompleteReadError as e:
                raise ResponseHeaderReadError(f"Response header read failed: {e}") from e

            if not line:
                break

            name, colon, value = line.partition(b":")
            if colon:
                result.headers.append(
                    (name.decode(self._ENCODING), value.strip().decode(self._ENCODING))
                )

            match = self._CONTENT_LENGTH.match(line)
            if match:
                result.content_length = int(match.group(1))
                continue

            match = self._CONTENT_TYPE.match(line)
            if match:
                result.content_type = match.group(1).strip().decode(self._ENCODING)

        logger.debug("Response headers: length=%s type=%s", result.content_length, result.content_type)
        return result
