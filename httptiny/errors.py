from enum import Enum


class ErrorKind(Enum):
    """Client-side failure kinds, valued with the classic http-tiny return codes."""
    HOST = -1
    SOCKET = -2
    CONNECT = -3
    HEADER_WRITE = -4
    BODY_WRITE = -5
    HEADER_READ = -6
    STATUS_LINE = -7
    NULL_ARGUMENT = -8
    NO_LENGTH = -9
    MEMORY = -10
    BODY_READ = -11
    URL_SCHEME = -12
    URL_PORT = -13
    REQUEST_TOO_LARGE = -14
    INVALID_HOST = -15
    INVALID_REQUEST = -16


class HttptinyError(Exception):
    """Base exception for the httptiny library."""
    kind: ErrorKind | None = None

    @property
    def code(self) -> int | None:
        return self.kind.value if self.kind is not None else None

# --- Transport Errors ---

class TransportError(HttptinyError):
    """A generic error occurred in the transport layer."""
    pass

class DnsFailureError(TransportError): kind = ErrorKind.HOST
class SocketCreateError(TransportError): kind = ErrorKind.SOCKET
class SocketConnectError(TransportError): kind = ErrorKind.CONNECT
class SocketWriteError(TransportError): pass
class SocketReadError(TransportError): pass


class IncompleteReadError(TransportError):
    """The peer closed or failed before the expected bytes arrived."""

    def __init__(self, message: str, bytes_read: int, partial: bytes = b"") -> None:
        super().__init__(message)
        self.bytes_read = bytes_read
        self.partial = partial

# --- HTTP Client Errors ---

class HttpClientError(HttptinyError):
    """A generic error occurred in the HTTP client logic."""
    pass

class HeaderWriteError(HttpClientError): kind = ErrorKind.HEADER_WRITE
class BodyWriteError(HttpClientError): kind = ErrorKind.BODY_WRITE
class ResponseHeaderReadError(HttpClientError): kind = ErrorKind.HEADER_READ
class MalformedStatusLineError(HttpClientError): kind = ErrorKind.STATUS_LINE
class NullArgumentError(HttpClientError): kind = ErrorKind.NULL_ARGUMENT
class MissingContentLengthError(HttpClientError): kind = ErrorKind.NO_LENGTH
class ResponseAllocationError(HttpClientError): kind = ErrorKind.MEMORY
class BodyReadError(HttpClientError): kind = ErrorKind.BODY_READ
class RequestTooLargeError(HttpClientError): kind = ErrorKind.REQUEST_TOO_LARGE
class InvalidRequestError(HttpClientError): kind = ErrorKind.INVALID_REQUEST

# --- URL Errors ---

class UrlParseError(HttpClientError):
    """The URL could not be decomposed into host, port and path."""
    pass

class InvalidSchemeError(UrlParseError): kind = ErrorKind.URL_SCHEME
class InvalidPortError(UrlParseError): kind = ErrorKind.URL_PORT
class InvalidHostError(UrlParseError): kind = ErrorKind.INVALID_HOST
