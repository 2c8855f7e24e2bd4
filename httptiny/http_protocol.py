from dataclasses import dataclass, field
from enum import Enum

from .transport import Transport


class HttpMethod(Enum):
    GET = "GET"
    PUT = "PUT"
    HEAD = "HEAD"
    DELETE = "DELETE"


@dataclass
class QueryResult:
    status_code: int
    # Set only for keep-open queries that got a status line; the caller must close it.
    transport: Transport | None = None


@dataclass
class ResponseHeaders:
    content_length: int | None = None
    content_type: str | None = None
    headers: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class PutResult:
    status_code: int


@dataclass
class DeleteResult:
    status_code: int


@dataclass
class HeadResult:
    status_code: int
    length: int | None = None
    content_type: str | None = None
    headers: list[tuple[str, str]] = field(default_factory=list)


@dataclass
class GetResult:
    status_code: int
    data: bytes | None = None
    length: int = 0
    content_type: str | None = None
    headers: list[tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status_code == HttpStatusCode.OK.value

# --- Status Codes ---
class HttpStatusCode(Enum):
    OK = 200
    CREATED = 201
    BAD_REQUEST = 400
    FORBIDDEN = 403
    REQUEST_TIMEOUT = 408
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503
