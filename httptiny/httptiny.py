from .errors import (
    BodyReadError,
    IncompleteReadError,
    MissingContentLengthError,
    NullArgumentError,
    RequestTooLargeError,
)
from .http10_protocol import Http10Protocol
from .http_protocol import (
    DeleteResult,
    GetResult,
    HeadResult,
    HttpMethod,
    HttpStatusCode,
    PutResult,
)
from .request import RequestDescriptor, release_descriptor
from .stream import read_exact
from .url import parse_url

MAX_CONTENT_TYPE_LENGTH = 64


class HttpClient:
    def __init__(self, protocol: Http10Protocol | None = None):
        self._protocol = protocol if protocol is not None else Http10Protocol()

    def put(
        self,
        descriptor: RequestDescriptor,
        data: bytes | bytearray | memoryview,
        overwrite: bool = False,
        content_type: str | None = None,
    ) -> PutResult:
        """Store ``data`` as the descriptor's resource.

        Returns the server's status code, typically 201 when the resource was created.
        """
        self._validate_descriptor(descriptor)
        if data is None:
            raise NullArgumentError("PUT requires data (use b'' for an empty resource).")

        headers = [("Content-Length", str(len(data)))]
        if content_type is not None:
            if len(content_type) > MAX_CONTENT_TYPE_LENGTH:
                raise RequestTooLargeError(
                    f"Content type is longer than {MAX_CONTENT_TYPE_LENGTH} characters."
                )
            headers.append(("Content-Type", content_type))
        if overwrite:
            headers.append(("Control", "overwrite=1"))

        result = self._protocol.query(descriptor, HttpMethod.PUT, headers, body=data)
        return PutResult(result.status_code)

    def get(self, descriptor: RequestDescriptor) -> GetResult:
        """Fetch the whole resource into memory.

        Anything but a 200 is returned as-is without reading a body. A 200
        must declare a positive Content-Length.
        """
        self._validate_descriptor(descriptor)

        result = self._protocol.query(descriptor, HttpMethod.GET, keep_open=True)
        if result.status_code != HttpStatusCode.OK.value:
            if result.transport is not None:
                result.transport.close()
            return GetResult(result.status_code)

        transport = result.transport
        try:
            headers = self._protocol.read_response_headers(transport)

            length = headers.content_length
            if length is None or length <= 0:
                raise MissingContentLengthError(
                    f"Response declares no usable Content-Length (got {length})."
                )

            try:
                data = read_exact(transport, length)
            except IncompleteReadError as e:
                raise BodyReadError(
                    f"Response body ended after {e.bytes_read} of {length} bytes."
                ) from e
        finally:
            transport.close()

        return GetResult(
            status_code=result.status_code,
            data=bytes(data),
            length=length,
            content_type=headers.content_type,
            headers=headers.headers,
        )

    def head(self, descriptor: RequestDescriptor) -> HeadResult:
        """Read only the response headers; the body is never read."""
        self._validate_descriptor(descriptor)

        result = self._protocol.query(descriptor, HttpMethod.HEAD, keep_open=True)
        if result.status_code != HttpStatusCode.OK.value:
            if result.transport is not None:
                result.transport.close()
            return HeadResult(result.status_code)

        try:
            headers = self._protocol.read_response_headers(result.transport)
        finally:
            result.transport.close()

        return HeadResult(
            status_code=result.status_code,
            length=headers.content_length,
            content_type=headers.content_type,
            headers=headers.headers,
        )

    def delete(self, descriptor: RequestDescriptor) -> DeleteResult:
        self._validate_descriptor(descriptor)
        result = self._protocol.query(descriptor, HttpMethod.DELETE)
        return DeleteResult(result.status_code)

    def _validate_descriptor(self, descriptor: RequestDescriptor) -> None:
        if descriptor is None:
            raise NullArgumentError("A request descriptor is required.")


_default_client = HttpClient()


def put(
    descriptor: RequestDescriptor,
    data: bytes | bytearray | memoryview,
    overwrite: bool = False,
    content_type: str | None = None,
) -> PutResult:
    return _default_client.put(descriptor, data, overwrite, content_type)


def get(descriptor: RequestDescriptor) -> GetResult:
    return _default_client.get(descriptor)


def head(descriptor: RequestDescriptor) -> HeadResult:
    return _default_client.head(descriptor)


def delete(descriptor: RequestDescriptor) -> DeleteResult:
    return _default_client.delete(descriptor)


__all__ = [
    "HttpClient",
    "RequestDescriptor",
    "parse_url",
    "put",
    "get",
    "head",
    "delete",
    "release_descriptor",
]
