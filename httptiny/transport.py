from typing import Callable, Protocol


class Transport(Protocol):
    """A connected byte stream the query engine writes requests to and reads responses from.

    ``read_into`` returns 0 once the peer has closed the stream.
    """

    def connect(self, host: str, port: int) -> None:
        ...

    def write(self, data: bytes | memoryview) -> int:
        ...

    def read_into(self, buffer: bytearray | memoryview) -> int:
        ...

    def close(self) -> None:
        ...


# Each query opens its own connection, so the engine asks for a fresh transport every time.
TransportFactory = Callable[[], Transport]
