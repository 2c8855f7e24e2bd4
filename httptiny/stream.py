"""Framing primitives over a :class:`Transport`.

``read_line`` deliberately pulls one byte per read so that nothing past the
line terminator is consumed; after the header block has been scanned, the
next byte on the stream is the first body byte.
"""
from .errors import IncompleteReadError, ResponseAllocationError, TransportError
from .transport import Transport

_CR = 0x0D
_LF = 0x0A


def read_line(transport: Transport, max_length: int) -> bytes:
    """Read a CRLF or LF terminated line, dropping the CR and LF bytes.

    At most ``max_length`` bytes are taken off the stream, CR bytes included.
    If the maximum is reached before a LF, the bytes stored so far are
    returned and the rest of the line stays on the stream; a line whose
    content plus CR fills the limit therefore leaves its LF to be read as an
    empty line by the next call.

    Raises:
        IncompleteReadError: the stream ended or failed before a LF was seen.
            ``bytes_read`` holds the number of bytes consumed.
    """
    line = bytearray()
    octet = bytearray(1)
    consumed = 0

    while consumed < max_length:
        try:
            received = transport.read_into(octet)
        except TransportError as e:
            raise IncompleteReadError(f"Line read failed: {e}", consumed, bytes(line)) from e
        if received != 1:
            raise IncompleteReadError("Connection closed before end of line.", consumed, bytes(line))

        consumed += 1
        if octet[0] == _CR:
            continue
        if octet[0] == _LF:
            break
        line += octet

    return bytes(line)


def read_exact(transport: Transport, length: int) -> bytearray:
    """Read exactly ``length`` bytes, retrying short reads.

    Raises:
        ResponseAllocationError: a buffer of ``length`` bytes could not be allocated.
        IncompleteReadError: the stream ended or failed first; ``bytes_read``
            holds how many bytes were delivered.
    """
    try:
        buffer = bytearray(length)
    except (MemoryError, OverflowError) as e:
        raise ResponseAllocationError(f"Cannot allocate {length} bytes for response body") from e

    view = memoryview(buffer)
    received = 0
    while received < length:
        try:
            n = transport.read_into(view[received:])
        except TransportError as e:
            raise IncompleteReadError(
                f"Read failed after {received} of {length} bytes: {e}", received, bytes(buffer[:received])
            ) from e
        if n <= 0:
            raise IncompleteReadError(
                f"Connection closed after {received} of {length} bytes.", received, bytes(buffer[:received])
            )
        received += n
    del view

    return buffer
