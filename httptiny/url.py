import logging

from .errors import InvalidSchemeError, InvalidPortError, InvalidHostError
from .request import RequestDescriptor

logger = logging.getLogger(__name__)

_SCHEME = "http://"
_MAX_PORT = 65535


def parse_url(url: str, descriptor: RequestDescriptor | None = None) -> RequestDescriptor:
    """Split an absolute ``http://host[:port][/path]`` URL into a request descriptor.

    When ``descriptor`` is given it is re-used: its server, port and path are
    reset before parsing and stay cleared if parsing fails. Proxy and user
    agent settings are left alone.
    """
    if descriptor is None:
        descriptor = RequestDescriptor()
    descriptor.clear_location()

    if url[:len(_SCHEME)].lower() != _SCHEME:
        raise InvalidSchemeError(f"Invalid URL '{url}': must start with '{_SCHEME}'")

    rest = url[len(_SCHEME):]

    end = len(rest)
    for i, c in enumerate(rest):
        if c in ":/":
            end = i
            break
    host = rest[:end]
    delimiter = rest[end] if end < len(rest) else ""

    port = descriptor.port
    if delimiter == ":":
        after = rest[end + 1:]
        digits = len(after) - len(after.lstrip("0123456789"))
        if digits == 0:
            raise InvalidPortError(f"Invalid port in URL '{url}'")
        port = int(after[:digits])
        if not 0 < port <= _MAX_PORT:
            raise InvalidPortError(f"Port {port} out of range in URL '{url}'")
        slash = after.find("/")
        pathname = after[slash + 1:] if slash != -1 else ""
    elif delimiter == "/":
        pathname = rest[end + 1:]
    else:
        pathname = ""

    if not host:
        raise InvalidHostError(f"Missing host in URL '{url}'")

    descriptor.server = host
    descriptor.port = port
    descriptor.pathname = pathname
    logger.debug("Parsed %s as server=%s port=%d path=%r", url, host, port, pathname)
    return descriptor
