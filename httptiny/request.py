import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_PORT = 80
DEFAULT_USER_AGENT = "httptiny/1.2"

USER_AGENT_ENV = "HTTPTINY_USER_AGENT"
PROXY_ENV = ("http_proxy", "HTTP_PROXY")


@dataclass
class RequestDescriptor:
    """Where a request goes: the resource server, an optional proxy, and the resource path.

    A descriptor is owned by its caller and may be mutated or re-parsed
    between calls. It carries no locking; use one per logical request.
    """
    server: str | None = None
    port: int = DEFAULT_PORT
    proxy_server: str | None = None
    proxy_port: int | None = None
    user_agent: str = DEFAULT_USER_AGENT
    pathname: str | None = None

    @property
    def is_proxied(self) -> bool:
        return bool(self.proxy_server) and bool(self.proxy_port)

    @property
    def target(self) -> tuple[str | None, int]:
        """The (host, port) actually connected to."""
        if self.is_proxied:
            return self.proxy_server, self.proxy_port
        return self.server, self.port

    def release(self) -> None:
        self.server = None
        self.pathname = None
        self.proxy_server = None
        self.proxy_port = None

    def clear_location(self) -> None:
        """Forget the server and path, keeping proxy and user agent settings."""
        self.server = None
        self.pathname = None
        self.port = DEFAULT_PORT

    @classmethod
    def from_environment(cls, url: str | None = None, environ: Mapping[str, str] | None = None) -> "RequestDescriptor":
        """Build a descriptor whose proxy and user agent come from the environment.

        ``http_proxy`` (or ``HTTP_PROXY``) is parsed like any other URL;
        ``HTTPTINY_USER_AGENT`` overrides the default user agent.
        """
        from .url import parse_url

        env = os.environ if environ is None else environ
        descriptor = cls(user_agent=env.get(USER_AGENT_ENV) or DEFAULT_USER_AGENT)

        proxy_url = next((env[name] for name in PROXY_ENV if env.get(name)), None)
        if proxy_url:
            proxy = parse_url(proxy_url)
            descriptor.proxy_server = proxy.server
            descriptor.proxy_port = proxy.port

        if url is not None:
            parse_url(url, descriptor)
        return descriptor


def release_descriptor(descriptor: RequestDescriptor) -> None:
    descriptor.release()
