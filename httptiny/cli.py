import argparse
import logging
import sys

from .errors import HttptinyError, UrlParseError
from .http10_protocol import Http10Protocol
from .httptiny import HttpClient
from .request import RequestDescriptor
from .tcp_transport import TcpTransport
from .url import parse_url


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="httptiny", description="Minimal HTTP/1.0 GET/PUT/HEAD/DELETE client.")

    parser.add_argument("--proxy", help="Proxy as HOST:PORT (defaults to the http_proxy environment variable).")
    parser.add_argument("--user-agent", help="User-Agent header value.")
    parser.add_argument("--timeout", type=float, default=None, help="Socket timeout in seconds (default: block).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log protocol details to stderr.")

    commands = parser.add_subparsers(dest="command", required=True)

    get_parser = commands.add_parser("get", help="Fetch a resource.")
    get_parser.add_argument("url")
    get_parser.add_argument("-o", "--output", help="Write the body to this file instead of stdout.")

    put_parser = commands.add_parser("put", help="Upload a file as a resource.")
    put_parser.add_argument("url")
    put_parser.add_argument("file", help="File whose contents are sent ('-' for stdin).")
    put_parser.add_argument("--type", dest="content_type", help="Content-Type of the data.")
    put_parser.add_argument("--overwrite", action="store_true", help="Ask the server to replace an existing resource.")

    head_parser = commands.add_parser("head", help="Show a resource's length and type.")
    head_parser.add_argument("url")

    delete_parser = commands.add_parser("delete", help="Remove a resource.")
    delete_parser.add_argument("url")

    return parser.parse_args(argv)


def build_descriptor(args) -> RequestDescriptor:
    descriptor = RequestDescriptor.from_environment()
    if args.user_agent:
        descriptor.user_agent = args.user_agent
    if args.proxy:
        proxy = parse_url(args.proxy if "://" in args.proxy else f"http://{args.proxy}")
        descriptor.proxy_server = proxy.server
        descriptor.proxy_port = proxy.port
    parse_url(args.url, descriptor)
    return descriptor


def read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s: %(message)s",
    )

    client = HttpClient(Http10Protocol(lambda: TcpTransport(timeout=args.timeout)))

    try:
        descriptor = build_descriptor(args)
    except UrlParseError as e:
        sys.exit(f"Error: {e}")

    try:
        if args.command == "get":
            result = client.get(descriptor)
            # Status goes to stderr so stdout carries only the body.
            print(f"Status: {result.status_code}", file=sys.stderr)
            if result.data is not None:
                print(f"Length: {result.length}  Type: {result.content_type}", file=sys.stderr)
                if args.output:
                    with open(args.output, "wb") as f:
                        f.write(result.data)
                else:
                    sys.stdout.buffer.write(result.data)
                    sys.stdout.buffer.flush()
        elif args.command == "put":
            result = client.put(descriptor, read_input(args.file), args.overwrite, args.content_type)
            print(f"Status: {result.status_code}")
        elif args.command == "head":
            result = client.head(descriptor)
            print(f"Status: {result.status_code}")
            print(f"Length: {result.length}  Type: {result.content_type}")
        else:
            result = client.delete(descriptor)
            print(f"Status: {result.status_code}")
    except HttptinyError as e:
        sys.exit(f"Error ({e.code}): {e}")
    except OSError as e:
        sys.exit(f"Error: {e}")
    finally:
        descriptor.release()

    return 0 if 200 <= result.status_code < 300 else 1


if __name__ == "__main__":
    sys.exit(main())
