import pytest

from httptiny.errors import InvalidSchemeError, InvalidPortError, InvalidHostError, ErrorKind
from httptiny.request import RequestDescriptor
from httptiny.url import parse_url


def test_parses_host_port_and_path():
    descriptor = parse_url("http://example.org:8080/data/file1")

    assert descriptor.server == "example.org"
    assert descriptor.port == 8080
    assert descriptor.pathname == "data/file1"


@pytest.mark.parametrize(
    "url, server, port, pathname",
    [
        ("http://example.org/index.html", "example.org", 80, "index.html"),
        ("http://example.org", "example.org", 80, ""),
        ("http://example.org/", "example.org", 80, ""),
        ("http://example.org:81", "example.org", 81, ""),
        ("http://10.0.0.1:5757/a/b/c.txt", "10.0.0.1", 5757, "a/b/c.txt"),
        ("HTTP://Example.ORG/Mixed", "Example.ORG", 80, "Mixed"),
        ("http://host/path:with:colons", "host", 80, "path:with:colons"),
    ],
)
def test_components_round_trip(url, server, port, pathname):
    descriptor = parse_url(url)

    assert (descriptor.server, descriptor.port, descriptor.pathname) == (server, port, pathname)


@pytest.mark.parametrize("url", ["https://example.org/", "ftp://example.org/x", "example.org/x", "", "http:/x"])
def test_rejects_other_schemes(url):
    with pytest.raises(InvalidSchemeError) as excinfo:
        parse_url(url)

    assert excinfo.value.kind is ErrorKind.URL_SCHEME
    assert excinfo.value.code == -12


@pytest.mark.parametrize("url", ["http://example.org:/x", "http://example.org:abc/x", "http://example.org:0/", "http://example.org:70000/"])
def test_rejects_bad_port(url):
    with pytest.raises(InvalidPortError) as excinfo:
        parse_url(url)

    assert excinfo.value.code == -13


def test_rejects_empty_host():
    with pytest.raises(InvalidHostError):
        parse_url("http:///path")


def test_reuses_descriptor_and_keeps_proxy_settings():
    descriptor = RequestDescriptor(proxy_server="proxy.local", proxy_port=3128, user_agent="tester/1.0")
    parse_url("http://first:9000/one", descriptor)

    same = parse_url("http://second/two", descriptor)

    assert same is descriptor
    assert descriptor.server == "second"
    assert descriptor.port == 80
    assert descriptor.pathname == "two"
    assert descriptor.proxy_server == "proxy.local"
    assert descriptor.proxy_port == 3128
    assert descriptor.user_agent == "tester/1.0"


def test_failed_parse_leaves_location_cleared():
    descriptor = parse_url("http://example.org:8080/data")

    with pytest.raises(InvalidSchemeError):
        parse_url("gopher://example.org/data", descriptor)

    assert descriptor.server is None
    assert descriptor.pathname is None
    assert descriptor.port == 80


def test_does_not_mutate_input():
    url = "http://example.org:8080/data/file1"
    parse_url(url)

    assert url == "http://example.org:8080/data/file1"
