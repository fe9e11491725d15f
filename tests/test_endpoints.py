import asyncio

import pytest

from mqtt5core.endpoints import (
    Endpoints,
    HostNotFoundError,
    TryAgainError,
    parse_brokers,
)
from mqtt5core.types import AuthorityPath


def _fake_resolver(failing=(), slow=()):
    calls = []

    async def resolve(host, port):
        calls.append((host, port))
        if host in slow:
            await asyncio.sleep(10)
        if host in failing:
            raise OSError("cannot resolve")
        return [(host, int(port))]

    return resolve, calls


def test_parse_single_host_uses_default_port():
    assert parse_brokers("localhost", 1883) == [AuthorityPath("localhost", "1883", "")]


def test_parse_host_with_path():
    assert parse_brokers("broker.hivemq.com/mqtt", 8000) == [
        AuthorityPath("broker.hivemq.com", "8000", "/mqtt")
    ]


def test_parse_explicit_port_overrides_default():
    assert parse_brokers("localhost:1884", 1883) == [
        AuthorityPath("localhost", "1884", "")
    ]


def test_parse_multiple_hosts_with_spaces():
    servers = parse_brokers(" 127.0.0.1 , localhost:1884/mqtt ,broker", 1883)
    assert [s.host for s in servers] == ["127.0.0.1", "localhost", "broker"]
    assert [s.port for s in servers] == ["1883", "1884", "1883"]
    assert [s.path for s in servers] == ["", "/mqtt", ""]


def test_parse_empty_string_gives_no_servers():
    assert parse_brokers("", 1883) == []


def test_parse_stops_at_invalid_entry():
    servers = parse_brokers("good,bad host,other", 1883)
    assert [s.host for s in servers] == ["good"]


def test_parse_port_without_digits_is_invalid():
    assert parse_brokers("host:", 1883) == []


def test_parse_trailing_separator():
    assert [s.host for s in parse_brokers("a,b,", 1) ] == ["a", "b"]


def test_brokers_replaces_list_and_clone_copies():
    first = Endpoints()
    first.brokers("a,b", 1883)
    first.brokers("c", 1883)
    assert [s.host for s in first.servers] == ["c"]

    second = Endpoints()
    second.clone_servers(first)
    assert second.servers == first.servers


@pytest.mark.asyncio
async def test_no_servers_raises_host_not_found():
    endpoints = Endpoints()
    endpoints.brokers("", 1883)
    with pytest.raises(HostNotFoundError):
        await endpoints.next_endpoint()


@pytest.mark.asyncio
async def test_round_robin_then_try_again():
    resolver, calls = _fake_resolver()
    endpoints = Endpoints(resolver=resolver)
    endpoints.brokers("a,b", 1883)

    addrs, ap = await endpoints.next_endpoint()
    assert ap.host == "a"
    assert addrs == [("a", 1883)]

    _, ap = await endpoints.next_endpoint()
    assert ap.host == "b"

    with pytest.raises(TryAgainError):
        await endpoints.next_endpoint()

    _, ap = await endpoints.next_endpoint()
    assert ap.host == "a"
    assert [c[0] for c in calls] == ["a", "b", "a"]


@pytest.mark.asyncio
async def test_failing_resolution_skips_to_next_host():
    resolver, calls = _fake_resolver(failing={"bad"})
    endpoints = Endpoints(resolver=resolver)
    endpoints.brokers("bad,good", 1883)

    _, ap = await endpoints.next_endpoint()
    assert ap.host == "good"
    assert [c[0] for c in calls] == ["bad", "good"]


@pytest.mark.asyncio
async def test_slow_resolution_times_out():
    resolver, _ = _fake_resolver(slow={"slow"})
    endpoints = Endpoints(resolver=resolver, resolve_timeout=0.01)
    endpoints.brokers("slow", 1883)

    with pytest.raises(TryAgainError):
        await endpoints.next_endpoint()


@pytest.mark.asyncio
async def test_default_resolver_resolves_numeric_address():
    endpoints = Endpoints()
    endpoints.brokers("127.0.0.1", 1883)
    addrs, ap = await endpoints.next_endpoint()
    assert ap == AuthorityPath("127.0.0.1", "1883", "")
    assert ("127.0.0.1", 1883) in [tuple(a[:2]) for a in addrs]