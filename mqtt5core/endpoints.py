"""Broker list parsing and round-robin resolution of broker endpoints."""

from __future__ import annotations

import asyncio
import logging
import re
import socket
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from mqtt5core.types import AuthorityPath

logger = logging.getLogger(__name__)

DEFAULT_RESOLVE_TIMEOUT = 5.0

Resolver = Callable[[str, str], Awaitable[List[Any]]]

_SPACE = "[ \t\n\r\f\v]"
_UNRESERVED = r"[-a-zA-Z_0-9.~]"
_URI = re.compile(
    rf"{_SPACE}*"
    rf"(?P<host>{_UNRESERVED}+)"
    r"(?P<ports>(?::[0-9]+)*)"
    rf"(?P<paths>(?:/{_UNRESERVED}*)*)"
    rf"{_SPACE}*(?:,|\Z)"
)
_PORT = re.compile(r":([0-9]+)")
_PATH = re.compile(rf"/{_UNRESERVED}*")


class HostNotFoundError(ConnectionError):
    """No broker has been configured."""


class TryAgainError(ConnectionError):
    """Every configured broker has been tried; start over after a pause."""


def parse_brokers(hosts: str, default_port: int) -> List[AuthorityPath]:
    """Parse a comma separated list of ``host[:port][/path]`` entries.

    Entries without a port get ``default_port``. Parsing stops at the first
    entry that does not fit the grammar; entries before it are kept.
    """
    servers: List[AuthorityPath] = []
    pos = 0
    while pos < len(hosts):
        match = _URI.match(hosts, pos)
        if match is None:
            break
        ports = _PORT.findall(match.group("ports"))
        paths = _PATH.findall(match.group("paths"))
        servers.append(
            AuthorityPath(
                host=match.group("host"),
                port=ports[-1] if ports else str(default_port),
                path=paths[-1] if paths else "",
            )
        )
        if match.end() == pos:
            break
        pos = match.end()
    return servers


async def _default_resolver(host: str, port: str) -> List[Any]:
    loop = asyncio.get_running_loop()
    infos = await loop.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    return [info[4] for info in infos]


class Endpoints:
    """Keeps the broker list and hands out resolved endpoints in turn."""

    def __init__(
        self,
        resolver: Optional[Resolver] = None,
        resolve_timeout: float = DEFAULT_RESOLVE_TIMEOUT,
    ) -> None:
        self._resolver: Resolver = resolver or _default_resolver
        self.resolve_timeout = resolve_timeout
        self._servers: List[AuthorityPath] = []
        self._current_host = -1

    @property
    def servers(self) -> List[AuthorityPath]:
        """The configured brokers, in order."""
        return list(self._servers)

    def brokers(self, hosts: str, default_port: int) -> None:
        """Replace the broker list with the one parsed from ``hosts``."""
        self._servers = parse_brokers(hosts, default_port)

    def clone_servers(self, other: "Endpoints") -> None:
        """Take over the broker list of ``other``."""
        self._servers = [
            AuthorityPath(ap.host, ap.port, ap.path) for ap in other._servers
        ]

    async def next_endpoint(self) -> Tuple[List[Any], AuthorityPath]:
        """Resolve the next broker that resolves in time.

        Returns the resolved addresses and the broker they belong to. Raises
        HostNotFoundError when no broker is configured and TryAgainError
        once the end of the list is reached, after which the next call
        starts from the first broker again.
        """
        if not self._servers:
            raise HostNotFoundError("no brokers configured")

        while True:
            self._current_host += 1
            if self._current_host + 1 > len(self._servers):
                self._current_host = -1
                raise TryAgainError("all brokers tried")

            ap = self._servers[self._current_host]
            try:
                addresses = await asyncio.wait_for(
                    self._resolver(ap.host, ap.port), self.resolve_timeout
                )
            except asyncio.TimeoutError:
                logger.info("resolve %s:%s: timed out", ap.host, ap.port)
                continue
            except OSError as exc:
                logger.info("resolve %s:%s: %s", ap.host, ap.port, exc)
                continue

            logger.debug("resolve %s:%s: %s", ap.host, ap.port, addresses)
            return list(addresses), AuthorityPath(ap.host, ap.port, ap.path)