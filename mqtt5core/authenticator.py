"""Type-erased wrapper around user supplied enhanced-authentication handlers."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from mqtt5core.types import AuthStep


@runtime_checkable
class Authenticator(Protocol):
    """Interface of an enhanced authenticator.

    ``method`` names the authentication method; ``async_auth`` receives the
    current step and the data from the server and returns the data to send.
    """

    method: str

    async def async_auth(self, step: AuthStep, data: str) -> str:
        ...


def _method_of(obj: Any) -> Optional[str]:
    method = getattr(obj, "method", None)
    if callable(method):
        method = method()
    return method if isinstance(method, str) else None


def is_authenticator(obj: Any) -> bool:
    """Whether ``obj`` has a string ``method`` and a callable ``async_auth``."""
    return callable(getattr(obj, "async_auth", None)) and _method_of(obj) is not None


class AnyAuthenticator:
    """Holds any authenticator, or none at all."""

    def __init__(self, authenticator: Any = None) -> None:
        if authenticator is None:
            self._method = ""
            self._authenticator = None
            return
        if not is_authenticator(authenticator):
            raise TypeError(f"{authenticator!r} is not an authenticator")
        self._method = _method_of(authenticator) or ""
        self._authenticator = authenticator

    @property
    def method(self) -> str:
        """The authentication method name, empty when no authenticator is set."""
        return self._method

    def __bool__(self) -> bool:
        return self._authenticator is not None

    async def async_auth(self, step: AuthStep, data: str) -> str:
        """Run one step of the authentication exchange."""
        if self._authenticator is None:
            raise RuntimeError("no authenticator is set")
        return await self._authenticator.async_auth(AuthStep(step), data)