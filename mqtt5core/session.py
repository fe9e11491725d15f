"""Connection credentials, session state and the MQTT connection context."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Optional

from mqtt5core.authenticator import AnyAuthenticator
from mqtt5core.types import Will

NO_SERIAL = 0


@dataclass
class Credentials:
    """Client Identifier with optional username and password.

    Empty username or password strings are treated as absent.
    """

    client_id: str = ""
    username: Optional[str] = None
    password: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.username:
            self.username = None
        if not self.password:
            self.password = None


@dataclass
class SessionState:
    """Flags describing the state of the session on the broker."""

    session_present: bool = False
    subscriptions_present: bool = False


@dataclass
class MqttContext:
    """Everything needed to establish an MQTT connection."""

    creds: Credentials = field(default_factory=Credentials)
    will_msg: Optional[Will] = None
    keep_alive: int = 60
    co_props: dict[Any, Any] = field(default_factory=dict)
    ca_props: dict[Any, Any] = field(default_factory=dict)
    state: SessionState = field(default_factory=SessionState)
    authenticator: AnyAuthenticator = field(default_factory=AnyAuthenticator)

    def copy(self) -> "MqttContext":
        """Copy the connect settings; CONNACK properties and state start fresh."""
        return MqttContext(
            creds=Credentials(
                self.creds.client_id, self.creds.username, self.creds.password
            ),
            will_msg=self.will_msg,
            keep_alive=self.keep_alive,
            co_props=dict(self.co_props),
            ca_props={},
            state=SessionState(),
            authenticator=self.authenticator,
        )


class SendFlag(IntFlag):
    """Flags that control how a packet is queued for sending."""

    NONE = 0b000
    THROTTLED = 0b001
    PRIORITIZED = 0b010
    TERMINAL = 0b100