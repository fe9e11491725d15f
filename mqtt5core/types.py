"""Core MQTT v5 value types: QoS levels, subscribe options and Will messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any


@dataclass
class AuthorityPath:
    """Hostname, port and (WebSocket) path of a broker."""

    host: str = ""
    port: str = ""
    path: str = ""


class QoS(IntEnum):
    """Quality of Service level of a PUBLISH packet."""

    AT_MOST_ONCE = 0b00
    AT_LEAST_ONCE = 0b01
    EXACTLY_ONCE = 0b10


class Retain(IntEnum):
    """RETAIN flag of a PUBLISH packet."""

    YES = 0b1
    NO = 0b0


class Dup(IntEnum):
    """DUP flag of a PUBLISH packet."""

    YES = 0b1
    NO = 0b0


class AuthStep(Enum):
    """Stage of the enhanced authentication exchange."""

    CLIENT_INITIAL = "client_initial"
    SERVER_CHALLENGE = "server_challenge"
    SERVER_FINAL = "server_final"


class NoLocal(IntEnum):
    """No Local subscribe option."""

    NO = 0b0
    YES = 0b1


class RetainAsPublished(IntEnum):
    """Retain As Published subscribe option."""

    DONT = 0b0
    RETAIN = 0b1


class RetainHandling(IntEnum):
    """Retain Handling subscribe option."""

    SEND = 0b00
    NEW_SUBSCRIPTION_ONLY = 0b01
    NOT_SEND = 0b10


@dataclass
class SubscribeOptions:
    """Subscribe options attached to a single subscription."""

    max_qos: QoS = QoS.EXACTLY_ONCE
    no_local: NoLocal = NoLocal.YES
    retain_as_published: RetainAsPublished = RetainAsPublished.RETAIN
    retain_handling: RetainHandling = RetainHandling.NEW_SUBSCRIPTION_ONLY

    def __post_init__(self) -> None:
        self.max_qos = QoS(self.max_qos)
        self.no_local = NoLocal(self.no_local)
        self.retain_as_published = RetainAsPublished(self.retain_as_published)
        self.retain_handling = RetainHandling(self.retain_handling)


@dataclass
class SubscribeTopic:
    """A topic filter together with its subscribe options."""

    topic_filter: str
    sub_opts: SubscribeOptions = field(default_factory=SubscribeOptions)


@dataclass
class Will:
    """Will Message the broker publishes when the connection drops abnormally."""

    topic: str = ""
    message: str = ""
    qos: QoS = QoS.AT_MOST_ONCE
    retain: Retain = Retain.NO
    properties: dict[Any, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.qos = QoS(self.qos)
        self.retain = Retain(self.retain)
        self.properties = dict(self.properties)