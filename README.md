# mqtt5core

Pure-Python building blocks for MQTT 5 clients, with no third-party
dependencies. The package contains these modules:

- `mqtt5core.types` holds the protocol value types. The enums are `QoS`,
  `Retain`, `Dup`, `AuthStep`, `NoLocal`, `RetainAsPublished` and
  `RetainHandling`. The dataclasses are `SubscribeOptions`,
  `SubscribeTopic`, `Will` and `AuthorityPath`.
- `mqtt5core.utf8` checks strings against the MQTT rules for UTF-8
  strings.
- `mqtt5core.session` holds `Credentials`, `SessionState`, `MqttContext`
  and the `SendFlag` bit flags.
- `mqtt5core.authenticator` holds the `Authenticator` protocol, the
  `is_authenticator` check and the `AnyAuthenticator` wrapper.
- `mqtt5core.encoders` encodes the primitive data types and property
  sections.
- `mqtt5core.handler` holds `CancellableHandler` and `CancellationType`.
- `mqtt5core.endpoints` parses broker lists and resolves broker addresses
  in turn with `Endpoints`.
- `mqtt5core.backoff` holds `ExponentialBackoff`, which produces the delay
  to wait between reconnect attempts.

## Installation

```
pip install mqtt5core
```

## Protocol types

```python
from mqtt5core.types import QoS, Retain, SubscribeOptions, SubscribeTopic, Will

topic = SubscribeTopic("sensors/#", SubscribeOptions(max_qos=QoS.AT_LEAST_ONCE))
last_will = Will("clients/status", "offline", QoS.AT_LEAST_ONCE, Retain.YES)
```

`SubscribeOptions` defaults to `QoS.EXACTLY_ONCE`, `NoLocal.YES`,
`RetainAsPublished.RETAIN` and `RetainHandling.NEW_SUBSCRIPTION_ONLY`.
`SubscribeOptions` and `Will` turn plain integers into the matching enum
members. If an integer does not match any member, they raise `ValueError`.

## UTF-8 validation

```python
from mqtt5core.utf8 import (
    ValidationResult, validate_mqtt_utf8, validate_mqtt_utf8_char,
)

validate_mqtt_utf8("sensors/kitchen/temperature")  # ValidationResult.VALID
validate_mqtt_utf8("bad\x01topic")                 # ValidationResult.INVALID
validate_mqtt_utf8_char(ord("#"))                  # ValidationResult.HAS_WILDCARD_CHARACTER
```

`validate_mqtt_utf8` accepts `str`, `bytes` or `bytearray`. It returns
`INVALID` in these cases:

- the string is longer than 65535 bytes;
- it contains a control character (U+0000–U+001F or U+007F–U+009F);
- it contains a surrogate or a non-character;
- it contains a malformed UTF-8 sequence.

Wildcard characters are allowed in the string.

`iter_code_points` yields the code points of UTF-8 data. When it meets a
malformed sequence, it yields `-1` and stops.

`is_valid_string_pair` checks both strings of a `(name, value)` pair.

## Session state

`Credentials` treats an empty username or password as absent, so those
fields become `None`. `MqttContext.copy()` copies the connect settings:
credentials, Will, keep-alive, CONNECT properties and authenticator. The
copy starts with empty CONNACK properties and a fresh `SessionState`.

## Enhanced authentication

An authenticator is any object that meets both of these conditions:

- it has a string `method`, either an attribute or a method that returns a
  string;
- it has an `async_auth(step, data)` coroutine.

```python
from mqtt5core.authenticator import AnyAuthenticator
from mqtt5core.types import AuthStep

class TokenAuthenticator:
    method = "TOKEN"

    async def async_auth(self, step, data):
        return "token" if step is AuthStep.CLIENT_INITIAL else ""

auth = AnyAuthenticator(TokenAuthenticator())
auth.method                                         # "TOKEN"
# await auth.async_auth(AuthStep.CLIENT_INITIAL, "")  -> "token"
```

`AnyAuthenticator()` with no argument is falsy and its `method` is `""`.
Calling its `async_auth` raises `RuntimeError`. Passing an object that is
not an authenticator raises `TypeError`.

## Wire encoding

```python
from mqtt5core.encoders import (
    PropertyKind, encode_int16, encode_properties, encode_utf8, to_variable_bytes,
)

encode_int16(60)          # b"\x00<"
encode_utf8("topic")      # b"\x00\x05topic"
to_variable_bytes(321)    # b"\xc1\x02"

encode_properties([
    (0x11, PropertyKind.FOUR_BYTE_INT, 40),
    (0x26, PropertyKind.STRING_PAIR, [("key", "val")]),
])
```

The integer and string encoders turn `None` into no bytes. Values above
`0xFFFFFFF` have no Variable Byte Integer encoding and produce no bytes.

`encode_property` repeats the identifier before every element of a list.
`encode_properties` writes the length of the section followed by its
properties. The whole section is left out in two cases:

- `props` is `None`;
- `may_omit` is set and no property is present.

`pack_flags((bits, value), ...)` packs bit fields, most significant first,
into the smallest 1, 2, 4 or 8 byte big-endian integer that holds them.

## Completion handlers

`CancellableHandler` wraps a callback.

- `cancel(kind)` records the cancellation in `cancelled`. Only terminal
  cancellation is passed on to `on_cancel`.
- `complete(*args)` calls the callback. The call is inline, unless the
  handler is bound to another event loop; then it is scheduled on that
  loop.
- `complete_immediate(*args)` always schedules the callback on an event
  loop. It raises `RuntimeError` when there is none.

A handler completes only once. A second completion raises `RuntimeError`.

## Broker lists

Each entry is `host[:port][/path]`. Entries are separated by commas, and
whitespace around them is ignored. An entry without a port gets the
default port. Parsing stops at the first entry that does not fit; the
entries before it are kept.

```python
from mqtt5core.endpoints import parse_brokers

for authority in parse_brokers("broker.example.com:8883, localhost/mqtt", 1883):
    print(authority.host, authority.port, authority.path)
```

`Endpoints.brokers(hosts, default_port)` sets the list, and
`clone_servers(other)` copies the list of another `Endpoints`.

The coroutine `next_endpoint()` resolves the next broker and returns its
addresses together with its `AuthorityPath`. A broker is skipped when its
lookup fails or takes longer than `resolve_timeout` (5 seconds by default).
The method raises these errors:

- `HostNotFoundError` when no broker is configured;
- `TryAgainError` once the end of the list is reached. The next call then
  starts again from the first broker.

Lookups use the event loop's `getaddrinfo` unless a `resolver` coroutine
is given.

## Reconnect backoff

```python
from mqtt5core.backoff import ExponentialBackoff

backoff = ExponentialBackoff()
for _ in range(6):
    print(backoff.generate())
```

`generate()` returns a `timedelta`. The delays are 1, 2, 4 and 8 seconds,
then 16 seconds for every call after that. Each delay is shifted by a
random amount of up to 500 ms either way. A `random.Random` can be passed
in to make the sequence repeatable.

## What this package does not do

This package is not an MQTT client.

- It does not open connections.
- It does not run a connect or reconnect loop.
- It does not encode or decode whole control packets such as CONNECT or
  PUBLISH.
- It does not send or receive messages.

It provides the pieces listed above for building such a client.

## Running the tests

```
pip install "mqtt5core[test]"
pytest
```