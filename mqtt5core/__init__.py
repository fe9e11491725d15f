"""Building blocks for MQTT 5 clients: types, validation, encoding, broker lists and backoff."""

__version__ = "0.1.0"

__all__ = [
    "authenticator",
    "backoff",
    "encoders",
    "endpoints",
    "handler",
    "session",
    "types",
    "utf8",
]