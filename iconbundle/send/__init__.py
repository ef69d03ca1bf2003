"""Send a processed icon to dev-host templates."""

from .sender import (
    Destination,
    IconSender,
    SendRequest,
    SendResult,
    destinations,
    parse_flags,
    parse_instance,
)

__all__ = [
    "Destination",
    "IconSender",
    "SendRequest",
    "SendResult",
    "destinations",
    "parse_flags",
    "parse_instance",
]
