"""Exception types raised by the icon build pipeline."""

from __future__ import annotations


class IconBundleError(RuntimeError):
    """Base class for iconbundle failures."""


class ConfigError(IconBundleError):
    """Raised when configuration is missing, unparsable or inconsistent."""


class UnknownTypeError(IconBundleError):
    """Raised when a tech is asked for an output type it cannot encode."""


class UnknownTargetError(IconBundleError):
    """Raised when a target was never registered on the build node."""


class IconReadError(IconBundleError):
    """Raised when an icon source cannot be read."""


class DataURISizeError(IconBundleError, ValueError):
    """Raised when an encoded data URI exceeds the configured limit."""


__all__ = [
    "ConfigError",
    "DataURISizeError",
    "IconBundleError",
    "IconReadError",
    "UnknownTargetError",
    "UnknownTypeError",
]
