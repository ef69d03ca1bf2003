"""Persistent stores used between builds."""

from .node_cache import NodeCache, TargetCache

__all__ = ["NodeCache", "TargetCache"]
