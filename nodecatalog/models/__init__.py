"""
Data models for nodecatalog.

Environment and Facts are value objects; Node is the mutable record
built once per lookup/compile cycle.
"""

from .environment import Environment
from .facts import Facts
from .node import Node

__all__ = ["Environment", "Facts", "Node"]
