from __future__ import annotations

from typing import Optional
import logging

from .base import NodeTerminus, apply_requested_environment
from ..models.node import Node

logger = logging.getLogger(__name__)


class PlainTerminus(NodeTerminus):
    """
    Returns a bare node for every name.

    Used when no external node classifier is configured: classes and
    parameters then come entirely from facts and manifests.
    """

    def find(self, name: str, environment=None) -> Optional[Node]:
        node = Node(name, self.context)
        apply_requested_environment(node, environment)
        logger.debug("[TERMINUS PLAIN] Built bare node %s", name)
        return node
