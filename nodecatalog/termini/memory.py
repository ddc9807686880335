from __future__ import annotations

from typing import Any, Dict, List, Optional
from threading import RLock
import logging

from .base import NodeTerminus, stored_data_hash
from ..models.node import Node

logger = logging.getLogger(__name__)


class MemoryTerminus(NodeTerminus):
    """
    In-process node store.

    Keeps data hashes, not live nodes: each find() builds a fresh Node.
    """

    def __init__(self, context) -> None:
        super().__init__(context)
        self._nodes: Dict[str, Dict[str, Any]] = {}
        self._lock = RLock()

    def save(self, node: Node) -> None:
        data = stored_data_hash(node)

        with self._lock:
            self._nodes[node.name] = data
            logger.info("[TERMINUS MEMORY] Saved node %s | total=%d", node.name, len(self._nodes))

    def find(self, name: str, environment=None) -> Optional[Node]:
        with self._lock:
            data = self._nodes.get(name)

        if data is None:
            logger.debug("[TERMINUS MEMORY] Unknown node %s", name)
            return None

        return self._build(data, environment)

    def list_names(self) -> List[str]:
        with self._lock:
            return sorted(self._nodes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._nodes)
