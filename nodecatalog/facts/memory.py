from __future__ import annotations

from copy import deepcopy
from typing import Dict, Optional
from threading import RLock
import logging

from .base import FactsStore
from ..models.environment import Environment
from ..models.facts import Facts

logger = logging.getLogger(__name__)


class MemoryFactsStore(FactsStore):
    """In-process facts store. Expired snapshots count as absent."""

    def __init__(self) -> None:
        self._facts: Dict[str, Facts] = {}
        self._lock = RLock()

    def find(self, name: str, environment: Optional[Environment] = None) -> Optional[Facts]:
        with self._lock:
            facts = self._facts.get(name)

            if facts is None:
                logger.debug("[FACTS MEMORY] No facts for %s", name)
                return None

            if facts.is_expired():
                logger.info("[FACTS MEMORY] Facts for %s expired", name)
                return None

            return deepcopy(facts)

    def save(self, facts: Facts) -> None:
        with self._lock:
            self._facts[facts.name] = deepcopy(facts)
            logger.info("[FACTS MEMORY] Saved facts for %s", facts.name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._facts)
