from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..models.environment import Environment
from ..models.facts import Facts


class FactsStore(ABC):
    """
    Abstract source of facts snapshots.

    Architectural Role
    -------------------
    Node.fact_merge() asks the store for the latest snapshot of a node.
    The store performs the actual retrieval (memory, disk, HTTP).

    Stores must:
        • Return None when no snapshot exists (absence is not failure)
        • Raise for transport or decoding failures
        • Never mutate a snapshot after handing it out
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def find(self, name: str, environment: Optional[Environment] = None) -> Optional[Facts]:
        """
        Return the facts snapshot for a node.

        Parameters
        ----------
        name : str
            Node name.

        environment : Environment | None
            Environment the node resolved to. Stores may ignore it.

        Returns
        -------
        Facts | None
            The snapshot, or None when the store has no record.
        """
        raise NotImplementedError

    @abstractmethod
    def save(self, facts: Facts) -> None:
        """Persist a snapshot, replacing any previous one for the node."""
        raise NotImplementedError
