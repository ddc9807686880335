from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .config import NodeSettings
from .environments.registry import EnvironmentRegistry
from .facts.base import FactsStore
from .facts.factory import create_facts_store
from .models.environment import Environment
from .trusted import TrustedScope


@dataclass(frozen=True)
class NodeContext:
    """
    Settings and collaborators a Node talks to during one cycle.

    Passed explicitly to every Node so nothing depends on global state.
    """

    settings: NodeSettings
    environments: EnvironmentRegistry
    facts_store: FactsStore
    trusted_scope: TrustedScope = field(default_factory=TrustedScope)

    @classmethod
    def default(cls, settings: Optional[NodeSettings] = None) -> "NodeContext":
        """
        Build a context whose registry knows only the default environment.
        """
        settings = settings or NodeSettings()

        return cls(
            settings=settings,
            environments=EnvironmentRegistry([Environment(settings.environment)]),
            facts_store=create_facts_store(settings),
        )
