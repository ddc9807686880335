from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
import logging

from .config import NodeSettings
from .context import NodeContext
from .models.node import Node
from .termini.base import NodeTerminus
from .termini.factory import create_terminus

logger = logging.getLogger(__name__)


class NodeService:
    """
    Runs the node half of one configuration cycle.

        terminus.find → Node.fact_merge → Node.add_server_facts

    The service owns no state beyond its wiring; each call builds and
    returns a fresh Node.
    """

    def __init__(self, context: NodeContext, terminus: NodeTerminus) -> None:
        self.context = context
        self.terminus = terminus

    @classmethod
    def from_settings(cls, settings: Optional[NodeSettings] = None) -> "NodeService":
        """
        Assemble a service from settings alone.

        Backends are selected by the terminus/facts factories.
        """
        context = NodeContext.default(settings)
        return cls(context, create_terminus(context))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, name: str, environment: Optional[str] = None) -> Optional[Node]:
        node = self.terminus.find(name, environment)

        if node is None:
            logger.info("[NODE SERVICE] Node %s not found via %s", name, self.terminus.name)
        else:
            logger.debug("[NODE SERVICE] Found %r via %s", node, self.terminus.name)

        return node

    def prepare(
        self,
        name: str,
        server_facts: Optional[Mapping[str, Any]] = None,
        environment: Optional[str] = None,
    ) -> Optional[Node]:
        """
        Find a node and fold its facts (and server facts) into its parameters.

        Returns None when the terminus does not know the node.
        Raises FactsRetrievalError or EnvironmentNotFound unchanged.
        """
        node = self.find(name, environment)
        if node is None:
            return None

        node.fact_merge()

        if server_facts:
            node.add_server_facts(server_facts)

        logger.info(
            "[NODE SERVICE] Prepared %s | environment=%s | parameters=%d",
            node.name,
            node.environment.name,
            len(node.parameters),
        )
        return node

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------

    def health(self) -> Dict[str, Any]:
        settings = self.context.settings
        return {
            "status": "ok",
            "node_terminus": self.terminus.name,
            "facts_store": self.context.facts_store.name,
            "default_environment": settings.environment,
            "environments": self.context.environments.list_names(),
        }
