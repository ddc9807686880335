from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from ..models.environment import Environment
from ..models.node import Node


class NodeTerminus(ABC):
    """
    Abstract node lookup backend.

    A terminus turns a node name into a Node record built against the
    terminus' NodeContext, or reports that the node is unknown.

    Implementations may be:
    - Plain (every name is a bare node)
    - In-memory
    - JSON files on disk
    - Remote node service over HTTP
    """

    def __init__(self, context) -> None:
        self.context = context

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    def find(
        self,
        name: str,
        environment: Optional[Union[str, Environment]] = None,
    ) -> Optional[Node]:
        """
        Look up a node.

        Parameters
        ----------
        name : str
            Node name (usually the certificate name).

        environment : str | Environment | None
            Environment requested by the caller. Applied only to nodes
            whose data does not name one.

        Returns
        -------
        Node | None
            The node, or None when this terminus does not know it.
        """
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _build(self, data, environment=None) -> Node:
        node = Node.from_data_hash(data, self.context)
        apply_requested_environment(node, environment)
        return node


def apply_requested_environment(node: Node, environment) -> None:
    if environment is None:
        return
    if node.environment_name or node.parameters.get("environment"):
        return
    node.environment_name = environment.name if isinstance(environment, Environment) else environment


def stored_data_hash(node: Node) -> Dict[str, Any]:
    """
    Data hash for storage that never resolves the environment.

    A node saved without an environment stays without one, so a later
    find() can still apply the requested environment.
    """
    data: Dict[str, Any] = {"name": node.name}
    if node.has_environment_instance():
        data["environment"] = node.environment.name
    elif node.environment_name:
        data["environment"] = node.environment_name
    if node.classes:
        data["classes"] = list(node.classes)
    if node.parameters:
        data["parameters"] = dict(node.parameters)
    return data
