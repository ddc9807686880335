from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
import logging
import time

from ..errors import FactsRetrievalError, InvalidArgument
from ..trusted import freeze
from .environment import Environment
from .facts import Facts

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# Environment resolution state
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Unresolved:
    """No environment object has been looked up yet."""


@dataclass(frozen=True)
class Resolved:
    environment: Environment


UNRESOLVED = Unresolved()

EnvironmentInput = Union[str, Enum, Environment]


class Node:
    """
    In-memory record of one managed machine for one configuration cycle.

    A Node gathers the classes and parameters declared for the machine,
    the facts it reported and the environment it belongs to, and folds
    them into a single parameter set for the compiler.

    Declared parameters always win over merged-in values: merge() only
    adds keys that are absent.

    Collaborators (environment registry, facts store, trusted scope) and
    settings come from the NodeContext given at construction.
    """

    def __init__(
        self,
        name: str,
        context=None,
        *,
        classes: Optional[Union[str, Sequence[str]]] = None,
        parameters: Optional[Dict[str, Any]] = None,
        facts: Optional[Facts] = None,
        environment: Optional[EnvironmentInput] = None,
    ):
        if not name or not isinstance(name, str):
            raise InvalidArgument("Node names cannot be empty")

        if context is None:
            from ..context import NodeContext
            context = NodeContext.default()

        self.name = name
        self.context = context

        self.classes: List[str] = _normalize_classes(classes)
        self.parameters: Dict[str, Any] = parameters if parameters is not None else {}
        self._facts = facts

        self.source: Optional[str] = None
        self.ipaddress: Optional[str] = None
        self.environment_name: Optional[str] = None

        self._trusted_data: Any = None
        self._environment_state: Union[Unresolved, Resolved] = UNRESOLVED

        if environment:
            self.environment = environment

        self._time = time.time()

    # ------------------------------------------------------------------
    # Read-only attributes
    # ------------------------------------------------------------------

    @property
    def settings(self):
        return self.context.settings

    @property
    def time(self) -> float:
        """Unix timestamp when the node was created."""
        return self._time

    @property
    def facts(self) -> Optional[Facts]:
        return self._facts

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    @property
    def environment(self) -> Environment:
        """
        Resolved environment, looked up once and cached.

        Resolution order when nothing is cached yet:
            1. parameters["environment"]
            2. environment_name
            3. the registry's default environment
        """
        state = self._environment_state
        if isinstance(state, Resolved):
            return state.environment

        env = self.parameters.get("environment")
        if env:
            self.environment = env
        elif self.environment_name:
            self.environment = self.environment_name
        else:
            # Default for a node that never specified its environment
            self.environment = self.context.environments.default_environment(self.settings)

        logger.debug(
            "[NODE] %s resolved environment %s",
            self.name,
            self._environment_state.environment.name,
        )
        return self._environment_state.environment

    @environment.setter
    def environment(self, env: EnvironmentInput) -> None:
        if isinstance(env, Environment):
            self._environment_state = Resolved(env)
        elif isinstance(env, (str, Enum)):
            self._environment_state = Resolved(self.context.environments.get_or_raise(env))
        else:
            raise TypeError(f"Cannot use {type(env).__name__} as an environment")

    def has_environment_instance(self) -> bool:
        return isinstance(self._environment_state, Resolved)

    # ------------------------------------------------------------------
    # Trusted data
    # ------------------------------------------------------------------

    @property
    def trusted_data(self) -> Any:
        return self._trusted_data

    @trusted_data.setter
    def trusted_data(self, data: Any) -> None:
        # Overwrites after warning; see DESIGN.md for the write-once decision
        if self._trusted_data is not None:
            logger.warning("Trusted node data modified for node %s", self.name)
        self._trusted_data = freeze(data)

    # ------------------------------------------------------------------
    # Facts and parameters
    # ------------------------------------------------------------------

    def fact_merge(self) -> Optional[Facts]:
        """
        Fetch this node's facts and merge them into the parameters.

        Returns the sanitized snapshot, or None when the store has none.
        Any store failure is raised as FactsRetrievalError.
        """
        environment = self.environment
        store = self.context.facts_store

        try:
            facts = store.find(self.name, environment)
            if facts is not None:
                facts.sanitize()
        except Exception as e:
            raise FactsRetrievalError(
                f"Could not retrieve facts for {self.name}: {e}"
            ) from e

        self._facts = facts

        if facts is None:
            logger.info("[NODE] No facts found for %s in %s", self.name, store.name)
            return None

        self.merge(facts.values)
        logger.info(
            "[NODE] Merged facts for %s | count=%d",
            self.name,
            len(facts.values),
        )
        return facts

    def merge(self, params: Mapping[str, Any]) -> None:
        """Add every absent key of params; existing parameters are kept."""
        for key, value in params.items():
            if key not in self.parameters:
                self.parameters[key] = value

        if self.parameters.get("environment") is None:
            self.parameters["environment"] = str(self.environment.name)

    def add_server_facts(self, server_facts: Mapping[str, Any]) -> None:
        if self.settings.trusted_server_facts:
            self.context.trusted_scope.set_trusted(server_facts)

        self.merge(server_facts)

    # ------------------------------------------------------------------
    # Name matching
    # ------------------------------------------------------------------

    def names(self) -> List[str]:
        """
        Candidate names for matching this node against named node rules.
        """
        if self.settings.strict_hostname_checking:
            return [self.name]

        names: List[str] = []

        if "." in self.name:
            names += self.split_name(self.name)

        fqdn = self.parameters.get("fqdn")
        if not fqdn:
            hostname = self.parameters.get("hostname")
            domain = self.parameters.get("domain")
            if hostname and domain:
                fqdn = f"{hostname}.{domain}"
            else:
                logger.warning("Host is missing hostname and/or domain: %s", self.name)

        if fqdn:
            names += self.split_name(fqdn)

        # The name is usually the certificate CN; it can be the hostname fact
        if self.settings.node_name == "cert":
            head = self.name
        else:
            head = self.parameters.get("hostname")

        if head:
            names.insert(0, head)

        return list(dict.fromkeys(names))

    @staticmethod
    def split_name(name: str) -> List[str]:
        """Dotted prefixes, longest first: a.b.c -> [a.b.c, a.b, a]"""
        parts = name.split(".")
        return [".".join(parts[:i]) for i in range(len(parts), 0, -1)]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_data_hash(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "name": self.name,
            "environment": self.environment.name,
        }
        if self.classes:
            result["classes"] = list(self.classes)
        if self.parameters:
            result["parameters"] = dict(self.parameters)
        return result

    @classmethod
    def from_data_hash(cls, data: Mapping[str, Any], context=None) -> "Node":
        name = data.get("name")
        if not name:
            raise InvalidArgument("No name provided in serialized data")

        node = cls(name, context)
        node.classes = _normalize_classes(data.get("classes"))
        node.parameters = dict(data.get("parameters") or {})
        node.environment_name = data.get("environment")
        return node

    def __repr__(self) -> str:
        return (
            f"Node(name={self.name}, classes={len(self.classes)}, "
            f"parameters={len(self.parameters)})"
        )


def _normalize_classes(classes) -> List[str]:
    if not classes:
        return []
    if isinstance(classes, str):
        return [classes]
    return list(classes)
