from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, List, Optional, Union
from threading import RLock
import logging

from ..errors import EnvironmentNotFound
from ..models.environment import Environment

logger = logging.getLogger(__name__)

EnvironmentName = Union[str, Enum]


def normalize_name(name: EnvironmentName) -> str:
    """Accept plain strings or str-valued Enum members."""
    if isinstance(name, Enum):
        name = name.value
    if not name or not isinstance(name, str):
        raise ValueError(f"Invalid environment name: {name!r}")
    return name


class EnvironmentRegistry:
    """
    Authoritative registry of the environments a node may belong to.

    If an environment is not registered here, nodes cannot resolve it.
    """

    def __init__(self, environments: Optional[Iterable[Environment]] = None) -> None:
        self._environments: Dict[str, Environment] = {}
        self._lock = RLock()

        for env in environments or ():
            self.register(env)

        logger.info("[ENV REGISTRY] Initialized | total=%d", len(self._environments))

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, env: Environment) -> None:

        if not isinstance(env, Environment):
            raise TypeError("Only Environment instances can be registered.")

        with self._lock:
            if env.name in self._environments:
                raise ValueError(f"Environment '{env.name}' is already registered.")

            self._environments[env.name] = env

            logger.info(
                "[ENV REGISTRY] Environment registered: %s | total=%d",
                env.name,
                len(self._environments),
            )

    def register_or_update(self, env: Environment) -> str:
        """
        Idempotent registration.

        Returns:
            "registered" | "updated" | "unchanged"
        """

        if not isinstance(env, Environment):
            raise TypeError("Only Environment instances can be registered.")

        with self._lock:
            existing = self._environments.get(env.name)

            if existing is None:
                self._environments[env.name] = env
                logger.info("[ENV REGISTRY] Environment registered: %s", env.name)
                return "registered"

            if existing == env:
                logger.debug("[ENV REGISTRY] Environment unchanged: %s", env.name)
                return "unchanged"

            self._environments[env.name] = env
            logger.info("[ENV REGISTRY] Environment updated: %s", env.name)
            return "updated"

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: EnvironmentName) -> Optional[Environment]:
        with self._lock:
            return self._environments.get(normalize_name(name))

    def get_or_raise(self, name: EnvironmentName) -> Environment:
        key = normalize_name(name)

        with self._lock:
            try:
                env = self._environments[key]
                logger.debug("[ENV REGISTRY] Lookup success: %s", key)
                return env
            except KeyError:
                logger.error(
                    "[ENV REGISTRY] Lookup FAILED: %s | available=%s",
                    key,
                    sorted(self._environments),
                )
                raise EnvironmentNotFound(key) from None

    def default_environment(self, settings) -> Environment:
        """Environment used by nodes that never specified one."""
        return self.get_or_raise(settings.environment)

    def has_environment(self, name: EnvironmentName) -> bool:
        with self._lock:
            return normalize_name(name) in self._environments

    def list_names(self) -> List[str]:
        with self._lock:
            return sorted(self._environments)

    def __len__(self) -> int:
        with self._lock:
            return len(self._environments)
