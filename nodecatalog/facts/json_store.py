from __future__ import annotations

from pathlib import Path
from typing import Optional
import json
import logging

from .base import FactsStore
from ..errors import BackendError
from ..models.environment import Environment
from ..models.facts import Facts

logger = logging.getLogger(__name__)


class JsonFactsStore(FactsStore):
    """
    Facts kept as one JSON document per node:

        <data_dir>/facts/<name>.json
    """

    def __init__(self, data_dir: str) -> None:
        self._root = Path(data_dir) / "facts"

    def _path(self, name: str) -> Path:
        if not name or "/" in name or name.startswith("."):
            raise ValueError(f"Invalid node name for file storage: {name!r}")
        return self._root / f"{name}.json"

    def find(self, name: str, environment: Optional[Environment] = None) -> Optional[Facts]:
        path = self._path(name)

        if not path.exists():
            logger.debug("[FACTS JSON] No facts file for %s", name)
            return None

        try:
            with path.open() as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise BackendError(f"Could not read facts file {path}: {e}") from e

        if not isinstance(data, dict):
            raise BackendError(f"Facts file {path} does not hold an object")

        facts = Facts.from_data_hash(data)

        if facts.is_expired():
            logger.info("[FACTS JSON] Facts for %s expired", name)
            return None

        return facts

    def save(self, facts: Facts) -> None:
        path = self._path(facts.name)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                json.dump(facts.to_data_hash(), f, indent=2)
        except OSError as e:
            raise BackendError(f"Could not write facts file {path}: {e}") from e

        logger.info("[FACTS JSON] Saved facts for %s", facts.name)
