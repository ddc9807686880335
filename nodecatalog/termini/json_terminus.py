from __future__ import annotations

from pathlib import Path
from typing import Optional
import json
import logging

from .base import NodeTerminus, stored_data_hash
from ..errors import BackendError
from ..models.node import Node

logger = logging.getLogger(__name__)


class JsonTerminus(NodeTerminus):
    """
    Node data kept as one JSON data hash per node:

        <data_dir>/nodes/<name>.json
    """

    def __init__(self, context, data_dir: str) -> None:
        super().__init__(context)
        self._root = Path(data_dir) / "nodes"

    def _path(self, name: str) -> Path:
        if not name or "/" in name or name.startswith("."):
            raise ValueError(f"Invalid node name for file storage: {name!r}")
        return self._root / f"{name}.json"

    def find(self, name: str, environment=None) -> Optional[Node]:
        path = self._path(name)

        if not path.exists():
            logger.debug("[TERMINUS JSON] No node file for %s", name)
            return None

        try:
            with path.open() as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise BackendError(f"Could not read node file {path}: {e}") from e

        if not isinstance(data, dict):
            raise BackendError(f"Node file {path} does not hold an object")

        return self._build(data, environment)

    def save(self, node: Node) -> None:
        path = self._path(node.name)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w") as f:
                json.dump(stored_data_hash(node), f, indent=2)
        except OSError as e:
            raise BackendError(f"Could not write node file {path}: {e}") from e

        logger.info("[TERMINUS JSON] Saved node %s", node.name)
