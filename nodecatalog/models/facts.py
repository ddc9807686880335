from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional
import logging
import time

from ..errors import InvalidArgument

logger = logging.getLogger(__name__)


# Names the compiler owns; facts may not shadow them.
RESERVED_FACT_NAMES = frozenset({"trusted", "facts", "server_facts"})


@dataclass
class Facts:
    """
    Snapshot of the facts collected from one managed machine.

    Attributes
    ----------
    name : str
        Node name the facts belong to.

    values : Dict[str, Any]
        Fact name to fact value.

    timestamp : float
        Unix timestamp when the snapshot was taken.

    expiration : Optional[float]
        Unix timestamp after which the snapshot is stale. None never expires.
    """

    name: str
    values: Dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)
    expiration: Optional[float] = None

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise InvalidArgument("Facts require a non-empty node name")

        if not isinstance(self.values, Mapping):
            raise InvalidArgument(f"Facts values for {self.name} must be a mapping")

        self.values = dict(self.values)

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------

    def sanitize(self) -> None:
        """
        Normalize values in place so they are plain JSON shapes.

        Keys become strings, reserved names are dropped.
        """
        cleaned: Dict[str, Any] = {}

        for key, value in self.values.items():
            key = _sanitize_key(key)

            if key in RESERVED_FACT_NAMES:
                logger.warning(
                    "[FACTS] Dropping reserved fact '%s' for node %s",
                    key,
                    self.name,
                )
                continue

            cleaned[key] = _sanitize_value(value)

        self.values = cleaned

    def add_local_facts(self) -> None:
        self.values.setdefault("clientcert", self.name)

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expiration is None:
            return False
        now = time.time() if now is None else now
        return now >= self.expiration

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_data_hash(self) -> Dict[str, Any]:
        result = {
            "name": self.name,
            "values": dict(self.values),
            "timestamp": self.timestamp,
        }
        if self.expiration is not None:
            result["expiration"] = self.expiration
        return result

    @classmethod
    def from_data_hash(cls, data: Mapping[str, Any]) -> "Facts":
        name = data.get("name")
        if not name:
            raise InvalidArgument("No name provided in serialized facts")

        values = data.get("values") or {}
        if not isinstance(values, Mapping):
            raise InvalidArgument(f"Serialized facts for {name} have non-mapping values")

        facts = cls(name=name, values=values, expiration=data.get("expiration"))
        if data.get("timestamp") is not None:
            facts.timestamp = float(data["timestamp"])
        return facts

    def __repr__(self) -> str:
        return f"Facts(name={self.name}, count={len(self.values)})"


def _sanitize_key(key: Any) -> str:
    if isinstance(key, Enum):
        key = key.value
    return key if isinstance(key, str) else str(key)


def _sanitize_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value

    if isinstance(value, Enum):
        return _sanitize_value(value.value)

    if isinstance(value, Mapping):
        return {_sanitize_key(k): _sanitize_value(v) for k, v in value.items()}

    if isinstance(value, (set, frozenset)):
        return sorted((_sanitize_value(v) for v in value), key=str)

    if isinstance(value, (list, tuple)):
        return [_sanitize_value(v) for v in value]

    return str(value)
