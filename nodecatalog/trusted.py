from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional
import logging

logger = logging.getLogger(__name__)


def freeze(data: Any) -> Any:
    """Return a read-only view of mapping data; other values pass through."""
    if isinstance(data, Mapping):
        return MappingProxyType(dict(data))
    return data


class TrustedScope:
    """
    Sink for data that untrusted node input must not be able to alter.

    Server facts are recorded here when trusted server facts are enabled,
    before they are merged into node parameters.
    """

    def __init__(self) -> None:
        self._trusted: Optional[Mapping[str, Any]] = None

    def set_trusted(self, data: Mapping[str, Any]) -> None:
        if self._trusted is not None:
            logger.warning("[TRUSTED] Trusted scope data replaced")

        self._trusted = freeze(data)
        logger.debug("[TRUSTED] Recorded %d trusted entries", len(self._trusted))

    @property
    def trusted(self) -> Optional[Mapping[str, Any]]:
        return self._trusted

    def has_trusted(self) -> bool:
        return self._trusted is not None
