from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Environment:
    """
    Named configuration namespace a node belongs to.

    The environment decides which manifest and module path apply
    when the node's catalog is compiled.
    """

    name: str
    manifest: str = ""

    # NOTE: Tuple used instead of List to preserve immutability
    modulepath: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValueError("Environment name must be a non-empty string.")

        object.__setattr__(self, "modulepath", tuple(self.modulepath))

    def __str__(self) -> str:
        return self.name
