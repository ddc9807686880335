"""
nodecatalog: node data model for a configuration-management system.

A Node combines a managed machine's declared classes, parameters,
discovered facts and environment into one parameter set.
"""

from .config import NodeSettings
from .context import NodeContext
from .errors import (
    BackendError,
    EnvironmentNotFound,
    FactsRetrievalError,
    InvalidArgument,
    NodeCatalogError,
)
from .models import Environment, Facts, Node
from .service import NodeService

__all__ = [
    "BackendError",
    "Environment",
    "EnvironmentNotFound",
    "Facts",
    "FactsRetrievalError",
    "InvalidArgument",
    "Node",
    "NodeCatalogError",
    "NodeContext",
    "NodeService",
    "NodeSettings",
]
