class NodeCatalogError(Exception):
    """Base class for every error raised by nodecatalog."""
    pass


class InvalidArgument(NodeCatalogError, ValueError):
    """Raised when a node (or facts snapshot) is built from unusable input."""
    pass


class EnvironmentNotFound(NodeCatalogError, LookupError):
    """Raised when a named environment is not known to the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Could not find a directory environment named '{name}'")


class FactsRetrievalError(NodeCatalogError, RuntimeError):
    """
    Raised by Node.fact_merge() when the facts store fails.

    The original failure is chained as ``__cause__``.
    """
    pass


class BackendError(NodeCatalogError, RuntimeError):
    """Transport or decoding failure inside a json/rest backend."""
    pass
