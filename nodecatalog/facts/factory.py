from .base import FactsStore
from .memory import MemoryFactsStore
from nodecatalog.config import NodeSettings


def create_facts_store(settings: NodeSettings) -> FactsStore:
    """
    Factory for the facts store backend.

    Selection is driven by ``settings.facts_terminus``:
    - "memory" → in-process store
    - "json"   → one file per node under data_dir
    - "rest"   → remote node service at server_url
    """

    terminus = settings.facts_terminus

    if terminus == "memory":
        return MemoryFactsStore()

    if terminus == "json":
        from .json_store import JsonFactsStore
        return JsonFactsStore(settings.data_dir)

    if terminus == "rest":
        # Lazy import keeps requests off the import path of local setups
        from .rest import RestFactsStore
        return RestFactsStore(
            settings.server_url,
            timeout_seconds=settings.timeout_seconds,
        )

    raise ValueError(f"Unsupported facts_terminus: {terminus}")
