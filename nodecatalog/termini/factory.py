from .base import NodeTerminus
from .plain import PlainTerminus
from .memory import MemoryTerminus


def create_terminus(context) -> NodeTerminus:
    """
    Factory for the node lookup backend.

    Selection is driven by ``context.settings.node_terminus``:
    - "plain"  → bare node for every name
    - "memory" → in-process store
    - "json"   → one file per node under data_dir
    - "rest"   → remote node service at server_url
    """

    settings = context.settings
    terminus = settings.node_terminus

    if terminus == "plain":
        return PlainTerminus(context)

    if terminus == "memory":
        return MemoryTerminus(context)

    if terminus == "json":
        from .json_terminus import JsonTerminus
        return JsonTerminus(context, settings.data_dir)

    if terminus == "rest":
        from .rest import RestTerminus
        return RestTerminus(
            context,
            settings.server_url,
            timeout_seconds=settings.timeout_seconds,
        )

    raise ValueError(f"Unsupported node_terminus: {terminus}")
