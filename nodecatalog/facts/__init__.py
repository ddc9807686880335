from .base import FactsStore
from .memory import MemoryFactsStore
from .factory import create_facts_store

__all__ = ["FactsStore", "MemoryFactsStore", "create_facts_store"]
