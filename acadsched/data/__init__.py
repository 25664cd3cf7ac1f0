from .loader import LoadedData, load_data
from .store import EntityStore, InMemoryStore

__all__ = ["EntityStore", "InMemoryStore", "LoadedData", "load_data"]
