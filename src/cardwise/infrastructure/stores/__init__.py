# Deck Store Adapters
from .memory import InMemoryDeckStore
from .yaml_store import YamlDeckStore

__all__ = ["InMemoryDeckStore", "YamlDeckStore"]
