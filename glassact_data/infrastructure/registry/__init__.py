from .in_memory_entity_registry import InMemoryEntityRegistry

__all__ = ["InMemoryEntityRegistry"]
