"""Domain Layer: ports, value objects and exceptions of the cache."""
