"""Defines common Value Objects used across the cache domain.

These objects represent simple values like cache keys and filesystem paths,
ensuring consistency and type safety between the layers.
"""

from typing import NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are strings at runtime.
CacheKey = NewType("CacheKey", str)      # Key of a cache entry, '/' separates levels
FilePath = NewType("FilePath", str)      # Absolute path of a node on disk

# Separator used inside cache keys to denote a hierarchical location
KEY_SEPARATOR = "/"
