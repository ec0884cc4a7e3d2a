"""Application services: the cache store and the tree walker behind clear()."""
