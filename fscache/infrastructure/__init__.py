"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the cache engine to the outside world (local disk, byte formats,
clocks, configuration, console) by implementing the interfaces defined in
the domain layer.
"""
