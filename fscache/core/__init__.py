"""Core Application Layer: the cache engine and command orchestration.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the cache store, its helpers and the command handler.
"""
