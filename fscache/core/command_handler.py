"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), runs them against
the CacheService and reports the result through the UserInterface.
Each handler returns the process exit code for the command.
"""

import logging
from typing import Optional

from fscache.domain.interfaces.cache import CacheService
from fscache.domain.interfaces.user_interface import UserInterface
from fscache.domain.models.common import CacheKey

logger = logging.getLogger(__name__)

_MISSING = object()


class CommandHandler:
    """Handles incoming commands and delegates to the cache service."""

    def __init__(self, cache_service: CacheService, ui: UserInterface):
        """Initializes the CommandHandler with the cache and the UI."""
        self.cache_service = cache_service
        self.ui = ui

    async def handle_get(self, key: str, default: Optional[str] = None) -> int:
        """Handles the 'get' command. A miss without a default exits with 1."""
        logger.info(f"Handling 'get' command for key: {key}")
        value = await self.cache_service.get(CacheKey(key), _MISSING)
        if value is _MISSING:
            if default is None:
                self.ui.display_error(f"No cache entry for key '{key}'.")
                return 1
            value = default
        self.ui.display_output(str(value))
        return 0

    async def handle_set(self, key: str, value: str, ttl: Optional[float] = None) -> int:
        """Handles the 'set' command."""
        logger.info(f"Handling 'set' command for key: {key} (ttl={ttl})")
        if await self.cache_service.set(CacheKey(key), value, ttl):
            self.ui.display_info(f"Stored '{key}'.")
            return 0
        self.ui.display_error(f"Failed to store '{key}'.")
        return 1

    async def handle_delete(self, key: str) -> int:
        """Handles the 'delete' command."""
        logger.info(f"Handling 'delete' command for key: {key}")
        if await self.cache_service.delete(CacheKey(key)):
            self.ui.display_info(f"Deleted '{key}'.")
            return 0
        self.ui.display_warning(f"Nothing deleted for '{key}'.")
        return 1

    async def handle_has(self, key: str) -> int:
        """Handles the 'has' command. Prints 'true' or 'false'."""
        exists = await self.cache_service.has(CacheKey(key))
        self.ui.display_output("true" if exists else "false")
        return 0 if exists else 1

    async def handle_clear(self) -> int:
        """Handles the 'clear' command."""
        logger.info("Handling 'clear' command")
        report = await self.cache_service.clear()
        self.ui.display_clear_report(report)
        return 0 if report.succeeded else 1
