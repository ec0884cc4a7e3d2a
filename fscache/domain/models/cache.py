"""Value objects of the cache engine: stored items, operation outcomes and
the report produced by a whole-cache clear.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, List, Optional

from fscache.domain.models.common import FilePath


@dataclass(frozen=True)
class CacheItem:
    """A stored value together with its absolute expiry timestamp.

    ``expires_at`` of None means the item never expires.
    """
    data: Any
    expires_at: Optional[float] = None


class Outcome(enum.Enum):
    """Cause-level result of a single cache operation."""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    CORRUPT_ENTRY = "corrupt_entry"
    IO_FAILURE = "io_failure"
    INVALID_KEY = "invalid_key"

    @property
    def ok(self) -> bool:
        return self is Outcome.SUCCESS


@dataclass(frozen=True)
class CacheResult:
    """Outcome of a read plus the value when the read succeeded."""
    outcome: Outcome
    value: Any = None


@dataclass(frozen=True)
class DiscoveredNode:
    """A node found under the cache root and its nesting depth.

    The root's immediate children have depth 1.
    """
    node: Any  # fscache.domain.interfaces.filesystem.Node
    depth: int


@dataclass(frozen=True)
class ClearFailure:
    """A node that clear() could not remove."""
    path: FilePath
    error: str


@dataclass
class ClearReport:
    """Summary of a whole-cache clear."""
    removed: List[FilePath] = field(default_factory=list)
    failures: List[ClearFailure] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def succeeded(self) -> bool:
        return not self.failures
