"""Enumerates and removes everything under the cache root.

Works in two phases. discover() lists the whole tree and returns a flat
list of nodes tagged with their depth. delete_depth_ordered() removes them
deepest level first, so every directory is already empty when its turn
comes. Nodes at the same depth are removed concurrently; one depth finishes
before the next shallower one starts.
"""

import asyncio
import logging
from itertools import groupby
from typing import List

from fscache.domain.interfaces.filesystem import DirectoryNode, FileNode, FileSystem, Node
from fscache.domain.models.cache import ClearFailure, ClearReport, DiscoveredNode
from fscache.domain.models.common import FilePath

logger = logging.getLogger(__name__)


class TreeWalker:
    """Discovers a directory tree and deletes it bottom-up."""

    def __init__(self, file_system: FileSystem):
        self.file_system = file_system

    async def discover(self, root: FilePath) -> List[DiscoveredNode]:
        """Lists every file and directory below ``root`` (root excluded).

        Args:
            root: The directory to enumerate.

        Returns:
            The discovered nodes, each tagged with its depth. Order within
            the list is unspecified.

        Raises:
            OSError: If any directory in the tree cannot be listed.
        """
        node = await self.file_system.detect(root)
        if not isinstance(node, DirectoryNode):
            logger.debug(f"Nothing to discover, {root} is not a directory.")
            return []
        return await self._walk(node, depth=1)

    async def _walk(self, directory: DirectoryNode, depth: int) -> List[DiscoveredNode]:
        children = await directory.ls()
        found = [DiscoveredNode(node=child, depth=depth) for child in children]

        subtrees = await asyncio.gather(*(
            self._walk(child, depth + 1)
            for child in children
            if isinstance(child, DirectoryNode)
        ))
        for subtree in subtrees:
            found.extend(subtree)
        return found

    async def delete_depth_ordered(self, nodes: List[DiscoveredNode]) -> ClearReport:
        """Removes ``nodes`` level by level, deepest level first.

        Every removal is attempted; failures are collected in the report
        instead of being raised.
        """
        report = ClearReport()
        ordered = sorted(nodes, key=lambda discovered: discovered.depth, reverse=True)

        for depth, level in groupby(ordered, key=lambda discovered: discovered.depth):
            level_nodes = [discovered.node for discovered in level]
            logger.debug(f"Removing {len(level_nodes)} node(s) at depth {depth}")
            results = await asyncio.gather(
                *(self._remove(node) for node in level_nodes),
                return_exceptions=True,
            )
            for node, result in zip(level_nodes, results):
                if isinstance(result, BaseException):
                    logger.warning(f"Failed to remove {node.path}: {result}")
                    report.failures.append(ClearFailure(path=node.path, error=str(result)))
                else:
                    report.removed.append(node.path)

        return report

    async def _remove(self, node: Node) -> None:
        if isinstance(node, FileNode):
            await node.unlink()
        elif isinstance(node, DirectoryNode):
            await node.remove()
        # A node that vanished since discovery needs no removal
