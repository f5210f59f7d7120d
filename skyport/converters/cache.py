"""
Output cache shared by the artifacts of one converter run

Artifacts are held in memory until the run finishes and written in one batch,
so a failing entry never leaves a half-written skybox behind and a face
texture derived by several entries is encoded and written only once.
"""

import logging
from typing import Dict, Iterator, Tuple

from skyport.identifier import Identifier
from skyport.resources import ResourceAccessor, ResourceType

logger = logging.getLogger(__name__)


class OutputCache:
    """Insert-if-absent map of output identifiers to file contents"""

    def __init__(self):
        self._entries: Dict[Identifier, bytes] = {}

    def __contains__(self, identifier: Identifier) -> bool:
        return identifier in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[Identifier, bytes]]:
        return iter(self._entries.items())

    def get(self, identifier: Identifier):
        return self._entries.get(identifier)

    def put_if_absent(self, identifier: Identifier, data: bytes) -> bool:
        """
        Store ``data`` unless ``identifier`` is already cached.

        Returns:
            True if the data was stored, False if an earlier entry won
        """
        if identifier in self._entries:
            return False
        self._entries[identifier] = data
        return True

    def flush(self, output: ResourceAccessor, resource_type: ResourceType = ResourceType.ASSETS) -> int:
        """
        Write every cached artifact once, then empty the cache.

        Returns:
            Number of artifacts written
        """
        count = len(self._entries)
        for identifier, data in self._entries.items():
            output.put(resource_type, identifier, data)
        self._entries.clear()
        if count:
            logger.info(f"Flushed {count} artifacts")
        return count
