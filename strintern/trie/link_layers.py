"""Size-classed storage for trie links

Links are (byte, child node) pairs. They live in chunks whose capacity is
a power of two; all chunks of one capacity share a layer made of two flat
arrays. A chunk is addressed by (layer, chunk index), and chunk c of layer
k covers slots [c << k, (c + 1) << k).

Chunks retired by a growing node go on their layer's free list and are
handed to the next node that needs that capacity.
"""

from array import array
from typing import List, Optional, Tuple

from strintern.core.growth_logger import GrowthKind, GrowthLogger

MAX_LAYER = 8  # 256 links, one per byte value
NO_LAYER = -1


class LinkLayers:
    """Chunk allocator with one free list per size class"""

    def __init__(self, logger: Optional[GrowthLogger] = None) -> None:
        """Initialize empty layers

        Args:
            logger: Optional growth logger
        """
        self.keys: List[bytearray] = [bytearray() for _ in range(MAX_LAYER + 1)]
        self.children: List[array] = [array('i') for _ in range(MAX_LAYER + 1)]
        self.free: List[List[int]] = [[] for _ in range(MAX_LAYER + 1)]
        self._logger = logger
        self.allocations = 0
        self.reuses = 0

    @staticmethod
    def capacity(layer: int) -> int:
        """Link capacity of a chunk in layer"""
        return 1 << layer

    def chunk_count(self, layer: int) -> int:
        """Chunks ever allocated in layer (live and free)"""
        return len(self.keys[layer]) >> layer

    def layer(self, layer: int) -> Tuple[bytearray, array]:
        """Key and child arrays of a layer"""
        return self.keys[layer], self.children[layer]

    def alloc(self, layer: int) -> int:
        """Get a chunk of capacity 1 << layer

        Args:
            layer: Size class

        Returns:
            Chunk index within the layer
        """
        free = self.free[layer]
        if free:
            chunk = free.pop()
            self.reuses += 1
            self._log(GrowthKind.TRIE_CHUNK_REUSE, layer, f"reused chunk {chunk}")
            return chunk

        chunk = self.chunk_count(layer)
        size = self.capacity(layer)
        self.keys[layer].extend(bytes(size))
        self.children[layer].extend([0] * size)
        self.allocations += 1
        self._log(GrowthKind.TRIE_CHUNK_ALLOC, layer, f"new chunk {chunk}")
        return chunk

    def release(self, layer: int, chunk: int) -> None:
        """Return a chunk to its layer's free list"""
        self.free[layer].append(chunk)

    def _log(self, kind: GrowthKind, layer: int, reason: str) -> None:
        if self._logger is not None:
            size = self.capacity(layer)
            self._logger.log_growth(kind, size, size, f"layer {layer}: {reason}")
