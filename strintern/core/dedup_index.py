"""Deduplication index: content -> identifier

An open-addressing table whose keys are ContentRefs into the arena. Key
bytes are never copied into the table; equality is decided by resolving
the reference against the arena, after the stored hashes already match.
"""

from typing import List, Optional

from strintern.core.arena import Arena, ContentRef
from strintern.core.growth_logger import GrowthKind, GrowthLogger
from strintern.core.hashing import BuiltinHasher, Hasher

EMPTY = -1
MIN_CAPACITY = 8


class DedupIndex:
    """Maps stored content to the identifier it was assigned"""

    def __init__(self,
                 arena: Arena,
                 hasher: Optional[Hasher] = None,
                 logger: Optional[GrowthLogger] = None) -> None:
        """Initialize index

        Args:
            arena: Arena every inserted reference points into
            hasher: Hash strategy (defaults to BuiltinHasher)
            logger: Optional growth logger
        """
        self._arena = arena
        self._hasher = hasher if hasher is not None else BuiltinHasher()
        self._logger = logger
        self._count = 0
        self._allocate_slots(MIN_CAPACITY)

    @property
    def hasher(self) -> Hasher:
        return self._hasher

    @property
    def capacity(self) -> int:
        """Number of slots in the table"""
        return len(self._ids)

    def __len__(self) -> int:
        return self._count

    def hash_of(self, data: bytes) -> int:
        """Hash data with the configured strategy"""
        return self._hasher.hash_bytes(data)

    def get(self, data: bytes, hash_value: Optional[int] = None) -> Optional[int]:
        """Find the identifier for data

        Args:
            data: Content to look up
            hash_value: Precomputed hash_of(data), if the caller has it

        Returns:
            Identifier if the content was inserted, None otherwise
        """
        if hash_value is None:
            hash_value = self.hash_of(data)
        mask = len(self._ids) - 1
        slot = hash_value & mask
        while True:
            identifier = self._ids[slot]
            if identifier == EMPTY:
                return None
            if self._hashes[slot] == hash_value and self._arena.equals(self._refs[slot], data):
                return identifier
            slot = (slot + 1) & mask

    def insert(self, ref: ContentRef, identifier: int, hash_value: Optional[int] = None) -> None:
        """Register stored content under an identifier

        The reference must already point at bytes written to the arena, and
        the content must not be present yet.

        Args:
            ref: Reference returned by Arena.allocate()
            identifier: Identifier assigned to the content
            hash_value: Precomputed hash of the content, if the caller has it
        """
        if hash_value is None:
            hash_value = self.hash_of(self._arena.resolve(ref))
        if (self._count + 1) * 3 > len(self._ids) * 2:
            self._resize(len(self._ids) * 2)
        self._place(hash_value, ref, identifier)
        self._count += 1

    def _place(self, hash_value: int, ref: ContentRef, identifier: int) -> None:
        mask = len(self._ids) - 1
        slot = hash_value & mask
        while self._ids[slot] != EMPTY:
            slot = (slot + 1) & mask
        self._hashes[slot] = hash_value
        self._refs[slot] = ref
        self._ids[slot] = identifier

    def _allocate_slots(self, capacity: int) -> None:
        self._hashes: List[int] = [0] * capacity
        self._refs: List[Optional[ContentRef]] = [None] * capacity
        self._ids: List[int] = [EMPTY] * capacity

    def _resize(self, new_capacity: int) -> None:
        # Stored hashes are reused; content is never rehashed.
        old = zip(self._hashes, self._refs, self._ids)
        old_capacity = len(self._ids)
        self._allocate_slots(new_capacity)
        for hash_value, ref, identifier in old:
            if identifier != EMPTY:
                self._place(hash_value, ref, identifier)
        if self._logger is not None:
            self._logger.log_growth(
                GrowthKind.INDEX_RESIZE, old_capacity, new_capacity,
                f"{self._count + 1} entries over 2/3 load"
            )
