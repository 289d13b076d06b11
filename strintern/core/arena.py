"""Append-only byte arena for the interning engine

Content written to the arena is never moved or overwritten. When the
active buffer cannot hold a new write it is retired (kept alive, not
copied) and a larger buffer becomes active, so every ContentRef handed
out earlier keeps resolving to the same bytes.
"""

from typing import List, NamedTuple, Optional

from strintern.core.growth_logger import GrowthKind, GrowthLogger


class ContentRef(NamedTuple):
    """Logical handle to a byte range inside one arena buffer"""
    buffer: int
    start: int
    length: int


def next_power_of_two(value: int) -> int:
    """Smallest power of two that is >= value (1 for value <= 1)"""
    if value <= 1:
        return 1
    return 1 << (value - 1).bit_length()


class Arena:
    """Owns the buffers that back every interned string"""

    def __init__(self, capacity: int = 0, logger: Optional[GrowthLogger] = None) -> None:
        """Initialize arena

        Args:
            capacity: Bytes to preallocate for the first buffer (0 allocates lazily)
            logger: Optional growth logger
        """
        self._buffers: List[bytearray] = []
        self._used = 0
        self._bytes_stored = 0
        self._logger = logger
        if capacity > 0:
            self._buffers.append(bytearray(next_power_of_two(capacity)))

    @property
    def capacity(self) -> int:
        """Capacity of the active buffer (0 before the first buffer exists)"""
        if not self._buffers:
            return 0
        return len(self._buffers[-1])

    @property
    def used(self) -> int:
        """Bytes written to the active buffer"""
        return self._used

    @property
    def buffer_count(self) -> int:
        """Number of buffers, active and retired"""
        return len(self._buffers)

    @property
    def bytes_stored(self) -> int:
        """Total bytes written across all buffers"""
        return self._bytes_stored

    def reserve(self, capacity_hint: int) -> None:
        """Make sure the active buffer can take capacity_hint more bytes

        Args:
            capacity_hint: Bytes the caller expects to write next
        """
        if self._buffers and self.capacity - self._used >= capacity_hint:
            return
        self._grow(next_power_of_two(max(self.capacity, capacity_hint)), "reserve")

    def allocate(self, data: bytes) -> ContentRef:
        """Copy data into the arena

        Args:
            data: Bytes to store

        Returns:
            Reference that stays valid for the arena's lifetime
        """
        size = len(data)
        cap = self.capacity
        if not self._buffers or cap < self._used + size:
            self._grow(
                next_power_of_two(max(cap, size) + 1),
                f"write of {size} bytes with {cap - self._used} free",
            )

        buffer_id = len(self._buffers) - 1
        start = self._used
        self._buffers[buffer_id][start:start + size] = data
        self._used += size
        self._bytes_stored += size
        return ContentRef(buffer_id, start, size)

    def resolve(self, ref: ContentRef) -> bytes:
        """Copy the bytes a reference points at

        Args:
            ref: Reference returned by allocate()

        Returns:
            Stored bytes
        """
        return bytes(self._buffers[ref.buffer][ref.start:ref.start + ref.length])

    def equals(self, ref: ContentRef, data: bytes) -> bool:
        """Compare stored content with data without copying it out"""
        if ref.length != len(data):
            return False
        with memoryview(self._buffers[ref.buffer]) as view:
            return view[ref.start:ref.start + ref.length] == data

    def _grow(self, new_capacity: int, reason: str) -> None:
        # The old buffer is retired in place; its bytes are never copied.
        old_capacity = self.capacity
        self._buffers.append(bytearray(new_capacity))
        self._used = 0
        if self._logger is not None:
            self._logger.log_growth(GrowthKind.ARENA_BUFFER, old_capacity, new_capacity, reason)
