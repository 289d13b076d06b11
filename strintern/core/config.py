"""Construction-time configuration for Interner"""

from dataclasses import dataclass
from typing import Union

from strintern.core.hashing import Hasher, available_hashers

BACKEND_HASH = "hash"
BACKEND_TRIE = "trie"
BACKENDS = (BACKEND_HASH, BACKEND_TRIE)


@dataclass
class InternerConfig:
    """Interner settings

    Attributes:
        backend: "hash" (arena + dedup index + id table) or "trie"
        hasher: Hash strategy name or object (hash backend only)
        initial_capacity: Bytes to preallocate for the first text buffer
        check_invariants: Verify lookup/re-intern postconditions on every new entry
        log_growth: Record growth events in a GrowthLogger
    """
    backend: str = BACKEND_HASH
    hasher: Union[str, Hasher] = "builtin"
    initial_capacity: int = 0
    check_invariants: bool = False
    log_growth: bool = False

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(
                f"backend must be one of {', '.join(BACKENDS)}, got {self.backend!r}"
            )
        if isinstance(self.hasher, str) and self.hasher not in available_hashers():
            raise ValueError(
                f"hasher must be one of {', '.join(available_hashers())}, got {self.hasher!r}"
            )
        if not isinstance(self.initial_capacity, int) or self.initial_capacity < 0:
            raise ValueError(
                f"initial_capacity must be a non-negative integer, got {self.initial_capacity!r}"
            )
