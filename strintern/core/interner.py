"""Interner facade

Canonicalizes repeated text into dense identifiers. Identifiers are
assigned in first-occurrence order starting at 0, never reused, and
resolve back to the exact bytes that were interned.

Text is treated as an opaque byte sequence: a str is encoded as UTF-8
(surrogateescape) and interns to the same identifier as its encoded bytes.

The interner is single-threaded. Concurrent lookups are only safe while
no intern call is running; callers that share an instance across threads
must serialize access themselves.
"""

from dataclasses import replace
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from strintern.core.arena import Arena
from strintern.core.config import BACKEND_TRIE, InternerConfig
from strintern.core.dedup_index import DedupIndex
from strintern.core.growth_logger import GrowthLogger
from strintern.core.hashing import get_hasher
from strintern.core.id_table import IdTable
from strintern.trie.trie_index import TrieDedupIndex

Text = Union[str, bytes, bytearray, memoryview]

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


class HashDedupBackend:
    """Arena + DedupIndex + IdTable composed into the interning contract"""

    name = "hash"

    def __init__(self, config: InternerConfig, logger: Optional[GrowthLogger] = None) -> None:
        """Initialize backend

        Args:
            config: Interner settings
            logger: Optional growth logger
        """
        self.arena = Arena(config.initial_capacity, logger)
        self.index = DedupIndex(self.arena, get_hasher(config.hasher), logger)
        self.table = IdTable()

    def __len__(self) -> int:
        return len(self.table)

    def get(self, data: bytes) -> Optional[int]:
        return self.index.get(data)

    def intern(self, data: bytes) -> int:
        hash_value = self.index.hash_of(data)
        existing = self.index.get(data, hash_value)
        if existing is not None:
            return existing

        # Index only after the bytes are in the arena.
        ref = self.arena.allocate(data)
        identifier = len(self.table)
        self.index.insert(ref, identifier, hash_value)
        self.table.push(ref)
        return identifier

    def resolve(self, identifier: int) -> bytes:
        return self.arena.resolve(self.table.get(identifier))

    def resolve_all(self) -> Iterator[bytes]:
        for ref in self.table:
            yield self.arena.resolve(ref)

    def stats(self) -> Dict:
        return {
            "bytes_stored": self.arena.bytes_stored,
            "buffer_count": self.arena.buffer_count,
            "buffer_capacity": self.arena.capacity,
            "index_capacity": self.index.capacity,
            "hasher": getattr(self.index.hasher, "name", type(self.index.hasher).__name__),
        }


class TrieDedupBackend:
    """TrieDedupIndex behind the same contract as HashDedupBackend"""

    name = "trie"

    def __init__(self, config: InternerConfig, logger: Optional[GrowthLogger] = None) -> None:
        self.trie = TrieDedupIndex(config.initial_capacity, logger)

    def __len__(self) -> int:
        return len(self.trie)

    def get(self, data: bytes) -> Optional[int]:
        return self.trie.get(data)

    def intern(self, data: bytes) -> int:
        return self.trie.intern(data)

    def resolve(self, identifier: int) -> bytes:
        return self.trie.resolve(identifier)

    def resolve_all(self) -> Iterator[bytes]:
        return self.trie.resolve_all()

    def stats(self) -> Dict:
        links = self.trie.links
        return {
            "bytes_stored": self.trie.arena.bytes_stored,
            "buffer_count": self.trie.arena.buffer_count,
            "node_count": self.trie.node_count,
            "chunk_allocations": links.allocations,
            "chunk_reuses": links.reuses,
            "free_chunks": sum(len(free) for free in links.free),
        }


class Interner:
    """String interner with pluggable deduplication backend"""

    def __init__(self, config: Optional[InternerConfig] = None, **overrides) -> None:
        """Initialize interner

        Args:
            config: Interner settings (defaults to InternerConfig())
            **overrides: InternerConfig fields, applied on top of config

        Raises:
            ValueError: If a setting is invalid
        """
        if config is None:
            config = InternerConfig(**overrides)
        elif overrides:
            config = replace(config, **overrides)
        self.config = config
        self.growth_logger = GrowthLogger() if config.log_growth else None
        if config.backend == BACKEND_TRIE:
            self._backend = TrieDedupBackend(config, self.growth_logger)
        else:
            self._backend = HashDedupBackend(config, self.growth_logger)

    @classmethod
    def with_capacity(cls, initial_bytes: int, **overrides) -> "Interner":
        """Create an interner whose first buffer holds initial_bytes

        Args:
            initial_bytes: Bytes to preallocate (rounded up to a power of two)
            **overrides: Other InternerConfig fields

        Returns:
            New interner
        """
        return cls(InternerConfig(initial_capacity=initial_bytes, **overrides))

    @property
    def backend(self) -> str:
        """Name of the active backend"""
        return self._backend.name

    def __len__(self) -> int:
        return len(self._backend)

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        for identifier, data in enumerate(self._backend.resolve_all()):
            yield identifier, _decode(data)

    def __contains__(self, text: Text) -> bool:
        return self.contains(text)

    def size(self) -> int:
        """Get number of distinct strings interned

        Returns:
            Number of identifiers issued
        """
        return len(self._backend)

    def intern(self, text: Text) -> int:
        """Intern text and return its identifier

        Re-interning equal content returns the earlier identifier without
        storing anything.

        Args:
            text: str or bytes-like value

        Returns:
            Identifier in [0, len(self))

        Raises:
            TypeError: If text is not str or bytes-like
        """
        data = _encode(text)
        before = len(self._backend)
        identifier = self._backend.intern(data)
        if self.config.check_invariants and len(self._backend) != before:
            self._check_new_entry(data, identifier, before)
        return identifier

    def intern_many(self, texts: Iterable[Text]) -> List[int]:
        """Intern every value of an iterable

        Args:
            texts: Values to intern

        Returns:
            Identifiers in input order
        """
        return [self.intern(text) for text in texts]

    def get(self, text: Text) -> Optional[int]:
        """Get the identifier of already interned text

        Args:
            text: Value to look up

        Returns:
            Identifier if found, None otherwise
        """
        return self._backend.get(_encode(text))

    def contains(self, text: Text) -> bool:
        """Check if text has been interned

        Args:
            text: Value to check

        Returns:
            True if text has an identifier
        """
        return self.get(text) is not None

    def lookup(self, identifier: int) -> str:
        """Get the text interned under identifier

        Args:
            identifier: Identifier returned by intern()

        Returns:
            Interned text

        Raises:
            InvalidIdentifierError: If identifier was not issued by this interner
        """
        return _decode(self._backend.resolve(identifier))

    def lookup_bytes(self, identifier: int) -> bytes:
        """Get the raw bytes interned under identifier

        Raises:
            InvalidIdentifierError: If identifier was not issued by this interner
        """
        return self._backend.resolve(identifier)

    def all_strings(self) -> List[str]:
        """Get all interned strings in identifier order

        Returns:
            List of strings (a copy)
        """
        return [_decode(data) for data in self._backend.resolve_all()]

    def stats(self) -> Dict:
        """Get summary statistics

        Returns:
            Dictionary describing the backend and its storage
        """
        stats = {
            "backend": self.backend,
            "distinct": len(self._backend),
        }
        stats.update(self._backend.stats())
        if self.growth_logger is not None:
            stats["growth"] = self.growth_logger.get_summary()
        return stats

    def _check_new_entry(self, data: bytes, identifier: int, before: int) -> None:
        if identifier != before:
            raise RuntimeError(f"new entry got identifier {identifier}, expected {before}")
        if self._backend.resolve(identifier) != data:
            raise RuntimeError(f"identifier {identifier} does not resolve to interned bytes")
        if self._backend.get(data) != identifier:
            raise RuntimeError(f"re-lookup of identifier {identifier} content disagrees")


def _encode(text: Text) -> bytes:
    if isinstance(text, str):
        return text.encode(ENCODING, ENCODING_ERRORS)
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytes(text)
    raise TypeError(f"Can only intern str or bytes-like values, got {type(text).__name__}")


def _decode(data: bytes) -> str:
    return data.decode(ENCODING, ENCODING_ERRORS)
