"""Core of the interning engine

Modules:
- Arena: Append-only buffers handing out stable ContentRefs
- DedupIndex: Content -> identifier table keyed by ContentRef
- IdTable: Identifier -> ContentRef
- Hashing: Pluggable hash strategies for DedupIndex
- GrowthLogger: Records buffer, index and chunk growth
- Interner: Facade composing the above (or the trie backend)
"""

from strintern.core.arena import Arena, ContentRef, next_power_of_two
from strintern.core.errors import InvalidIdentifierError
from strintern.core.growth_logger import GrowthKind, GrowthLogger, GrowthRecord
from strintern.core.hashing import (
    Blake3Hasher, BuiltinHasher, Fnv1aHasher, Hasher, available_hashers, get_hasher
)
from strintern.core.dedup_index import DedupIndex
from strintern.core.id_table import IdTable
from strintern.core.config import InternerConfig
from strintern.core.interner import Interner

__all__ = [
    'Arena',
    'ContentRef',
    'next_power_of_two',
    'InvalidIdentifierError',
    'GrowthKind',
    'GrowthLogger',
    'GrowthRecord',
    'Hasher',
    'BuiltinHasher',
    'Fnv1aHasher',
    'Blake3Hasher',
    'available_hashers',
    'get_hasher',
    'DedupIndex',
    'IdTable',
    'InternerConfig',
    'Interner',
]
