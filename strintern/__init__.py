"""strintern - string interning engine

Canonicalizes repeated text into dense integer identifiers.

Modules:
- core: Arena, DedupIndex, IdTable and the Interner facade
- trie: Byte-wise trie backend with a size-classed link allocator
- symbols: Scopes and a symbol table built on an interner, plus a Lua name collector
"""

from strintern.core.config import InternerConfig
from strintern.core.errors import InvalidIdentifierError
from strintern.core.interner import Interner

__version__ = "0.1.0"

__all__ = [
    'Interner',
    'InternerConfig',
    'InvalidIdentifierError',
]
