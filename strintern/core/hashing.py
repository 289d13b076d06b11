"""Hash strategies for the deduplication index

The index only needs a well-mixed integer per byte string. Which function
produces it is a policy choice: the default is fast but seeded per process,
FNV-1a is reproducible across runs, and BLAKE3 resists crafted collisions.
"""

from typing import Dict, List, Protocol, Type, Union

from blake3 import blake3

FNV64_OFFSET_BASIS = 0xCBF29CE484222325
FNV64_PRIME = 0x100000001B3
MASK64 = 0xFFFFFFFFFFFFFFFF


class Hasher(Protocol):
    """Strategy interface for content hashing"""

    name: str

    def hash_bytes(self, data: bytes) -> int:
        ...


class BuiltinHasher:
    """Python's own bytes hash"""

    name = "builtin"

    def hash_bytes(self, data: bytes) -> int:
        return hash(bytes(data))


class Fnv1aHasher:
    """64-bit FNV-1a, stable across processes"""

    name = "fnv1a"

    def hash_bytes(self, data: bytes) -> int:
        value = FNV64_OFFSET_BASIS
        for byte in data:
            value ^= byte
            value = (value * FNV64_PRIME) & MASK64
        return value


class Blake3Hasher:
    """BLAKE3 digest truncated to 64 bits"""

    name = "blake3"

    def hash_bytes(self, data: bytes) -> int:
        return int.from_bytes(blake3(data).digest(length=8), "little")


_HASHERS: Dict[str, Type] = {
    BuiltinHasher.name: BuiltinHasher,
    Fnv1aHasher.name: Fnv1aHasher,
    Blake3Hasher.name: Blake3Hasher,
}


def available_hashers() -> List[str]:
    """Names accepted by get_hasher()"""
    return sorted(_HASHERS)


def get_hasher(hasher: Union[str, Hasher]) -> Hasher:
    """Resolve a hasher name or pass a strategy object through

    Args:
        hasher: Registered name or object with a hash_bytes method

    Returns:
        Hash strategy instance

    Raises:
        ValueError: If the name is not registered
    """
    if not isinstance(hasher, str):
        if not callable(getattr(hasher, "hash_bytes", None)):
            raise ValueError(f"Hasher {hasher!r} has no hash_bytes method")
        return hasher
    try:
        return _HASHERS[hasher]()
    except KeyError:
        raise ValueError(
            f"Unknown hasher '{hasher}' (available: {', '.join(available_hashers())})"
        ) from None
