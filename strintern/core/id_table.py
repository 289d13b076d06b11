"""Identifier table: identifier -> ContentRef"""

from typing import Iterator, List

from strintern.core.arena import ContentRef
from strintern.core.errors import InvalidIdentifierError


class IdTable:
    """Dense, insertion-ordered table of content references"""

    def __init__(self) -> None:
        self._refs: List[ContentRef] = []

    def __len__(self) -> int:
        return len(self._refs)

    def __iter__(self) -> Iterator[ContentRef]:
        return iter(self._refs)

    def push(self, ref: ContentRef) -> int:
        """Append a reference

        Args:
            ref: Reference to stored content

        Returns:
            Identifier of the new entry (the table length before the push)
        """
        identifier = len(self._refs)
        self._refs.append(ref)
        return identifier

    def get(self, identifier: int) -> ContentRef:
        """Get the reference for an identifier

        Args:
            identifier: Identifier returned by push()

        Returns:
            Content reference

        Raises:
            InvalidIdentifierError: If identifier was never issued
        """
        check_identifier(identifier, len(self._refs))
        return self._refs[identifier]


def check_identifier(identifier: object, size: int) -> None:
    """Raise InvalidIdentifierError unless identifier is in [0, size)"""
    if (
        not isinstance(identifier, int)
        or isinstance(identifier, bool)
        or identifier < 0
        or identifier >= size
    ):
        raise InvalidIdentifierError(identifier, size)
