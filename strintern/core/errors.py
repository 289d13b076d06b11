"""Errors raised by the interning engine"""


class InvalidIdentifierError(IndexError):
    """Raised when an identifier was never issued by the interner resolving it

    Subclasses IndexError so code written against a plain list-backed
    string pool keeps working.
    """

    def __init__(self, identifier: object, size: int) -> None:
        """Initialize error

        Args:
            identifier: Offending identifier
            size: Number of identifiers issued so far
        """
        self.identifier = identifier
        self.size = size
        super().__init__(f"Identifier {identifier!r} out of bounds (size: {size})")
