"""Interns the identifiers of a Lua chunk

A front end sees the same names over and over; collecting them through
an interner turns every later comparison into an integer comparison.
"""

from typing import List

from luaparser import ast, astnodes

from strintern.core.interner import Interner
from strintern.symbols.ast_visitor import ASTVisitor


class NameCollector(ASTVisitor):
    """Visitor that interns Name nodes (and optionally string literals)"""

    def __init__(self, interner: Interner, include_strings: bool = False) -> None:
        """Initialize collector

        Args:
            interner: Interner that receives the names
            include_strings: Also intern string literal contents
        """
        self.interner = interner
        self.include_strings = include_strings
        self.ids: List[int] = []

    def collect(self, source: str) -> List[int]:
        """Parse Lua source and intern every identifier in visit order

        Args:
            source: Lua source code

        Returns:
            Identifiers, one per occurrence
        """
        self.ids = []
        self.visit(ast.parse(source))
        return list(self.ids)

    def visit_Name(self, node: astnodes.Name) -> None:
        self.ids.append(self.interner.intern(node.id))
        self.generic_visit(node)

    def visit_String(self, node: astnodes.String) -> None:
        # luaparser stores literal contents as bytes or str depending on version
        if self.include_strings:
            self.ids.append(self.interner.intern(node.s))
        self.generic_visit(node)
