"""AST visitor base class for Lua sources

Provides a visitor pattern for traversing Lua AST nodes produced by
luaparser. Override visit_<NodeClass> methods to handle specific node
types and call generic_visit() to continue into children.
"""

from abc import ABC
from typing import Any

try:
    from luaparser import astnodes
except ImportError:
    raise ImportError(
        "luaparser is required. Install with: pip install luaparser"
    )


class ASTVisitor(ABC):
    """Base visitor for Lua AST traversal"""

    def visit(self, node: Any) -> Any:
        """Visit a node using double-dispatch pattern

        Args:
            node: AST node to visit

        Returns:
            Result from visit method (often None)
        """
        method_name = f"visit_{node.__class__.__name__}"
        method = getattr(self, method_name, self.generic_visit)
        return method(node)

    def generic_visit(self, node: Any) -> None:
        """Default visitor - visit all child nodes"""
        for child in self.get_children(node):
            self.visit(child)

    def get_children(self, node: Any) -> list:
        """Get all child nodes of a node in attribute order

        Args:
            node: AST node

        Returns:
            List of child nodes
        """
        children = []
        if hasattr(node, "__dict__"):
            for value in node.__dict__.values():
                if isinstance(value, astnodes.Node):
                    children.append(value)
                elif isinstance(value, list):
                    children.extend(v for v in value if isinstance(v, astnodes.Node))
        return children
