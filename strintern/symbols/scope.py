"""Lexical scopes keyed by interned name

Symbols are stored under the identifier the interner assigned to their
name, so scope lookups compare integers instead of strings. Inner scopes
shadow outer ones; the global scope is the outermost.
"""

from typing import Dict, List, Optional


class Symbol:
    """Represents a variable or function symbol"""

    def __init__(
        self,
        name_id: int,
        scope_id: int,
        is_global: bool = False,
        is_function: bool = False,
        param_index: int = -1,
    ) -> None:
        """Initialize symbol

        Args:
            name_id: Interned identifier of the symbol name
            scope_id: Scope where symbol is defined
            is_global: True if this is a global variable
            is_function: True if this is a function definition
            param_index: Parameter index (if function parameter)
        """
        self.name_id = name_id
        self.scope_id = scope_id
        self.is_global = is_global
        self.is_function = is_function
        self.param_index = param_index

    def __repr__(self) -> str:
        return (
            f"Symbol(name_id={self.name_id}, scope_id={self.scope_id}, "
            f"is_global={self.is_global}, is_function={self.is_function})"
        )


class Scope:
    """Represents a lexical scope"""

    def __init__(self, scope_id: int, parent: Optional["Scope"] = None) -> None:
        """Initialize scope

        Args:
            scope_id: Sequential scope number (0 for the global scope)
            parent: Parent scope (None for global scope)
        """
        self.scope_id = scope_id
        self.parent = parent
        self.symbols: Dict[int, Symbol] = {}

    def define(self, name_id: int, **kwargs) -> Symbol:
        """Define a symbol in this scope

        Args:
            name_id: Interned symbol name
            **kwargs: Additional symbol properties (is_global, is_function, param_index)

        Returns:
            Created symbol

        Raises:
            NameError: If the name is already defined in this scope
        """
        if name_id in self.symbols:
            raise NameError(f"Symbol #{name_id} already defined in scope {self.scope_id}")
        symbol = Symbol(name_id, self.scope_id, **kwargs)
        self.symbols[name_id] = symbol
        return symbol

    def lookup(self, name_id: int) -> Optional[Symbol]:
        """Look up a symbol, checking parent scopes"""
        scope: Optional[Scope] = self
        while scope is not None:
            symbol = scope.symbols.get(name_id)
            if symbol is not None:
                return symbol
            scope = scope.parent
        return None

    def get_depth(self) -> int:
        """Get nesting depth of this scope (0 for global scope)"""
        depth = 0
        current = self
        while current.parent:
            depth += 1
            current = current.parent
        return depth


class ScopeManager:
    """Manages the stack of open scopes"""

    def __init__(self) -> None:
        """Initialize scope manager with global scope"""
        self._next_scope_id = 1
        self._global_scope = Scope(0)
        self._scope_stack: List[Scope] = [self._global_scope]

    @property
    def current_scope(self) -> Scope:
        """Get current scope"""
        return self._scope_stack[-1]

    @property
    def global_scope(self) -> Scope:
        """Get global scope"""
        return self._global_scope

    def push_scope(self) -> Scope:
        """Push a new scope

        Returns:
            New scope
        """
        new_scope = Scope(self._next_scope_id, self.current_scope)
        self._next_scope_id += 1
        self._scope_stack.append(new_scope)
        return new_scope

    def pop_scope(self) -> Scope:
        """Pop current scope

        Returns:
            Popped scope

        Raises:
            RuntimeError: If trying to pop global scope
        """
        if len(self._scope_stack) == 1:
            raise RuntimeError("Cannot pop global scope")
        return self._scope_stack.pop()

    def define_local(self, name_id: int, **kwargs) -> Symbol:
        return self.current_scope.define(name_id, is_global=False, **kwargs)

    def define_global(self, name_id: int, **kwargs) -> Symbol:
        return self._global_scope.define(name_id, is_global=True, **kwargs)

    def define_function_param(self, name_id: int, param_index: int) -> Symbol:
        return self.current_scope.define(
            name_id, is_global=False, param_index=param_index
        )

    def lookup(self, name_id: int) -> Optional[Symbol]:
        return self.current_scope.lookup(name_id)

    def current_depth(self) -> int:
        """Get current nesting depth (0 for global scope)"""
        return self.current_scope.get_depth()
