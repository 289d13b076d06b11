"""Symbol table backed by an interner

Names are interned on definition and resolved with the interner's
non-mutating lookup, so asking about an unknown name never grows the
interner.
"""

from typing import List, Optional

from strintern.core.interner import Interner
from strintern.symbols.scope import ScopeManager, Symbol


class SymbolTable:
    """Unified symbol table over interned names"""

    def __init__(self, interner: Interner, scope_manager: Optional[ScopeManager] = None) -> None:
        """Initialize symbol table

        Args:
            interner: Interner that owns the symbol names
            scope_manager: Scope manager to use (a fresh one if None)
        """
        self.interner = interner
        self.scope_manager = scope_manager if scope_manager is not None else ScopeManager()
        self._all_symbols: List[Symbol] = []

    def add_local(self, name: str, **kwargs) -> Symbol:
        """Add a local variable

        Args:
            name: Variable name
            **kwargs: Additional symbol properties

        Returns:
            Created symbol
        """
        symbol = self.scope_manager.define_local(self.interner.intern(name), **kwargs)
        self._all_symbols.append(symbol)
        return symbol

    def add_global(self, name: str, **kwargs) -> Symbol:
        """Add a global variable

        Args:
            name: Variable name
            **kwargs: Additional symbol properties

        Returns:
            Created symbol
        """
        symbol = self.scope_manager.define_global(self.interner.intern(name), **kwargs)
        self._all_symbols.append(symbol)
        return symbol

    def add_function(self, name: str, is_global: bool = False) -> Symbol:
        """Add a function definition

        Args:
            name: Function name
            is_global: True if global function

        Returns:
            Created symbol
        """
        if is_global:
            return self.add_global(name, is_function=True)
        return self.add_local(name, is_function=True)

    def add_parameter(self, name: str, param_index: int) -> Symbol:
        """Add a function parameter

        Args:
            name: Parameter name
            param_index: Parameter position

        Returns:
            Created symbol
        """
        symbol = self.scope_manager.define_function_param(self.interner.intern(name), param_index)
        self._all_symbols.append(symbol)
        return symbol

    def resolve(self, name: str) -> Optional[Symbol]:
        """Resolve a symbol by name

        Args:
            name: Symbol name

        Returns:
            Symbol if found, None otherwise
        """
        name_id = self.interner.get(name)
        if name_id is None:
            return None
        return self.scope_manager.lookup(name_id)

    def resolve_required(self, name: str) -> Symbol:
        """Resolve a symbol, raising if not found

        Raises:
            NameError: If symbol not found
        """
        symbol = self.resolve(name)
        if symbol is None:
            raise NameError(f"Symbol '{name}' not found")
        return symbol

    def name_of(self, symbol: Symbol) -> str:
        """Get the source name of a symbol"""
        return self.interner.lookup(symbol.name_id)

    def get_all_symbols(self) -> List[Symbol]:
        """Get all symbols added to table (a copy)"""
        return list(self._all_symbols)

    def get_global_symbols(self) -> List[Symbol]:
        return [s for s in self._all_symbols if s.is_global]

    def get_function_symbols(self) -> List[Symbol]:
        return [s for s in self._all_symbols if s.is_function]

    def is_defined(self, name: str) -> bool:
        """Check if name is visible from the current scope"""
        return self.resolve(name) is not None
