"""Symbol tables built on an interner"""

from strintern.symbols.scope import Scope, ScopeManager, Symbol
from strintern.symbols.symbol_table import SymbolTable
from strintern.symbols.name_collector import NameCollector

__all__ = [
    'Scope',
    'ScopeManager',
    'Symbol',
    'SymbolTable',
    'NameCollector',
]
