"""Trie backend for the interning engine"""

from strintern.trie.link_layers import LinkLayers
from strintern.trie.trie_index import NodeTag, TrieDedupIndex

__all__ = [
    'LinkLayers',
    'NodeTag',
    'TrieDedupIndex',
]
