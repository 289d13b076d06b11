"""Byte-wise trie deduplication index

Alternative backend with the same contract as DedupIndex + IdTable: it
assigns dense identifiers in first-occurrence order and resolves them back
to bytes. Strings are walked one byte at a time. The root keeps a direct
256-slot fan-out; every other node keeps its children as sorted links in a
chunk from LinkLayers, found by binary search and grown into the next size
class when full.

Node data is stored column-wise, one array per field, indexed by node.
"""

from array import array
from bisect import bisect_left
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from strintern.core.arena import Arena
from strintern.core.growth_logger import GrowthKind, GrowthLogger
from strintern.core.id_table import IdTable
from strintern.trie.link_layers import MAX_LAYER, NO_LAYER, LinkLayers

ROOT = 0
NO_NODE = -1
NO_PAYLOAD = -1


class NodeTag(Enum):
    """Whether some interned string terminates at a node"""
    INTERNAL = "internal"
    LEAF = "leaf"


class TrieDedupIndex:
    """Trie-backed interning index"""

    def __init__(self, capacity: int = 0, logger: Optional[GrowthLogger] = None) -> None:
        """Initialize trie with only the root node

        Args:
            capacity: Bytes to preallocate for the shared text buffer
            logger: Optional growth logger
        """
        self._logger = logger
        self._arena = Arena(capacity, logger)
        self._ids = IdTable()
        self._links = LinkLayers(logger)
        self._root_children = array('i', [NO_NODE] * 256)

        self._payload = array('q')
        self._count = array('H')
        self._layer = array('b')
        self._chunk = array('i')
        self._new_node()

    def __len__(self) -> int:
        return len(self._ids)

    @property
    def arena(self) -> Arena:
        return self._arena

    @property
    def links(self) -> LinkLayers:
        return self._links

    @property
    def node_count(self) -> int:
        return len(self._payload)

    def get(self, data: bytes) -> Optional[int]:
        """Find the identifier for data without inserting

        Args:
            data: Content to look up

        Returns:
            Identifier if the content was interned, None otherwise
        """
        node = ROOT
        for byte in data:
            node = self._find_child(node, byte)
            if node == NO_NODE:
                return None
        payload = self._payload[node]
        return None if payload == NO_PAYLOAD else payload

    def intern(self, data: bytes) -> int:
        """Return the identifier for data, assigning the next one on a miss

        Args:
            data: Content to intern

        Returns:
            Identifier
        """
        node = ROOT
        for byte in data:
            child = self._find_child(node, byte)
            if child == NO_NODE:
                child = self._add_child(node, byte)
            node = child

        payload = self._payload[node]
        if payload != NO_PAYLOAD:
            return payload

        identifier = self._ids.push(self._arena.allocate(data))
        self._payload[node] = identifier
        return identifier

    def resolve(self, identifier: int) -> bytes:
        """Get the bytes interned under identifier

        Raises:
            InvalidIdentifierError: If identifier was never issued
        """
        return self._arena.resolve(self._ids.get(identifier))

    def resolve_all(self) -> Iterator[bytes]:
        """Stored bytes in identifier order"""
        for ref in self._ids:
            yield self._arena.resolve(ref)

    def tag(self, node: int) -> NodeTag:
        """Tag of a node"""
        self._check_node(node)
        if self._payload[node] == NO_PAYLOAD:
            return NodeTag.INTERNAL
        return NodeTag.LEAF

    def children(self, node: int) -> List[Tuple[int, int]]:
        """(byte, child) pairs of a node in byte order"""
        self._check_node(node)
        if node == ROOT:
            return [(byte, child) for byte, child in enumerate(self._root_children)
                    if child != NO_NODE]
        count = self._count[node]
        if count == 0:
            return []
        layer = self._layer[node]
        base = self._chunk[node] << layer
        keys, children = self._links.layer(layer)
        return list(zip(keys[base:base + count], children[base:base + count]))

    def check_invariants(self) -> None:
        """Verify link ordering, chunk capacity and free-list accounting

        Raises:
            RuntimeError: On the first violation found
        """
        root_count = sum(1 for child in self._root_children if child != NO_NODE)
        if root_count != self._count[ROOT]:
            raise RuntimeError(
                f"root child count {self._count[ROOT]} != {root_count} occupied slots"
            )

        live = set()
        for node in range(1, self.node_count):
            count = self._count[node]
            layer = self._layer[node]
            if count == 0:
                if layer != NO_LAYER:
                    raise RuntimeError(f"childless node {node} holds a chunk")
                continue
            if layer == NO_LAYER or count > LinkLayers.capacity(layer):
                raise RuntimeError(
                    f"node {node} has {count} children in layer {layer}"
                )
            key = (layer, self._chunk[node])
            if key in live:
                raise RuntimeError(f"chunk {key} shared by more than one node")
            live.add(key)
            keys = [byte for byte, _ in self.children(node)]
            if any(a >= b for a, b in zip(keys, keys[1:])):
                raise RuntimeError(f"children of node {node} are not sorted: {keys}")

        for layer in range(MAX_LAYER + 1):
            free = self._links.free[layer]
            if len(set(free)) != len(free):
                raise RuntimeError(f"duplicate chunk on layer {layer} free list")
            for chunk in free:
                if (layer, chunk) in live:
                    raise RuntimeError(f"chunk ({layer}, {chunk}) is both live and free")

    def _check_node(self, node: int) -> None:
        if not 0 <= node < self.node_count:
            raise IndexError(f"Node {node} out of bounds (size: {self.node_count})")

    def _new_node(self) -> int:
        node = len(self._payload)
        self._payload.append(NO_PAYLOAD)
        self._count.append(0)
        self._layer.append(NO_LAYER)
        self._chunk.append(0)
        return node

    def _find_child(self, node: int, byte: int) -> int:
        if node == ROOT:
            return self._root_children[byte]
        count = self._count[node]
        if count == 0:
            return NO_NODE
        layer = self._layer[node]
        base = self._chunk[node] << layer
        keys = self._links.keys[layer]
        pos = bisect_left(keys, byte, base, base + count)
        if pos < base + count and keys[pos] == byte:
            return self._links.children[layer][pos]
        return NO_NODE

    def _add_child(self, node: int, byte: int) -> int:
        child = self._new_node()
        if node == ROOT:
            self._root_children[byte] = child
            self._count[ROOT] += 1
            return child

        count = self._count[node]
        layer = self._layer[node]
        if layer == NO_LAYER or count == LinkLayers.capacity(layer):
            layer = self._move_to_next_layer(node, count)

        base = self._chunk[node] << layer
        end = base + count
        keys, children = self._links.layer(layer)
        pos = bisect_left(keys, byte, base, end)
        keys[pos + 1:end + 1] = keys[pos:end]
        children[pos + 1:end + 1] = children[pos:end]
        keys[pos] = byte
        children[pos] = child
        self._count[node] = count + 1
        return child

    def _move_to_next_layer(self, node: int, count: int) -> int:
        old_layer = self._layer[node]
        new_layer = 0 if old_layer == NO_LAYER else old_layer + 1
        new_chunk = self._links.alloc(new_layer)

        if old_layer != NO_LAYER:
            old_chunk = self._chunk[node]
            old_base = old_chunk << old_layer
            new_base = new_chunk << new_layer
            old_keys, old_children = self._links.layer(old_layer)
            new_keys, new_children = self._links.layer(new_layer)
            new_keys[new_base:new_base + count] = old_keys[old_base:old_base + count]
            new_children[new_base:new_base + count] = old_children[old_base:old_base + count]
            self._links.release(old_layer, old_chunk)

        self._layer[node] = new_layer
        self._chunk[node] = new_chunk
        if self._logger is not None:
            self._logger.log_growth(
                GrowthKind.TRIE_NODE_GROW,
                0 if old_layer == NO_LAYER else LinkLayers.capacity(old_layer),
                LinkLayers.capacity(new_layer),
                f"node {node} gained child {count + 1}"
            )
        return new_layer
