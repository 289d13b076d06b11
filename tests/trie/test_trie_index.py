"""Tests for the trie deduplication index"""

import random

import pytest
from strintern.core.errors import InvalidIdentifierError
from strintern.core.growth_logger import GrowthKind, GrowthLogger
from strintern.trie.link_layers import LinkLayers
from strintern.trie.trie_index import ROOT, NodeTag, TrieDedupIndex


def _node_for(trie: TrieDedupIndex, data: bytes) -> int:
    node = ROOT
    for byte in data:
        node = dict(trie.children(node))[byte]
    return node


class TestTrieDedupIndex:
    """Test suite for TrieDedupIndex"""

    def test_initial_state(self):
        """Test trie starts with only the root"""
        trie = TrieDedupIndex()
        assert len(trie) == 0
        assert trie.node_count == 1
        assert trie.children(ROOT) == []
        assert trie.get(b"") is None

    def test_intern_and_get(self):
        """Test identifiers in first-occurrence order"""
        trie = TrieDedupIndex()
        assert trie.intern(b"foo") == 0
        assert trie.intern(b"bar") == 1
        assert trie.intern(b"foo") == 0
        assert trie.get(b"bar") == 1
        assert trie.get(b"ba") is None
        assert trie.get(b"barn") is None

    def test_empty_string_lives_at_root(self):
        """Test empty content terminates at the root"""
        trie = TrieDedupIndex()
        assert trie.intern(b"") == 0
        assert trie.tag(ROOT) is NodeTag.LEAF
        assert trie.node_count == 1

    def test_resolve(self):
        """Test identifiers resolve to their bytes"""
        trie = TrieDedupIndex()
        trie.intern(b"alpha")
        trie.intern(b"alp")
        assert trie.resolve(0) == b"alpha"
        assert trie.resolve(1) == b"alp"
        assert list(trie.resolve_all()) == [b"alpha", b"alp"]

    def test_resolve_unissued(self):
        """Test unissued identifiers are rejected"""
        trie = TrieDedupIndex()
        trie.intern(b"x")
        with pytest.raises(InvalidIdentifierError):
            trie.resolve(1)

    def test_reintern_allocates_nothing(self):
        """Test a hit adds no nodes, bytes or chunks"""
        trie = TrieDedupIndex()
        trie.intern(b"repeat")
        nodes = trie.node_count
        stored = trie.arena.bytes_stored
        allocations = trie.links.allocations
        assert trie.intern(b"repeat") == 0
        assert trie.node_count == nodes
        assert trie.arena.bytes_stored == stored
        assert trie.links.allocations == allocations

    def test_shared_prefix_nodes(self):
        """Test common prefixes share nodes"""
        trie = TrieDedupIndex()
        trie.intern(b"abc")
        trie.intern(b"abd")
        # root + a + b + c + d
        assert trie.node_count == 5

    def test_tags(self):
        """Test terminal nodes are tagged as leaves"""
        trie = TrieDedupIndex()
        trie.intern(b"ab")
        assert trie.tag(_node_for(trie, b"a")) is NodeTag.INTERNAL
        assert trie.tag(_node_for(trie, b"ab")) is NodeTag.LEAF
        trie.intern(b"a")
        assert trie.tag(_node_for(trie, b"a")) is NodeTag.LEAF

    def test_node_out_of_bounds(self):
        """Test node queries check their index"""
        trie = TrieDedupIndex()
        with pytest.raises(IndexError):
            trie.children(5)
        with pytest.raises(IndexError):
            trie.tag(-1)

    def test_root_fan_out(self):
        """Test root children come from the direct 256-slot table"""
        trie = TrieDedupIndex()
        for byte in (200, 3, 77):
            trie.intern(bytes([byte]))
        assert [byte for byte, _ in trie.children(ROOT)] == [3, 77, 200]
        assert trie.links.allocations == 0

    def test_children_sorted_after_shuffled_inserts(self):
        """Test links stay sorted whatever the insertion order"""
        trie = TrieDedupIndex()
        values = list(range(256))
        random.Random(7).shuffle(values)
        for value in values:
            trie.intern(b"p" + bytes([value]))
        node = _node_for(trie, b"p")
        assert [byte for byte, _ in trie.children(node)] == list(range(256))
        trie.check_invariants()

    def test_node_moves_through_size_classes(self):
        """Test a node's chunk grows one size class at a time"""
        trie = TrieDedupIndex()
        node = None
        for count, byte in enumerate(b"abcdefghi", start=1):
            trie.intern(b"n" + bytes([byte]))
            node = _node_for(trie, b"n")
            layer = trie._layer[node]
            assert count <= LinkLayers.capacity(layer)
            assert count > LinkLayers.capacity(layer) // 2 or layer == 0
        assert trie._layer[node] == 4

    def test_retired_chunks_reused(self):
        """Test a chunk freed by one node is reused by another"""
        trie = TrieDedupIndex()
        trie.intern(b"xa")
        trie.intern(b"xb")
        assert trie.links.free[0] == [0]
        trie.intern(b"ya")
        assert trie.links.reuses == 1
        assert trie.links.allocations == 2
        assert trie.links.free[0] == []
        trie.check_invariants()

    def test_growth_events_logged(self):
        """Test node growth and chunk events reach the logger"""
        logger = GrowthLogger()
        trie = TrieDedupIndex(logger=logger)
        trie.intern(b"xa")
        trie.intern(b"xb")
        trie.intern(b"ya")
        assert logger.count(GrowthKind.TRIE_NODE_GROW) == 3
        assert logger.count(GrowthKind.TRIE_CHUNK_ALLOC) == 2
        assert logger.count(GrowthKind.TRIE_CHUNK_REUSE) == 1

    def test_invariants_after_random_inserts(self):
        """Test structure invariants under interleaved inserts"""
        rng = random.Random(2024)
        trie = TrieDedupIndex(capacity=16)
        words = [bytes(rng.randrange(256) for _ in range(rng.randint(0, 6))) for _ in range(2000)]
        expected = {}
        for word in words:
            identifier = trie.intern(word)
            expected.setdefault(word, len(expected))
            assert identifier == expected[word]
        trie.check_invariants()
        for word, identifier in expected.items():
            assert trie.get(word) == identifier
            assert trie.resolve(identifier) == word

    def test_check_invariants_detects_unsorted_links(self):
        """Test corrupted link order is reported"""
        trie = TrieDedupIndex()
        trie.intern(b"qa")
        trie.intern(b"qb")
        node = _node_for(trie, b"q")
        layer = trie._layer[node]
        base = trie._chunk[node] << layer
        keys = trie.links.keys[layer]
        keys[base], keys[base + 1] = keys[base + 1], keys[base]
        with pytest.raises(RuntimeError, match="not sorted"):
            trie.check_invariants()

    def test_check_invariants_detects_live_free_chunk(self):
        """Test a chunk both in use and on a free list is reported"""
        trie = TrieDedupIndex()
        trie.intern(b"qa")
        node = _node_for(trie, b"q")
        trie.links.release(trie._layer[node], trie._chunk[node])
        with pytest.raises(RuntimeError, match="both live and free"):
            trie.check_invariants()
