"""Tests for size-classed link storage"""

from strintern.core.growth_logger import GrowthKind, GrowthLogger
from strintern.trie.link_layers import MAX_LAYER, LinkLayers


class TestLinkLayers:
    """Test suite for LinkLayers"""

    def test_initial_state(self):
        """Test no chunks exist up front"""
        layers = LinkLayers()
        for layer in range(MAX_LAYER + 1):
            assert layers.chunk_count(layer) == 0
            assert layers.free[layer] == []

    def test_capacity(self):
        """Test layer capacities are powers of two"""
        assert LinkLayers.capacity(0) == 1
        assert LinkLayers.capacity(3) == 8
        assert LinkLayers.capacity(MAX_LAYER) == 256

    def test_alloc_extends_layer(self):
        """Test fresh chunks are appended to their layer"""
        layers = LinkLayers()
        assert layers.alloc(2) == 0
        assert layers.alloc(2) == 1
        keys, children = layers.layer(2)
        assert len(keys) == 8
        assert len(children) == 8
        assert layers.chunk_count(2) == 2
        assert layers.allocations == 2

    def test_release_and_reuse(self):
        """Test released chunks are handed out again"""
        layers = LinkLayers()
        first = layers.alloc(1)
        layers.alloc(1)
        layers.release(1, first)
        assert layers.alloc(1) == first
        assert layers.reuses == 1
        assert layers.chunk_count(1) == 2

    def test_free_lists_are_per_layer(self):
        """Test a released chunk only serves its own size class"""
        layers = LinkLayers()
        chunk = layers.alloc(0)
        layers.release(0, chunk)
        assert layers.alloc(1) == 0
        assert layers.free[0] == [chunk]
        assert layers.reuses == 0

    def test_events_logged(self):
        """Test allocation and reuse are reported"""
        logger = GrowthLogger()
        layers = LinkLayers(logger)
        chunk = layers.alloc(3)
        layers.release(3, chunk)
        layers.alloc(3)
        assert logger.count(GrowthKind.TRIE_CHUNK_ALLOC) == 1
        assert logger.count(GrowthKind.TRIE_CHUNK_REUSE) == 1
        assert logger.records[0].new_capacity == 8
