"""Tests for growth logger"""

from strintern.core.growth_logger import GrowthKind, GrowthLogger


class TestGrowthLogger:
    """Test suite for GrowthLogger"""

    def test_initial_state(self):
        """Test initial empty state"""
        logger = GrowthLogger()
        assert logger.records == []
        assert logger.get_summary() == {"total_events": 0, "events_by_kind": {}}

    def test_log_growth(self):
        """Test recording an event"""
        logger = GrowthLogger()
        logger.log_growth(GrowthKind.ARENA_BUFFER, 4, 16, "write of 10 bytes")
        record = logger.records[0]
        assert record.kind is GrowthKind.ARENA_BUFFER
        assert record.old_capacity == 4
        assert record.new_capacity == 16
        assert record.reason == "write of 10 bytes"

    def test_summary_counts_by_kind(self):
        """Test summary groups events"""
        logger = GrowthLogger()
        logger.log_growth(GrowthKind.ARENA_BUFFER, 4, 16, "a")
        logger.log_growth(GrowthKind.ARENA_BUFFER, 16, 32, "b")
        logger.log_growth(GrowthKind.INDEX_RESIZE, 8, 16, "c")
        summary = logger.get_summary()
        assert summary["total_events"] == 3
        assert summary["events_by_kind"] == {
            GrowthKind.ARENA_BUFFER: 2,
            GrowthKind.INDEX_RESIZE: 1,
        }
        assert logger.count(GrowthKind.TRIE_CHUNK_ALLOC) == 0

    def test_print_summary(self):
        """Test formatted summary"""
        logger = GrowthLogger()
        logger.log_growth(GrowthKind.TRIE_CHUNK_REUSE, 4, 4, "layer 2: reused chunk 0")
        text = logger.print_summary()
        assert "=== Growth Summary ===" in text
        assert "Total events: 1" in text
        assert "trie_chunk_reuse: 1" in text
        assert "layer 2: reused chunk 0" in text

    def test_clear(self):
        """Test clearing the log"""
        logger = GrowthLogger()
        logger.log_growth(GrowthKind.ARENA_BUFFER, 0, 1, "first write")
        logger.clear()
        assert logger.records == []
