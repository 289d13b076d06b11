"""Growth logger for the interning engine

Tracks every expensive step the engine takes (new arena buffers, index
resizes, trie chunk allocation and reuse) and provides summary statistics.
"""

from typing import Dict, List
from dataclasses import dataclass
from enum import Enum


class GrowthKind(Enum):
    """Types of growth events"""
    ARENA_BUFFER = "arena_buffer"
    INDEX_RESIZE = "index_resize"
    TRIE_CHUNK_ALLOC = "trie_chunk_alloc"
    TRIE_CHUNK_REUSE = "trie_chunk_reuse"
    TRIE_NODE_GROW = "trie_node_grow"


@dataclass
class GrowthRecord:
    """Record of a single growth event"""
    kind: GrowthKind
    old_capacity: int
    new_capacity: int
    reason: str


class GrowthLogger:
    """Logs growth events and provides summaries"""

    def __init__(self) -> None:
        self.records: List[GrowthRecord] = []

    def log_growth(self,
                   kind: GrowthKind,
                   old_capacity: int,
                   new_capacity: int,
                   reason: str) -> None:
        """Log a growth event

        Args:
            kind: Type of growth
            old_capacity: Capacity before the event
            new_capacity: Capacity after the event
            reason: Why the growth happened
        """
        record = GrowthRecord(
            kind=kind,
            old_capacity=old_capacity,
            new_capacity=new_capacity,
            reason=reason
        )
        self.records.append(record)

    def count(self, kind: GrowthKind) -> int:
        """Count events of one kind"""
        return sum(1 for record in self.records if record.kind is kind)

    def get_summary(self) -> Dict:
        """Get summary statistics

        Returns:
            Dictionary with growth statistics
        """
        by_kind: Dict[GrowthKind, int] = {}
        for record in self.records:
            by_kind[record.kind] = by_kind.get(record.kind, 0) + 1

        return {
            "total_events": len(self.records),
            "events_by_kind": by_kind,
        }

    def print_summary(self) -> str:
        """Generate formatted summary string

        Returns:
            Formatted summary as string
        """
        summary = self.get_summary()
        lines = []

        lines.append("=== Growth Summary ===")
        lines.append(f"Total events: {summary['total_events']}")

        if summary['events_by_kind']:
            lines.append("")
            lines.append("Events by kind:")
            for kind, count in summary['events_by_kind'].items():
                lines.append(f"  {kind.value}: {count}")

        if self.records:
            lines.append("")
            lines.append("Event details (top 10):")
            for record in self.records[:10]:
                lines.append(
                    f"  {record.kind.value} - {record.old_capacity} → "
                    f"{record.new_capacity}: {record.reason}"
                )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all logs"""
        self.records.clear()
