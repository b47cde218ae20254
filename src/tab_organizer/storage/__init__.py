"""
Persistence for grouping patterns.
"""

from tab_organizer.storage.pattern_store import GroupingPattern, PatternStore

__all__ = ["GroupingPattern", "PatternStore"]
