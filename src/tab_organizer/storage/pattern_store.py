"""
SQLite cache of grouping patterns.

After a categorization run, each group's name, color and a sample of its
members' keywords are remembered so later runs (or the UI) can reuse them.
Only the most recent patterns are kept.
"""

import json
import sqlite3
from collections.abc import Sequence
from datetime import datetime, UTC
from pathlib import Path

from pydantic import BaseModel, Field

from tab_organizer.agents.models import CategoryGroup, ClusterColor
from tab_organizer.config import get_logger

logger = get_logger(__name__)

MAX_PATTERNS = 50
MAX_PATTERN_KEYWORDS = 20


class GroupingPattern(BaseModel):
    """A remembered group: its name, color and representative keywords."""

    id: int | None = None
    name: str
    color: ClusterColor = ClusterColor.GREY
    keywords: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PatternStore:
    """SQLite handler for grouping patterns."""

    def __init__(self, db_path: Path, max_patterns: int = MAX_PATTERNS):
        """
        Initialize the database connection.

        Args:
            db_path: Path to the SQLite database file
            max_patterns: Number of most recent patterns to keep (default: 50)
        """
        self.db_path = Path(db_path)
        self.max_patterns = max_patterns
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self._initialize_schema()

    def _initialize_schema(self):
        """Create the database schema if it doesn't exist."""
        cursor = self.conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS grouping_patterns (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                color TEXT NOT NULL,
                keywords TEXT,
                created_at TIMESTAMP NOT NULL
            )
        """)
        self.conn.commit()

    def save_patterns(self, groups: Sequence[CategoryGroup]) -> int:
        """
        Remember the given groups as patterns and prune old ones.

        Args:
            groups: Groups from a categorization run (empty groups are skipped)

        Returns:
            Number of patterns saved
        """
        rows = []
        now = datetime.now(UTC)
        for group in groups:
            if not group.items:
                continue
            keywords = [k for item in group.items for k in item.keywords][:MAX_PATTERN_KEYWORDS]
            rows.append((group.name, group.color.value, json.dumps(keywords), now.isoformat()))

        if not rows:
            return 0

        cursor = self.conn.cursor()
        cursor.executemany(
            """
            INSERT INTO grouping_patterns (name, color, keywords, created_at)
            VALUES (?, ?, ?, ?)
        """,
            rows,
        )

        # Keep only the most recent patterns
        cursor.execute(
            """
            DELETE FROM grouping_patterns
            WHERE id NOT IN (
                SELECT id FROM grouping_patterns ORDER BY id DESC LIMIT ?
            )
        """,
            (self.max_patterns,),
        )
        self.conn.commit()

        logger.info(f"Saved {len(rows)} grouping patterns")
        return len(rows)

    def load_patterns(self) -> list[GroupingPattern]:
        """Get all stored patterns, oldest first."""
        cursor = self.conn.cursor()
        cursor.execute("SELECT * FROM grouping_patterns ORDER BY id ASC")

        patterns = []
        for row in cursor.fetchall():
            keywords = []
            if row["keywords"]:
                try:
                    keywords = json.loads(row["keywords"])
                except json.JSONDecodeError:
                    keywords = []

            patterns.append(
                GroupingPattern(
                    id=row["id"],
                    name=row["name"],
                    color=ClusterColor(row["color"]),
                    keywords=keywords,
                    created_at=datetime.fromisoformat(row["created_at"]),
                )
            )
        return patterns

    def clear(self) -> int:
        """Delete all patterns. Returns the number deleted."""
        cursor = self.conn.cursor()
        cursor.execute("DELETE FROM grouping_patterns")
        self.conn.commit()
        return cursor.rowcount

    def close(self):
        """Close the database connection."""
        self.conn.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
