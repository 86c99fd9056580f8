"""
history.py - Linear Undo/Redo History
======================================
Every committed graph edit becomes an immutable Graph snapshot in a
bounded list with a cursor:

    entries: [g0, g1, g2, g3]
                      ^ cursor          -> g2 is displayed

    undo()   -> cursor 1
    redo()   -> cursor 3
    commit() -> everything after the cursor is discarded first (the redo
                branch dies), then the new snapshot is appended.

When the list grows past `capacity` the oldest snapshot is evicted, so
the cursor always keeps pointing at the newest entry after a commit.
Snapshots are shared, never copied: Graph is immutable.
"""

import logging
from typing import List, Optional

from graph import Graph

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50


class History:
    """
    Attributes:
        entries  : Graph snapshots, oldest first.
        cursor   : Index of the displayed snapshot.
        capacity : Maximum number of snapshots kept.
    """

    def __init__(self, initial: Graph, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.entries:  List[Graph] = [initial]
        self.cursor:   int         = 0
        self.capacity: int         = capacity

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def commit(self, graph: Graph) -> Graph:
        """Record `graph` as the new current state and return it."""
        dropped = len(self.entries) - self.cursor - 1
        del self.entries[self.cursor + 1:]
        self.entries.append(graph)

        evicted = 0
        while len(self.entries) > self.capacity:
            self.entries.pop(0)
            evicted += 1
        self.cursor = len(self.entries) - 1

        logger.debug(
            "history commit: %d entries, cursor %d (redo dropped %d, evicted %d)",
            len(self.entries), self.cursor, dropped, evicted,
        )
        return graph

    def undo(self) -> Optional[Graph]:
        """Step back one entry; None (no-op) at the oldest entry."""
        if not self.can_undo:
            return None
        self.cursor -= 1
        return self.entries[self.cursor]

    def redo(self) -> Optional[Graph]:
        """Step forward one entry; None (no-op) at the newest entry."""
        if not self.can_redo:
            return None
        self.cursor += 1
        return self.entries[self.cursor]

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current(self) -> Graph:
        return self.entries[self.cursor]

    @property
    def can_undo(self) -> bool:
        return self.cursor > 0

    @property
    def can_redo(self) -> bool:
        return self.cursor < len(self.entries) - 1

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict:
        return {
            "length":   len(self.entries),
            "cursor":   self.cursor,
            "can_undo": self.can_undo,
            "can_redo": self.can_redo,
        }
