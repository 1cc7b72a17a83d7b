from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any


@dataclass
class TocEntry:
    """One line of a table of contents."""
    id: str
    title: str
    level: int
    page_number: Optional[int] = None
    children: List["TocEntry"] = field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        """Flat view: no children."""
        rec: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "level": self.level,
        }
        if self.page_number is not None:
            rec["page_number"] = self.page_number
        return rec

    def to_dict(self) -> Dict[str, Any]:
        """Nested view, built without recursion."""
        root = self.to_record()
        stack = [(self, root)]
        while stack:
            node, d = stack.pop()
            if node.children:
                kids = [c.to_record() for c in node.children]
                d["children"] = kids
                stack.extend(zip(node.children, kids))
        return root


@dataclass
class ProcessedToc:
    """Hierarchical and flat views over the same entries."""
    entries: List[TocEntry] = field(default_factory=list)
    flat_entries: List[TocEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "flat_entries": [e.to_record() for e in self.flat_entries],
        }
