from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Any, Optional

import pandas as pd

from .models import ProcessedToc
from .toc_detect import is_toc_text
from .toc_parse import process_toc_text
from .section_tree import iter_tree, tree_to_markdown
from .export import write_tree_json, write_tree_md, write_entries_jsonl

ENTRY_COLUMNS = ["id", "title", "level", "page_number", "parent_id", "path"]


@dataclass
class TocResult:
    source: str
    looks_like_toc: bool
    toc: ProcessedToc
    tree_md: str

    def entries_df(self) -> pd.DataFrame:
        """
        One row per flat entry, in line order, with its place in the tree.
        """
        parents: Dict[str, Optional[str]] = {}
        paths: Dict[str, str] = {}
        for entry, _, path in iter_tree(self.toc.entries):
            paths[entry.id] = " > ".join(path)
            for child in entry.children:
                parents[child.id] = entry.id

        rows: List[Dict[str, Any]] = []
        for e in self.toc.flat_entries:
            rows.append(
                {
                    "id": e.id,
                    "title": e.title,
                    "level": e.level,
                    "page_number": e.page_number,
                    "parent_id": parents.get(e.id),
                    "path": paths.get(e.id, e.title),
                }
            )
        df = pd.DataFrame(rows, columns=ENTRY_COLUMNS)
        df["page_number"] = df["page_number"].astype("Int64")
        return df

    def export(self, out_dir: str) -> None:
        out = Path(out_dir)
        out.mkdir(parents=True, exist_ok=True)

        write_tree_json(str(out), self.toc)
        write_tree_md(str(out), self.tree_md)
        write_entries_jsonl(str(out), self.toc)


def parse_toc(text: str, source: str = "<text>") -> TocResult:
    toc = process_toc_text(text)
    return TocResult(
        source=source,
        looks_like_toc=is_toc_text(text),
        toc=toc,
        tree_md=tree_to_markdown(toc.entries),
    )


def parse_toc_file(path: str, encoding: str = "utf-8-sig") -> TocResult:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"TOC text file not found: {path}")
    return parse_toc(p.read_text(encoding=encoding), source=str(p))
