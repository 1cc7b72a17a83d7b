from __future__ import annotations

from pathlib import Path
from typing import Iterator, List
import json

from .models import TocEntry, ProcessedToc


def _out_path(out_dir: str, name: str) -> Path:
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    return out / name


def _dumps(obj) -> str:
    return json.dumps(obj, ensure_ascii=False)


def _iter_forest_json(roots: List[TocEntry]) -> Iterator[str]:
    """
    Stream the nested entries as a JSON array, one entry object per line.
    json.dump recurses per nesting level; this walks with an explicit stack.
    """
    stack = [iter(roots)]
    first = [True]
    yield "["
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            first.pop()
            yield "]"
            if stack:
                yield "}"  # closes the entry that owned this children list
            continue
        if not first[-1]:
            yield ","
        first[-1] = False
        body = _dumps(entry.to_record())
        if entry.children:
            yield "\n" + body[:-1] + ', "children": ['
            stack.append(iter(entry.children))
            first.append(True)
        else:
            yield "\n" + body


def write_tree_json(out_dir: str, toc: ProcessedToc) -> str:
    p = _out_path(out_dir, "tree.json")
    with open(p, "w", encoding="utf-8") as f:
        f.write('{"entries": ')
        for chunk in _iter_forest_json(toc.entries):
            f.write(chunk)
        f.write(',\n"flat_entries": [')
        f.write(",".join("\n" + _dumps(e.to_record()) for e in toc.flat_entries))
        f.write("]}\n")
    return str(p)


def write_tree_md(out_dir: str, tree_md: str) -> str:
    p = _out_path(out_dir, "tree.md")
    p.write_text(tree_md, encoding="utf-8")
    return str(p)


def write_entries_jsonl(out_dir: str, toc: ProcessedToc) -> str:
    p = _out_path(out_dir, "entries.jsonl")
    with open(p, "w", encoding="utf-8") as f:
        for e in toc.flat_entries:
            f.write(_dumps(e.to_record()) + "\n")
    return str(p)
