from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple
import logging

from .models import TocEntry

logger = logging.getLogger(__name__)


def build_forest(entries: Iterable[TocEntry]) -> List[TocEntry]:
    """
    Attach levelled entries to a forest, in order.

    Each entry hangs under the most recently placed entry one depth up.
    When a level is skipped the entry goes under the deepest entry placed
    so far, so it can end up shallower in the tree than its level says.
    """
    roots: List[TocEntry] = []
    # chain[d] is the last entry placed at tree depth d + 1
    chain: List[TocEntry] = []

    for entry in entries:
        if entry.level == 1 or not roots:
            roots.append(entry)
            chain = [entry]
            continue

        depth = min(entry.level, len(chain) + 1)
        parent = chain[depth - 2]
        parent.children.append(entry)
        del chain[depth - 1:]
        chain.append(entry)

    logger.debug("Built forest with %d root(s)", len(roots))
    return roots


def iter_tree(roots: List[TocEntry]) -> Iterator[Tuple[TocEntry, int, List[str]]]:
    """
    Depth-first walk yielding (entry, depth, path of titles down to entry).
    Depth starts at 1 for roots. Uses an explicit stack, so tree depth is
    not bounded by the recursion limit.
    """
    stack = [(node, 1, [node.title]) for node in reversed(roots)]
    while stack:
        node, depth, path = stack.pop()
        yield node, depth, path
        for child in reversed(node.children):
            stack.append((child, depth + 1, path + [child.title]))


def tree_to_markdown(roots: List[TocEntry]) -> str:
    """
    Pretty markdown outline.
    """
    lines: List[str] = []
    for entry, depth, _ in iter_tree(roots):
        page = f"  *(p. {entry.page_number})*" if entry.page_number is not None else ""
        lines.append(f'{"  " * (depth - 1)}- {entry.title}{page}')
    return "\n".join(lines).strip() + "\n"
