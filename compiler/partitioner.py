"""
compiler/partitioner.py — podział drzewa na agregatory i liście wg poziomu parsowania.

classify(tree, parse_level) -> SectionTree

Węzeł na głębokości d:
  - AGGREGATOR gdy d < L i któryś potomek ma głębokość <= L;
    tekst przed pierwszym podnagłówkiem → intro (tylko gdy niepusty po strip)
  - LEAF w pozostałych przypadkach; treść obejmuje wszystkie podsekcje dosłownie

L to jedno globalne pokrętło ziarnistości, nie wybór per węzeł.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from data_model.tree import NodeKind, SectionTree, TreeNode
from segmenter.heading_patterns import match_fence, match_heading

log = logging.getLogger(__name__)

MIN_PARSE_LEVEL = 2


def is_valid_parse_level(level: object) -> bool:
    """Poziom parsowania to int >= 2 (bool się nie liczy)."""
    return isinstance(level, int) and not isinstance(level, bool) and level >= MIN_PARSE_LEVEL


def classify(tree: SectionTree, parse_level: int) -> SectionTree:
    """
    Ustawia kind i intro na każdym węźle drzewa (w miejscu) i zwraca drzewo.

    Raises:
        ValueError: parse_level spoza dozwolonego zakresu
    """
    if not is_valid_parse_level(parse_level):
        raise ValueError(f"parse_level musi być liczbą całkowitą >= {MIN_PARSE_LEVEL}: {parse_level!r}")

    for node in tree.nodes:
        has_shallow_descendant = any(
            d.depth <= parse_level for d in tree.descendants(node.index)
        )
        if node.depth < parse_level and has_shallow_descendant:
            node.kind = NodeKind.AGGREGATOR
            node.intro = extract_intro(node.section.body)
        else:
            node.kind = NodeKind.LEAF
            node.intro = None

    log.debug(
        "Klasyfikacja (L=%d): %d agregatorów, %d liści",
        parse_level,
        sum(1 for n in tree.nodes if n.kind is NodeKind.AGGREGATOR),
        sum(1 for n in tree.nodes if n.kind is NodeKind.LEAF),
    )
    return tree


def extract_intro(body: str) -> str | None:
    """Tekst przed pierwszym nagłówkiem w treści; None gdy pusty po strip."""
    intro: list[str] = []
    open_fence: str | None = None
    for line in body.split("\n"):
        fence = match_fence(line)
        if open_fence is not None:
            if fence == open_fence:
                open_fence = None
        elif fence is not None:
            open_fence = fence
        elif match_heading(line) is not None:
            break
        intro.append(line)

    text = "\n".join(intro).strip()
    return text or None


def emitted_nodes(tree: SectionTree) -> Iterator[TreeNode]:
    """
    Węzły, które staną się rekordami: pre-order, bez zagłębiania się w liście
    (podsekcje liścia są częścią jego treści).
    """
    stack = list(reversed(tree.roots))
    while stack:
        node = tree.nodes[stack.pop()]
        yield node
        if node.kind is NodeKind.AGGREGATOR:
            stack.extend(reversed(node.children))
