"""
compiler/tree_builder.py — odtworzenie zagnieżdżenia sekcji z głębokości nagłówków.

build_tree(sections) -> SectionTree

Stos otwartych węzłów (indeksy w arenie). Dla każdej sekcji zdejmujemy ze
stosu węzły o głębokości >= bieżącej; pusty stos → nowy korzeń lasu, inaczej
ostatnie dziecko wierzchołka stosu. Przeskoki głębokości (== → ====) wiążą
sekcję z najbliższym płytszym otwartym węzłem.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from data_model.documents import Section
from data_model.tree import NodeId, SectionTree, TreeNode

log = logging.getLogger(__name__)


def build_tree(sections: Iterable[Section]) -> SectionTree:
    tree = SectionTree()
    stack: list[NodeId] = []

    for section in sections:
        node = TreeNode(index=len(tree.nodes), section=section)
        tree.nodes.append(node)

        while stack and tree.nodes[stack[-1]].depth >= section.depth:
            stack.pop()

        if stack:
            node.parent = stack[-1]
            tree.nodes[stack[-1]].children.append(node.index)
        else:
            tree.roots.append(node.index)

        stack.append(node.index)

    log.debug("Drzewo: %d węzłów, %d korzeni", len(tree.nodes), len(tree.roots))
    return tree
