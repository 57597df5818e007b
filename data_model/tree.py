"""
data_model/tree.py — drzewo sekcji w postaci areny (płaskiej listy węzłów).

Węzły są przechowywane w SectionTree.nodes; relacje rodzic/dziecko to indeksy
w tej liście. Rodzic służy wyłącznie do nawigacji — właścicielem węzłów jest
arena. Pola obliczane (identifier, kind, intro) wypełniają kolejne etapy
kompilatora: compiler.partitioner (kind, intro) i compiler.synthesizer (identyfikatory).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

from .documents import Section

# Indeks węzła w SectionTree.nodes
NodeId: TypeAlias = int


class NodeKind(StrEnum):
    """Klasyfikacja węzła względem poziomu parsowania."""
    AGGREGATOR = "aggregator"
    LEAF       = "leaf"


@dataclass(slots=True)
class TreeNode:
    """
    Węzeł drzewa: dokładnie jedna sekcja.

    - index:      pozycja w arenie (= kolejność dokumentu)
    - section:    sekcja źródłowa
    - parent:     indeks rodzica (None dla korzenia lasu)
    - children:   indeksy dzieci w kolejności dokumentu
    - identifier: wygenerowany identyfikator (tag 'd')
    - kind:       AGGREGATOR | LEAF (None przed klasyfikacją)
    - intro:      tekst przed pierwszą podsekcją agregatora (None gdy brak)
    - intro_identifier: identyfikator liścia wprowadzenia ("" gdy brak)
    """
    index: NodeId
    section: Section
    parent: NodeId | None = None
    children: list[NodeId] = field(default_factory=list)
    identifier: str = ""
    kind: NodeKind | None = None
    intro: str | None = None
    intro_identifier: str = ""

    @property
    def depth(self) -> int:
        return self.section.depth

    @property
    def title(self) -> str:
        return self.section.title


@dataclass(slots=True)
class SectionTree:
    """
    Las sekcji.

    - nodes: arena węzłów w kolejności dokumentu
    - roots: indeksy węzłów najwyższego poziomu
    """
    nodes: list[TreeNode] = field(default_factory=list)
    roots: list[NodeId] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, node_id: NodeId) -> TreeNode:
        return self.nodes[node_id]

    def children_of(self, node_id: NodeId) -> list[TreeNode]:
        return [self.nodes[i] for i in self.nodes[node_id].children]

    def descendants(self, node_id: NodeId) -> Iterator[TreeNode]:
        """Wszyscy potomkowie węzła, pre-order."""
        stack = list(reversed(self.nodes[node_id].children))
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def walk(self) -> Iterator[TreeNode]:
        """Wszystkie węzły, pre-order (= kolejność dokumentu)."""
        stack = list(reversed(self.roots))
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def path(self, node_id: NodeId) -> list[TreeNode]:
        """Ścieżka od korzenia lasu do węzła (włącznie)."""
        chain: list[TreeNode] = []
        current: NodeId | None = node_id
        while current is not None:
            node = self.nodes[current]
            chain.append(node)
            current = node.parent
        chain.reverse()
        return chain
