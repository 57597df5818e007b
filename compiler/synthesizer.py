"""
compiler/synthesizer.py — rekordy z sklasyfikowanego drzewa.

synthesize(tree, document, options) -> Synthesis

Kolejność emisji: pre-order (kolejność dokumentu). Agregator emituje siebie,
potem liść wprowadzenia (jeśli jest), potem dzieci; wprowadzenie jest pierwszą
referencją agregatora.

Warianty dokumentu:
  ARTICLE    — korzeń-agregator (slug tytułu) z referencjami do węzłów
               najwyższego poziomu; preambuła dokumentu → '<id>-content'
  INDEX_CARD — sam korzeń-agregator, bez referencji
  SCATTERED  — brak korzenia; jeden liść na sekcję najwyższego poziomu
  NONE       — brak rekordów

Tagi rekordu: własne metadane sekcji, atrybuty własne, dziedziczone z dokumentu
(language, type — tylko liście i tylko gdy sekcja nie ustawia ich sama).
Liść wprowadzenia dostaje te same tagi własne co jego sekcja.
Autor dokumentu nie jest przenoszony na sekcje.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from data_model.documents import RawDocument
from data_model.metadata import MetadataTag
from data_model.records import Address, Record, RecordKind
from data_model.tree import NodeKind, SectionTree, TreeNode
from segmenter.heading_patterns import is_empty_publication

from .identifiers import Collision, IdentifierScope, abbreviate, intro_identifier, slug
from .partitioner import emitted_nodes
from .types import CompileOptions, ContentType

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Synthesis:
    """
    Wynik syntezy.

    - content_type: wariant dokumentu
    - root:         agregator dokumentu lub None
    - records:      wszystkie rekordy, pre-order
    - collisions:   kolizje identyfikatorów (polityka 'error')
    """
    content_type: ContentType
    root: Record | None = None
    records: list[Record] = field(default_factory=list)
    collisions: list[Collision] = field(default_factory=list)


def detect_content_type(document: RawDocument) -> ContentType:
    if document.has_title:
        if document.sections:
            return ContentType.ARTICLE
        if is_empty_publication(document.text.split("\n")):
            return ContentType.INDEX_CARD
        return ContentType.NONE
    if document.sections:
        return ContentType.SCATTERED
    return ContentType.NONE


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def synthesize(
    tree: SectionTree,
    document: RawDocument,
    options: CompileOptions | None = None,
) -> Synthesis:
    """
    Buduje rekordy z drzewa po classify(). Nadaje węzłom identyfikatory.

    Args:
        tree:     drzewo z ustawionym kind/intro na każdym węźle
        document: dokument źródłowy (tytuł, preambuła, metadane)
        options:  przestrzeń nazw identyfikatorów i polityka kolizji
    """
    options = options or CompileOptions()
    content_type = detect_content_type(document)
    result = Synthesis(content_type=content_type)
    if content_type is ContentType.NONE:
        return result

    scope = IdentifierScope(policy=options.collision_policy)
    inherited = _inherited_tags(document)

    if content_type is ContentType.SCATTERED:
        for node in emitted_nodes(tree):
            node.identifier = scope.claim_title(node.title, node.section.span.start_line)
            result.records.append(_leaf(node, inherited))
        result.collisions = scope.collisions
        log.debug("Synteza (notatki rozproszone): %d liści", len(result.records))
        return result

    title = document.title or ""
    root_id = scope.claim(slug(title), title, document.title_lines[0])
    if options.namespace_identifiers:
        scope.prefix = abbreviate(title) + "-"

    root_tags = _own_tags(document.metadata.to_tags(include_title=False), document.custom_attributes)
    root_refs: list[Address] = []
    body_records: list[Record] = []

    if content_type is ContentType.ARTICLE:
        if document.preamble_body.strip():
            intro_id = scope.claim(intro_identifier(root_id), title)
            body_records.append(Record(
                kind=RecordKind.LEAF,
                identifier=intro_id,
                title=title,
                body=document.preamble_body.strip(),
                tags=tuple(inherited),
            ))
            root_refs.append(body_records[-1].address)

        for index in tree.roots:
            _claim_subtree(tree, tree.nodes[index], scope)
        for node in emitted_nodes(tree):
            body_records.append(_node_record(tree, node, inherited))
            if node.intro_identifier:
                body_records.append(_intro_record(node, inherited))
        root_refs.extend(_address_of(tree.nodes[i]) for i in tree.roots)

    root = Record(
        kind=RecordKind.AGGREGATOR,
        identifier=root_id,
        title=title,
        tags=tuple(root_tags),
        references=tuple(root_refs),
    )
    result.root = root
    result.records = [root, *body_records]
    result.collisions = scope.collisions
    log.debug(
        "Synteza (%s): korzeń=%s, rekordów=%d, kolizji=%d",
        content_type, root_id, len(result.records), len(result.collisions),
    )
    return result


# ---------------------------------------------------------------------------
# Identyfikatory
# ---------------------------------------------------------------------------

def _claim_subtree(tree: SectionTree, top: TreeNode, scope: IdentifierScope) -> None:
    """Nadaje identyfikatory emitowanym węzłom poddrzewa, w kolejności dokumentu."""
    stack = [top]
    while stack:
        node = stack.pop()
        line = node.section.span.start_line
        node.identifier = scope.claim_title(node.title, line)
        if node.kind is NodeKind.AGGREGATOR:
            if node.intro:
                node.intro_identifier = scope.claim(
                    intro_identifier(node.identifier), node.title, line,
                )
            stack.extend(reversed(tree.children_of(node.index)))


# ---------------------------------------------------------------------------
# Rekordy
# ---------------------------------------------------------------------------

def _address_of(node: TreeNode) -> Address:
    kind = RecordKind.AGGREGATOR if node.kind is NodeKind.AGGREGATOR else RecordKind.LEAF
    return Address(kind=kind, identifier=node.identifier)


def _node_record(tree: SectionTree, node: TreeNode, inherited: list[MetadataTag]) -> Record:
    if node.kind is not NodeKind.AGGREGATOR:
        return _leaf(node, inherited)

    refs: list[Address] = []
    if node.intro_identifier:
        refs.append(Address(kind=RecordKind.LEAF, identifier=node.intro_identifier))
    refs.extend(_address_of(child) for child in tree.children_of(node.index))
    return Record(
        kind=RecordKind.AGGREGATOR,
        identifier=node.identifier,
        title=node.title,
        tags=tuple(_section_tags(node)),
        references=tuple(refs),
    )


def _intro_record(node: TreeNode, inherited: list[MetadataTag]) -> Record:
    return Record(
        kind=RecordKind.LEAF,
        identifier=node.intro_identifier,
        title=node.title,
        body=node.intro or "",
        tags=tuple(_merge_inherited(_section_tags(node), inherited)),
    )


def _leaf(node: TreeNode, inherited: list[MetadataTag]) -> Record:
    return Record(
        kind=RecordKind.LEAF,
        identifier=node.identifier,
        title=node.title,
        body=node.section.body,
        tags=tuple(_merge_inherited(_section_tags(node), inherited)),
    )


# ---------------------------------------------------------------------------
# Tagi
# ---------------------------------------------------------------------------

def _own_tags(
    metadata_tags: list[MetadataTag],
    custom: list[tuple[str, str]],
) -> list[MetadataTag]:
    return [*metadata_tags, *custom]


def _section_tags(node: TreeNode) -> list[MetadataTag]:
    section = node.section
    return _own_tags(section.metadata.to_tags(include_title=False), section.custom_attributes)


def _inherited_tags(document: RawDocument) -> list[MetadataTag]:
    tags: list[MetadataTag] = []
    if document.metadata.type:
        tags.append(("type", document.metadata.type))
    for key, value in document.custom_attributes:
        if key == "language" and value:
            tags.append((key, value))
            break
    return tags


def _merge_inherited(tags: list[MetadataTag], inherited: list[MetadataTag]) -> list[MetadataTag]:
    present = {k for k, _ in tags}
    return tags + [(k, v) for k, v in inherited if k not in present]
