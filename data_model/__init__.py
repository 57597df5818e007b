"""
data_model — struktury danych kompilatora publikacji.

Użycie:
  from data_model import RawDocument, Section, Record, Address, ...

Moduły:
  metadata  — PublicationMetadata, AutoUpdate, CustomAttributes, MetadataTag
  documents — RawDocument, Section, Author, SourceSpan, ParseWarning
  tree      — SectionTree, TreeNode, NodeKind, NodeId
  records   — Record, Address, RecordKind, OWNER_PLACEHOLDER, MIME_TAGS

Mapowanie na protokół docelowy:
  Record(AGGREGATOR) → kind 30040, content "", tagi d/m/M/title/…/a*
  Record(LEAF)       → kind 30041, content = treść sekcji
  Address            → tag 'a' w formacie "kind:owner:identifier"
"""

from .metadata import (
    AutoUpdate,
    CustomAttributes,
    MetadataTag,
    PublicationMetadata,
)
from .documents import (
    Author,
    ParseWarning,
    RawDocument,
    Section,
    SourceSpan,
)
from .tree import (
    NodeId,
    NodeKind,
    SectionTree,
    TreeNode,
)
from .records import (
    MIME_TAGS,
    OWNER_PLACEHOLDER,
    Address,
    Record,
    RecordKind,
)

__all__ = [
    # metadata
    "AutoUpdate",
    "CustomAttributes",
    "MetadataTag",
    "PublicationMetadata",
    # documents
    "Author",
    "ParseWarning",
    "RawDocument",
    "Section",
    "SourceSpan",
    # tree
    "NodeId",
    "NodeKind",
    "SectionTree",
    "TreeNode",
    # records
    "MIME_TAGS",
    "OWNER_PLACEHOLDER",
    "Address",
    "Record",
    "RecordKind",
]
