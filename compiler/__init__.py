"""
compiler — kompilator dokumentu do rekordów 30040/30041.

Użycie:
  from compiler import compile_document, CompileOptions

  report = compile_document(text, CompileOptions(parse_level=3))
  if report.is_valid:
      events = report.events(owner=pubkey)

Moduły:
  identifiers  — slug, abbreviate, IdentifierScope
  tree_builder — build_tree
  partitioner  — classify, extract_intro
  synthesizer  — synthesize
  engine       — compile_document
"""

from .types import (
    DEFAULT_PARSE_LEVEL,
    CollisionPolicy,
    CompilationReport,
    CompileOptions,
    ContentType,
)
from .identifiers import Collision, IdentifierScope, abbreviate, intro_identifier, slug
from .tree_builder import build_tree
from .partitioner import MIN_PARSE_LEVEL, classify, emitted_nodes, extract_intro, is_valid_parse_level
from .synthesizer import Synthesis, detect_content_type, synthesize
from .engine import compile_document

__all__ = [
    "DEFAULT_PARSE_LEVEL",
    "CollisionPolicy",
    "CompilationReport",
    "CompileOptions",
    "ContentType",
    "Collision",
    "IdentifierScope",
    "abbreviate",
    "intro_identifier",
    "slug",
    "build_tree",
    "MIN_PARSE_LEVEL",
    "classify",
    "emitted_nodes",
    "extract_intro",
    "is_valid_parse_level",
    "Synthesis",
    "detect_content_type",
    "synthesize",
    "compile_document",
]
