"""
segmenter — podział tekstu źródłowego na nagłówek dokumentu i sekcje.

Użycie:
  from segmenter import segment, extract_header

  doc = segment(text)          # RawDocument
  doc.sections                 # płaska lista Section (głębokość = liczba '=')
"""

from .heading_patterns import (
    EMPTY_PUBLICATION_MARKER,
    HeadingMatch,
    is_empty_publication,
    match_attribute,
    match_heading,
)
from .metadata import (
    ATTRIBUTE_MAP,
    RESERVED_ATTRIBUTES,
    ExtractedHeader,
    extract_header,
    split_tags,
)
from .parser import normalize_newlines, segment

__all__ = [
    "EMPTY_PUBLICATION_MARKER",
    "HeadingMatch",
    "is_empty_publication",
    "match_attribute",
    "match_heading",
    "ATTRIBUTE_MAP",
    "RESERVED_ATTRIBUTES",
    "ExtractedHeader",
    "extract_header",
    "split_tags",
    "normalize_newlines",
    "segment",
]
