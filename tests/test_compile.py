"""
Testy pełnego potoku kompilacji (compiler/engine.py, compiler/synthesizer.py).

Run: python -m pytest tests/test_compile.py -q
"""

import json

import pytest

from compiler import CollisionPolicy, CompileOptions, ContentType, compile_document
from data_model import Address, RecordKind
from validator import ErrorCode


def _ids(report):
    return [r.identifier for r in report.records]


# ---------------------------------------------------------------------------
# Scenariusz podstawowy
# ---------------------------------------------------------------------------

class TestRoundTrip:
    def test_records(self, round_trip_text):
        report = compile_document(round_trip_text, CompileOptions(parse_level=2))
        assert report.is_valid
        assert report.content_type is ContentType.ARTICLE
        assert _ids(report) == ["doc", "one", "two"]

        root = report.root
        assert root is report.records[0]
        assert root.kind is RecordKind.AGGREGATOR
        assert root.body == ""
        assert root.references == (
            Address(RecordKind.LEAF, "one"),
            Address(RecordKind.LEAF, "two"),
        )

        one, two = report.records[1:]
        assert (one.kind, one.body) == (RecordKind.LEAF, "Body1")
        assert (two.kind, two.body) == (RecordKind.LEAF, "Body2")

    def test_author_stays_on_root(self, round_trip_text):
        report = compile_document(round_trip_text)
        assert report.root.tag_values("author") == ["Ada"]
        # autor dokumentu nie jest przenoszony na liście
        assert all(leaf.tag_values("author") == [] for leaf in report.leaves)

    def test_events(self, round_trip_text):
        events = compile_document(round_trip_text).events()
        assert events[0] == {
            "kind": 30040,
            "content": "",
            "tags": [
                ["d", "doc"],
                ["m", "application/json"],
                ["M", "meta-data/index/replaceable"],
                ["title", "Doc"],
                ["author", "Ada"],
                ["a", "30041:<owner>:one"],
                ["a", "30041:<owner>:two"],
            ],
        }
        assert events[1] == {
            "kind": 30041,
            "content": "Body1",
            "tags": [
                ["d", "one"],
                ["m", "text/asciidoc"],
                ["M", "article/publication-content/replaceable"],
                ["title", "One"],
            ],
        }

    def test_owner_substituted(self, round_trip_text):
        owner = "f" * 64
        events = compile_document(round_trip_text).events(owner=owner)
        refs = [t[1] for t in events[0]["tags"] if t[0] == "a"]
        assert refs == [f"30041:{owner}:one", f"30041:{owner}:two"]


# ---------------------------------------------------------------------------
# Warianty dokumentu
# ---------------------------------------------------------------------------

class TestContentTypes:
    def test_empty_publication(self):
        report = compile_document("= Doc\nindex card")
        assert report.is_valid
        assert report.content_type is ContentType.INDEX_CARD
        assert len(report.records) == 1
        assert report.root.is_aggregator
        assert report.root.body == ""
        assert report.root.references == ()

    def test_scattered(self, scattered_text):
        report = compile_document(scattered_text)
        assert report.is_valid
        assert report.content_type is ContentType.SCATTERED
        assert report.root is None
        assert _ids(report) == ["alpha", "beta"]
        assert all(not r.is_aggregator for r in report.records)
        assert "=== Beta detail" in report.records[1].body

    def test_scattered_ignores_parse_level(self, scattered_text):
        report = compile_document(scattered_text, CompileOptions(parse_level=5))
        assert _ids(report) == ["alpha", "beta"]

    def test_title_after_section_rejected(self):
        report = compile_document("== A\nalpha, x.\n= Doc\nlate text, here.\n== B\nbeta, y.")
        assert not report.is_valid
        assert [p.code for p in report.errors] == [ErrorCode.TITLE_MISPLACED]
        assert report.records == []

    def test_duplicate_title_rejected(self):
        report = compile_document("= One\n= Two\n== S\ntext here.")
        assert not report.is_valid
        assert [p.code for p in report.errors] == [ErrorCode.TITLE_DUPLICATE]
        assert report.records == []
        assert report.root is None
        assert report.tree is None

    def test_no_content(self):
        report = compile_document("")
        assert not report.is_valid
        assert report.content_type is ContentType.NONE
        assert [p.code for p in report.errors] == [ErrorCode.NO_CONTENT]

    def test_require_title(self, scattered_text):
        report = compile_document(scattered_text, CompileOptions(require_title=True))
        assert [p.code for p in report.errors] == [ErrorCode.TITLE_MISSING]
        assert report.records == []


# ---------------------------------------------------------------------------
# Poziom parsowania
# ---------------------------------------------------------------------------

class TestParseLevel:
    def test_level_2(self, book_text):
        report = compile_document(book_text, CompileOptions(parse_level=2))
        assert _ids(report) == ["book", "book-content", "part-one", "part-two"]
        assert len(report.aggregators) == 1
        part_one = report.records[2]
        assert "=== Chapter A" in part_one.body
        assert "Treść B, akapit 2." in part_one.body

    def test_level_3(self, book_text):
        report = compile_document(book_text, CompileOptions(parse_level=3))
        assert _ids(report) == [
            "book", "book-content",
            "part-one", "part-one-content", "chapter-a", "chapter-b",
            "part-two",
        ]
        part_one = report.records[2]
        assert part_one.is_aggregator
        assert [ref.identifier for ref in part_one.references] == [
            "part-one-content", "chapter-a", "chapter-b",
        ]
        assert report.records[3].body == "Wstęp do części 1."
        assert report.root.references[0] == Address(RecordKind.LEAF, "book-content")

    def test_leaf_count_never_decreases(self, book_text):
        counts = [
            len(compile_document(book_text, CompileOptions(parse_level=level)).leaves)
            for level in range(2, 7)
        ]
        assert counts == sorted(counts)
        assert counts[0] < counts[-1]

    @pytest.mark.parametrize("level", [0, 1, True, "2"])
    def test_invalid_level(self, round_trip_text, level):
        report = compile_document(round_trip_text, CompileOptions(parse_level=level))
        assert not report.is_valid
        assert [p.code for p in report.errors] == [ErrorCode.PARSE_LEVEL_INVALID]
        assert report.records == []

    def test_depth_skip(self):
        text = "= Doc\n== A\nText a, here.\n==== Deep\nDeep text, here.\n== B\nText b, here."
        report = compile_document(text, CompileOptions(parse_level=4))
        tree = report.tree
        assert tree[1].parent == 0
        assert _ids(report) == ["doc", "a", "a-content", "deep", "b"]

        shallow = compile_document(text, CompileOptions(parse_level=3))
        assert _ids(shallow) == ["doc", "a", "b"]
        assert "==== Deep" in shallow.records[1].body


# ---------------------------------------------------------------------------
# Determinizm i metadane
# ---------------------------------------------------------------------------

class TestDeterminism:
    @pytest.mark.parametrize("level", [2, 3, 4])
    def test_identical_output(self, book_text, level):
        options = CompileOptions(parse_level=level)
        first = compile_document(book_text, options)
        second = compile_document(book_text, options)
        assert first.records == second.records
        assert json.dumps(first.events()) == json.dumps(second.events())


class TestTags:
    def test_root_tags(self, book_text):
        root = compile_document(book_text).root
        assert list(root.tags) == [
            ("author", "Ada Lovelace"),
            ("type", "book"),
            ("language", "pl"),
        ]

    def test_leaves_inherit_type_and_language(self, book_text):
        report = compile_document(book_text, CompileOptions(parse_level=3))
        for leaf in report.leaves:
            assert leaf.tag_values("type") == ["book"]
            assert leaf.tag_values("language") == ["pl"]
            assert leaf.tag_values("author") == []

    def test_local_value_not_overridden(self):
        text = "= Doc\n:type: book\n\n== A\n:type: poem\n\nText, a."
        leaf = compile_document(text).records[1]
        assert leaf.tag_values("type") == ["poem"]

    def test_section_metadata_and_custom_tags(self):
        text = "= Doc\n\n== A\n:keywords: x, y\n:mood: calm\n\nText, a."
        leaf = compile_document(text).records[1]
        assert list(leaf.tags) == [("t", "x"), ("t", "y"), ("mood", "calm")]

    def test_intro_leaf_carries_section_tags(self):
        text = "= Doc\n:type: note\n\n== A\n:mood: calm\n\nintro, a.\n=== B\nb text, x."
        report = compile_document(text, CompileOptions(parse_level=3))
        assert _ids(report) == ["doc", "a", "a-content", "b"]
        intro = report.records[2]
        assert list(intro.tags) == [("mood", "calm"), ("type", "note")]
        assert report.records[1].tag_values("mood") == ["calm"]


# ---------------------------------------------------------------------------
# Identyfikatory
# ---------------------------------------------------------------------------

class TestIdentifiers:
    COLLIDING = "= Doc\n== Intro\nFirst text, here.\n== Intro\nSecond text, here."

    def test_collision_is_error_by_default(self):
        report = compile_document(self.COLLIDING)
        assert not report.is_valid
        assert [p.code for p in report.errors] == [ErrorCode.IDENTIFIER_COLLISION]
        assert report.errors[0].line == 4
        assert report.records == []

    def test_collision_after_normalisation(self):
        report = compile_document("= Doc\n== Część I\nx, y.\n== część-i\nz, w.")
        assert [p.code for p in report.errors] == [ErrorCode.IDENTIFIER_COLLISION]

    def test_collision_suffix_policy(self):
        report = compile_document(
            self.COLLIDING, CompileOptions(collision_policy=CollisionPolicy.SUFFIX),
        )
        assert report.is_valid
        assert _ids(report) == ["doc", "intro", "intro-2"]

    def test_policy_from_string(self):
        options = CompileOptions(collision_policy="suffix")
        assert options.collision_policy is CollisionPolicy.SUFFIX
        with pytest.raises(ValueError):
            CompileOptions(collision_policy="overwrite")

    def test_namespaced_identifiers(self):
        text = "= Wojna i Pokój\n== Tom Pierwszy\nTreść tomu 1."
        report = compile_document(text, CompileOptions(namespace_identifiers=True))
        assert _ids(report) == ["wojna-i-pokój", "wip-tom-pierwszy"]
        assert report.root.references == (Address(RecordKind.LEAF, "wip-tom-pierwszy"),)

    def test_intro_identifier_follows_namespace(self, book_text):
        report = compile_document(
            book_text, CompileOptions(parse_level=3, namespace_identifiers=True),
        )
        assert "b-part-one-content" in _ids(report)
        assert "book-content" in _ids(report)

    def test_tree_carries_identifiers(self, book_text):
        report = compile_document(book_text, CompileOptions(parse_level=3))
        assert [n.identifier for n in report.tree.walk()] == [
            "part-one", "chapter-a", "chapter-b", "part-two",
        ]
        assert report.tree[0].intro_identifier == "part-one-content"


class TestWarningsPassThrough:
    def test_empty_section_compiles_with_warning(self):
        report = compile_document("= Doc\n== Empty\n== Full\nText, here.")
        assert report.is_valid
        assert [p.code for p in report.warnings] == [ErrorCode.SECTION_EMPTY]
        assert report.records[1].body == ""
