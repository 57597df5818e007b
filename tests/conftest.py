"""Wspólne dokumenty testowe."""

import pytest

ROUND_TRIP = "= Doc\n:author: Ada\n\n== One\nBody1\n\n== Two\nBody2"

BOOK = """\
= Book
:author: Ada Lovelace
:type: book
:language: pl

Preambuła książki.

== Part One
Wstęp do części 1.

=== Chapter A
Treść A, akapit 1.

=== Chapter B
Treść B, akapit 2.

== Part Two
Tekst części 2.
"""

SCATTERED = """\
== Alpha
First note, body.

== Beta
Second note, body.

=== Beta detail
Nested text here, too.
"""


@pytest.fixture
def round_trip_text():
    return ROUND_TRIP


@pytest.fixture
def book_text():
    return BOOK


@pytest.fixture
def scattered_text():
    return SCATTERED
