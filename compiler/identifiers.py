"""
compiler/identifiers.py — identyfikatory rekordów (tag 'd').

slug(title)       → 'rozdział-1-wstęp' (litery/cyfry Unicode, reszta → '-')
abbreviate(title) → 'r1w'              (pierwszy znak każdego słowa)

IdentifierScope to tablica identyfikator → właściciel, tworzona raz na jedno
wywołanie kompilacji. Wykrywa kolizje w obrębie dokumentu i — zależnie od
polityki — zgłasza je albo dopisuje przyrostek -2, -3, …
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .types import CollisionPolicy

# Wszystko poza literami i cyframi (także '_')
_NON_ALNUM_RE = re.compile(r"[\W_]+", re.UNICODE)

SLUG_FALLBACK = "untitled"
ABBREVIATION_FALLBACK = "u"
INTRO_SUFFIX = "-content"


def slug(title: str) -> str:
    """
    Identyfikator z tytułu: małe litery, każdy ciąg znaków spoza liter/cyfr → '-',
    bez '-' na brzegach. Poprawny identyfikator przechodzi bez zmian.
    """
    return _NON_ALNUM_RE.sub("-", title.lower()).strip("-") or SLUG_FALLBACK


def abbreviate(title: str) -> str:
    """Pierwsze znaki słów tytułu, małymi literami ('Wojna i pokój' → 'wip')."""
    words = [w for w in _NON_ALNUM_RE.split(title) if w]
    return "".join(w[0] for w in words).lower() or ABBREVIATION_FALLBACK


def intro_identifier(identifier: str) -> str:
    return identifier + INTRO_SUFFIX


# ---------------------------------------------------------------------------
# IdentifierScope
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Collision:
    """Dwa rekordy wyliczyły ten sam identyfikator."""
    identifier: str
    first: str       # tytuł pierwszego właściciela
    second: str      # tytuł kolejnego
    line: int | None = None


@dataclass(slots=True)
class IdentifierScope:
    """
    Tablica identyfikatorów jednego dokumentu.

    - policy:     CollisionPolicy.ERROR | CollisionPolicy.SUFFIX
    - prefix:     dopisywany do identyfikatorów poniżej korzenia ('' = brak)
    - owners:     identyfikator → tytuł właściciela
    - collisions: kolizje zarejestrowane przy polityce ERROR
    """
    policy: CollisionPolicy = CollisionPolicy.ERROR
    prefix: str = ""
    owners: dict[str, str] = field(default_factory=dict)
    collisions: list[Collision] = field(default_factory=list)

    def claim(self, identifier: str, owner: str, line: int | None = None) -> str:
        """Rejestruje identyfikator i zwraca ostateczną wartość."""
        if identifier not in self.owners:
            self.owners[identifier] = owner
            return identifier

        if self.policy is CollisionPolicy.ERROR:
            self.collisions.append(Collision(
                identifier=identifier,
                first=self.owners[identifier],
                second=owner,
                line=line,
            ))
            return identifier

        n = 2
        while f"{identifier}-{n}" in self.owners:
            n += 1
        unique = f"{identifier}-{n}"
        self.owners[unique] = owner
        return unique

    def claim_title(self, title: str, line: int | None = None) -> str:
        """slug(title) z prefiksem przestrzeni nazw."""
        return self.claim(self.prefix + slug(title), title, line)
