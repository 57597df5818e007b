"""
data_model/records.py — rekordy wynikowe kompilatora.

Record to jedyny produkt kompilacji: agregator (kind 30040, pusta treść,
referencje do dzieci) albo liść (kind 30041, treść sekcji). Referencja do
dziecka to Address (kind, właściciel, identyfikator) — trójka, nie wskaźnik;
rozwiązywana poza kompilatorem.

Właściciela (klucz publiczny wydawcy) kompilator nie zna: w adresach stoi
OWNER_PLACEHOLDER, który wywołujący podmienia po podpisaniu (with_owner).
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from .metadata import MetadataTag

# Znacznik właściciela podmieniany przez warstwę publikacji.
OWNER_PLACEHOLDER = "<owner>"


class RecordKind(IntEnum):
    """Rodzaj rekordu = numer kind w protokole docelowym."""
    AGGREGATOR = 30040
    LEAF       = 30041


# Tagi MIME dla rodzajów rekordów: (m, M)
MIME_TAGS: dict[RecordKind, tuple[MetadataTag, MetadataTag]] = {
    RecordKind.AGGREGATOR: (
        ("m", "application/json"),
        ("M", "meta-data/index/replaceable"),
    ),
    RecordKind.LEAF: (
        ("m", "text/asciidoc"),
        ("M", "article/publication-content/replaceable"),
    ),
}


# ---------------------------------------------------------------------------
# Address
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Address:
    """
    Adres rekordu adresowalnego: kind:owner:identifier.

    - kind:       RecordKind dziecka
    - owner:      identyfikator właściciela (domyślnie OWNER_PLACEHOLDER)
    - identifier: wartość tagu 'd' dziecka
    """
    kind: RecordKind
    identifier: str
    owner: str = OWNER_PLACEHOLDER

    def coordinate(self) -> str:
        return f"{int(self.kind)}:{self.owner}:{self.identifier}"

    def with_owner(self, owner: str) -> Address:
        return dataclasses.replace(self, owner=owner)

    @classmethod
    def parse(cls, coordinate: str) -> Address:
        """Odtwarza Address z napisu 'kind:owner:identifier'."""
        parts = coordinate.split(":", 2)
        if len(parts) != 3 or not parts[2]:
            raise ValueError(f"Nieprawidłowy adres: '{coordinate}'")
        kind, owner, identifier = parts
        return cls(kind=RecordKind(int(kind)), identifier=identifier, owner=owner)

    def __str__(self) -> str:
        return self.coordinate()


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Record:
    """
    Skompilowany rekord.

    - kind:       AGGREGATOR | LEAF
    - identifier: tag 'd' (slug)
    - title:      tytuł sekcji / dokumentu
    - body:       treść (zawsze pusta dla agregatora)
    - tags:       metadane i atrybuty własne jako (klucz, wartość);
                  duplikaty kluczy dozwolone (autorzy, tagi 't')
    - references: adresy dzieci, w kolejności dokumentu (tylko agregator)
    """
    kind: RecordKind
    identifier: str
    title: str
    body: str = ""
    tags: tuple[MetadataTag, ...] = ()
    references: tuple[Address, ...] = ()

    @property
    def is_aggregator(self) -> bool:
        return self.kind == RecordKind.AGGREGATOR

    @property
    def address(self) -> Address:
        return Address(kind=self.kind, identifier=self.identifier)

    def tag_values(self, key: str) -> list[str]:
        """Wszystkie wartości tagów o danym kluczu, w kolejności."""
        return [v for k, v in self.tags if k == key]

    def event_tags(self) -> list[list[str]]:
        """
        Pełna lista tagów zdarzenia:
          d, m, M, title, metadane/atrybuty, a* (po jednym na referencję).
        """
        m_tag, big_m_tag = MIME_TAGS[self.kind]
        tags: list[list[str]] = [
            ["d", self.identifier],
            list(m_tag),
            list(big_m_tag),
            ["title", self.title],
        ]
        tags.extend([k, v] for k, v in self.tags)
        tags.extend(["a", ref.coordinate()] for ref in self.references)
        return tags

    def to_event(self) -> dict[str, Any]:
        """Niepodpisane zdarzenie: kind, content, tags (bez id/pubkey/sig)."""
        return {
            "kind": int(self.kind),
            "content": self.body,
            "tags": self.event_tags(),
        }

    def with_owner(self, owner: str) -> Record:
        """Kopia rekordu z podmienionym właścicielem we wszystkich adresach."""
        if not self.references:
            return self
        return dataclasses.replace(
            self,
            references=tuple(ref.with_owner(owner) for ref in self.references),
        )
