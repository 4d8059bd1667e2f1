"""Data models for FamilySearch (GEDCOM X) records.

Upstream payloads are loosely typed; from_gedcomx keeps only string leaves
and treats anything else as missing.
"""

from dataclasses import dataclass, field
from enum import Enum

from .constants import BIRTH, DEATH, FEMALE, MALE
from .helpers import as_text, dict_items, dig, extract_year, strip_type_uri


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"
    UNKNOWN = "Unknown"

    @classmethod
    def from_uri(cls, type_uri: str | None) -> "Gender":
        if type_uri == MALE:
            return cls.MALE
        if type_uri == FEMALE:
            return cls.FEMALE
        return cls.UNKNOWN


@dataclass
class Fact:
    type: str  # full GEDCOM X type URI
    date: str | None = None  # original text, never normalized
    place: str | None = None

    @classmethod
    def from_gedcomx(cls, raw: dict) -> "Fact":
        return cls(
            type=as_text(raw.get("type")) or "",
            date=as_text(dig(raw, "date", "original")),
            place=as_text(dig(raw, "place", "original")),
        )

    @property
    def label(self) -> str:
        return strip_type_uri(self.type) or "Unknown"


def describe_fact(fact: Fact | None) -> str:
    """Render a fact as 'date - place', or 'Unknown' when absent."""
    if fact is None:
        return "Unknown"
    return f"{fact.date or 'Unknown date'} - {fact.place or 'Unknown place'}"


@dataclass
class Person:
    id: str
    name: str = "Unknown"
    gender: Gender = Gender.UNKNOWN
    facts: list[Fact] = field(default_factory=list)

    @classmethod
    def from_gedcomx(cls, raw: dict) -> "Person":
        name = None
        for name_entry in dict_items(raw.get("names")):
            name = as_text(dig(name_entry, "nameForms", 0, "fullText"))
            if name:
                break
        return cls(
            id=as_text(raw.get("id")) or "",
            name=name or "Unknown",
            gender=Gender.from_uri(dig(raw, "gender", "type")),
            facts=[Fact.from_gedcomx(f) for f in dict_items(raw.get("facts"))],
        )

    def find_fact(self, fact_type: str) -> Fact | None:
        for fact in self.facts:
            if fact.type == fact_type:
                return fact
        return None

    @property
    def birth(self) -> Fact | None:
        return self.find_fact(BIRTH)

    @property
    def death(self) -> Fact | None:
        return self.find_fact(DEATH)

    @property
    def birth_year(self) -> str | None:
        birth = self.birth
        return extract_year(birth.date) if birth else None

    def to_summary(self) -> str:
        """Single-line form used in tree output: 'Name (1850) [ID]'."""
        return f"{self.name} ({self.birth_year or '?'}) [{self.id}]"


@dataclass
class Relationship:
    type: str
    person1_id: str | None = None  # parent for ParentChild
    person2_id: str | None = None  # child for ParentChild

    @classmethod
    def from_gedcomx(cls, raw: dict) -> "Relationship":
        return cls(
            type=as_text(raw.get("type")) or "",
            person1_id=as_text(dig(raw, "person1", "resourceId")),
            person2_id=as_text(dig(raw, "person2", "resourceId")),
        )
