from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

NoteId = str


@dataclass(frozen=True)
class NoteRef:
    id: NoteId
    title: str

    @classmethod
    def coerce(cls, value: "NoteRef | Mapping[str, Any]") -> "NoteRef":
        if isinstance(value, NoteRef):
            return value
        return cls(id=str(value["id"]), title=str(value["title"]))


@dataclass(frozen=True)
class Heading:
    id: str  # "heading-<n>"
    level: int  # 1..3
    text: str  # plain text, no markup


@dataclass
class RenderResult:
    html: str
    headings: list[Heading] = field(default_factory=list)
    references: dict[str, str] = field(default_factory=dict)


# Slots: typed stand-ins for spans lifted out of the working text.


@dataclass(frozen=True)
class CodeFence:
    language: str | None
    code: str
    source: str


@dataclass(frozen=True)
class WikiLink:
    note_id: NoteId
    title: str  # as typed between the brackets
    source: str


@dataclass(frozen=True)
class MissingWikiLink:
    title: str
    source: str


@dataclass(frozen=True)
class ProtectedHtml:
    markup: str

    @property
    def source(self) -> str:
        return self.markup


Slot = Union[CodeFence, WikiLink, MissingWikiLink, ProtectedHtml]
