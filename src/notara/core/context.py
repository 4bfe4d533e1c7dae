"""Per-call state for one run of the rendering pipeline."""

import html
import re
import secrets
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

from .model import (
    Heading,
    MissingWikiLink,
    NoteRef,
    ProtectedHtml,
    Slot,
    WikiLink,
)
from .ports import Highlighter

# Private-use code points: never produced by escaping, never markdown syntax.
TOKEN_OPEN = "\ue000"
TOKEN_CLOSE = "\ue001"
TOKEN_RE = re.compile(f"{TOKEN_OPEN}[0-9a-f]{{8}}-[0-9]+{TOKEN_CLOSE}")

# Inline markers left in heading text; headings are rendered before emphasis.
_MARKER_RES = (
    re.compile(r"\*\*(.+?)\*\*"),
    re.compile(r"\*(.+?)\*"),
    re.compile(r"`([^`]+)`"),
)


@dataclass
class RenderContext:
    """
    Everything a render call mutates. Created fresh at entry, dropped at
    return; nothing here outlives the call.

    Lifted spans are kept in a slot table keyed by opaque tokens. The working
    text only ever contains the token, so later rewrites cannot touch the
    span's content.
    """

    notes: Sequence[NoteRef] | None
    highlighter: Highlighter | None
    classes: Mapping[str, str]
    references: dict[str, str] = field(default_factory=dict)
    headings: list[Heading] = field(default_factory=list)
    nonce: str = field(default_factory=lambda: secrets.token_hex(4))
    _slots: dict[str, Slot] = field(default_factory=dict)

    # Slots

    def stash(self, slot: Slot) -> str:
        token = f"{TOKEN_OPEN}{self.nonce}-{len(self._slots)}{TOKEN_CLOSE}"
        self._slots[token] = slot
        return token

    def slot(self, token: str) -> Slot | None:
        return self._slots.get(token)

    def substitute(self, text: str, fn: Callable[[Slot], str | None]) -> str:
        """Replace every known token in text by fn(slot); None keeps the token."""

        def sub(m: re.Match[str]) -> str:
            slot = self._slots.get(m.group(0))
            if slot is None:
                return m.group(0)
            out = fn(slot)
            return m.group(0) if out is None else out

        return TOKEN_RE.sub(sub, text)

    def reveal(self, text: str) -> str:
        """Put back the original source text of every slot in text."""
        return self.substitute(text, lambda s: s.source)

    def expand_html(self, text: str) -> str:
        """Replace protected-markup tokens by their markup."""
        return self.substitute(
            text, lambda s: s.markup if isinstance(s, ProtectedHtml) else None
        )

    def plain(self, text: str) -> str:
        """
        Readable text for a heading body: emphasis and code markers dropped,
        wiki titles in place of links, other slots removed, no entities.
        """

        def sub(slot: Slot) -> str | None:
            if isinstance(slot, (WikiLink, MissingWikiLink)):
                return slot.title
            return ""

        for pattern in _MARKER_RES:
            text = pattern.sub(r"\1", text)
        return html.unescape(self.substitute(text, sub)).strip()

    # Headings

    def add_heading(self, level: int, text: str) -> str:
        heading_id = f"heading-{len(self.headings)}"
        self.headings.append(Heading(id=heading_id, level=level, text=self.plain(text)))
        return heading_id

    # References

    def lookup(self, ref_id: str) -> str | None:
        return self.references.get(html.unescape(ref_id).lower())

    def css(self, key: str) -> str:
        return self.classes[key]
