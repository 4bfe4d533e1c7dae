from typing import Any, Protocol
from .model import NoteId, NoteRef


class Highlighter(Protocol):
    """
    Adds syntax-highlighting markup to code. MUST NOT change the visible
    text; an unknown language hint falls back to auto-detection.
    """

    def highlight(self, code: str, language: str | None = None) -> str:
        pass


class NoteSource(Protocol):
    """
    Supplies note bodies and the {id, title} list used for wiki-links.
    Read-only from the renderer's point of view.
    """

    def list_refs(self) -> list[NoteRef]:
        pass

    def get_body(self, id: NoteId) -> str | None:
        pass


class FrontmatterCodec(Protocol):
    """
    Split optional frontmatter from a note body without enforcing schema.
    """

    def decode(self, text: str) -> tuple[dict[str, Any], str]:
        pass
