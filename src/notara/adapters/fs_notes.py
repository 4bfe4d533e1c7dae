import re
from pathlib import Path
from typing import Any, Iterable

from ..core.model import NoteId, NoteRef
from ..core.ports import FrontmatterCodec, NoteSource
from .yaml_codec import YamlFrontmatter

_TITLE_RE = re.compile(r"^# (.+)$", re.MULTILINE)


class FsNotes(NoteSource):
    """
    Flat directory of <name>.md notes. Frontmatter `id` and `title` win over
    the file stem; without a title the first "# " heading is used.
    """

    def __init__(self, root: Path, codec: FrontmatterCodec | None = None):
        self.root = root
        self.codec = codec or YamlFrontmatter()

    def _files(self) -> Iterable[Path]:
        if not self.root.exists():
            return []
        return sorted(self.root.glob("*.md"))

    def _decode(self, path: Path) -> tuple[NoteId, dict[str, Any], str]:
        meta, body = self.codec.decode(path.read_text(encoding="utf-8"))
        note_id = str(meta.get("id") or path.stem)
        return note_id, meta, body

    def _title(self, path: Path, meta: dict[str, Any], body: str) -> str:
        title = meta.get("title")
        if title:
            return str(title)
        m = _TITLE_RE.search(body)
        if m:
            return m.group(1).strip()
        return path.stem

    def list_refs(self) -> list[NoteRef]:
        refs = []
        for path in self._files():
            note_id, meta, body = self._decode(path)
            refs.append(NoteRef(id=note_id, title=self._title(path, meta, body)))
        return refs

    def read(self, id: NoteId) -> tuple[dict[str, Any], str] | None:
        direct = self.root / f"{id}.md"
        candidates = [direct] if direct.exists() else []
        candidates += [p for p in self._files() if p != direct]
        for path in candidates:
            note_id, meta, body = self._decode(path)
            if note_id == id:
                return meta, body
        return None

    def get_body(self, id: NoteId) -> str | None:
        found = self.read(id)
        return found[1] if found else None
