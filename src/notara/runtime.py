"""Runtime wiring helper for CLI and API."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_notes import FsNotes
from .adapters.pygments_highlighter import PygmentsHighlighter
from .adapters.yaml_codec import YamlFrontmatter
from .config import NotaraConfig, load_config
from .core.model import NoteRef, RenderResult
from .errors import NoteNotFoundError
from .render import Renderer


@dataclass
class Runtime:
    """Container for all wired components."""
    notes: FsNotes
    renderer: Renderer
    config: NotaraConfig

    def render_note(self, note_id: str) -> RenderResult:
        body = self.notes.get_body(note_id)
        if body is None:
            raise NoteNotFoundError(note_id)
        return self.renderer.render_document(body, self.notes.list_refs())

    def render_text(self, text: str, notes: list[NoteRef] | None = None) -> RenderResult:
        if notes is None:
            notes = self.notes.list_refs()
        return self.renderer.render_document(text, notes)


def build_runtime(
    notes_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a notes directory."""
    config = load_config(config_path=config_path, notes_path=notes_path)

    if notes_path is None:
        notes_path = config.notes.root

    notes = FsNotes(notes_path, YamlFrontmatter())
    highlighter = PygmentsHighlighter() if config.render.highlight else None
    renderer = Renderer(highlighter=highlighter, classes=config.render.classes)

    return Runtime(
        notes=notes,
        renderer=renderer,
        config=config,
    )
