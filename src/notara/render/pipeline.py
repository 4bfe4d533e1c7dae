"""The ordered stage list and the render entry points.

Stage contract, in order (reordering any two changes output):

  fences             raw text in; fenced code lifted to CodeFence slots
  wikilinks          [[Title]] lifted to WikiLink / MissingWikiLink slots
  references         `[id]: target` lines removed into ctx.references
  protect            video/iframe/details HTML lifted to ProtectedHtml slots
  newlines           CRLF and CR become LF outside lifted slots
  escape             & < > escaped; from here on text is safe markup
  blocks             markdown rules; CodeFence slots become ProtectedHtml
  wikilinks-restore  wiki slots become <a>/<span>
  paragraphs         bare lines wrapped in <p>
  restore            ProtectedHtml slots put back verbatim
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from ..core.context import RenderContext
from ..core.model import NoteRef, RenderResult
from ..core.ports import Highlighter
from .blocks import transform_blocks
from .markup import DEFAULT_CLASSES
from .paragraphs import wrap_paragraphs
from .protect import (
    escape_html,
    extract_references,
    lift_code_fences,
    normalize_newlines,
    protect_media,
    restore_protected,
)
from .wikilinks import resolve_wikilinks, restore_wikilinks


@dataclass(frozen=True)
class Stage:
    name: str
    apply: Callable[[str, RenderContext], str]


STAGES: tuple[Stage, ...] = (
    Stage("fences", lift_code_fences),
    Stage("wikilinks", resolve_wikilinks),
    Stage("references", extract_references),
    Stage("protect", protect_media),
    Stage("newlines", normalize_newlines),
    Stage("escape", escape_html),
    Stage("blocks", transform_blocks),
    Stage("wikilinks-restore", restore_wikilinks),
    Stage("paragraphs", wrap_paragraphs),
    Stage("restore", restore_protected),
)

_DEFAULT = object()


def _default_highlighter() -> Highlighter:
    from ..adapters.pygments_highlighter import PygmentsHighlighter

    return PygmentsHighlighter()


class Renderer:
    """
    A configured renderer. Holds no per-call state, so one instance can be
    shared between threads.
    """

    def __init__(
        self,
        highlighter: Any = _DEFAULT,
        classes: Mapping[str, str] | None = None,
    ):
        self.highlighter: Highlighter | None = (
            _default_highlighter() if highlighter is _DEFAULT else highlighter
        )
        merged = dict(DEFAULT_CLASSES)
        if classes:
            merged.update(classes)
        self.classes = merged

    def render_document(
        self,
        text: str,
        notes: Sequence[NoteRef | Mapping[str, Any]] | None = None,
    ) -> RenderResult:
        if not text:
            return RenderResult(html="")

        ctx = RenderContext(
            notes=None if notes is None else [NoteRef.coerce(n) for n in notes],
            highlighter=self.highlighter,
            classes=self.classes,
        )
        out = text
        for stage in STAGES:
            out = stage.apply(out, ctx)
        return RenderResult(
            html=out, headings=list(ctx.headings), references=dict(ctx.references)
        )

    def render(
        self,
        text: str,
        notes: Sequence[NoteRef | Mapping[str, Any]] | None = None,
    ) -> str:
        return self.render_document(text, notes).html


_shared: Renderer | None = None


def _shared_renderer() -> Renderer:
    global _shared
    if _shared is None:
        _shared = Renderer()
    return _shared


def render_document(
    text: str,
    notes: Sequence[NoteRef | Mapping[str, Any]] | None = None,
    *,
    highlighter: Any = _DEFAULT,
    classes: Mapping[str, str] | None = None,
) -> RenderResult:
    """Render with a shared default renderer unless options are given."""
    if highlighter is _DEFAULT and not classes:
        renderer = _shared_renderer()
    else:
        renderer = Renderer(highlighter=highlighter, classes=classes)
    return renderer.render_document(text, notes)


def render(
    text: str,
    notes: Sequence[NoteRef | Mapping[str, Any]] | None = None,
    *,
    highlighter: Any = _DEFAULT,
    classes: Mapping[str, str] | None = None,
) -> str:
    """
    Render a note body to HTML.

    Args:
        text: Note body in the Notara markdown dialect (may be empty)
        notes: {id, title} pairs used to resolve [[wiki-links]]; None leaves
            wiki-link syntax untouched
        highlighter: Highlighter for fenced code; None renders code plain.
            Defaults to Pygments.
        classes: CSS class overrides by key

    Returns:
        HTML string
    """
    return render_document(text, notes, highlighter=highlighter, classes=classes).html
