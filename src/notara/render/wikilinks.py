"""Wiki-link resolution and restoration."""

import html
import re

from ..core.context import RenderContext
from ..core.model import MissingWikiLink, Slot, WikiLink
from . import markup

WIKILINK_RE = re.compile(r"\[\[([^\]]+)\]\]")


def resolve_wikilinks(text: str, ctx: RenderContext) -> str:
    """
    Replace each [[Title]] with a WikiLink or MissingWikiLink slot.

    Titles match note titles case-insensitively; the first note wins. With no
    note list at all the syntax is left alone.
    """
    if ctx.notes is None:
        return text

    by_title: dict[str, str] = {}
    for note in ctx.notes:
        by_title.setdefault(note.title.lower(), note.id)

    def sub(m: re.Match[str]) -> str:
        title = m.group(1)
        note_id = by_title.get(title.lower())
        if note_id is not None:
            return ctx.stash(WikiLink(note_id=note_id, title=title, source=m.group(0)))
        return ctx.stash(MissingWikiLink(title=title, source=m.group(0)))

    return WIKILINK_RE.sub(sub, text)


def restore_wikilinks(text: str, ctx: RenderContext) -> str:
    """Turn wiki slots into an anchor (resolved) or an inert span (missing)."""

    def render(slot: Slot) -> str | None:
        if isinstance(slot, WikiLink):
            return markup.WIKI_LINK.format(
                cls=ctx.css("wiki_link"),
                id=html.escape(slot.note_id, quote=True),
                title=html.escape(slot.title, quote=False),
            )
        if isinstance(slot, MissingWikiLink):
            return markup.WIKI_MISSING.format(
                cls=ctx.css("wiki_missing"),
                title=html.escape(slot.title, quote=False),
            )
        return None

    return ctx.substitute(text, render)
