import re

from ..core.context import RenderContext
from . import markup

BLOCK_START_RE = re.compile(
    r"^<(div|ul|li|h|p|blockquote|pre|table|hr|details|summary)", re.IGNORECASE
)


def wrap_paragraphs(text: str, ctx: RenderContext) -> str:
    """
    Wrap every bare line in a paragraph.

    Works line by line: blank lines become empty, lines that already open a
    block-level tag pass through trimmed. Protected slots are looked through
    when deciding, but stay tokens, so their inner lines are never wrapped.
    """
    out = []
    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            out.append("")
        elif BLOCK_START_RE.match(ctx.expand_html(trimmed)):
            out.append(trimmed)
        else:
            out.append(markup.PARAGRAPH.format(cls=ctx.css("p"), text=trimmed))
    return "\n".join(out)
