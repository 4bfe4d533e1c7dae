"""Lifting of spans that later stages must not rewrite, and HTML escaping."""

import re

from ..core.context import RenderContext
from ..core.model import CodeFence, ProtectedHtml

FENCE_RE = re.compile(r"```(\w+)?(?:\r\n?|\n)(.*?)```", re.DOTALL)
REFERENCE_RE = re.compile(r"(?:^|(?<=\r))\[([^\]]+)\]:\s*(\S+)[^\r\n]*", re.MULTILINE)
MEDIA_RE = re.compile(
    r'<div class="aspect-video[^"]*">.*?(?:<iframe|<video).*?(?:</iframe>|</video>).*?</div>'
    r"|<iframe.*?</iframe>"
    r"|<video.*?</video>"
    r"|<details.*?</details>",
    re.IGNORECASE | re.DOTALL,
)
_NEWLINE_RE = re.compile(r"\r\n?")


def lift_code_fences(text: str, ctx: RenderContext) -> str:
    """
    Move fenced code into CodeFence slots before anything else sees it, so
    the body reaches the highlighter unchanged apart from its line endings.
    Unterminated fences do not match and stay literal.
    """

    def sub(m: re.Match[str]) -> str:
        code = _NEWLINE_RE.sub("\n", m.group(2))
        return ctx.stash(CodeFence(language=m.group(1), code=code, source=m.group(0)))

    return FENCE_RE.sub(sub, text)


def extract_references(text: str, ctx: RenderContext) -> str:
    """
    Consume `[id]: target` lines into ctx.references. The whole line is
    dropped even when nothing refers to it; a later definition wins.
    """

    def sub(m: re.Match[str]) -> str:
        ctx.references[m.group(1).lower()] = m.group(2)
        return ""

    return REFERENCE_RE.sub(sub, text)


def protect_media(text: str, ctx: RenderContext) -> str:
    """
    Lift embedded video/iframe/details HTML into ProtectedHtml slots.
    Slots lifted earlier inside a match are folded back to their source so
    the protected markup is exactly what the author wrote.
    """

    def sub(m: re.Match[str]) -> str:
        return ctx.stash(ProtectedHtml(markup=ctx.reveal(m.group(0))))

    return MEDIA_RE.sub(sub, text)


def normalize_newlines(text: str, ctx: RenderContext) -> str:
    """
    Turn CRLF and lone CR line endings into LF. Runs after media is lifted,
    so protected blocks keep the endings they were written with.
    """
    return _NEWLINE_RE.sub("\n", text)


def escape_html(text: str, ctx: RenderContext) -> str:
    # & first, or the entities below would be escaped twice
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def restore_protected(text: str, ctx: RenderContext) -> str:
    """Put protected markup back, unescaped. Nothing runs after this."""
    return ctx.expand_html(text)
