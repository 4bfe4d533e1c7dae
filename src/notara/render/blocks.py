"""Block and inline rewrites applied to escaped text.

Input to every rule here has already been HTML-escaped, so rules only ever
emit trusted markup and never escape again. The rules run in BLOCK_RULES
order; several depend on an earlier one having consumed its syntax first.
"""

import html
import logging
import re
from typing import Callable

from ..core.context import TOKEN_RE, RenderContext
from ..core.model import CodeFence, ProtectedHtml
from . import markup

log = logging.getLogger(__name__)

HEADING_RE = re.compile(r"^(#{1,3}) (.*)$", re.MULTILINE)
BOLD_RE = re.compile(r"\*\*(.+)\*\*")
ITALIC_RE = re.compile(r"\*(.+)\*")
IMAGE_RE = re.compile(r"!\[([^\]]*)\]\(([^)]*)\)")
IMAGE_REF_RE = re.compile(r"!\[([^\]]*)\]\[([^\]]*)\]")
LINK_RE = re.compile(r"\[([^\]]*)\]\(([^)]*)\)")
LINK_REF_RE = re.compile(r"\[([^\]]+)\]\[([^\]]*)\]")
BLOCKQUOTE_RE = re.compile(r"^&gt; (.*)$", re.MULTILINE)
HR_RE = re.compile(r"^---$", re.MULTILINE)
BULLET_RE = re.compile(r"^- (.*)$", re.MULTILINE)
TASK_OPEN_RE = re.compile(r"^\[ \] (.*)$", re.MULTILINE)
TASK_DONE_RE = re.compile(r"^\[x\] (.*)$", re.MULTILINE | re.IGNORECASE)
LI_RUN_RE = re.compile(r"^<li\b.*</li>(?:\n<li\b.*</li>)*$", re.MULTILINE)
INLINE_CODE_RE = re.compile(r"`([^`]+)`")
TABLE_RE = re.compile(r"\|(.+)\|\n\|[-| ]+\|\n((?:\|.*\|\n?)+)")
ELEMENT_LINE_RE = re.compile(r"<(h[1-3]|ul|li|blockquote)\b")


def _headings(text: str, ctx: RenderContext) -> str:
    # One pass in document order; "#{1,3} " cannot match a "####" line.
    def sub(m: re.Match[str]) -> str:
        level = len(m.group(1))
        body = m.group(2)
        return markup.HEADING.format(
            level=level,
            id=ctx.add_heading(level, body),
            cls=ctx.css(f"h{level}"),
            text=body,
        )

    return HEADING_RE.sub(sub, text)


def _emphasis(text: str, ctx: RenderContext) -> str:
    # Bold first, or the single-star rule would eat half of each "**".
    text = BOLD_RE.sub(r"<strong>\1</strong>", text)
    return ITALIC_RE.sub(r"<em>\1</em>", text)


def _images(text: str, ctx: RenderContext) -> str:
    def inline(m: re.Match[str]) -> str:
        return markup.IMAGE.format(
            src=markup.attr(m.group(2)), alt=markup.attr(m.group(1)), cls=ctx.css("img")
        )

    def by_reference(m: re.Match[str]) -> str:
        url = ctx.lookup(m.group(2))
        if url is None:
            return m.group(0)
        return markup.IMAGE.format(
            src=html.escape(url, quote=True), alt=markup.attr(m.group(1)), cls=ctx.css("img")
        )

    text = IMAGE_RE.sub(inline, text)
    return IMAGE_REF_RE.sub(by_reference, text)


def _links(text: str, ctx: RenderContext) -> str:
    def inline(m: re.Match[str]) -> str:
        return markup.LINK.format(
            href=markup.attr(m.group(2)), text=m.group(1), cls=ctx.css("a")
        )

    def by_reference(m: re.Match[str]) -> str:
        url = ctx.lookup(m.group(2))
        if url is None:
            return m.group(0)
        return markup.LINK.format(
            href=html.escape(url, quote=True), text=m.group(1), cls=ctx.css("a")
        )

    text = LINK_RE.sub(inline, text)
    return LINK_REF_RE.sub(by_reference, text)


def _blockquotes(text: str, ctx: RenderContext) -> str:
    # The ">" marker reaches us already escaped.
    return BLOCKQUOTE_RE.sub(
        lambda m: markup.BLOCKQUOTE.format(cls=ctx.css("blockquote"), text=m.group(1)),
        text,
    )


def _rules(text: str, ctx: RenderContext) -> str:
    return HR_RE.sub(lambda m: markup.HR.format(cls=ctx.css("hr")), text)


def _lists(text: str, ctx: RenderContext) -> str:
    def task(done: bool) -> Callable[[re.Match[str]], str]:
        def sub(m: re.Match[str]) -> str:
            return markup.TASK.format(
                li_cls=ctx.css("li_task"),
                checked=" checked" if done else "",
                box_cls=ctx.css("checkbox"),
                span_cls=ctx.css("task_done" if done else "task_open"),
                text=m.group(1),
            )

        return sub

    text = BULLET_RE.sub(
        lambda m: markup.BULLET.format(cls=ctx.css("li"), text=m.group(1)), text
    )
    text = TASK_OPEN_RE.sub(task(False), text)
    text = TASK_DONE_RE.sub(task(True), text)
    # Adjacent items share one <ul>; "</ul>" stays on the last item's line.
    return LI_RUN_RE.sub(
        lambda m: markup.LIST.format(cls=ctx.css("ul"), items=m.group(0)), text
    )


def _highlight(fence: CodeFence, ctx: RenderContext) -> str:
    if ctx.highlighter is None:
        return html.escape(fence.code, quote=False)
    try:
        return ctx.highlighter.highlight(fence.code, fence.language)
    except Exception:
        log.warning(
            "Highlighting failed for %s code block, rendering it plain",
            fence.language or "unlabelled",
            exc_info=True,
        )
        return html.escape(fence.code, quote=False)


def render_code_block(fence: CodeFence, ctx: RenderContext) -> str:
    language = fence.language or "plaintext"
    return markup.CODE_BLOCK.format(
        wrapper_cls=ctx.css("code_wrapper"),
        header_cls=ctx.css("code_header"),
        lang_cls=ctx.css("code_lang"),
        copy_cls=ctx.css("code_copy"),
        pre_cls=ctx.css("pre"),
        code_cls=ctx.css("code_block"),
        language=language,
        payload=markup.copy_payload(fence.code),
        code=_highlight(fence, ctx),
    )


def _code_blocks(text: str, ctx: RenderContext) -> str:
    # Rendered blocks stay protected and sit on their own line, except on a
    # line an earlier rule already opened an element on; that element must
    # not be split.
    def sub(m: re.Match[str]) -> str:
        slot = ctx.slot(m.group(0))
        if not isinstance(slot, CodeFence):
            return m.group(0)
        token = ctx.stash(ProtectedHtml(markup=render_code_block(slot, ctx)))
        line_start = text.rfind("\n", 0, m.start()) + 1
        if ELEMENT_LINE_RE.match(text, line_start):
            return token
        return "\n" + token + "\n"

    return TOKEN_RE.sub(sub, text)


def _inline_code(text: str, ctx: RenderContext) -> str:
    return INLINE_CODE_RE.sub(
        lambda m: markup.INLINE_CODE.format(cls=ctx.css("code_inline"), text=m.group(1)),
        text,
    )


def _cells(row: str) -> list[str]:
    parts = row.strip().split("|")
    if parts and not parts[0].strip():
        parts = parts[1:]
    if parts and not parts[-1].strip():
        parts = parts[:-1]
    return [p.strip() for p in parts]


def _tables(text: str, ctx: RenderContext) -> str:
    def sub(m: re.Match[str]) -> str:
        head = "".join(
            markup.TH.format(cls=ctx.css("th"), text=cell)
            for cell in _cells(f"|{m.group(1)}|")
        )
        rows = []
        for row in m.group(2).strip().split("\n"):
            cells = "".join(
                markup.TD.format(cls=ctx.css("td"), text=cell) for cell in _cells(row)
            )
            rows.append(f"<tr>{cells}</tr>")
        out = markup.TABLE.format(
            wrapper_cls=ctx.css("table_wrapper"),
            table_cls=ctx.css("table"),
            head=head,
            body="".join(rows),
        )
        return out + "\n" if m.group(0).endswith("\n") else out

    return TABLE_RE.sub(sub, text)


BLOCK_RULES: tuple[tuple[str, Callable[[str, RenderContext], str]], ...] = (
    ("headings", _headings),
    ("emphasis", _emphasis),
    ("images", _images),
    ("links", _links),
    ("blockquotes", _blockquotes),
    ("rules", _rules),
    ("lists", _lists),
    ("code-blocks", _code_blocks),
    ("inline-code", _inline_code),
    ("tables", _tables),
)


def transform_blocks(text: str, ctx: RenderContext) -> str:
    for _name, rule in BLOCK_RULES:
        text = rule(text, ctx)
    return text
