"""Tests for the stage list and slot handling."""

from notara.core.context import TOKEN_RE, RenderContext
from notara.core.model import MissingWikiLink, ProtectedHtml, WikiLink
from notara.render import STAGES
from notara.render.blocks import BLOCK_RULES
from notara.render.markup import DEFAULT_CLASSES


def _ctx(notes=None):
    return RenderContext(notes=notes, highlighter=None, classes=DEFAULT_CLASSES)


def test_stage_order():
    """Stages run in the documented order."""
    assert [s.name for s in STAGES] == [
        "fences",
        "wikilinks",
        "references",
        "protect",
        "newlines",
        "escape",
        "blocks",
        "wikilinks-restore",
        "paragraphs",
        "restore",
    ]


def test_block_rule_order():
    """Block rules run in the documented order."""
    assert [name for name, _rule in BLOCK_RULES] == [
        "headings",
        "emphasis",
        "images",
        "links",
        "blockquotes",
        "rules",
        "lists",
        "code-blocks",
        "inline-code",
        "tables",
    ]


def test_tokens_survive_escaping():
    """Tokens hold no characters the escaper or markdown rules act on."""
    ctx = _ctx()
    token = ctx.stash(ProtectedHtml(markup="<b>"))
    assert TOKEN_RE.fullmatch(token)
    for ch in "&<>*[]()#`|_":
        assert ch not in token


def test_tokens_unique_per_call():
    """Two contexts use different nonces."""
    a = _ctx().stash(ProtectedHtml(markup="x"))
    b = _ctx().stash(ProtectedHtml(markup="x"))
    assert a != b


def test_unknown_token_left_alone():
    """A token from another call is not substituted."""
    other = _ctx().stash(ProtectedHtml(markup="<i>"))
    ctx = _ctx()
    assert ctx.expand_html(f"a {other} b") == f"a {other} b"


def test_reveal_and_plain():
    """reveal gives source text, plain gives readable titles."""
    ctx = _ctx()
    link = ctx.stash(WikiLink(note_id="1", title="Foo", source="[[Foo]]"))
    missing = ctx.stash(MissingWikiLink(title="Bar", source="[[Bar]]"))
    text = f"{link} &amp; {missing}"
    assert ctx.reveal(text) == "[[Foo]] &amp; [[Bar]]"
    assert ctx.plain(text) == "Foo & Bar"


def test_stages_compose_to_render():
    """Applying STAGES by hand equals Renderer output."""
    from notara import Renderer

    text = "# T\n[a]: http://x\n[l][a] and *i*"
    ctx = _ctx()
    out = text
    for stage in STAGES:
        out = stage.apply(out, ctx)
    assert out == Renderer(highlighter=None).render(text)
