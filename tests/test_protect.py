"""Tests for protected raw-HTML media blocks."""

from notara import render
from notara.core.context import RenderContext
from notara.render.markup import DEFAULT_CLASSES
from notara.render.protect import escape_html, protect_media


def test_iframe_wrapper_byte_identical():
    """A video wrapper comes out exactly as it went in."""
    block = (
        '<div class="aspect-video w-full"><iframe src="https://www.youtube.com/embed/abc?a=1&b=2" '
        'allowfullscreen></iframe></div>'
    )
    result = render(f"Intro\n\n{block}\n\nOutro")
    assert block in result
    assert result.splitlines()[2] == block


def test_multiline_details_untouched():
    """Lines inside a protected block are not wrapped or rewritten."""
    block = "<details>\n<summary>More *info*</summary>\n# not a heading\n- not a list\n</details>"
    result = render(block)
    assert result == block


def test_crlf_details_byte_identical():
    """A protected block keeps its CRLF line endings while the rest is normalized."""
    block = "<details>\r\n<summary>x</summary>\r\n</details>"
    result = render(f"Intro\r\n{block}\r\nOutro")
    assert block in result
    assert result.startswith('<p class="mb-4">Intro</p>\n')
    assert result.endswith('\n<p class="mb-4">Outro</p>')


def test_bare_video_and_iframe():
    """Bare video and iframe tags are protected too."""
    video = '<video controls src="clip.mp4"></video>'
    iframe = '<iframe src="https://e.com/?x=<1>"></iframe>'
    result = render(f"{video}\n{iframe}")
    assert video in result
    assert iframe in result


def test_inline_media_wrapped_in_paragraph():
    """A protected block mid-line keeps its line's paragraph."""
    iframe = '<iframe src="x"></iframe>'
    result = render(f"watch {iframe} now")
    assert result == f'<p class="mb-4">watch {iframe} now</p>'


def test_other_html_is_escaped():
    """Unrecognized tags are escaped."""
    result = render("<script>alert(1)</script>")
    assert "<script>" not in result
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in result


def test_wikilink_inside_protected_block_kept_verbatim():
    """Protected markup holds the author's text even after wiki resolution."""
    block = "<details><summary>[[Foo]]</summary>body</details>"
    result = render(block, notes=[{"id": "1", "title": "Foo"}])
    assert result == block


def test_code_fence_inside_protected_block_kept_verbatim():
    """A fence inside a details block is not rendered."""
    block = "<details>\n```python\nprint(1)\n```\n</details>"
    result = render(block)
    assert result == block
    assert "code-block-wrapper" not in result


def test_protect_records_tokens_in_order():
    """Each match gets its own slot; the text keeps only tokens."""
    ctx = RenderContext(notes=None, highlighter=None, classes=DEFAULT_CLASSES)
    text = "<video>a</video> and <video>b</video>"
    out = protect_media(text, ctx)
    assert "<video>" not in out
    assert escape_html(out, ctx) == out
    assert ctx.expand_html(out) == text


def test_escape_order():
    """& is escaped before the entities for < and >."""
    ctx = RenderContext(notes=None, highlighter=None, classes=DEFAULT_CLASSES)
    assert escape_html("a & <b>", ctx) == "a &amp; &lt;b&gt;"
