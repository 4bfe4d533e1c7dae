import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from ..core.ports import Highlighter

log = logging.getLogger(__name__)

# Lexers must hand back the code exactly as given.
_LEXER_OPTIONS = {"stripnl": False, "ensurenl": False}


class PygmentsHighlighter(Highlighter):
    def __init__(self, **formatter_options):
        formatter_options.setdefault("nowrap", True)
        self.formatter = HtmlFormatter(**formatter_options)

    def lexer_for(self, code: str, language: str | None = None) -> Lexer:
        if language:
            try:
                return get_lexer_by_name(language, **_LEXER_OPTIONS)
            except ClassNotFound:
                log.debug("No lexer named %r, guessing from content", language)
        try:
            return guess_lexer(code, **_LEXER_OPTIONS)
        except ClassNotFound:
            return TextLexer(**_LEXER_OPTIONS)

    def highlight(self, code: str, language: str | None = None) -> str:
        out = highlight(code, self.lexer_for(code, language), self.formatter)
        # HtmlFormatter terminates the last line even when the code did not
        if out.endswith("\n") and not code.endswith("\n"):
            out = out[:-1]
        return out
