"""Notara - renders notes written in the Notara markdown dialect to HTML."""

__version__ = "0.1.0"

from .core.model import Heading, NoteRef, RenderResult
from .errors import ConfigError, NotaraError, NoteNotFoundError
from .render import Renderer, render, render_document

__all__ = [
    "__version__",
    "Heading",
    "NoteRef",
    "RenderResult",
    "Renderer",
    "render",
    "render_document",
    "NotaraError",
    "ConfigError",
    "NoteNotFoundError",
]
