"""Markdown-to-HTML rendering pipeline."""

from .pipeline import STAGES, Renderer, Stage, render, render_document

__all__ = [
    "STAGES",
    "Stage",
    "Renderer",
    "render",
    "render_document",
]
