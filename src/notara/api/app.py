"""FastAPI application for the notara local JSON API."""

import secrets
from dataclasses import asdict
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from .. import __version__
from ..core.model import NoteRef, RenderResult
from ..errors import NoteNotFoundError


class NoteRefIn(BaseModel):
    id: str
    title: str


class RenderRequest(BaseModel):
    text: str
    notes: list[NoteRefIn] | None = None


def _result(result: RenderResult) -> dict[str, Any]:
    return {
        "html": result.html,
        "headings": [asdict(h) for h in result.headings],
    }


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> Any:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with notes and renderer
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Notara API",
        description="Local JSON API for rendering notara notes",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if token:
        security_scheme = HTTPBearer(auto_error=False)

        async def verify_token(
            credentials: HTTPAuthorizationCredentials | None = Security(security_scheme),  # noqa: B008
        ) -> None:
            """Verify bearer token."""
            if credentials is None or credentials.credentials != token:
                raise HTTPException(status_code=401, detail="Invalid or missing token")
    else:

        async def verify_token() -> None:
            """No-op when auth is disabled."""
            return None

    @app.get("/health")
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.get("/notes")
    async def list_notes(auth: None = Depends(verify_token)) -> list[dict[str, Any]]:
        """List {id, title} of every note."""
        return [asdict(ref) for ref in runtime.notes.list_refs()]

    @app.get("/notes/{note_id}/html")
    async def note_html(note_id: str, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Render a stored note."""
        try:
            result = runtime.render_note(note_id)
        except NoteNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e
        return {"id": note_id, **_result(result)}

    @app.post("/render")
    async def render(req: RenderRequest, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Render arbitrary text; without notes the stored note list is used."""
        notes = None
        if req.notes is not None:
            notes = [NoteRef(id=n.id, title=n.title) for n in req.notes]
        return _result(runtime.render_text(req.text, notes))

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
