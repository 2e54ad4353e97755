"""FastAPI application exposing the flowtext core as a local JSON API."""

import secrets
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, Field

from .. import __version__
from ..core.model import TextSelection
from ..core.utils import line_start
from ..editing.checkbox import is_checkbox_at, toggle_checkbox_at
from ..editing.lists import apply_newline, continue_list
from ..editing.suggest import active_query, filter_candidates, match
from ..editing.wrap import toggle_wrap
from ..errors import ListSourceError
from ..markup.hashtags import add_hashtag_to_text, extract_hashtags, remove_hashtags
from ..markup.tokenizer import tokenize, tokenize_live


class TextIn(BaseModel):
    text: str


class TokenizeIn(TextIn):
    hashtags: bool | None = None
    emphasis: bool | None = None
    live: bool = False


class AddHashtagIn(TextIn):
    list_path: str = Field(..., min_length=1)


class SelectionIn(TextIn):
    start: int
    end: int | None = None

    def selection(self) -> TextSelection:
        end = self.start if self.end is None else self.end
        return TextSelection(self.start, end).clamp(len(self.text))


class WrapIn(SelectionIn):
    style: str | None = Field(None, description="bold | italic | strikethrough | highlight")
    before: str | None = None
    after: str | None = None


class CheckboxIn(TextIn):
    offset: int


class SuggestIn(SelectionIn):
    limit: int | None = Field(None, ge=0)


def create_app(runtime: Any, token: str | None = None, enable_cors: bool = False) -> FastAPI:
    """
    Create FastAPI application with runtime injected.

    Args:
        runtime: Runtime instance with config and list source
        token: Bearer token for authentication (None to disable auth)
        enable_cors: Enable CORS middleware

    Returns:
        FastAPI application instance
    """
    config = runtime.config

    app = FastAPI(
        title="flowtext API",
        description="Local JSON API for task text markup and editing",
        version=__version__,
        docs_url="/docs" if token is None else None,
        redoc_url="/redoc" if token is None else None,
    )

    # Add CORS middleware if enabled
    if enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Security setup
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

    markers = {
        "bold": config.editing.bold_marker,
        "italic": config.editing.italic_marker,
        "strikethrough": "~~",
        "highlight": "==",
    }

    @app.get("/health")  # type: ignore[misc]
    async def health(auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    @app.post("/tokenize")  # type: ignore[misc]
    async def tokenize_text(body: TokenizeIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Split text into typed spans."""
        if body.live:
            spans = tokenize_live(body.text, recognize_images=config.markup.images)
        else:
            spans = tokenize(
                body.text,
                recognize_hashtags=config.markup.hashtags if body.hashtags is None else body.hashtags,
                recognize_emphasis=config.markup.emphasis if body.emphasis is None else body.emphasis,
            )
        return {"spans": [s.as_dict() for s in spans]}

    @app.post("/hashtags/extract")  # type: ignore[misc]
    async def hashtags_extract(body: TextIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        return {"hashtags": extract_hashtags(body.text)}

    @app.post("/hashtags/remove")  # type: ignore[misc]
    async def hashtags_remove(body: TextIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        return {"text": remove_hashtags(body.text)}

    @app.post("/hashtags/add")  # type: ignore[misc]
    async def hashtags_add(body: AddHashtagIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        return {"text": add_hashtag_to_text(body.text, body.list_path)}

    @app.post("/edit/newline")  # type: ignore[misc]
    async def edit_newline(body: SelectionIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Apply list continuation; handled=false means insert a plain newline."""
        selection = body.selection()
        result = apply_newline(body.text, selection)
        if result is None:
            return {"handled": False, "action": "none"}

        line = body.text[line_start(body.text, selection.start) : selection.start]
        action = continue_list(line).action.value
        return {"handled": True, "action": action, **result.as_dict()}

    @app.post("/edit/wrap")  # type: ignore[misc]
    async def edit_wrap(body: WrapIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Toggle a marker pair around the selection."""
        if body.before:
            before, after = body.before, body.after or body.before
        elif body.style in markers:
            before = after = markers[body.style]
        else:
            raise HTTPException(
                status_code=400, detail="Provide a known style or an explicit 'before' marker"
            )
        return toggle_wrap(body.text, body.selection(), before, after).as_dict()

    @app.post("/edit/checkbox")  # type: ignore[misc]
    async def edit_checkbox(body: CheckboxIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        if not is_checkbox_at(body.text, body.offset):
            raise HTTPException(status_code=400, detail=f"No checkbox at offset {body.offset}")
        return {"text": toggle_checkbox_at(body.text, body.offset)}

    @app.post("/suggest")  # type: ignore[misc]
    async def suggest(body: SuggestIn, auth: None = Depends(verify_token)) -> dict[str, Any]:
        """Hashtag suggestions for the query typed at the caret."""
        query = active_query(body.text, body.selection())
        if query is None:
            return {"active": False}

        try:
            candidates = runtime.lists.lists()
        except ListSourceError as e:
            raise HTTPException(status_code=500, detail=str(e)) from e

        limit = config.suggest.limit if body.limit is None else body.limit
        result = match(query.query, candidates)
        return {
            "active": True,
            "query": query.query,
            "start": query.start,
            "end": query.end,
            "has_exact_match": result.has_exact_match,
            "show_create_option": result.show_create_option,
            "suggestions": [c.as_dict() for c in filter_candidates(query.query, candidates, limit)],
        }

    return app


def generate_token() -> str:
    """Generate a random bearer token."""
    return secrets.token_urlsafe(32)
