"""
JSON Body Parsing Middleware

The GraphQL handler never reads the raw request stream itself: it expects
the decoded body to be waiting on ``request.state.json_body``. This
middleware puts it there.

USAGE:
------
    app = FastAPI()
    app.add_middleware(JSONBodyMiddleware)

Without it every POST to the GraphQL endpoint is answered with a 500.
"""

import json
import logging
from typing import Any

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from apollo_fastapi.errors import body_invalid

logger = logging.getLogger(__name__)

BODY_STATE_KEY = "json_body"


def is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def has_parsed_body(request: Request) -> bool:
    """True when JSONBodyMiddleware ran for this request, whatever the decoded value."""
    return hasattr(request.state, BODY_STATE_KEY)


def get_parsed_body(request: Request) -> Any:
    """Return the body decoded by JSONBodyMiddleware, or None when it did not run.

    A JSON ``null`` body also reads as None; use has_parsed_body to tell them apart.
    """
    return getattr(request.state, BODY_STATE_KEY, None)


class JSONBodyMiddleware(BaseHTTPMiddleware):
    """Decode JSON request bodies onto ``request.state.json_body``."""

    async def dispatch(self, request: Request, call_next):
        body: Any = {}

        if is_json_content_type(request.headers.get("content-type", "")):
            raw = await request.body()
            if raw.strip():
                try:
                    body = json.loads(raw)
                except ValueError as e:
                    error = body_invalid(str(e))
                    error.log("warning")
                    return PlainTextResponse(error.message, status_code=error.status_code)

        setattr(request.state, BODY_STATE_KEY, body)
        return await call_next(request)
