"""
Apollo FastAPI - Main Application

Serves the demo schema over HTTP.

ENDPOINTS:
----------
- POST /graphql: single or batched GraphQL queries (JSON body)
- GET  /graphiql: GraphiQL explorer (when APOLLO_GRAPHIQL_ENABLED)
- GET  /health: liveness check

Run with:
    uvicorn apollo_fastapi.main:app --port 8080
"""

import uuid
import logging
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request

from apollo_fastapi.core.config import Settings, get_settings
from apollo_fastapi.graphql_api import schema
from apollo_fastapi.integrations import (
    GRAPHQL_METHODS,
    GraphQLOptions,
    JSONBodyMiddleware,
    graphql_http,
    render_graphiql,
)
from apollo_fastapi.modules.graphiql import GraphiQLData


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    def filter(self, record):
        if not hasattr(record, "request_id"):
            record.request_id = request_id_var.get()
        return True


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    for handler in logging.root.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())


logger = logging.getLogger(__name__)


# =============================================================================
# GRAPHQL OPTIONS
# =============================================================================

def log_graphql_event(event: Dict[str, Any]):
    logger.debug(f"graphql {event['action']} {event['step']}")


def graphql_options(request: Request) -> GraphQLOptions:
    """Per-request options: the request is made available to resolvers via the context."""
    return GraphQLOptions(
        schema=schema,
        context={"request": request},
        log_function=log_graphql_event,
    )


# =============================================================================
# APPLICATION FACTORY
# =============================================================================

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="GraphQL over HTTP for FastAPI",
        debug=settings.debug,
    )

    app.add_middleware(JSONBodyMiddleware)

    # Request ID middleware for tracing
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add request ID for tracing and structured logging."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_api_route(
        settings.graphql_path,
        graphql_http(graphql_options),
        methods=GRAPHQL_METHODS,
        tags=["GraphQL"],
    )

    if settings.graphiql_enabled:
        app.add_api_route(
            settings.graphiql_path,
            render_graphiql(GraphiQLData(
                endpoint_url=settings.graphql_path,
                query="{\n  hello\n}\n",
            )),
            methods=["GET"],
            tags=["GraphQL"],
        )

    @app.get("/health", tags=["Health"])
    def health():
        """Public health check endpoint."""
        return {
            "status": "ok",
            "time": datetime.now(timezone.utc).isoformat(),
            "version": settings.app_version,
        }

    logger.info(
        f"{settings.app_name} ready: graphql={settings.graphql_path} "
        f"graphiql={settings.graphiql_path if settings.graphiql_enabled else 'disabled'}"
    )
    return app


app = create_app()
