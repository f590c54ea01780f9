"""
Web Framework Integrations

FastAPI / Starlette endpoints for GraphQL execution and the GraphiQL page.
"""

from apollo_fastapi.integrations.body_parser import (
    JSONBodyMiddleware,
    get_parsed_body,
    has_parsed_body,
)
from apollo_fastapi.integrations.fastapi_apollo import (
    GraphQLOptions,
    GRAPHQL_METHODS,
    GraphQLOptionsFunction,
    graphql_http,
    render_graphiql,
)

__all__ = [
    "JSONBodyMiddleware",
    "get_parsed_body",
    "has_parsed_body",
    "GraphQLOptions",
    "GRAPHQL_METHODS",
    "GraphQLOptionsFunction",
    "graphql_http",
    "render_graphiql",
]
