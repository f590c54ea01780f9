"""
Apollo FastAPI

GraphQL over HTTP for FastAPI: a POST endpoint that runs single or batched
queries through graphql-core, plus the GraphiQL explorer page.
"""

from apollo_fastapi.core.run_query import QueryParams, run_query
from apollo_fastapi.errors import ApolloServerError, ErrorCode, default_format_error
from apollo_fastapi.integrations import (
    GRAPHQL_METHODS,
    GraphQLOptions,
    GraphQLOptionsFunction,
    JSONBodyMiddleware,
    graphql_http,
    render_graphiql,
)
from apollo_fastapi.modules.graphiql import GraphiQLData

__version__ = "0.1.0"

__all__ = [
    "graphql_http",
    "render_graphiql",
    "GRAPHQL_METHODS",
    "GraphQLOptions",
    "GraphQLOptionsFunction",
    "GraphiQLData",
    "JSONBodyMiddleware",
    "QueryParams",
    "run_query",
    "ApolloServerError",
    "ErrorCode",
    "default_format_error",
]
