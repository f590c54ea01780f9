"""
Apollo Server - FastAPI Integration

Binds graphql-core query execution to FastAPI / Starlette endpoints.

DESIGN:
-------
- There is exactly one way in: a POST request with a JSON body.
- A body that is a JSON array is a batch; each entry is executed in order,
  one after the other, and the response is an array of the same length.
- One entry failing never affects the others.

USAGE:
------
    app = FastAPI()
    app.add_middleware(JSONBodyMiddleware)

    app.add_api_route(
        "/graphql",
        graphql_http(GraphQLOptions(schema=schema)),
        methods=GRAPHQL_METHODS,
    )
    app.add_api_route(
        "/graphiql",
        render_graphiql(GraphiQLData(endpoint_url="/graphql")),
        methods=["GET"],
    )

GraphQLOptions:

- schema: an executable GraphQL schema used to fulfill requests
- (optional) format_error: formatting function applied to all errors before the response is sent
- (optional) root_value: root value passed to GraphQL execution
- (optional) context: the context passed to GraphQL execution
- (optional) log_function: a function called for logging events such as execution phases
- (optional) format_params: a function applied to the parameters of every run_query invocation
- (optional) validation_rules: extra validation rules applied to requests
- (optional) format_response: a function applied to each GraphQL execution result

Instead of a GraphQLOptions value, a function taking the request and returning
(or awaiting to) GraphQLOptions may be passed; it is called once per request.
"""

import json
import logging
from dataclasses import dataclass, fields
from inspect import isawaitable
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Type, Union

from fastapi import Request, Response
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from graphql import ASTValidationRule

from apollo_fastapi.core.run_query import QueryParams, run_query
from apollo_fastapi.errors import (
    ApolloServerError,
    body_missing,
    default_format_error,
    item_not_object,
    method_not_allowed,
    options_missing,
    query_missing,
    too_many_arguments,
    variables_invalid,
)
from apollo_fastapi.integrations.body_parser import get_parsed_body, has_parsed_body
from apollo_fastapi.modules.graphiql import GraphiQLData, render_graphiql_page

logger = logging.getLogger(__name__)

# All methods reach the handler, which answers anything but POST with 405.
GRAPHQL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# =============================================================================
# OPTIONS
# =============================================================================

@dataclass
class GraphQLOptions:
    schema: Any
    format_error: Optional[Callable[[Exception], Any]] = None
    root_value: Any = None
    context: Any = None
    log_function: Optional[Callable[[Dict[str, Any]], None]] = None
    format_params: Optional[Callable[[QueryParams], QueryParams]] = None
    validation_rules: Optional[List[Type[ASTValidationRule]]] = None
    format_response: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None

    @classmethod
    def from_value(cls, value: Any) -> "GraphQLOptions":
        """Accept either a GraphQLOptions instance or a mapping with the same keys."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            known = {f.name for f in fields(cls)}
            unknown = set(value) - known
            if unknown:
                raise TypeError(f"Unknown Apollo Server options: {', '.join(sorted(unknown))}")
            return cls(**value)
        raise TypeError(f"Apollo Server options must be GraphQLOptions, got {type(value).__name__}")


GraphQLOptionsFunction = Callable[[Request], Union[GraphQLOptions, Awaitable[GraphQLOptions]]]
GraphQLHandler = Callable[[Request], Awaitable[Response]]


async def resolve_options(
    options: Union[GraphQLOptions, Mapping[str, Any], GraphQLOptionsFunction],
    request: Request,
) -> GraphQLOptions:
    """Return the options for this request, calling (and awaiting) ``options`` if it is a function."""
    if callable(options):
        resolved = options(request)
        if isawaitable(resolved):
            resolved = await resolved
    else:
        resolved = options
    return GraphQLOptions.from_value(resolved)


# =============================================================================
# REQUEST HANDLER
# =============================================================================

def build_query_params(
    request_params: Any,
    options: GraphQLOptions,
    format_error: Callable[[Exception], Any],
) -> QueryParams:
    """Turn one entry of the request body into QueryParams ready for run_query."""
    if not isinstance(request_params, Mapping):
        raise item_not_object(type(request_params).__name__)

    query = request_params.get("query")
    operation_name = request_params.get("operationName")
    variables = request_params.get("variables")

    if isinstance(variables, str):
        variables = json.loads(variables)

    params = QueryParams(
        schema=options.schema,
        query=query,
        variables=variables,
        root_value=options.root_value,
        context=options.context,
        operation_name=operation_name,
        log_function=options.log_function,
        validation_rules=options.validation_rules,
        format_error=format_error,
        format_response=options.format_response,
    )

    if options.format_params:
        params = options.format_params(params)

    if not params.query:
        raise query_missing()

    return params


def graphql_http(
    options: Union[GraphQLOptions, Mapping[str, Any], GraphQLOptionsFunction, None] = None,
    *args: Any,
) -> GraphQLHandler:
    """
    Create a FastAPI endpoint that executes GraphQL requests.

    Raises ApolloServerError immediately when ``options`` is missing or when
    more than one argument is given.
    """
    if not options:
        raise options_missing()

    if args:
        raise too_many_arguments(len(args) + 1)

    async def handler(request: Request) -> Response:
        options_object = await resolve_options(options, request)
        format_error = options_object.format_error or default_format_error

        if request.method != "POST":
            error = method_not_allowed(request.method)
            return PlainTextResponse(
                error.message,
                status_code=error.status_code,
                headers={"Allow": "POST"},
            )

        if not has_parsed_body(request):
            error = body_missing()
            error.log()
            return PlainTextResponse(error.message, status_code=error.status_code)

        body = get_parsed_body(request)
        is_batch = isinstance(body, list)
        items = body if is_batch else [body]
        logger.debug(f"Executing {len(items)} GraphQL request(s), batch={is_batch}")

        responses: List[Dict[str, Any]] = []
        for request_params in items:
            try:
                params = build_query_params(request_params, options_object, format_error)
                responses.append(await run_query(params))
            except Exception as e:
                if isinstance(e, ApolloServerError):
                    e.log("warning")
                else:
                    logger.warning(f"GraphQL request failed: {e}", exc_info=True)
                responses.append({"errors": [format_error(e)]})

        if is_batch:
            return JSONResponse(responses)

        graphql_response = responses[0]
        status_code = 200
        if graphql_response.get("errors") and "data" not in graphql_response:
            status_code = 400
        return JSONResponse(graphql_response, status_code=status_code)

    return handler


# =============================================================================
# GRAPHIQL
# =============================================================================

def render_graphiql(options: GraphiQLData) -> GraphQLHandler:
    """
    Create a FastAPI endpoint that returns the GraphiQL explorer page.

    ``query``, ``variables`` and ``operationName`` from the query string take
    precedence over the defaults in ``options`` when they are non-empty.
    """
    async def handler(request: Request) -> Response:
        q = request.query_params
        query = q.get("query") or ""
        variables = q.get("variables") or "{}"
        operation_name = q.get("operationName") or ""

        try:
            parsed_variables = json.loads(variables)
        except ValueError as e:
            error = variables_invalid(str(e))
            error.log("warning")
            return PlainTextResponse(error.message, status_code=error.status_code)

        graphiql_string = render_graphiql_page(GraphiQLData(
            endpoint_url=options.endpoint_url,
            query=query or options.query,
            variables=parsed_variables or options.variables,
            operation_name=operation_name or options.operation_name,
            result=options.result,
        ))
        return HTMLResponse(graphiql_string)

    return handler
