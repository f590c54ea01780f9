"""
Query Executor

Runs one GraphQL operation against a schema: parse, validate, execute,
then format the result into the ``{"data": ..., "errors": [...]}`` shape
that is sent over the wire.

The optional ``log_function`` receives a dict for the start and the end of
every phase, for example::

    {"action": "request", "step": "start"}
    {"action": "parse", "step": "end"}
    {"action": "request", "step": "end", "data": {...}}
"""

import logging
from dataclasses import dataclass
from inspect import isawaitable
from typing import Any, Callable, Dict, List, Optional, Type

import strawberry
from graphql import (
    ASTValidationRule,
    GraphQLError,
    GraphQLSchema,
    execute,
    parse,
    specified_rules,
    validate,
)

from apollo_fastapi.errors import default_format_error

logger = logging.getLogger(__name__)


@dataclass
class QueryParams:
    """Everything needed to run one operation. Built fresh for each request item."""
    schema: Any
    query: Optional[str] = None
    variables: Optional[Dict[str, Any]] = None
    root_value: Any = None
    context: Any = None
    operation_name: Optional[str] = None
    log_function: Optional[Callable[[Dict[str, Any]], None]] = None
    validation_rules: Optional[List[Type[ASTValidationRule]]] = None
    format_error: Optional[Callable[[Exception], Any]] = None
    format_response: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None


def resolve_schema(schema: Any) -> GraphQLSchema:
    """
    Return the graphql-core schema behind ``schema``.

    strawberry does not expose its graphql-core schema publicly, so a
    ``strawberry.Schema`` is unwrapped through its private ``_schema`` attribute.
    """
    if isinstance(schema, GraphQLSchema):
        return schema
    if isinstance(schema, strawberry.Schema):
        return schema._schema
    raise TypeError(f"Expected a GraphQL schema, got {type(schema).__name__}")


async def run_query(params: QueryParams) -> Dict[str, Any]:
    """Execute ``params.query`` and return the formatted response dict."""
    log = params.log_function or (lambda event: None)
    format_error = params.format_error or default_format_error

    def format_response(response: Dict[str, Any]) -> Dict[str, Any]:
        if params.format_response:
            response = params.format_response(response)
        log({"action": "request", "step": "end", "data": response})
        return response

    log({"action": "request", "step": "start"})
    schema = resolve_schema(params.schema)

    log({"action": "parse", "step": "start"})
    try:
        document = parse(params.query)
    except GraphQLError as e:
        log({"action": "parse", "step": "end"})
        logger.debug(f"Query failed to parse: {e.message}")
        return format_response({"errors": [format_error(e)]})
    log({"action": "parse", "step": "end"})

    log({"action": "validation", "step": "start"})
    rules = list(specified_rules) + list(params.validation_rules or [])
    validation_errors = validate(schema, document, rules)
    log({"action": "validation", "step": "end"})
    if validation_errors:
        logger.debug(f"Query failed validation with {len(validation_errors)} errors")
        return format_response({"errors": [format_error(e) for e in validation_errors]})

    log({"action": "execution", "step": "start"})
    result = execute(
        schema,
        document,
        root_value=params.root_value,
        context_value=params.context,
        variable_values=params.variables,
        operation_name=params.operation_name,
    )
    if isawaitable(result):
        result = await result
    log({"action": "execution", "step": "end"})

    response: Dict[str, Any] = {"data": result.data}
    if result.errors:
        response["errors"] = [format_error(e) for e in result.errors]

    return format_response(response)
