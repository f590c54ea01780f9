"""
Pytest configuration and shared fixtures for Apollo FastAPI tests.
"""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
)

from apollo_fastapi import GRAPHQL_METHODS, JSONBodyMiddleware, graphql_http, render_graphiql


def resolve_error(obj, info):
    raise ValueError("Secret error message")


async def resolve_async(obj, info):
    await asyncio.sleep(0)
    return "async works"


QueryType = GraphQLObjectType(
    "QueryType",
    lambda: {
        "testString": GraphQLField(
            GraphQLString,
            resolve=lambda obj, info: "it works",
        ),
        "testArgument": GraphQLField(
            GraphQLString,
            args={"echo": GraphQLArgument(GraphQLString)},
            resolve=lambda obj, info, echo=None: f"hello {echo}",
        ),
        "testRequired": GraphQLField(
            GraphQLString,
            args={"echo": GraphQLArgument(GraphQLNonNull(GraphQLString))},
            resolve=lambda obj, info, echo: echo,
        ),
        "testRootValue": GraphQLField(
            GraphQLString,
            resolve=lambda obj, info: obj,
        ),
        "testContext": GraphQLField(
            GraphQLString,
            resolve=lambda obj, info: info.context,
        ),
        "testError": GraphQLField(GraphQLString, resolve=resolve_error),
        "testAsync": GraphQLField(GraphQLString, resolve=resolve_async),
    },
)

TEST_SCHEMA = GraphQLSchema(query=QueryType)


@pytest.fixture
def schema():
    """Return the graphql-core schema used by the HTTP tests."""
    return TEST_SCHEMA


@pytest.fixture
def make_client():
    """
    Build a TestClient around a bare FastAPI app serving ``graphql_http(options)``
    at /graphql and, when given, ``render_graphiql(graphiql)`` at /graphiql.
    """
    def _make_client(options, graphiql=None, body_parser=True):
        app = FastAPI()
        if body_parser:
            app.add_middleware(JSONBodyMiddleware)
        app.add_api_route("/graphql", graphql_http(options), methods=GRAPHQL_METHODS)
        if graphiql is not None:
            app.add_api_route("/graphiql", render_graphiql(graphiql), methods=["GET"])
        return TestClient(app)

    return _make_client


@pytest.fixture
def client():
    """Create a test client for the demo application."""
    from apollo_fastapi.main import app
    return TestClient(app)


@pytest.fixture
def sample_query():
    """Return a sample single-query payload."""
    return {"query": "{ testString }"}
