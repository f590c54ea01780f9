"""
Apollo FastAPI - Demo GraphQL Schema

A small strawberry schema served by ``apollo_fastapi.main``. It exists so the
server can be started and explored with GraphiQL out of the box.
"""

from typing import List, Optional

import strawberry
from strawberry.types import Info

from apollo_fastapi.core.config import settings


# =============================================================================
# GRAPHQL TYPES
# =============================================================================

@strawberry.type
class HealthStatus:
    """System health status."""
    status: str
    version: str
    environment: str


@strawberry.type
class Echo:
    """A message sent back to the caller."""
    message: str
    times: int
    repeated: List[str]


# =============================================================================
# QUERIES
# =============================================================================

@strawberry.type
class Query:
    """GraphQL Query root."""

    @strawberry.field
    def health(self) -> HealthStatus:
        """Get system health status."""
        return HealthStatus(
            status="ok",
            version=settings.app_version,
            environment=settings.environment,
        )

    @strawberry.field
    def hello(self, name: Optional[str] = None) -> str:
        return f"Hello, {name or 'world'}!"

    @strawberry.field
    def echo(self, message: str, times: int = 1) -> Echo:
        """Repeat ``message`` ``times`` times."""
        if times < 0:
            raise ValueError("times must not be negative")
        return Echo(message=message, times=times, repeated=[message] * times)

    @strawberry.field
    def request_id(self, info: Info) -> Optional[str]:
        """The X-Request-ID of the HTTP request carrying this query."""
        request = (info.context or {}).get("request")
        if request is None:
            return None
        return getattr(request.state, "request_id", None)


# =============================================================================
# MUTATIONS
# =============================================================================

@strawberry.type
class Mutation:
    """GraphQL Mutation root."""

    @strawberry.mutation
    def add(self, a: int, b: int) -> int:
        return a + b


# =============================================================================
# SCHEMA
# =============================================================================

schema = strawberry.Schema(query=Query, mutation=Mutation)
