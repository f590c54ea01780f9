"""
Core Components

Configuration and the query executor.
"""

from apollo_fastapi.core.config import settings, get_settings, Settings
from apollo_fastapi.core.run_query import run_query, QueryParams

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "run_query",
    "QueryParams",
]
