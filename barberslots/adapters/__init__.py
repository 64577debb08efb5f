"""
Adapters layer - External integrations (GraphQL API, mock data, session storage).
"""

from .graphql_client import GraphQLScheduleClient
from .mock_schedule_client import MockScheduleClient
from .session_store import SessionStore

__all__ = ["GraphQLScheduleClient", "MockScheduleClient", "SessionStore"]
