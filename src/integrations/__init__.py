"""
External study service integrations.

Modules:
- gql_client: GraphQL-over-HTTP client for the remote study service
- local_deck: Offline study service backed by a JSON deck
"""
from .gql_client import StudyGraphQLClient
from .local_deck import LocalDeckService

__all__ = ["StudyGraphQLClient", "LocalDeckService"]
