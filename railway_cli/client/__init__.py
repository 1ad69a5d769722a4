"""Railway backboard API client."""

from railway_cli.client.graphql import GQLClient
from railway_cli.client.queries import PROJECT_TOKEN_QUERY, ProjectTokenResponse

__all__ = [
    "GQLClient",
    "PROJECT_TOKEN_QUERY",
    "ProjectTokenResponse",
]
