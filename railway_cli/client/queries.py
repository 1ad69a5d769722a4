"""GraphQL documents and response models used by the config layer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PROJECT_TOKEN_QUERY = """
query ProjectToken {
  projectToken {
    projectId
    environmentId
    project {
      id
      name
    }
    environment {
      id
      name
    }
  }
}
"""


class _Node(BaseModel):
    id: str
    name: str


class ProjectToken(BaseModel):
    """Identity a project-scoped token grants access to."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project: _Node
    environment: _Node


class ProjectTokenResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    project_token: ProjectToken
