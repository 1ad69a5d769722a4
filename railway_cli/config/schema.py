"""Pydantic models for the persisted Railway config document.

Field names are camelCase on disk (``projectPath``, ``lastUpdateCheck``)
and ``None`` values are omitted when writing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
)


class LinkedProject(BaseModel):
    """Binding between a local directory and a remote project/environment."""

    model_config = _MODEL_CONFIG

    project_path: str = Field(..., description="Absolute directory path; lookup key.")
    name: Optional[str] = Field(default=None, description="Cached project name.")
    project: str = Field(..., description="Remote project id.")
    environment: str = Field(..., description="Remote environment id.")
    environment_name: Optional[str] = Field(
        default=None, description="Cached environment name."
    )
    service: Optional[str] = Field(default=None, description="Linked service id.")


class RailwayUser(BaseModel):
    model_config = _MODEL_CONFIG

    token: Optional[str] = None


class RailwayConfig(BaseModel):
    """Root persisted document. Always read and written as a whole."""

    model_config = _MODEL_CONFIG

    projects: Dict[str, LinkedProject]
    user: RailwayUser
    last_update_check: Optional[datetime] = None
    new_version_available: Optional[str] = None

    @classmethod
    def empty(cls) -> "RailwayConfig":
        return cls(projects={}, user=RailwayUser())

    def to_document(self) -> Dict[str, Any]:
        """Return the JSON-ready on-disk representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
