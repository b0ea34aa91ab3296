"""Pydantic models for persisted roles."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Role(BaseModel):
    name: str
    users: list[str] = Field(default_factory=list)


class RoleDocument(BaseModel):
    """Top-level shape of a YAML or JSON role file."""

    roles: list[Role] = Field(default_factory=list)
