#!/usr/bin/env python3

from __future__ import annotations
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, field_validator

# Property naming the profile this one inherits from.
SOURCE_PROFILE = "source_profile"


class Profile(BaseModel):
    """
    A named, read-only bundle of settings.

    The parent is held as a name; look it up through the owning `ProfileStore`.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    properties: Mapping[str, str]
    parent_name: str | None = None

    @field_validator("properties", mode="after")
    @classmethod
    def _snapshot(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.properties.get(key, default)

    def __hash__(self) -> int:
        return hash((self.name, tuple(sorted(self.properties.items())), self.parent_name))

    def __repr__(self) -> str:
        return f"Profile(name={self.name!r}, properties={dict(self.properties)!r}, parent_name={self.parent_name!r})"
